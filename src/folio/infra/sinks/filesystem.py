"""Filesystem output sink for rendered pages."""

from __future__ import annotations

import logging
from pathlib import Path

from folio.core.exceptions import FolioError
from folio.engine.renderer import RenderResult

logger = logging.getLogger(__name__)

MANAGED_SUFFIXES = frozenset({".html", ".xml"})


class FileSystemOutputSink:
    """Writes rendered pages below an output directory.

    Pages are written as UTF-8. Previously generated ``.html`` and ``.xml``
    files that the current run did not produce are removed, so the output
    directory always mirrors the latest build.
    """

    def __init__(self, output_dir: Path, protected: tuple[Path, ...] = ()) -> None:
        """Initialize the filesystem output sink.

        Args:
            output_dir: Directory where pages will be written
            protected: Directories the output directory must not contain,
                such as the site root or the posts directory.

        """
        self.output_dir = Path(output_dir)
        self.protected = tuple(Path(p) for p in protected)

    def publish(self, result: RenderResult) -> list[Path]:
        """Write every page of ``result`` and prune stale files.

        Returns:
            The written file paths, in page order.

        Raises:
            FolioError: If the output directory would overwrite sources.

        """
        self._check_output_dir()
        self.output_dir.mkdir(parents=True, exist_ok=True)

        written = []
        for page in result.pages:
            target = self.output_dir / page.output_path
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(page.content, encoding="utf-8")
            written.append(target)

        self._prune(set(written))
        logger.info("Wrote %d pages to %s", len(written), self.output_dir)
        return written

    def _check_output_dir(self) -> None:
        output = self.output_dir.resolve()
        for path in self.protected:
            protected = path.resolve()
            if output == protected or output in protected.parents:
                msg = f"Output directory {self.output_dir} would overwrite {path}"
                raise FolioError(msg)

    def _prune(self, keep: set[Path]) -> None:
        for stale in sorted(self.output_dir.rglob("*")):
            if stale.is_file() and stale.suffix in MANAGED_SUFFIXES and stale not in keep:
                logger.debug("Removing stale output %s", stale)
                stale.unlink()

        # Deepest first so emptied parents can go too
        for directory in sorted(self.output_dir.rglob("*"), key=lambda p: len(p.parts), reverse=True):
            if directory.is_dir() and not any(directory.iterdir()):
                directory.rmdir()
