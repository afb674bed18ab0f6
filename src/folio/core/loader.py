"""Discovers Markdown sources and parses them into Documents."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath

from pydantic import ValidationError

from folio.core.config import FolioConfig
from folio.core.dates import split_filename, to_aware_datetime
from folio.core.exceptions import ParseError
from folio.core.types import Document, FrontMatter
from folio.core.utils import slugify, titleize
from folio.markdown.frontmatter import parse_frontmatter, parse_frontmatter_file

logger = logging.getLogger(__name__)

SOURCE_SUFFIXES = frozenset({".md", ".markdown"})


@dataclass(frozen=True)
class LoadResult:
    """Outcome of one loader pass."""

    documents: list[Document] = field(default_factory=list)
    errors: list[ParseError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


class DocumentLoader:
    """Parses every source file under the posts directory.

    The loader holds no state between passes, so iterating twice over
    unchanged files yields equal documents.
    """

    def __init__(self, config: FolioConfig) -> None:
        self.config = config
        self.source_dir = config.paths.abs_posts_dir

    def discover(self) -> list[Path]:
        """Return source files in a stable, sorted order.

        Names starting with ``_`` or ``.`` are skipped, as are files inside
        such directories.
        """
        if not self.source_dir.is_dir():
            logger.warning("Posts directory %s does not exist", self.source_dir)
            return []

        sources = []
        for candidate in self.source_dir.rglob("*"):
            if not candidate.is_file() or candidate.suffix.lower() not in SOURCE_SUFFIXES:
                continue
            relative = candidate.relative_to(self.source_dir)
            if any(part.startswith(("_", ".")) for part in relative.parts):
                continue
            sources.append(candidate)
        return sorted(sources, key=lambda p: p.relative_to(self.source_dir).as_posix())

    def iter_documents(self, errors: list[ParseError] | None = None) -> Iterator[Document]:
        """Lazily yield one Document per source file.

        Args:
            errors: When given, parse failures are logged, appended here and
                the file is left out. When None, the first failure is raised.

        Raises:
            ParseError: On the first malformed file if ``errors`` is None.

        """
        for source in self.discover():
            try:
                yield self.parse_file(source)
            except ParseError as exc:
                if errors is None:
                    raise
                logger.error("Skipping %s", exc)
                errors.append(exc)

    def load(self) -> LoadResult:
        """Run a full pass, collecting documents and parse errors."""
        errors: list[ParseError] = []
        documents = list(self.iter_documents(errors))
        logger.info("Loaded %d documents (%d failed)", len(documents), len(errors))
        return LoadResult(documents=documents, errors=errors)

    def parse_file(self, source: Path) -> Document:
        """Parse a single file on disk."""
        relative = self._relative_path(source)
        metadata, body = parse_frontmatter_file(source, source=relative)
        return self._build(metadata, body, relative)

    def parse_text(self, text: str, path: str) -> Document:
        """Parse in-memory source text as if it were stored at ``path``."""
        metadata, body = parse_frontmatter(text, path)
        return self._build(metadata, body, path)

    def _relative_path(self, source: Path) -> str:
        try:
            return source.relative_to(self.source_dir).as_posix()
        except ValueError:
            return source.as_posix()

    def _build(self, metadata: dict, body: str, path: str) -> Document:
        try:
            matter = FrontMatter.from_mapping(metadata)
        except ValidationError as exc:
            raise ParseError(path, _describe_validation_error(exc)) from exc

        filename_date, slug = split_filename(PurePosixPath(path).stem)
        raw_date = matter.date if matter.date is not None else filename_date
        if raw_date is None:
            raise ParseError(path, "no date in front matter or filename (expected YYYY-MM-DD-slug.md)")

        site = self.config.site
        try:
            return Document(
                path=path,
                slug=slugify(slug),
                title=matter.title if matter.title else titleize(slug),
                date=to_aware_datetime(raw_date, site.tzinfo),
                categories=frozenset(matter.categories),
                layout=matter.layout or site.default_layout,
                published=matter.published,
                body=body,
                metadata=matter.extra,
            )
        except ValidationError as exc:
            raise ParseError(path, _describe_validation_error(exc)) from exc


def _describe_validation_error(exc: ValidationError) -> str:
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"]) or "front matter"
        problems.append(f"{location}: {error['msg']}")
    return "invalid front matter (" + "; ".join(problems) + ")"
