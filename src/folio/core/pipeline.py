"""Single-run build: load, collect, render, publish."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from folio.core.config import FolioConfig
from folio.core.exceptions import ParseError, RenderError
from folio.core.loader import DocumentLoader
from folio.core.site import Site
from folio.core.types import Document
from folio.engine.renderer import RenderedPage, Renderer
from folio.infra.sinks.filesystem import FileSystemOutputSink

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BuildReport:
    """Everything one build produced or reported."""

    documents: tuple[Document, ...] = ()
    pages: list[RenderedPage] = field(default_factory=list)
    parse_errors: list[ParseError] = field(default_factory=list)
    render_errors: list[RenderError] = field(default_factory=list)
    written: list[Path] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.parse_errors and not self.render_errors

    @property
    def categories(self) -> set[str]:
        return {name for doc in self.documents for name in doc.categories}


def build_site(config: FolioConfig, *, dry_run: bool = False) -> BuildReport:
    """Run the full pipeline once for ``config``.

    Parse and render failures are collected in the report rather than
    raised, so one bad post never stops the others from being published.

    Args:
        config: Configuration scoped to this run.
        dry_run: Render but do not write anything to disk.

    """
    loaded = DocumentLoader(config).load()
    site = Site.from_documents(loaded.documents)
    result = Renderer(config).render(site)

    written: list[Path] = []
    if not dry_run:
        paths = config.paths
        sink = FileSystemOutputSink(
            paths.abs_output_dir,
            protected=(paths.site_root, paths.abs_posts_dir, paths.abs_layouts_dir),
        )
        written = sink.publish(result)

    report = BuildReport(
        documents=site.documents,
        pages=result.pages,
        parse_errors=[*loaded.errors, *site.errors],
        render_errors=result.errors,
        written=written,
    )
    if not report.ok:
        logger.warning(
            "Build finished with %d parse errors and %d render errors",
            len(report.parse_errors),
            len(report.render_errors),
        )
    return report
