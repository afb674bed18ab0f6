"""Turns a Site into rendered pages."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime

from jinja2 import TemplateError, TemplateNotFound
from markupsafe import Markup

from folio.core.config import FolioConfig
from folio.core.exceptions import RenderError
from folio.core.rendering import render_html
from folio.core.site import Site
from folio.core.types import Document
from folio.core.utils import slugify
from folio.engine.template_loader import TemplateLoader

logger = logging.getLogger(__name__)

INDEX_PAGE = "index.html"
FEED_PAGE = "feed.xml"
# Atom requires <updated>; an empty site has no newest post to take it from
EMPTY_FEED_UPDATED = datetime(1970, 1, 1, tzinfo=UTC)


@dataclass(frozen=True)
class RenderedPage:
    """One output file, addressed relative to the output directory."""

    output_path: str
    content: str
    source: str | None = None


@dataclass(frozen=True)
class RenderResult:
    pages: list[RenderedPage] = field(default_factory=list)
    errors: list[RenderError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def page(self, output_path: str) -> RenderedPage | None:
        return next((p for p in self.pages if p.output_path == output_path), None)


class Renderer:
    """Renders document pages, the index, category listings and the feed.

    A failing page is recorded as a RenderError and the remaining pages are
    still rendered. Documents whose own page failed stay in the listings.
    """

    def __init__(self, config: FolioConfig, templates: TemplateLoader | None = None) -> None:
        self.config = config
        self.templates = templates or TemplateLoader(config.site, config.paths.abs_layouts_dir)

    def render(self, site: Site) -> RenderResult:
        pages: list[RenderedPage] = []
        errors: list[RenderError] = []
        claimed: dict[str, str] = {}

        def attempt(key: str, owner: str, build) -> None:
            if key in claimed:
                error = RenderError(owner, f"output {key} already produced by {claimed[key]}")
                logger.error("%s", error)
                errors.append(error)
                return
            try:
                page = build()
            except RenderError as exc:
                logger.error("%s", exc)
                errors.append(exc)
                return
            claimed[key] = owner
            pages.append(page)

        for doc in site.documents:
            attempt(doc.output_path, doc.path, lambda doc=doc: self.render_document(doc))

        attempt(INDEX_PAGE, INDEX_PAGE, lambda: self.render_index(site))

        for name, docs in site.categories.items():
            output_path = category_output_path(name)
            attempt(output_path, f"category {name!r}", lambda n=name, d=docs: self.render_category(n, d))

        attempt(FEED_PAGE, FEED_PAGE, lambda: self.render_feed(site))

        logger.info("Rendered %d pages (%d failed)", len(pages), len(errors))
        return RenderResult(pages=pages, errors=errors)

    def render_document(self, doc: Document) -> RenderedPage:
        """Render one document through its layout.

        Raises:
            RenderError: If the layout does not exist or fails to render.

        """
        template_name = f"{doc.layout}.html"
        try:
            content = self.templates.render_template(
                template_name,
                page=doc,
                content=Markup(render_html(doc.body)),
            )
        except TemplateNotFound as exc:
            raise RenderError(doc.path, f"layout {doc.layout!r} not found") from exc
        except TemplateError as exc:
            raise RenderError(doc.path, f"layout {doc.layout!r} failed: {exc}") from exc
        return RenderedPage(output_path=doc.output_path, content=content, source=doc.path)

    def render_index(self, site: Site) -> RenderedPage:
        content = self._render_listing(
            INDEX_PAGE,
            "index.html",
            documents=site.documents,
            categories=site.categories,
        )
        return RenderedPage(output_path=INDEX_PAGE, content=content)

    def render_category(self, name: str, documents: tuple[Document, ...]) -> RenderedPage:
        output_path = category_output_path(name)
        content = self._render_listing(output_path, "category.html", category=name, documents=documents)
        return RenderedPage(output_path=output_path, content=content)

    def render_feed(self, site: Site) -> RenderedPage:
        content = self._render_listing(
            FEED_PAGE,
            "feed.xml",
            documents=site.recent(self.config.site.feed_limit),
            updated=site.updated or EMPTY_FEED_UPDATED,
        )
        return RenderedPage(output_path=FEED_PAGE, content=content)

    def _render_listing(self, output_path: str, template_name: str, **context) -> str:
        try:
            return self.templates.render_template(template_name, **context)
        except TemplateError as exc:
            raise RenderError(output_path, f"template {template_name!r} failed: {exc}") from exc


def category_output_path(name: str) -> str:
    return f"category/{slugify(name)}/index.html"
