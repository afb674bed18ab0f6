"""Jinja2 template loader for site layouts.

Layouts are looked up in the site's layouts directory first, then among
the defaults shipped with the package.
"""

from importlib.resources import files
from pathlib import Path
from typing import Any

from jinja2 import ChoiceLoader, Environment, FileSystemLoader, StrictUndefined, Template, select_autoescape

from folio.core.config import SiteSettings
from folio.core.utils import slugify
from folio.engine import filters


class TemplateLoader:
    """Loads and renders Jinja2 templates for site pages.

    Supports:
    - Template inheritance (``base.html``)
    - Site overrides of any default template
    - Custom filters (datetime formatting, slugify, markdown)
    """

    def __init__(self, site: SiteSettings, layouts_dir: Path | None = None) -> None:
        """Initialize TemplateLoader.

        Args:
            site: Site settings, exposed to every template as ``site``.
            layouts_dir: Site-specific layouts. Ignored when it does not exist.

        """
        self.default_dir = Path(str(files("folio.engine").joinpath("templates")))
        self.layouts_dir = layouts_dir

        search_path = []
        if layouts_dir is not None and layouts_dir.is_dir():
            search_path.append(FileSystemLoader(layouts_dir))
        search_path.append(FileSystemLoader(self.default_dir))

        self.env = Environment(
            loader=ChoiceLoader(search_path),
            autoescape=select_autoescape(["html", "xml"]),
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )

        self._register_filters()
        self.env.globals["site"] = site
        self.env.globals["category_url"] = filters.category_url

    def _register_filters(self) -> None:
        """Register custom Jinja2 filters."""
        self.env.filters["format_datetime"] = filters.format_datetime
        self.env.filters["isoformat"] = filters.isoformat
        self.env.filters["markdown"] = filters.markdown
        self.env.filters["slugify"] = slugify

    def load_template(self, template_name: str) -> Template:
        """Load a template by name.

        Raises:
            TemplateNotFound: If template does not exist

        """
        return self.env.get_template(template_name)

    def render_template(self, template_name: str, **context: Any) -> str:
        """Load and render a template with context.

        Raises:
            TemplateNotFound: If template does not exist
            TemplateError: If rendering fails

        """
        template = self.load_template(template_name)
        return template.render(**context)
