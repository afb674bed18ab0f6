"""Custom Jinja2 filters for site templates."""

from datetime import datetime

from markupsafe import Markup

from folio.core.rendering import render_html
from folio.core.types import format_iso_utc
from folio.core.utils import slugify


def format_datetime(value: datetime, format_str: str = "%Y-%m-%d") -> str:
    """Format datetime object.

    Args:
        value: Datetime to format
        format_str: strftime format string

    Returns:
        Formatted datetime string

    """
    if not isinstance(value, datetime):
        return str(value)
    return value.strftime(format_str)


def isoformat(value: datetime) -> str:
    """RFC 3339 timestamp, as Atom requires."""
    if not isinstance(value, datetime):
        return str(value)
    return format_iso_utc(value)


def markdown(value: str | None) -> Markup:
    """Render Markdown to HTML that Jinja will not escape again."""
    return Markup(render_html(value))


def category_url(name: str) -> str:
    """Site-relative URL of a category listing."""
    return f"/category/{slugify(name)}/"
