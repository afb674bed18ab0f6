"""Core data types for Folio."""

from datetime import date as date_type
from datetime import datetime
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

from folio.core.dates import parse_date_string
from folio.core.rendering import fenced_spans


def format_iso_utc(dt: datetime) -> str:
    """Provides a consistent ISO 8601 format for templates and feeds."""
    return dt.isoformat().replace("+00:00", "Z")


class FrontMatter(BaseModel):
    """Validated front matter of one source file.

    Recognized keys map to named fields; everything else lands in ``extra``.
    """

    RECOGNIZED_KEYS: ClassVar[frozenset[str]] = frozenset(
        {"title", "date", "categories", "category", "layout", "published"}
    )

    model_config = ConfigDict(extra="forbid")

    title: str | None = None
    date: datetime | date_type | None = None
    categories: list[str] = Field(default_factory=list)
    layout: str | None = None
    published: bool = True
    extra: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_mapping(cls, data: dict[str, Any]) -> "FrontMatter":
        """Build front matter from a raw YAML mapping.

        The singular ``category`` key is merged after ``categories``.
        """
        known = {key: value for key, value in data.items() if key in cls.RECOGNIZED_KEYS}
        extra = {key: value for key, value in data.items() if key not in cls.RECOGNIZED_KEYS}

        categories = _as_list(known.pop("categories", None)) + _as_list(known.pop("category", None))
        return cls.model_validate({**known, "categories": categories, "extra": extra})

    @field_validator("title", mode="before")
    @classmethod
    def _coerce_title(cls, value: Any) -> Any:
        # "title: 2048" is a number to YAML
        if isinstance(value, int | float) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("date", mode="before")
    @classmethod
    def _parse_date(cls, value: Any) -> Any:
        if isinstance(value, int | float):
            msg = f"expected a date, got {value!r}"
            raise ValueError(msg)
        if isinstance(value, str):
            return parse_date_string(value)
        return value

    @field_validator("layout")
    @classmethod
    def _check_layout(cls, value: str | None) -> str | None:
        if value is not None and not value.strip():
            msg = "layout must not be blank"
            raise ValueError(msg)
        return value.strip() if value else value

    @field_validator("categories", mode="before")
    @classmethod
    def _normalize_categories(cls, value: Any) -> Any:
        if not isinstance(value, list):
            return value
        seen: dict[str, None] = {}
        for item in value:
            if isinstance(item, bool) or not isinstance(item, str | int | float):
                msg = f"category must be a string, got {type(item).__name__}"
                raise ValueError(msg)
            name = str(item).strip()
            if name:
                seen.setdefault(name, None)
        return list(seen)


def _as_list(value: Any) -> list[Any]:
    # Jekyll allows "categories: ruby rails" as a whitespace-separated string
    if value is None:
        return []
    if isinstance(value, str):
        return value.split()
    if isinstance(value, list | tuple):
        return list(value)
    return [value]


class Document(BaseModel):
    """One parsed source file. Read-only after construction."""

    model_config = ConfigDict(frozen=True)

    path: str
    slug: str
    title: str
    date: datetime
    categories: frozenset[str] = frozenset()
    layout: str = "post"
    published: bool = True
    body: str = ""
    metadata: dict[str, Any] = Field(default_factory=dict)

    @field_validator("date")
    @classmethod
    def _require_aware(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            msg = "document date must be timezone-aware"
            raise ValueError(msg)
        return value

    @property
    def url(self) -> str:
        """Site-relative permalink, e.g. ``/2015/02/13/hello/``."""
        return f"/{self.date:%Y/%m/%d}/{self.slug}/"

    @property
    def output_path(self) -> str:
        return f"{self.url.strip('/')}/index.html"

    @property
    def sorted_categories(self) -> list[str]:
        return sorted(self.categories)

    @property
    def sort_key(self) -> tuple[float, str]:
        """Key ordering newest first, ties broken by path."""
        return (-self.date.timestamp(), self.path)

    def excerpt(self, separator: str = "\n\n") -> str:
        """Return the body up to the first ``separator`` outside a fenced code block."""
        body = self.body.replace("\r\n", "\n").strip()
        if not separator:
            return body
        fences = fenced_spans(body)
        pos = body.find(separator)
        while pos != -1:
            if not any(start <= pos and pos + len(separator) <= end for start, end in fences):
                return body[:pos].strip()
            pos = body.find(separator, pos + 1)
        return body
