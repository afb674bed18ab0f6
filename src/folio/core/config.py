from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class SiteSettings(BaseModel):
    """Site-wide metadata exposed to templates as ``site``."""

    title: str = Field(default="My Blog", description="Site title")
    description: str = Field(default="", description="Short site description")
    author: str = Field(default="", description="Default author name")
    base_url: str = Field(default="", description="Absolute URL prefix, e.g. https://example.com")
    default_layout: str = Field(default="post", description="Layout used when a post sets none")
    timezone: str = Field(default="UTC", description="Timezone for dates without one")
    excerpt_separator: str = Field(default="\n\n", description="Marker ending the post excerpt")
    feed_limit: int = Field(default=20, ge=1, description="Number of posts in feed.xml")

    @field_validator("timezone")
    @classmethod
    def _check_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            msg = f"Unknown timezone: {value!r}"
            raise ValueError(msg) from exc
        return value

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @property
    def tzinfo(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)


class PathsSettings(BaseModel):
    """Path configuration.

    All paths are relative to the 'site_root' unless absolute.
    site_root defaults to current working directory.
    """

    site_root: Path = Field(
        default_factory=Path.cwd,
        description="Root directory of the site (defaults to current working directory)",
    )

    posts_dir: Path = Field(default=Path("_posts"), description="Source posts directory")
    layouts_dir: Path = Field(default=Path("_layouts"), description="Site layout templates")
    output_dir: Path = Field(default=Path("_site"), description="Rendered output directory")

    @property
    def abs_posts_dir(self) -> Path:
        return self._resolve(self.posts_dir)

    @property
    def abs_layouts_dir(self) -> Path:
        return self._resolve(self.layouts_dir)

    @property
    def abs_output_dir(self) -> Path:
        return self._resolve(self.output_dir)

    def _resolve(self, path: Path) -> Path:
        if path.is_absolute():
            return path
        return self.site_root / path


class FolioConfig(BaseSettings):
    """Root configuration for a single Folio run.

    Supports environment variable overrides with the pattern:
    FOLIO_SECTION__KEY (e.g., FOLIO_SITE__TITLE)
    """

    site: SiteSettings = Field(default_factory=SiteSettings)
    paths: PathsSettings = Field(default_factory=PathsSettings)

    model_config = SettingsConfigDict(
        extra="ignore",
        env_prefix="FOLIO_",
        env_nested_delimiter="__",
    )
