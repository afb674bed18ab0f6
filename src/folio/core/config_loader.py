from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from folio.core.config import FolioConfig
from folio.core.exceptions import ConfigError

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "_config.yml"
ENV_PREFIX = "FOLIO_"


class ConfigLoader:
    """Builds a FolioConfig from ``_config.yml`` and the environment.

    Priority (highest to lowest):
    1. Environment variables (FOLIO_SECTION__KEY, or FOLIO_SECTION as JSON)
    2. Config file (_config.yml in site_root)
    3. Defaults
    """

    def __init__(self, site_root: Path | None = None):
        """Initialize config loader.

        Args:
            site_root: Root directory of the site. If None, uses current working directory.

        """
        self.site_root = site_root if site_root is not None else Path.cwd()

    @property
    def config_path(self) -> Path:
        return self.site_root / CONFIG_FILENAME

    def load(self) -> FolioConfig:
        file_config = self._load_from_file()
        try:
            # Instantiating BaseSettings applies the FOLIO_* variables
            values = FolioConfig().model_dump(mode="json")
            from_env = _env_keys()

            for section, settings in file_config.items():
                if section not in values:
                    logger.warning("Ignoring unknown section %r in %s", section, self.config_path)
                    continue
                if not isinstance(settings, dict):
                    msg = f"Configuration '{section}' must be a dictionary, got {type(settings).__name__}"
                    raise ConfigError(msg)
                if (section,) in from_env:
                    continue
                values[section].update(
                    {key: value for key, value in settings.items() if (section, key.lower()) not in from_env}
                )

            if ("paths", "site_root") not in from_env:
                values["paths"]["site_root"] = str(self.site_root)
            return FolioConfig.model_validate(values)
        except ValidationError as exc:
            msg = f"Invalid configuration in {self.config_path}: {exc}"
            raise ConfigError(msg) from exc

    def _load_from_file(self) -> dict[str, Any]:
        """Loads configuration from _config.yml."""
        config_path = self.config_path
        if not config_path.exists():
            return {}

        try:
            with config_path.open(encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

        if not isinstance(data, dict):
            msg = f"Configuration root must be a mapping (dictionary), got {type(data).__name__}"
            raise ConfigError(msg)
        return data


def _env_keys() -> set[tuple[str, ...]]:
    """``FOLIO_SITE__TITLE`` -> ``("site", "title")``."""
    return {
        tuple(part.lower() for part in name.removeprefix(ENV_PREFIX).split("__") if part)
        for name in os.environ
        if name.startswith(ENV_PREFIX)
    }
