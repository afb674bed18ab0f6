"""Shared fixtures for building throwaway site trees."""

from __future__ import annotations

import os
from collections.abc import Callable
from pathlib import Path
from textwrap import dedent

import pytest

from folio.core.config import FolioConfig, PathsSettings, SiteSettings


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    # FOLIO_* variables from the shell would leak into configs
    for key in list(os.environ):
        if key.startswith("FOLIO_"):
            monkeypatch.delenv(key)


@pytest.fixture
def site_root(tmp_path: Path) -> Path:
    root = tmp_path / "site"
    (root / "_posts").mkdir(parents=True)
    return root


@pytest.fixture
def config(site_root: Path) -> FolioConfig:
    return FolioConfig(
        site=SiteSettings(title="Test Blog", base_url="https://blog.example.com"),
        paths=PathsSettings(site_root=site_root),
    )


@pytest.fixture
def write_post(site_root: Path) -> Callable[..., Path]:
    """Write a post below ``_posts``; text is dedented."""

    def _write(name: str, text: str) -> Path:
        path = site_root / "_posts" / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(dedent(text).lstrip("\n"), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def write_layout(site_root: Path) -> Callable[[str, str], Path]:
    def _write(name: str, text: str) -> Path:
        path = site_root / "_layouts" / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(dedent(text).lstrip("\n"), encoding="utf-8")
        return path

    return _write
