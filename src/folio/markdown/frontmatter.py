"""Helpers for parsing YAML frontmatter from Markdown content."""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Any

import frontmatter
import yaml

from folio.core.exceptions import ParseError

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

_OPENING = re.compile(r"^-{3,}\s*$")
# YAML's document end marker "..." may close the block too
_CLOSING = re.compile(r"^(-{3,}|\.{3})\s*$")


def _split(content: str, source: str) -> tuple[str, str]:
    lines = content.splitlines(keepends=True)
    if not lines or not _OPENING.match(lines[0]):
        raise ParseError(source, "missing front matter opening marker '---'")

    for index, line in enumerate(lines[1:], start=1):
        if _CLOSING.match(line):
            return "".join(lines[1:index]), "".join(lines[index + 1 :])
    raise ParseError(source, "front matter closing marker '---' or '...' not found")


def parse_frontmatter(content: str, source: str = "<string>") -> tuple[dict[str, Any], str]:
    """Split Markdown content into its frontmatter mapping and body.

    Unlike python-frontmatter's own ``loads``, a document without a complete
    frontmatter block is an error rather than an empty mapping.

    Args:
        content: Markdown content starting with a ``---`` delimited block.
        source: Name used in error messages, usually the source path.

    Returns:
        Tuple of (metadata dict, body string).

    Raises:
        ParseError: If a marker is missing, the YAML is invalid, or the block
            is not a mapping.

    """
    content = content.removeprefix("\ufeff")
    fm_text, body = _split(content, source)

    handler = frontmatter.YAMLHandler()
    try:
        raw_metadata = handler.load(fm_text)
    except yaml.YAMLError as exc:
        raise ParseError(source, f"invalid YAML in front matter: {exc}") from exc

    if raw_metadata is None:
        return {}, body.lstrip("\n")
    if not isinstance(raw_metadata, dict):
        reason = f"front matter must be a mapping, got {type(raw_metadata).__name__}"
        raise ParseError(source, reason)

    metadata = {str(key): value for key, value in raw_metadata.items()}
    return metadata, body.lstrip("\n")


def parse_frontmatter_file(
    path: Path, *, source: str | None = None, encoding: str = "utf-8"
) -> tuple[dict[str, Any], str]:
    """Read a Markdown file and parse its frontmatter.

    Raises:
        ParseError: If the file cannot be read or its frontmatter is malformed.

    """
    name = source or str(path)
    try:
        content = path.read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError) as exc:
        raise ParseError(name, f"cannot read file: {exc}") from exc
    logger.debug("Parsing frontmatter of %s", name)
    return parse_frontmatter(content, name)
