"""Markdown rendering for document bodies."""

from markdown_it import MarkdownIt

# --- Markdown Renderer ---
_md = MarkdownIt("commonmark", {"html": True}).enable("table")


def render_html(content: str | None) -> str:
    """Render markdown content to HTML.

    Fenced code blocks are emitted as-is inside ``<pre><code>``; their
    contents are never interpreted. Returns an empty string for no content.
    """
    if content:
        return _md.render(content).strip()
    return ""


def fenced_spans(content: str) -> list[tuple[int, int]]:
    """Character ranges ``[start, end)`` covered by fenced code blocks."""
    offsets = [0]
    for line in content.split("\n"):
        offsets.append(offsets[-1] + len(line) + 1)
    return [
        (offsets[token.map[0]], min(offsets[token.map[1]], len(content)))
        for token in _md.parse(content)
        if token.type == "fence" and token.map
    ]
