"""Core exceptions for Folio."""


class FolioError(Exception):
    """Base exception for all Folio errors."""


class ConfigError(FolioError):
    """Raised when the site configuration cannot be loaded or validated."""


class ParseError(FolioError):
    """Raised when a source document cannot be parsed."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class DuplicateDocumentError(ParseError):
    """Raised when two documents share the same source path."""

    def __init__(self, path: str) -> None:
        super().__init__(path, "duplicate document path")


class RenderError(FolioError):
    """Raised when a page cannot be rendered.

    ``path`` is the source document path for post pages, or the output page
    for generated listings.
    """

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")
