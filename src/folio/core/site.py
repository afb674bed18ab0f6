"""The ordered, grouped document collection handed to the renderer."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime

from folio.core.exceptions import DuplicateDocumentError
from folio.core.types import Document

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Site:
    """Published documents, newest first, plus their category listings.

    Category names are matched case-sensitively: ``Go`` and ``go`` are
    separate listings.
    """

    documents: tuple[Document, ...] = ()
    categories: dict[str, tuple[Document, ...]] = field(default_factory=dict)
    errors: tuple[DuplicateDocumentError, ...] = ()

    @classmethod
    def from_documents(cls, documents: Iterable[Document]) -> Site:
        """Factory to build a Site from loaded documents.

        Unpublished documents are dropped. When two documents share a path
        the first one wins and the rest are reported.
        """
        seen: dict[str, Document] = {}
        errors: list[DuplicateDocumentError] = []
        for doc in documents:
            if doc.path in seen:
                error = DuplicateDocumentError(doc.path)
                logger.error("Ignoring %s", error)
                errors.append(error)
                continue
            seen[doc.path] = doc

        published = [doc for doc in seen.values() if doc.published]
        skipped = len(seen) - len(published)
        if skipped:
            logger.info("Skipping %d unpublished documents", skipped)

        ordered = tuple(sorted(published, key=lambda d: d.sort_key))

        grouped: dict[str, list[Document]] = {}
        for doc in ordered:
            for category in doc.categories:
                grouped.setdefault(category, []).append(doc)

        categories = {name: tuple(grouped[name]) for name in sorted(grouped)}
        return cls(documents=ordered, categories=categories, errors=tuple(errors))

    @property
    def updated(self) -> datetime | None:
        """Date of the newest document, or None for an empty site."""
        if not self.documents:
            return None
        return self.documents[0].date

    def recent(self, limit: int) -> tuple[Document, ...]:
        return self.documents[:limit]
