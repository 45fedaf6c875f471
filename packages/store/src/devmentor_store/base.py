"""Abstract store interface.

Every backend (SQLite, in-memory) implements this interface. The CLI and
the review orchestrator depend on BaseStore, not on a concrete backend.

All reads are scoped to the owning submitter: a review that exists but
belongs to someone else is reported exactly like a missing one.
"""

from __future__ import annotations

import dataclasses
import uuid
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from devmentor_store.models import ReviewPage, StoredReview


class StoreError(Exception):
    """Raised when the storage backend fails to read or write."""


def utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


class BaseStore(ABC):
    """Pluggable persistence layer for stored reviews."""

    @abstractmethod
    def save(self, review: StoredReview) -> StoredReview:
        """Persist a new review and return it with id and timestamps assigned.

        Every call creates a new record; there is no deduplication.
        Raises StoreError on backend failure.
        """

    @abstractmethod
    def get(self, review_id: str, submitter_id: str) -> StoredReview | None:
        """Return the submitter's review, or None if absent or not theirs."""

    @abstractmethod
    def list_reviews(self, submitter_id: str, page: int = 1, limit: int = 10) -> ReviewPage:
        """Return one page of the submitter's reviews, newest first."""

    @abstractmethod
    def all_reviews(self, submitter_id: str) -> list[StoredReview]:
        """Return every review of the submitter, oldest first."""

    @abstractmethod
    def update(
        self,
        review_id: str,
        submitter_id: str,
        title: str | None = None,
        description: str | None = None,
    ) -> StoredReview | None:
        """Change title and/or description. Empty values leave the field as is.

        Returns the updated review, or None if absent or not the submitter's.
        """

    @abstractmethod
    def delete(self, review_id: str, submitter_id: str) -> bool:
        """Delete the submitter's review. Returns False if nothing was deleted."""

    def close(self) -> None:
        """Release the backend connection. A no-op unless the backend holds one."""

    @staticmethod
    def _stamp_new(review: StoredReview) -> StoredReview:
        now = utc_now()
        return dataclasses.replace(review, id=uuid.uuid4().hex, created_at=now, updated_at=now)

    @staticmethod
    def _page_bounds(page: int, limit: int) -> tuple[int, int]:
        page = max(page, 1)
        limit = max(limit, 1)
        return page, limit
