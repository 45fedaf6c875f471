"""In-memory store — process-local, nothing survives exit.

Handy for one-off runs (`store: memory` in .devmentor.yml) and as a
lightweight stand-in where a real database is unnecessary.
"""

from __future__ import annotations

import dataclasses

from devmentor_store.base import BaseStore, utc_now
from devmentor_store.models import ReviewPage, StoredReview


class MemoryStore(BaseStore):
    """Keeps reviews in an insertion-ordered dict keyed by review id."""

    def __init__(self):
        self._reviews: dict[str, StoredReview] = {}

    def save(self, review: StoredReview) -> StoredReview:
        review = self._stamp_new(review)
        self._reviews[review.id] = review
        return review

    def get(self, review_id: str, submitter_id: str) -> StoredReview | None:
        review = self._reviews.get(review_id)
        if review is None or review.submitter_id != submitter_id:
            return None
        return review

    def list_reviews(self, submitter_id: str, page: int = 1, limit: int = 10) -> ReviewPage:
        page, limit = self._page_bounds(page, limit)
        newest_first = list(reversed(self.all_reviews(submitter_id)))
        start = (page - 1) * limit
        return ReviewPage(
            reviews=newest_first[start : start + limit],
            page=page,
            limit=limit,
            total_count=len(newest_first),
        )

    def all_reviews(self, submitter_id: str) -> list[StoredReview]:
        return [r for r in self._reviews.values() if r.submitter_id == submitter_id]

    def update(
        self,
        review_id: str,
        submitter_id: str,
        title: str | None = None,
        description: str | None = None,
    ) -> StoredReview | None:
        existing = self.get(review_id, submitter_id)
        if existing is None:
            return None
        updated = dataclasses.replace(
            existing,
            title=title or existing.title,
            description=description or existing.description,
            updated_at=utc_now(),
        )
        self._reviews[review_id] = updated
        return updated

    def delete(self, review_id: str, submitter_id: str) -> bool:
        if self.get(review_id, submitter_id) is None:
            return False
        del self._reviews[review_id]
        return True
