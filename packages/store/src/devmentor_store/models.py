"""Persisted review data models.

Kept free of devmentor_core imports so the store layer can be used on its
own; the orchestrator maps a request and its analysis to a StoredReview.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field


@dataclass
class IssueRecord:
    """A single heuristic issue attached to a stored review."""

    type: str
    severity: str
    line: int
    message: str
    suggestion: str | None = None


@dataclass
class SuggestionRecord:
    type: str
    message: str
    code_example: str | None = None


@dataclass
class StoredReview:
    """A submitted snippet, the provider's raw review and the derived analysis.

    Owned by ``submitter_id``. Only title and description change after
    creation; the analysis fields are never recomputed.
    """

    title: str
    code: str
    language: str
    submitter_id: str
    overall_score: float
    complexity: str
    maintainability: int
    performance: int
    security: int
    raw_text: str
    description: str | None = None
    model_id: str = ""
    token_count: int = 0
    low_confidence: bool = False
    issues: list[IssueRecord] = field(default_factory=list)
    suggestions: list[SuggestionRecord] = field(default_factory=list)
    id: str = ""  # assigned by the store on save
    created_at: str = ""  # ISO-8601 UTC timestamp
    updated_at: str = ""

    @property
    def issues_count(self) -> int:
        return len(self.issues)

    @property
    def suggestions_count(self) -> int:
        return len(self.suggestions)


@dataclass
class ReviewPage:
    """One page of a submitter's reviews, newest first."""

    reviews: list[StoredReview]
    page: int
    limit: int
    total_count: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_count / self.limit) if self.limit else 0

    @property
    def has_next(self) -> bool:
        return (self.page - 1) * self.limit + self.limit < self.total_count

    @property
    def has_prev(self) -> bool:
        return self.page > 1
