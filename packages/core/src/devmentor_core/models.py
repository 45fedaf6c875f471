"""Submission, provider result and analysis types.

Decoupled from devmentor_store: the orchestrator maps a ReviewRequest and
its Analysis to a StoredReview only at persistence time.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Union

DEFAULT_SCORE = 7.0
DEFAULT_COMPLEXITY = "medium"
DEFAULT_MAINTAINABILITY = 75
DEFAULT_PERFORMANCE = 80
DEFAULT_SECURITY = 70


@dataclass(frozen=True)
class ReviewRequest:
    """A validated code submission. Build with validation.build_request()."""

    title: str
    code: str
    language: str
    submitter_id: str
    description: str | None = None


class FailureKind(str, Enum):
    RATE_LIMITED = "rate_limited"
    UNAUTHORIZED = "unauthorized"
    UNAVAILABLE = "unavailable"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class Usage:
    token_count: int = 0


@dataclass(frozen=True)
class ProviderSuccess:
    raw_text: str
    model_id: str
    usage: Usage = field(default_factory=Usage)

    ok: ClassVar[bool] = True


@dataclass(frozen=True)
class ProviderFailure:
    kind: FailureKind
    detail: str
    status_code: int | None = None

    ok: ClassVar[bool] = False


ProviderResult = Union[ProviderSuccess, ProviderFailure]


@dataclass
class Issue:
    type: str  # "bug" | "performance" | "security" | "style" | "maintainability"
    severity: str  # "low" | "medium" | "high" | "critical"
    line: int
    message: str
    suggestion: str | None = None


@dataclass
class Suggestion:
    type: str  # "improvement" | "optimization" | "best-practice"
    message: str
    code_example: str | None = None


@dataclass
class Analysis:
    """Heuristically derived summary of a provider's free-text review.

    Every field always has a value. A freshly constructed Analysis is the
    documented default, flagged low_confidence until a signal is found.
    """

    overall_score: float = DEFAULT_SCORE
    complexity: str = DEFAULT_COMPLEXITY
    maintainability: int = DEFAULT_MAINTAINABILITY
    performance: int = DEFAULT_PERFORMANCE
    security: int = DEFAULT_SECURITY
    issues: list[Issue] = field(default_factory=list)
    suggestions: list[Suggestion] = field(default_factory=list)
    low_confidence: bool = True
