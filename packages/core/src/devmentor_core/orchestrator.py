"""Review submission orchestration: provider call → extraction → persistence."""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING, Callable

from devmentor_core.config import api_key_for
from devmentor_core.errors import PersistenceError, ProviderError, ProviderUnauthorizedError
from devmentor_core.extractor import extract
from devmentor_core.models import Analysis, ProviderSuccess, ReviewRequest
from devmentor_core.providers.anthropic import AnthropicProvider
from devmentor_core.providers.openai import OpenAIProvider
from devmentor_core.providers.openrouter import OpenRouterProvider
from devmentor_store.base import StoreError
from devmentor_store.models import IssueRecord, StoredReview, SuggestionRecord

if TYPE_CHECKING:
    from devmentor_core.providers.base import BaseProvider
    from devmentor_store.base import BaseStore

logger = logging.getLogger(__name__)


class SubmissionState(str, Enum):
    BUILT = "built"
    PROVIDER_PENDING = "provider_pending"
    PROVIDER_OK = "provider_ok"
    PROVIDER_FAILED = "provider_failed"
    EXTRACTED = "extracted"
    PERSISTED = "persisted"
    FAILED = "failed"


def get_provider(config: dict) -> BaseProvider:
    """Build the provider named by ``config["model"]``.

    Raises ConfigurationError if the provider is unknown or has no API key.
    """
    api_key = api_key_for(config)
    model = config["model"]
    common = {
        "api_key": api_key,
        "model": config.get("model_id"),
        "temperature": config.get("temperature"),
        "max_tokens": config.get("max_tokens"),
        "timeout": config.get("request_timeout"),
    }
    if model == "openrouter":
        return OpenRouterProvider(site_url=config.get("site_url") or "http://localhost:3000", **common)
    if model == "openai":
        return OpenAIProvider(**common)
    return AnthropicProvider(**common)


def to_stored_review(request: ReviewRequest, analysis: Analysis, result: ProviderSuccess) -> StoredReview:
    """Map a submission and its analysis to the record handed to the store."""
    return StoredReview(
        title=request.title,
        description=request.description,
        code=request.code,
        language=request.language,
        submitter_id=request.submitter_id,
        overall_score=analysis.overall_score,
        complexity=analysis.complexity,
        maintainability=analysis.maintainability,
        performance=analysis.performance,
        security=analysis.security,
        low_confidence=analysis.low_confidence,
        raw_text=result.raw_text,
        model_id=result.model_id,
        token_count=result.usage.token_count,
        issues=[
            IssueRecord(
                type=i.type,
                severity=i.severity,
                line=i.line,
                message=i.message,
                suggestion=i.suggestion,
            )
            for i in analysis.issues
        ],
        suggestions=[
            SuggestionRecord(type=s.type, message=s.message, code_example=s.code_example)
            for s in analysis.suggestions
        ],
    )


class ReviewOrchestrator:
    """Runs one submission through the provider, the extractor and the store.

    Sequential and stateless between calls: concurrent submissions share
    nothing but the store. Every submit() creates a new StoredReview.
    """

    def __init__(
        self,
        provider: BaseProvider,
        store: BaseStore,
        extractor: Callable[[str], Analysis] = extract,
        retry_after: int = 60,
    ):
        self.provider = provider
        self.store = store
        self.extractor = extractor
        self.retry_after = retry_after

    def submit(self, request: ReviewRequest) -> StoredReview:
        """Review and persist one submission.

        Raises a ProviderError subclass if the provider failed (nothing is
        extracted or stored), or PersistenceError if the store rejected the
        record (the analysis is discarded).
        """
        logger.info(
            "Starting code review for %s: %s, %d characters",
            request.submitter_id,
            request.language,
            len(request.code),
        )
        self._transition(SubmissionState.PROVIDER_PENDING)
        result = self.provider.analyze(request)

        if not result.ok:
            self._transition(SubmissionState.PROVIDER_FAILED, result.kind.value)
            error = ProviderError.from_failure(result, retry_after=self.retry_after)
            if isinstance(error, ProviderUnauthorizedError):
                logger.error("AI provider rejected the configured credentials: %s", error.detail)
            self._transition(SubmissionState.FAILED, error.category)
            raise error

        self._transition(SubmissionState.PROVIDER_OK, f"{result.usage.token_count} tokens")
        analysis = self.extractor(result.raw_text)
        self._transition(SubmissionState.EXTRACTED, f"score={analysis.overall_score}")

        try:
            stored = self.store.save(to_stored_review(request, analysis, result))
        except StoreError as e:
            self._transition(SubmissionState.FAILED, "persistence")
            raise PersistenceError(f"Failed to save review to database: {e}") from e

        self._transition(SubmissionState.PERSISTED, stored.id)
        logger.info("Code review completed and saved: %s", stored.id)
        return stored

    @staticmethod
    def _transition(state: SubmissionState, detail: str = "") -> None:
        logger.debug("submission → %s %s", state.value, detail)
