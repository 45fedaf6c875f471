"""Error taxonomy for the review submission path.

Validation fails before any network call. Provider failures are surfaced
untouched as one ProviderError subclass per FailureKind. PersistenceError is
raised when the store rejects a review after a successful provider call.

Each error carries the HTTP-equivalent status and the message safe to show an
end user; operator-only detail stays in ``detail`` and the logs.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from devmentor_core.models import ProviderFailure


class DevMentorError(Exception):
    """Base exception for DevMentor."""

    status_code: int = 500
    category: str = "internal"

    @property
    def user_message(self) -> str:
        return str(self)


class ValidationError(DevMentorError):
    """Bad submission input. Raised before the provider is contacted."""

    status_code = 400
    category = "validation"


class ConfigurationError(DevMentorError):
    """Missing or invalid configuration (e.g. no API key for the provider)."""

    category = "configuration"

    @property
    def user_message(self) -> str:
        return "AI service configuration error. Please contact support."


class ProviderError(DevMentorError):
    """A categorized failure reported by the AI provider adapter."""

    category = "provider_unknown"

    def __init__(self, detail: str, upstream_status: int | None = None):
        super().__init__(detail)
        self.detail = detail
        self.upstream_status = upstream_status

    @classmethod
    def from_failure(cls, failure: ProviderFailure, retry_after: int = 60) -> ProviderError:
        from devmentor_core.models import FailureKind

        if failure.kind is FailureKind.RATE_LIMITED:
            return RateLimitedError(failure.detail, failure.status_code, retry_after=retry_after)
        if failure.kind is FailureKind.UNAUTHORIZED:
            return ProviderUnauthorizedError(failure.detail, failure.status_code)
        if failure.kind is FailureKind.UNAVAILABLE:
            return ProviderUnavailableError(failure.detail, failure.status_code)
        return ProviderUnknownError(failure.detail, failure.status_code)


class RateLimitedError(ProviderError):
    status_code = 429
    category = "provider_rate_limited"

    def __init__(self, detail: str, upstream_status: int | None = None, retry_after: int = 60):
        super().__init__(detail, upstream_status)
        self.retry_after = retry_after

    @property
    def user_message(self) -> str:
        return f"AI service rate limit exceeded. Please try again in {self.retry_after} seconds."


class ProviderUnauthorizedError(ProviderError):
    """The provider rejected our credentials. An operator problem, not the user's."""

    status_code = 500
    category = "provider_unauthorized"

    @property
    def user_message(self) -> str:
        return "AI service configuration error. Please contact support."


class ProviderUnavailableError(ProviderError):
    status_code = 503
    category = "provider_unavailable"

    @property
    def user_message(self) -> str:
        return "AI service temporarily unavailable. Please try again later."


class ProviderUnknownError(ProviderError):
    category = "provider_unknown"

    @property
    def status_code(self) -> int:  # type: ignore[override]
        return self.upstream_status or 500

    @property
    def user_message(self) -> str:
        return f"AI analysis failed: {self.detail}"


class PersistenceError(DevMentorError):
    """The review was analysed but could not be saved. The analysis is lost."""

    category = "persistence"

    @property
    def user_message(self) -> str:
        return "Failed to save review. Please try again."
