"""Base provider implementing the Template Method pattern.

All providers share the same request/response contract:
    analyze() → _build_system_prompt() + _build_user_prompt()
              → _call_api()        ← only this differs per provider
              → ProviderSuccess | ProviderFailure

Subclasses implement two things only:
  - __init__: validate and store the SDK client
  - _call_api: make one raw API call and return a Completion

There is deliberately no retry here: a transient failure is reported to the
caller immediately as a typed ProviderFailure.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass

from devmentor_core.models import (
    FailureKind,
    ProviderFailure,
    ProviderResult,
    ProviderSuccess,
    ReviewRequest,
    Usage,
)

logger = logging.getLogger(__name__)

_TEMPERATURE = 0.3
_MAX_TOKENS = 2500


@dataclass(frozen=True)
class Completion:
    """One raw chat-completion response, normalised across SDKs."""

    text: str | None
    total_tokens: int = 0
    model: str | None = None


def classify_status(status: int | None, detail: str) -> ProviderFailure:
    """Map an upstream HTTP status to a FailureKind."""
    if status == 429:
        kind = FailureKind.RATE_LIMITED
    elif status in (401, 403):
        kind = FailureKind.UNAUTHORIZED
    elif status is not None and status >= 500:
        kind = FailureKind.UNAVAILABLE
    else:
        kind = FailureKind.UNKNOWN
    return ProviderFailure(kind=kind, detail=detail, status_code=status)


class BaseProvider(ABC):
    NAME: str = "provider"
    MODEL: str = ""
    TEMPERATURE: float = _TEMPERATURE
    MAX_TOKENS: int = _MAX_TOKENS
    # Transport-level errors (unreachable host, timeout) that carry no HTTP status.
    CONNECTION_ERRORS: tuple[type[BaseException], ...] = (ConnectionError, TimeoutError)

    def __init__(
        self,
        model: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ):
        self.model = model or self.MODEL
        self.temperature = self.TEMPERATURE if temperature is None else temperature
        self.max_tokens = max_tokens or self.MAX_TOKENS

    # ------------------------------------------------------------------ #
    # Public interface                                                     #
    # ------------------------------------------------------------------ #

    def analyze(self, request: ReviewRequest) -> ProviderResult:
        """Request a review of one submission and return raw text or a typed failure.

        Makes exactly one outbound call. Never raises for provider-side
        problems; those come back as ProviderFailure.
        """
        system = self._build_system_prompt()
        user = self._build_user_prompt(request)
        logger.debug(
            "%s: requesting review (%s, %d chars) from %s",
            self.__class__.__name__,
            request.language,
            len(request.code),
            self.model,
        )
        try:
            completion = self._call_api(system, user)
        except Exception as e:
            failure = self._classify_error(e)
            logger.warning(
                "%s API error (%s): %s",
                self.__class__.__name__,
                failure.kind.value,
                failure.detail,
            )
            return failure

        if not completion.text or not completion.text.strip():
            logger.warning("%s returned no response content", self.__class__.__name__)
            return ProviderFailure(
                kind=FailureKind.UNAVAILABLE,
                detail="No response content received from AI",
            )

        return ProviderSuccess(
            raw_text=completion.text,
            model_id=completion.model or self.model,
            usage=Usage(token_count=completion.total_tokens or 0),
        )

    # ------------------------------------------------------------------ #
    # Abstract: implement in each provider                                #
    # ------------------------------------------------------------------ #

    @abstractmethod
    def _call_api(self, system_prompt: str, user_prompt: str) -> Completion:
        """Make a single API call and return the raw completion.

        Should raise on failure; analyze() turns the exception into a
        ProviderFailure via _classify_error.
        """

    # ------------------------------------------------------------------ #
    # Shared implementations                                               #
    # ------------------------------------------------------------------ #

    def _classify_error(self, error: Exception) -> ProviderFailure:
        status = getattr(error, "status_code", None)
        if not isinstance(status, int):
            status = None
        detail = getattr(error, "message", None) or str(error) or error.__class__.__name__
        if status is None and isinstance(error, self.CONNECTION_ERRORS):
            return ProviderFailure(kind=FailureKind.UNAVAILABLE, detail=detail)
        return classify_status(status, detail)

    def _build_system_prompt(self) -> str:
        return (
            "You are a senior software engineer and expert code reviewer. "
            "Provide detailed, actionable feedback on code quality, security, performance, "
            "and best practices. Focus on helping developers improve their skills for "
            "technical interviews and professional development."
        )

    def _build_user_prompt(self, request: ReviewRequest) -> str:
        language = request.language
        return f"""Please review this {language} code and provide comprehensive feedback:

Title: {request.title}
Description: {request.description or "No description provided"}

Code to review:
```{language}
{request.code}
```

Please provide detailed analysis including:

1. **Overall Assessment**: Rate the code quality (1-10)
2. **Critical Issues**: Any bugs, security vulnerabilities, or major problems
3. **Performance**: Optimization opportunities and bottlenecks
4. **Code Quality**: Style, readability, maintainability concerns
5. **Best Practices**: Industry standards and {language} specific recommendations
6. **Suggestions**: Specific improvements with code examples
7. **Complexity**: Overall complexity level (low/medium/high)

Format your response with clear sections and be specific about line numbers where applicable."""
