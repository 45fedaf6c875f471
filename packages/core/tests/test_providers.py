"""Tests for the AI provider adapters.

Failure classification and prompt building live in BaseProvider and are
exercised through a stub. The SDK-specific classes only get tests for client
setup and response unpacking.
"""

import types
from unittest.mock import MagicMock, patch

import pytest

from devmentor_core.models import FailureKind, ReviewRequest
from devmentor_core.providers.anthropic import AnthropicProvider
from devmentor_core.providers.base import BaseProvider, Completion, classify_status
from devmentor_core.providers.openai import OpenAIProvider
from devmentor_core.providers.openrouter import OpenRouterProvider

REVIEW_TEXT = "Overall 8/10. Consider adding error handling."


def _request(**overrides):
    fields = {
        "title": "Fizzbuzz",
        "description": "Classic interview warm-up",
        "code": "for i in range(1, 16):\n    print(i)",
        "language": "python",
        "submitter_id": "dev@example.com",
    }
    fields.update(overrides)
    return ReviewRequest(**fields)


class _StubProvider(BaseProvider):
    """Minimal concrete subclass used to test BaseProvider shared methods."""

    MODEL = "stub-model"

    def __init__(self, completion=None, error=None):
        super().__init__()
        self._completion = completion or Completion(text=REVIEW_TEXT, total_tokens=321, model="stub-model-v2")
        self._error = error
        self.calls = 0

    def _call_api(self, system_prompt: str, user_prompt: str) -> Completion:
        self.calls += 1
        if self._error is not None:
            raise self._error
        return self._completion


class _StatusError(Exception):
    def __init__(self, status_code, message="upstream says no"):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


# ---------------------------------------------------------------------------
# BaseProvider behaviour
# ---------------------------------------------------------------------------


class TestAnalyzeSuccess:
    def test_returns_raw_text_usage_and_model(self):
        result = _StubProvider().analyze(_request())
        assert result.ok is True
        assert result.raw_text == REVIEW_TEXT
        assert result.usage.token_count == 321
        assert result.model_id == "stub-model-v2"

    def test_falls_back_to_configured_model_id(self):
        provider = _StubProvider(completion=Completion(text="fine", total_tokens=0, model=None))
        assert provider.analyze(_request()).model_id == "stub-model"

    def test_makes_exactly_one_call(self):
        provider = _StubProvider()
        provider.analyze(_request())
        assert provider.calls == 1


class TestAnalyzeFailures:
    @pytest.mark.parametrize(
        "status, kind",
        [
            (429, FailureKind.RATE_LIMITED),
            (401, FailureKind.UNAUTHORIZED),
            (403, FailureKind.UNAUTHORIZED),
            (500, FailureKind.UNAVAILABLE),
            (503, FailureKind.UNAVAILABLE),
            (400, FailureKind.UNKNOWN),
            (404, FailureKind.UNKNOWN),
        ],
    )
    def test_status_mapping(self, status, kind):
        result = _StubProvider(error=_StatusError(status)).analyze(_request())
        assert result.ok is False
        assert result.kind is kind
        assert result.status_code == status

    def test_unknown_failure_carries_provider_message(self):
        result = _StubProvider(error=_StatusError(422, "context length exceeded")).analyze(_request())
        assert result.kind is FailureKind.UNKNOWN
        assert "context length exceeded" in result.detail

    def test_connection_error_is_unavailable(self):
        result = _StubProvider(error=ConnectionError("connection refused")).analyze(_request())
        assert result.kind is FailureKind.UNAVAILABLE
        assert result.status_code is None

    def test_timeout_is_unavailable(self):
        result = _StubProvider(error=TimeoutError("timed out")).analyze(_request())
        assert result.kind is FailureKind.UNAVAILABLE

    def test_unexpected_exception_is_unknown(self):
        result = _StubProvider(error=RuntimeError("boom")).analyze(_request())
        assert result.kind is FailureKind.UNKNOWN
        assert result.detail == "boom"

    def test_empty_content_is_unavailable(self):
        result = _StubProvider(completion=Completion(text=None)).analyze(_request())
        assert result.kind is FailureKind.UNAVAILABLE

    def test_whitespace_content_is_unavailable(self):
        result = _StubProvider(completion=Completion(text="   \n")).analyze(_request())
        assert result.kind is FailureKind.UNAVAILABLE

    def test_failure_is_not_retried(self):
        provider = _StubProvider(error=_StatusError(503))
        provider.analyze(_request())
        assert provider.calls == 1


class TestClassifyStatus:
    def test_none_status_is_unknown(self):
        assert classify_status(None, "x").kind is FailureKind.UNKNOWN

    def test_599_is_unavailable(self):
        assert classify_status(599, "x").kind is FailureKind.UNAVAILABLE


class TestPrompts:
    def test_user_prompt_contains_title_language_and_code(self):
        prompt = _StubProvider()._build_user_prompt(_request())
        assert "Fizzbuzz" in prompt
        assert "```python" in prompt
        assert "print(i)" in prompt

    def test_user_prompt_contains_description(self):
        prompt = _StubProvider()._build_user_prompt(_request())
        assert "Classic interview warm-up" in prompt

    def test_missing_description_placeholder(self):
        prompt = _StubProvider()._build_user_prompt(_request(description=None))
        assert "No description provided" in prompt

    def test_user_prompt_asks_for_rating_and_complexity(self):
        prompt = _StubProvider()._build_user_prompt(_request())
        assert "(1-10)" in prompt
        assert "low/medium/high" in prompt

    def test_system_prompt_sets_reviewer_persona(self):
        assert "code reviewer" in _StubProvider()._build_system_prompt()


class TestGenerationParameters:
    def test_defaults(self):
        provider = _StubProvider()
        assert provider.temperature == 0.3
        assert provider.max_tokens == 2500

    def test_zero_temperature_is_kept(self):
        class _P(_StubProvider):
            def __init__(self):
                BaseProvider.__init__(self, temperature=0.0)

        assert _P().temperature == 0.0


# ---------------------------------------------------------------------------
# SDK adapters
# ---------------------------------------------------------------------------


def _openai_response(content=REVIEW_TEXT, total_tokens=150, model="gpt-4o-mini-2024"):
    message = types.SimpleNamespace(content=content)
    return types.SimpleNamespace(
        choices=[types.SimpleNamespace(message=message)],
        usage=types.SimpleNamespace(total_tokens=total_tokens),
        model=model,
    )


class TestOpenAIProvider:
    def test_raises_import_error_without_sdk(self):
        import devmentor_core.providers.openai as openai_mod

        real_openai = openai_mod._OpenAI
        openai_mod._OpenAI = None
        try:
            with pytest.raises(ImportError):
                OpenAIProvider(api_key="key")
        finally:
            openai_mod._OpenAI = real_openai

    def test_sends_chat_completion_request(self):
        provider = OpenAIProvider(api_key="key")
        provider.client = MagicMock()
        provider.client.chat.completions.create.return_value = _openai_response()

        result = provider.analyze(_request())

        assert result.ok is True
        assert result.raw_text == REVIEW_TEXT
        assert result.usage.token_count == 150
        kwargs = provider.client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "gpt-4o-mini"
        assert kwargs["temperature"] == 0.3
        assert kwargs["max_tokens"] == 2500
        assert [m["role"] for m in kwargs["messages"]] == ["system", "user"]

    def test_empty_choices_is_unavailable(self):
        provider = OpenAIProvider(api_key="key")
        provider.client = MagicMock()
        provider.client.chat.completions.create.return_value = types.SimpleNamespace(
            choices=[], usage=None, model=None
        )
        assert provider.analyze(_request()).kind is FailureKind.UNAVAILABLE

    def test_sdk_connection_error_is_unavailable(self):
        import httpx
        import openai

        provider = OpenAIProvider(api_key="key")
        provider.client = MagicMock()
        provider.client.chat.completions.create.side_effect = openai.APIConnectionError(
            request=httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
        )
        assert provider.analyze(_request()).kind is FailureKind.UNAVAILABLE

    def test_sdk_rate_limit_error_is_rate_limited(self):
        import httpx
        import openai

        request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
        response = httpx.Response(429, request=request)
        provider = OpenAIProvider(api_key="key")
        provider.client = MagicMock()
        provider.client.chat.completions.create.side_effect = openai.RateLimitError(
            "slow down", response=response, body=None
        )
        result = provider.analyze(_request())
        assert result.kind is FailureKind.RATE_LIMITED
        assert result.status_code == 429


class TestOpenRouterProvider:
    def test_uses_openrouter_base_url_and_headers(self):
        with patch("devmentor_core.providers.openai._OpenAI") as mock_client:
            OpenRouterProvider(api_key="key", site_url="https://devmentor.example")
        kwargs = mock_client.call_args.kwargs
        assert kwargs["base_url"] == "https://openrouter.ai/api/v1"
        assert kwargs["default_headers"]["HTTP-Referer"] == "https://devmentor.example"
        assert "X-Title" in kwargs["default_headers"]

    def test_default_model(self):
        assert OpenRouterProvider.MODEL == "meta-llama/llama-3.1-8b-instruct:free"

    def test_timeout_only_passed_when_set(self):
        with patch("devmentor_core.providers.openai._OpenAI") as mock_client:
            OpenRouterProvider(api_key="key")
        assert "timeout" not in mock_client.call_args.kwargs

        with patch("devmentor_core.providers.openai._OpenAI") as mock_client:
            OpenRouterProvider(api_key="key", timeout=30)
        assert mock_client.call_args.kwargs["timeout"] == 30


class TestAnthropicProvider:
    def test_raises_import_error_without_sdk(self):
        with patch.dict("sys.modules", {"anthropic": None}):
            with pytest.raises(ImportError):
                AnthropicProvider(api_key="key")

    def test_model_is_claude(self):
        assert "claude" in AnthropicProvider.MODEL

    def test_joins_text_blocks_and_sums_usage(self):
        from anthropic.types import TextBlock

        provider = AnthropicProvider(api_key="key")
        provider.client = MagicMock()
        provider.client.messages.create.return_value = types.SimpleNamespace(
            content=[TextBlock(type="text", text="Score: 9/10."), TextBlock(type="text", text=" Simple code.")],
            usage=types.SimpleNamespace(input_tokens=100, output_tokens=40),
            model="claude-sonnet-4-20250514",
        )

        result = provider.analyze(_request())

        assert result.raw_text == "Score: 9/10. Simple code."
        assert result.usage.token_count == 140
        assert provider.client.messages.create.call_args.kwargs["system"]
