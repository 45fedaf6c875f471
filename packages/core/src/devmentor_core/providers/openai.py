from __future__ import annotations

try:
    import openai as _openai
    from openai import OpenAI as _OpenAI
except ImportError:
    _openai = None  # type: ignore[assignment]
    _OpenAI = None  # type: ignore[assignment,misc]

from devmentor_core.providers.base import BaseProvider, Completion


class OpenAIProvider(BaseProvider):
    NAME = "openai"
    MODEL = "gpt-4o-mini"
    BASE_URL: str | None = None

    def __init__(
        self,
        api_key: str,
        model: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
        timeout: float | None = None,
        default_headers: dict[str, str] | None = None,
    ):
        if _OpenAI is None:
            raise ImportError(
                "The 'openai' package is required for this provider. " "Install it with: pip install openai"
            )
        super().__init__(model=model, temperature=temperature, max_tokens=max_tokens)
        client_kwargs: dict = {"api_key": api_key}
        if self.BASE_URL:
            client_kwargs["base_url"] = self.BASE_URL
        if default_headers:
            client_kwargs["default_headers"] = default_headers
        if timeout is not None:
            client_kwargs["timeout"] = timeout
        self.client = _OpenAI(**client_kwargs)
        # APITimeoutError subclasses APIConnectionError.
        self.CONNECTION_ERRORS = (_openai.APIConnectionError, ConnectionError, TimeoutError)

    def _call_api(self, system_prompt: str, user_prompt: str) -> Completion:
        response = self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )
        content = response.choices[0].message.content if response.choices else None
        usage = getattr(response, "usage", None)
        return Completion(
            text=content,
            total_tokens=getattr(usage, "total_tokens", 0) or 0,
            model=getattr(response, "model", None) or self.model,
        )
