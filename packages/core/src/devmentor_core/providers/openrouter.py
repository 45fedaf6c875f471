from __future__ import annotations

from devmentor_core.providers.openai import OpenAIProvider


class OpenRouterProvider(OpenAIProvider):
    """OpenAI-compatible client pointed at OpenRouter.

    OpenRouter uses the HTTP-Referer and X-Title headers to attribute traffic
    to the calling application.
    """

    NAME = "openrouter"
    MODEL = "meta-llama/llama-3.1-8b-instruct:free"
    BASE_URL = "https://openrouter.ai/api/v1"
    APP_TITLE = "DevMentor AI - Code Review Platform"

    def __init__(
        self,
        api_key: str,
        model: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
        timeout: float | None = None,
        site_url: str = "http://localhost:3000",
    ):
        super().__init__(
            api_key=api_key,
            model=model,
            temperature=temperature,
            max_tokens=max_tokens,
            timeout=timeout,
            default_headers={"HTTP-Referer": site_url, "X-Title": self.APP_TITLE},
        )
