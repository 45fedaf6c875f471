from __future__ import annotations

from devmentor_core.providers.base import BaseProvider, Completion


class AnthropicProvider(BaseProvider):
    NAME = "anthropic"
    MODEL = "claude-sonnet-4-20250514"

    def __init__(
        self,
        api_key: str,
        model: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
        timeout: float | None = None,
    ):
        try:
            import anthropic
        except ImportError:
            raise ImportError(
                "The 'anthropic' package is required for this provider. "
                "Install it with: pip install anthropic"
            )
        super().__init__(model=model, temperature=temperature, max_tokens=max_tokens)
        client_kwargs: dict = {"api_key": api_key}
        if timeout is not None:
            client_kwargs["timeout"] = timeout
        self.client = anthropic.Anthropic(**client_kwargs)
        self.CONNECTION_ERRORS = (anthropic.APIConnectionError, ConnectionError, TimeoutError)

    def _call_api(self, system_prompt: str, user_prompt: str) -> Completion:
        # optional dependency, checked in __init__
        from anthropic.types import TextBlock

        response = self.client.messages.create(
            model=self.model,
            system=system_prompt,
            messages=[{"role": "user", "content": user_prompt}],
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )
        text_blocks = [block.text for block in response.content if isinstance(block, TextBlock)]
        usage = getattr(response, "usage", None)
        total_tokens = (getattr(usage, "input_tokens", 0) or 0) + (getattr(usage, "output_tokens", 0) or 0)
        return Completion(
            text="".join(text_blocks).strip(),
            total_tokens=total_tokens,
            model=getattr(response, "model", None) or self.model,
        )
