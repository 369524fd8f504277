from __future__ import annotations

try:
    from openai import OpenAI as _OpenAI
except ImportError:
    _OpenAI = None  # type: ignore[assignment,misc]

from docreview_core.providers.base import BaseRewriter


class OpenAIRewriter(BaseRewriter):
    MODEL = "gpt-4o"
    TEMPERATURE = 0.0

    def __init__(self, api_key: str, timeout: float = 300.0, max_tokens: int | None = None):
        super().__init__(timeout=timeout, max_tokens=max_tokens)
        if _OpenAI is None:
            raise ImportError(
                "The 'openai' package is required for this provider. "
                "Install it with: pip install 'docreview[openai]'"
            )
        self.client = _OpenAI(api_key=api_key, timeout=timeout, max_retries=0)

    def _call_api(self, system_prompt: str, user_prompt: str) -> str:
        response = self.client.chat.completions.create(
            model=self.MODEL,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            temperature=self.TEMPERATURE,
            max_tokens=self.MAX_TOKENS,
        )
        return response.choices[0].message.content
