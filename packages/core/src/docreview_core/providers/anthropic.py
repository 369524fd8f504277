from __future__ import annotations

from docreview_core.providers.base import BaseRewriter


class AnthropicRewriter(BaseRewriter):
    MODEL = "claude-sonnet-4-20250514"
    # Rewrites must stay close to the input file, so keep sampling conservative.
    TEMPERATURE = 0.0

    def __init__(self, api_key: str, timeout: float = 300.0, max_tokens: int | None = None):
        super().__init__(timeout=timeout, max_tokens=max_tokens)
        try:
            from anthropic import Anthropic
        except ImportError:
            raise ImportError(
                "The 'anthropic' package is required for this provider. "
                "Install it with: pip install anthropic"
            )
        # max_retries=0: a failed file is skipped for this run, not retried.
        self.client = Anthropic(api_key=api_key, timeout=timeout, max_retries=0)

    def _call_api(self, system_prompt: str, user_prompt: str) -> str:
        # Imported inside the method because the anthropic package is optional;
        # __init__ already validated it is installed before we reach here.
        from anthropic.types import TextBlock

        response = self.client.messages.create(
            model=self.MODEL,
            system=system_prompt,
            messages=[{"role": "user", "content": user_prompt}],
            temperature=self.TEMPERATURE,
            max_tokens=self.MAX_TOKENS,
        )
        text_blocks = [block.text for block in response.content if isinstance(block, TextBlock)]
        return "".join(text_blocks)
