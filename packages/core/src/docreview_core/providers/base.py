"""Base rewriter implementing the Template Method pattern.

All providers share the same rewrite algorithm:
    rewrite() → _build_system_prompt() + _build_user_prompt()
              → _call_api()   ← only this differs per provider
              → _clean()

Subclasses implement two things only:
  - __init__: validate and store the SDK client
  - _call_api: make one raw API call and return the text response

A failed call is not retried. The orchestrator skips the file for this run,
and because its content (and so its fingerprint) is unchanged, the next
incremental run picks it up again.
"""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod

logger = logging.getLogger(__name__)

_MAX_TOKENS = 16000
_TIMEOUT = 300.0


class RewriteError(RuntimeError):
    """A single rewrite call failed: network error, timeout, or unusable response."""


class BaseRewriter(ABC):
    MAX_TOKENS: int = _MAX_TOKENS

    def __init__(self, timeout: float = _TIMEOUT, max_tokens: int | None = None):
        self.timeout = timeout
        if max_tokens is not None:
            self.MAX_TOKENS = max_tokens

    # ------------------------------------------------------------------ #
    # Public interface                                                     #
    # ------------------------------------------------------------------ #

    def rewrite(self, guidelines: str, file_name: str, file_content: str) -> str:
        """Return the model's revised version of ``file_content``.

        Raises RewriteError if the call fails or the response is empty.
        """
        system = self._build_system_prompt(guidelines)
        user = self._build_user_prompt(file_name, file_content)
        try:
            raw = self._call_api(system, user)
        except Exception as e:
            raise RewriteError(f"{self.__class__.__name__} API call failed: {e}") from e

        text = self._clean(raw or "")
        if not text.strip():
            raise RewriteError(f"{self.__class__.__name__} returned an empty response for {file_name}.")
        return text

    # ------------------------------------------------------------------ #
    # Abstract — implement in each provider                               #
    # ------------------------------------------------------------------ #

    @abstractmethod
    def _call_api(self, system_prompt: str, user_prompt: str) -> str:
        """Make a single API call and return the raw text response.

        Should raise on failure; rewrite() wraps the error in RewriteError.
        """

    # ------------------------------------------------------------------ #
    # Shared implementations                                               #
    # ------------------------------------------------------------------ #

    def _build_system_prompt(self, guidelines: str) -> str:
        return f"""You are an expert Ballerina developer reviewing the API documentation of a connector.
Apply the guidelines below to the source file you are given.

{guidelines}

Rules:
- Only change documentation comments and annotations that the guidelines cover.
- Never change code behaviour, signatures, imports or formatting outside documentation.
- If the file already follows the guidelines, return it unchanged."""

    def _build_user_prompt(self, file_name: str, file_content: str) -> str:
        return f"""Review the documentation in `{file_name}`.

## File Content
{file_content}

### Output Format:
Respond with **only** the complete updated file content.
Do not add explanations, summaries or any text before or after the file."""

    def _clean(self, raw: str) -> str:
        """Strip an outer ``` fence if the model wrapped the whole file in one.

        Fences inside the file (e.g. code samples in doc comments) are kept.
        """
        stripped = raw.strip()
        if not stripped.startswith("```"):
            return raw
        cleaned = re.sub(r"^```[\w+-]*[ \t]*\n?", "", stripped)
        cleaned = re.sub(r"\n?```$", "", cleaned)
        if not cleaned.endswith("\n"):
            cleaned += "\n"
        return cleaned
