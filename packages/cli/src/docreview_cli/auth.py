"""API key resolution for the configured rewrite provider.

The key is read from the environment once, here, and then passed explicitly
into the provider's constructor. Nothing below the CLI reads the environment.
"""

from __future__ import annotations

import logging
import os

from docreview_core.config import API_KEY_ENV_VARS

logger = logging.getLogger(__name__)


def api_key_env_var(model: str) -> str:
    """Return the environment variable name that holds ``model``'s API key."""
    try:
        return API_KEY_ENV_VARS[model]
    except KeyError:
        raise ValueError(f"Unknown model provider: {model!r}. Choose one of: {', '.join(API_KEY_ENV_VARS)}.")


def resolve_api_key(model: str) -> str | None:
    """Return the API key for ``model`` or None if it is not set.

    Never raises for a missing key — callers should check for None and emit a
    UsageError. Blank values count as missing.
    """
    token = os.environ.get(api_key_env_var(model), "").strip()
    if token:
        return token
    logger.debug("%s is not set.", api_key_env_var(model))
    return None
