import os
from pathlib import Path
from typing import Optional

import yaml

from docreview_core.locator import TARGET_DIR, TARGET_FILE_NAMES

DEFAULT_CONFIG: dict = {
    "model": "anthropic",
    "target_dir": TARGET_DIR,  # subdirectory of the repository that is scanned
    "target_files": list(TARGET_FILE_NAMES),
    "timeout": 300,  # seconds per rewrite call; a timeout fails only that file
    "max_tokens": 16000,
}

# Environment variable holding the API key for each provider.
API_KEY_ENV_VARS = {
    "anthropic": "ANTHROPIC_API_KEY",
    "openai": "OPENAI_API_KEY",
}


def load_config(config_path: str = ".docreview.yml", cli_overrides: Optional[dict] = None) -> dict:
    """
    Load configuration by merging (in order of precedence):
      1. Built-in defaults
      2. .docreview.yml in the current directory
      3. CLI argument overrides
    """
    config = {**DEFAULT_CONFIG, "target_files": list(DEFAULT_CONFIG["target_files"])}

    path = Path(config_path)
    if path.exists():
        with open(path) as f:
            file_config = yaml.safe_load(f) or {}
        config.update(file_config)

    if cli_overrides:
        for key, value in cli_overrides.items():
            if value is not None:
                config[key] = value

    # Resolve credentials from environment variables
    config["anthropic_api_key"] = os.environ.get(API_KEY_ENV_VARS["anthropic"])
    config["openai_api_key"] = os.environ.get(API_KEY_ENV_VARS["openai"])

    return config


def load_guidelines(guidelines_path: str) -> str:
    """Load the guideline document sent alongside every file."""
    p = Path(guidelines_path)
    if not p.is_file():
        raise FileNotFoundError(f"Guidelines file not found: {guidelines_path}")
    return p.read_text(encoding="utf-8")
