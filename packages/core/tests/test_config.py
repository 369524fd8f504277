"""Tests for configuration loading."""

import pytest

from docreview_core.config import load_config, load_guidelines
from docreview_core.locator import TARGET_FILE_NAMES


def test_defaults_applied_when_no_config_file(tmp_path):
    config = load_config(config_path=str(tmp_path / "nonexistent.yml"))
    assert config["model"] == "anthropic"
    assert config["target_dir"] == "ballerina"
    assert config["target_files"] == list(TARGET_FILE_NAMES)
    assert config["timeout"] == 300


def test_config_file_overrides_defaults(tmp_path):
    cfg = tmp_path / ".docreview.yml"
    cfg.write_text("model: openai\ntimeout: 60\n")
    config = load_config(config_path=str(cfg))
    assert config["model"] == "openai"
    assert config["timeout"] == 60


def test_target_files_loaded(tmp_path):
    cfg = tmp_path / ".docreview.yml"
    cfg.write_text("target_files:\n  - client.bal\n  - utils.bal\n")
    config = load_config(config_path=str(cfg))
    assert config["target_files"] == ["client.bal", "utils.bal"]


def test_empty_config_file_uses_defaults(tmp_path):
    cfg = tmp_path / ".docreview.yml"
    cfg.write_text("")
    config = load_config(config_path=str(cfg))
    assert config["model"] == "anthropic"


def test_cli_overrides_config_file(tmp_path):
    cfg = tmp_path / ".docreview.yml"
    cfg.write_text("model: openai\n")
    config = load_config(config_path=str(cfg), cli_overrides={"model": "anthropic"})
    assert config["model"] == "anthropic"


def test_none_cli_overrides_ignored(tmp_path):
    cfg = tmp_path / ".docreview.yml"
    cfg.write_text("model: openai\n")
    config = load_config(config_path=str(cfg), cli_overrides={"model": None})
    assert config["model"] == "openai"


def test_env_vars_loaded(monkeypatch, tmp_path):
    monkeypatch.setenv("ANTHROPIC_API_KEY", "ant-key")
    monkeypatch.setenv("OPENAI_API_KEY", "oai-key")
    config = load_config(config_path=str(tmp_path / "nonexistent.yml"))
    assert config["anthropic_api_key"] == "ant-key"
    assert config["openai_api_key"] == "oai-key"


def test_target_files_list_is_not_shared_reference(tmp_path):
    """Mutating one config's target list must not affect another."""
    config_a = load_config(config_path=str(tmp_path / "nonexistent.yml"))
    config_b = load_config(config_path=str(tmp_path / "nonexistent.yml"))
    config_a["target_files"].append("utils.bal")
    assert "utils.bal" not in config_b["target_files"]


def test_load_guidelines(tmp_path):
    guidelines_file = tmp_path / "review-docs.md"
    guidelines_file.write_text("# API Docs Guidelines\n- Document every parameter", encoding="utf-8")
    assert "API Docs Guidelines" in load_guidelines(str(guidelines_file))


def test_missing_guidelines_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_guidelines(str(tmp_path / "does-not-exist.md"))


def test_directory_as_guidelines_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_guidelines(str(tmp_path))
