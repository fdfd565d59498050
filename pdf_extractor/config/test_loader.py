"""
Tests for configuration defaults and YAML loading.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from pdf_extractor.errors import ConfigurationError, ErrorKind

from .loader import (
    DEFAULT_BASE_URL,
    DEFAULT_MODEL,
    DEFAULT_SYSTEM_PROMPT,
    DEFAULT_TEXT_THRESHOLD,
    ExtractorConfig,
    load_config,
)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    monkeypatch.delenv("OPENAI_BASE_URL", raising=False)
    return monkeypatch


# --- Default Resolution Tests ---


def test_defaults_applied() -> None:
    """Test an API key alone yields a fully resolved configuration."""
    config = ExtractorConfig(api_key="k")

    assert config.base_url == DEFAULT_BASE_URL
    assert config.model == DEFAULT_MODEL
    assert config.text_model == DEFAULT_MODEL
    assert config.vision_model == DEFAULT_MODEL
    assert config.vision_enabled is True
    assert config.text_threshold == DEFAULT_TEXT_THRESHOLD
    assert config.system_prompt == DEFAULT_SYSTEM_PROMPT
    assert config.timeout == 600.0


@pytest.mark.parametrize("api_key", [None, "", "   "])
def test_missing_api_key_fails(api_key: str | None) -> None:
    """Test construction fails without a usable API key."""
    with pytest.raises(ConfigurationError) as exc_info:
        ExtractorConfig(api_key=api_key)
    assert exc_info.value.kind is ErrorKind.CONFIGURATION


def test_mode_models_fall_back_to_model() -> None:
    """Test empty text and vision models inherit the default model."""
    config = ExtractorConfig(api_key="k", model="base", text_model="", vision_model=None)
    assert config.get_text_model() == "base"
    assert config.get_vision_model() == "base"


def test_empty_model_uses_default() -> None:
    """Test an empty model name is replaced by the default."""
    assert ExtractorConfig(api_key="k", model="").model == DEFAULT_MODEL


@pytest.mark.parametrize("threshold", [None, 0, -5])
def test_non_positive_threshold_uses_default(threshold: int | None) -> None:
    """Test an absent or non-positive threshold becomes 100."""
    assert ExtractorConfig(api_key="k", text_threshold=threshold).text_threshold == 100


def test_custom_threshold_kept() -> None:
    """Test a positive threshold is used as-is."""
    assert ExtractorConfig(api_key="k", text_threshold=250).text_threshold == 250


def test_system_prompt_none_vs_empty() -> None:
    """Test None selects the default prompt and an empty string is kept."""
    assert ExtractorConfig(api_key="k", system_prompt=None).system_prompt == DEFAULT_SYSTEM_PROMPT
    assert ExtractorConfig(api_key="k", system_prompt="").system_prompt == ""


def test_vision_enabled_none_defaults_true() -> None:
    """Test an unset vision flag enables vision."""
    assert ExtractorConfig(api_key="k", vision_enabled=None).vision_enabled is True
    assert ExtractorConfig(api_key="k", vision_enabled=False).vision_enabled is False


def test_base_url_trailing_slash_stripped() -> None:
    """Test the base URL is normalized without a trailing slash."""
    config = ExtractorConfig(api_key="k", base_url="http://localhost:11434/v1/")
    assert config.base_url == "http://localhost:11434/v1"


def test_config_is_frozen() -> None:
    """Test the resolved configuration cannot be mutated."""
    config = ExtractorConfig(api_key="k")
    with pytest.raises(ValueError):
        config.model = "other"  # type: ignore[misc]


# --- YAML Loading Tests ---


def test_load_from_yaml(tmp_path: Path, clean_env: pytest.MonkeyPatch) -> None:
    """Test every key is read from the YAML file."""
    path = tmp_path / "config.yaml"
    path.write_text(
        "api_key: file-key\n"
        "base_url: https://llm.local/v1/\n"
        "model: gpt-4.1-mini\n"
        "vision_model: gpt-4o\n"
        "vision_enabled: false\n"
        "text_threshold: 0\n"
        "system_prompt: ''\n"
        "timeout: 30\n",
        encoding="utf-8",
    )

    config = load_config(path)

    assert config.api_key == "file-key"
    assert config.base_url == "https://llm.local/v1"
    assert config.text_model == "gpt-4.1-mini"
    assert config.vision_model == "gpt-4o"
    assert config.vision_enabled is False
    assert config.text_threshold == 100
    assert config.system_prompt == ""
    assert config.timeout == 30.0


def test_environment_fills_missing_keys(tmp_path: Path, clean_env: pytest.MonkeyPatch) -> None:
    """Test OPENAI_API_KEY and OPENAI_BASE_URL are used when the file omits them."""
    clean_env.setenv("OPENAI_API_KEY", "env-key")
    clean_env.setenv("OPENAI_BASE_URL", "https://proxy.test/v1")
    path = tmp_path / "config.yaml"
    path.write_text("model: gpt-4o\n", encoding="utf-8")

    config = load_config(path)

    assert config.api_key == "env-key"
    assert config.base_url == "https://proxy.test/v1"
    assert config.model == "gpt-4o"


def test_blank_keys_fall_back_to_environment(tmp_path: Path, clean_env: pytest.MonkeyPatch) -> None:
    """Test keys present in the file with no value use the environment."""
    clean_env.setenv("OPENAI_API_KEY", "env-key")
    clean_env.setenv("OPENAI_BASE_URL", "https://proxy.test/v1")
    path = tmp_path / "config.yaml"
    path.write_text("api_key:\nbase_url: ''\nmodel: gpt-4o\n", encoding="utf-8")

    config = load_config(path)

    assert config.api_key == "env-key"
    assert config.base_url == "https://proxy.test/v1"


def test_file_overrides_environment(tmp_path: Path, clean_env: pytest.MonkeyPatch) -> None:
    """Test the file wins over the environment."""
    clean_env.setenv("OPENAI_API_KEY", "env-key")
    path = tmp_path / "config.yaml"
    path.write_text("api_key: file-key\n", encoding="utf-8")
    assert load_config(path).api_key == "file-key"


def test_missing_file_uses_environment(tmp_path: Path, clean_env: pytest.MonkeyPatch) -> None:
    """Test a missing file falls back to defaults and the environment."""
    clean_env.setenv("OPENAI_API_KEY", "env-key")
    config = load_config(tmp_path / "absent.yaml")
    assert config.api_key == "env-key"
    assert config.model == DEFAULT_MODEL


def test_missing_key_everywhere_fails(tmp_path: Path, clean_env: pytest.MonkeyPatch) -> None:
    """Test loading fails when neither file nor environment has a key."""
    with pytest.raises(ConfigurationError):
        load_config(tmp_path / "absent.yaml")


def test_non_mapping_file_fails(tmp_path: Path, clean_env: pytest.MonkeyPatch) -> None:
    """Test a YAML list is rejected."""
    path = tmp_path / "config.yaml"
    path.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ConfigurationError, match="mapping"):
        load_config(path)
