"""
Configuration Loader for pdf-extractor.

Loads and validates configuration from YAML files and the environment.
All defaults are resolved once, when an ExtractorConfig is built.
"""

import os
from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped]
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, model_validator

from pdf_extractor.errors import ConfigurationError
from pdf_extractor.utils.logger import log

from .enums import OpenAIModel

# Load environment variables from .env file
load_dotenv()

DEFAULT_MODEL = OpenAIModel.GPT_4O_MINI.value
DEFAULT_BASE_URL = "https://api.openai.com/v1"
DEFAULT_SYSTEM_PROMPT = (
    "You are a helpful assistant that extracts structured data from text. "
    "Extract the requested information accurately from the provided text."
)
DEFAULT_VISION_ENABLED = True
DEFAULT_TEXT_THRESHOLD = 100
DEFAULT_TIMEOUT = 600.0


class ExtractorConfig(BaseModel):
    """
    Resolved extractor configuration.

    ``system_prompt=None`` selects the default instruction, while an empty
    string drops the system message from every request.
    ``text_model`` and ``vision_model`` fall back to ``model``.
    """

    model_config = ConfigDict(frozen=True)

    api_key: str
    base_url: str = DEFAULT_BASE_URL
    model: str = DEFAULT_MODEL
    text_model: str = ""
    vision_model: str = ""
    vision_enabled: bool = DEFAULT_VISION_ENABLED
    text_threshold: int = DEFAULT_TEXT_THRESHOLD
    system_prompt: str = DEFAULT_SYSTEM_PROMPT
    timeout: float = DEFAULT_TIMEOUT

    @model_validator(mode="before")
    @classmethod
    def resolve_defaults(cls, data: Any) -> Any:
        """Fill absent or empty fields so nothing empty reaches a request."""
        if not isinstance(data, dict):
            return data
        data = dict(data)

        api_key = (data.get("api_key") or "").strip()
        if not api_key:
            raise ConfigurationError("OpenAI API key is required")
        data["api_key"] = api_key

        data["model"] = data.get("model") or DEFAULT_MODEL
        data["base_url"] = (data.get("base_url") or DEFAULT_BASE_URL).rstrip("/")
        data["text_model"] = data.get("text_model") or data["model"]
        data["vision_model"] = data.get("vision_model") or data["model"]

        if data.get("vision_enabled") is None:
            data["vision_enabled"] = DEFAULT_VISION_ENABLED

        threshold = data.get("text_threshold")
        if threshold is None or (isinstance(threshold, int) and threshold <= 0):
            data["text_threshold"] = DEFAULT_TEXT_THRESHOLD

        if data.get("system_prompt") is None:
            data["system_prompt"] = DEFAULT_SYSTEM_PROMPT

        if data.get("timeout") is None:
            data["timeout"] = DEFAULT_TIMEOUT

        return data

    def get_model(self) -> str:
        """Default model for both extraction modes."""
        return self.model

    def get_text_model(self) -> str:
        """Model used for text-based extraction."""
        return self.text_model

    def get_vision_model(self) -> str:
        """Model used for vision-based extraction."""
        return self.vision_model


def load_config(config_path: str | Path | None = None) -> ExtractorConfig:
    """
    Load configuration from a YAML file.

    Keys mirror the ExtractorConfig fields. ``OPENAI_API_KEY`` and
    ``OPENAI_BASE_URL`` fill ``api_key`` and ``base_url`` when the file
    does not set them.

    Args:
        config_path: Path to the config file. Defaults to pdf_extractor/config/config.yaml

    Returns:
        Loaded and validated ExtractorConfig instance

    Raises:
        ConfigurationError: If no API key is available
    """
    if config_path is None:
        config_path = Path(__file__).parent / "config.yaml"
    else:
        config_path = Path(config_path)

    raw_config: dict[str, Any] = {}
    if config_path.exists():
        with open(config_path, "r", encoding="utf-8") as f:
            raw_config = yaml.safe_load(f) or {}
    else:
        log(f"Config file not found at {config_path}, using defaults")

    if not isinstance(raw_config, dict):
        raise ConfigurationError(
            f"Config file must contain a mapping: {config_path}",
            {"path": str(config_path)},
        )

    # Keys present but left blank still fall back to the environment
    if not raw_config.get("api_key"):
        raw_config["api_key"] = os.getenv("OPENAI_API_KEY")
    if not raw_config.get("base_url"):
        raw_config["base_url"] = os.getenv("OPENAI_BASE_URL")

    return ExtractorConfig(**raw_config)
