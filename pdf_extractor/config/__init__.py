"""
Configuration module for pdf-extractor.

Provides mode/model enums and YAML configuration loading.
"""

from .enums import ExtractionMode, OpenAIModel
from .loader import (
    DEFAULT_BASE_URL,
    DEFAULT_MODEL,
    DEFAULT_SYSTEM_PROMPT,
    DEFAULT_TEXT_THRESHOLD,
    ExtractorConfig,
    load_config,
)

__all__ = [
    "ExtractionMode",
    "OpenAIModel",
    "ExtractorConfig",
    "load_config",
    "DEFAULT_BASE_URL",
    "DEFAULT_MODEL",
    "DEFAULT_SYSTEM_PROMPT",
    "DEFAULT_TEXT_THRESHOLD",
]
