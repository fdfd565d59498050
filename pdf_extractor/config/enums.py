"""
Mode and Model Enums for pdf-extractor.

These enums define the extraction modes and the well-known models
that can be used against an OpenAI-compatible endpoint.
"""

from enum import Enum


class ExtractionMode(str, Enum):
    """Extraction path chosen for a document."""
    TEXT = "text"
    VISION = "vision"


class OpenAIModel(str, Enum):
    """Known OpenAI models for structured extraction."""
    GPT_4O = "gpt-4o"
    GPT_4O_MINI = "gpt-4o-mini"
    GPT_4_1 = "gpt-4.1"
    GPT_4_1_MINI = "gpt-4.1-mini"
    # Any other model id accepted by the endpoint works as a plain string
