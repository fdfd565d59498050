"""
Mode Selection

Decides whether a document carries enough embedded text for text-mode
extraction, or whether its pages must be rendered for a vision model.
"""

from pdf_extractor.config.enums import ExtractionMode
from pdf_extractor.config.loader import DEFAULT_TEXT_THRESHOLD


def has_extractable_text(text: str | None, threshold: int = DEFAULT_TEXT_THRESHOLD) -> bool:
    """True when the stripped text has at least ``threshold`` characters."""
    if not text:
        return False
    trimmed = text.strip()
    return len(trimmed) > 0 and len(trimmed) >= threshold


def select_mode(text: str | None, threshold: int = DEFAULT_TEXT_THRESHOLD) -> ExtractionMode:
    """
    Pick the extraction mode for a document's extracted text.

    Args:
        text: Concatenated page text (may be empty)
        threshold: Minimum stripped length for text mode (inclusive)

    Returns:
        ExtractionMode.TEXT or ExtractionMode.VISION
    """
    if has_extractable_text(text, threshold):
        return ExtractionMode.TEXT
    return ExtractionMode.VISION
