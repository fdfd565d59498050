"""
Utility modules for pdf-extractor.

Contains the PDF engine boundary, logging, and prompt helpers.
"""

from .pdf import PdfEngine, PyMuPDFEngine, encode_png
from .logger import (
    log,
    log_debug,
    log_warning,
    log_error,
    log_usage,
    get_tracker,
    reset_tracker,
    UsageTracker,
    UsageRecord,
)

__all__ = [
    # PDF utilities
    "PdfEngine",
    "PyMuPDFEngine",
    "encode_png",
    # Logging utilities
    "log",
    "log_debug",
    "log_warning",
    "log_error",
    "log_usage",
    "get_tracker",
    "reset_tracker",
    "UsageTracker",
    "UsageRecord",
]
