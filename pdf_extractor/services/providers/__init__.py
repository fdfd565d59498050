"""
Provider implementations for completion services.
"""

from .openai import OpenAIService

__all__ = [
    "OpenAIService",
]
