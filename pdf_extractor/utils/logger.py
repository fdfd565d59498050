"""
Logger Module.

Simple, generalized logging utility for pdf-extractor.
"""

import logging
from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S"
)
logger = logging.getLogger("pdf-extractor")


class UsageRecord(BaseModel):
    """Single usage record for a completion call."""
    provider: str
    model: str
    input_tokens: int = 0
    output_tokens: int = 0
    total_tokens: int = 0
    timestamp: datetime = Field(default_factory=datetime.now)
    operation: str = ""
    metadata: dict[str, Any] = Field(default_factory=dict)


class UsageTracker(BaseModel):
    """Tracks cumulative usage across multiple completion calls."""
    records: list[UsageRecord] = []

    @property
    def total_tokens(self) -> int:
        return sum(r.total_tokens for r in self.records)

    def add(self, record: UsageRecord) -> None:
        """Add a usage record."""
        self.records.append(record)

    def summary(self) -> dict:
        """Get a summary of all usage."""
        by_model: dict = {}
        for r in self.records:
            key = f"{r.provider}/{r.model}"
            if key not in by_model:
                by_model[key] = {"calls": 0, "tokens": 0}
            by_model[key]["calls"] += 1
            by_model[key]["tokens"] += r.total_tokens

        return {
            "by_model": by_model,
            "total_calls": len(self.records),
            "total_tokens": self.total_tokens,
        }

    def print_summary(self) -> None:
        """Print a formatted usage summary."""
        s = self.summary()
        log("=" * 50)
        log("USAGE SUMMARY")
        for model, stats in s["by_model"].items():
            log(f"  {model}: {stats['calls']} calls, {stats['tokens']:,} tokens")
        log(f"Total: {s['total_calls']} calls, {s['total_tokens']:,} tokens")
        log("=" * 50)


# Global tracker holder (avoids global statement)
_tracker_holder: dict[str, UsageTracker] = {"tracker": UsageTracker()}


def get_tracker() -> UsageTracker:
    """Get the global usage tracker."""
    return _tracker_holder["tracker"]


def reset_tracker() -> None:
    """Reset the global usage tracker."""
    _tracker_holder["tracker"] = UsageTracker()


def log(message: str) -> None:
    """Log an info message."""
    logger.info(message)


def log_debug(message: str) -> None:
    """Log a debug message."""
    logger.debug(message)


def log_warning(message: str) -> None:
    """Log a warning message."""
    logger.warning(message)


def log_error(message: str) -> None:
    """Log an error message."""
    logger.error(message)


def log_usage(
    provider: str,
    model: str,
    input_tokens: int = 0,
    output_tokens: int = 0,
    total_tokens: int | None = None,
    operation: str = "",
    **metadata: Any
) -> UsageRecord:
    """
    Log API usage for a completion call.

    Args:
        provider: Provider name (e.g., "openai")
        model: Model identifier reported by the endpoint
        input_tokens: Number of prompt tokens
        output_tokens: Number of completion tokens
        total_tokens: Total tokens as reported; defaults to input + output
        operation: Description of the operation
        **metadata: Any additional metadata to log

    Returns:
        The created UsageRecord
    """
    if total_tokens is None:
        total_tokens = input_tokens + output_tokens

    record = UsageRecord(
        provider=provider,
        model=model,
        input_tokens=input_tokens,
        output_tokens=output_tokens,
        total_tokens=total_tokens,
        operation=operation,
        metadata=metadata
    )

    _tracker_holder["tracker"].add(record)

    log(f"[{provider}/{model}] {operation}")
    if total_tokens:
        log(f"  Tokens: {input_tokens:,} in / {output_tokens:,} out / {total_tokens:,} total")

    return record
