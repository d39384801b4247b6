"""Helpers shared by the table models."""

from datetime import UTC, datetime


def utcnow() -> datetime:
    """Naive UTC timestamp, matching what DATETIME columns store."""
    return datetime.now(UTC).replace(tzinfo=None)
