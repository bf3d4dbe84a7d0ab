# src/sigverify/db/time.py
"""Ambient clock used for deadline checks."""

from collections.abc import Callable
from datetime import UTC, datetime

Clock = Callable[[], int]


def utcnow() -> datetime:
    """Return the current UTC time as a timezone-aware datetime."""
    return datetime.now(UTC)


def unix_now() -> int:
    """Return the current time as whole seconds since the Unix epoch."""
    return int(utcnow().timestamp())
