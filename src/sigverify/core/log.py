"""Logging setup for processes embedding the verifier."""

from __future__ import annotations

import logging

from sigverify.core.settings import settings

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Apply a basic root handler at the configured level.

    Args:
        level: Level name such as ``"DEBUG"``; defaults to ``settings.log_level``.
    """
    logging.basicConfig(level=(level or settings.log_level).upper(), format=_LOG_FORMAT)
