# infrastructure/logging/log_setup.py
from __future__ import annotations

import os

from loguru import logger

DEFAULT_LOG_LEVEL = "INFO"


def resolve_log_level(level: str | None = None) -> str:
    return (level or os.getenv("NAVIGATION_LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper()


def setup_console_logging(level: str | None = None) -> None:
    logger.remove()
    logger.add(
        lambda msg: print(msg, end=""),
        level=resolve_log_level(level),
        format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<7} | {message}",
    )
