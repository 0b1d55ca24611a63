# cricket_insights/config.py
from __future__ import annotations

import logging
import os
import sys

from dotenv import load_dotenv

# Load .env from project root
load_dotenv()


def _get_env(name: str, default: str = "") -> str:
    return os.getenv(name, default).strip()


def _get_env_int(name: str, default: int) -> int:
    raw = _get_env(name, str(default))
    try:
        return int(raw)
    except ValueError:
        return default


# -------------------------
# Logging
# -------------------------
LOG_LEVEL: str = _get_env("LOG_LEVEL", "INFO").upper()

# Engine-level debug logging (degraded inputs, gated matches)
INSIGHTS_DEBUG: bool = _get_env("INSIGHTS_DEBUG", "0") == "1"


# -------------------------
# Service limits
# -------------------------
RELATED_MATCHES_LIMIT: int = _get_env_int("RELATED_MATCHES_LIMIT", 6)

# Upper bound on matches accepted in one archive / head-to-head request
ARCHIVE_MAX_MATCHES: int = _get_env_int("ARCHIVE_MAX_MATCHES", 500)


def setup_logger(name: str) -> logging.Logger:
    """Create or retrieve a configured logger for the application."""

    logger = logging.getLogger(name)

    level_name = "DEBUG" if INSIGHTS_DEBUG else LOG_LEVEL
    logger.setLevel(getattr(logging, level_name, logging.INFO))

    if logging.getLogger().handlers:
        logger.propagate = True
        return logger

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s"))
        logger.addHandler(handler)
        logger.propagate = False

    return logger


def validate_config() -> None:
    if LOG_LEVEL not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
        raise RuntimeError(f"LOG_LEVEL must be a standard logging level, got {LOG_LEVEL!r}")

    if RELATED_MATCHES_LIMIT <= 0:
        raise RuntimeError("RELATED_MATCHES_LIMIT must be positive")

    if ARCHIVE_MAX_MATCHES <= 0:
        raise RuntimeError("ARCHIVE_MAX_MATCHES must be positive")
