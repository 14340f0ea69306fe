"""
gridmix/config.py

Runtime configuration read from the environment.

Environment Variables
---------------------
GRIDMIX_DEFAULT_RANGE
    Range used when none is given ("24h", "48h" or "7d"). Defaults to "24h".
GRIDMIX_DEFAULT_PROVIDER
    Provider used when none is given ("mock", "eirgrid" or "entsoe").
    Defaults to "mock".
GRIDMIX_PROFILE_FILE
    Optional path to a JSON profile (see `profiles.load_profile_file`) used
    by the CLI for the mock provider when no profile is requested explicitly.
GRIDMIX_LOG_LEVEL
    Logging level name. Defaults to "WARNING".
"""

from __future__ import annotations

import logging
import os
import sys

from dotenv import load_dotenv

# Load `.env` for local development so settings need not be exported.
load_dotenv()

LOG_FORMAT = "%(asctime)s level=%(levelname)s logger=%(name)s msg=%(message)s"


def default_range() -> str:
    return os.getenv("GRIDMIX_DEFAULT_RANGE", "24h")


def default_provider() -> str:
    return os.getenv("GRIDMIX_DEFAULT_PROVIDER", "mock")


def profile_file() -> str | None:
    return os.getenv("GRIDMIX_PROFILE_FILE") or None


def configure_logging(level: str | int | None = None) -> logging.Logger:
    """Attach a single stderr handler to the ``gridmix`` logger.

    Calling this more than once replaces the previous handler rather than
    stacking duplicates.

    Args:
        level: Level name or number. Defaults to ``GRIDMIX_LOG_LEVEL``.

    Returns:
        logging.Logger: The configured package logger.
    """
    if level is None:
        level = os.getenv("GRIDMIX_LOG_LEVEL", "WARNING")
    if isinstance(level, str):
        level = level.upper()

    logger = logging.getLogger("gridmix")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(level)
    return logger
