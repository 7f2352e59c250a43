"""Root logger setup for the command line."""

from __future__ import annotations

import logging
import os

from .errors import ConfigurationError

LOG_LEVEL_VAR = "VIEWSTATE_LOG_LEVEL"


def log_level_from_env(default: int = logging.INFO) -> int:
    value = os.getenv(LOG_LEVEL_VAR)
    if value is None or not value.strip():
        return default
    level = logging.getLevelNamesMapping().get(value.strip().upper())
    if level is None:
        raise ConfigurationError(f"{LOG_LEVEL_VAR} must be a logging level name, got {value!r}")
    return level


def configure_logging(*, level: int | None = None, force: bool = False) -> None:
    """Configure the root logger with a terse, timestamped format.

    ``level`` defaults to ``VIEWSTATE_LOG_LEVEL`` (INFO when unset). Pass
    ``force=True`` to replace handlers installed earlier, e.g. in tests.
    """

    logging.basicConfig(
        level=log_level_from_env() if level is None else level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
