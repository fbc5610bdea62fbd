"""Logging setup driven by the environment."""

import logging
import os

LOG_LEVEL_ENV = "LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"


def log_level(value: str | None = None) -> int:
    """Resolve a level name, falling back to LOG_LEVEL and then WARNING.

    Unknown names resolve to the default instead of failing the run.
    """
    name = (value or os.environ.get(LOG_LEVEL_ENV) or DEFAULT_LOG_LEVEL).upper()
    return logging.getLevelNamesMapping().get(name, logging.WARNING)


def configure_logging(level: str | None = None) -> None:
    """Set the level of the backend_harness loggers.

    Records are left to pytest's log capture, which installs the handlers.
    """
    logging.getLogger("backend_harness").setLevel(log_level(level))
