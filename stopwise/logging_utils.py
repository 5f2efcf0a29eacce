"""Mini README: Logging helpers shared by every Stopwise module.

Structure:
    * configure_root_logger - install the single stream handler once.
    * set_log_level - adjust verbosity from the CLI or settings.
    * get_logger - module logger factory used as ``LOGGER = get_logger(__name__)``.

Usage:
    Sequencing code logs pass counts and swaps at DEBUG, pipeline stages and
    provider calls at INFO and exhausted search budgets or retries at WARNING.
    Repeated imports (reloading web workers, test sessions) never stack
    duplicate handlers because configuration happens exactly once.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

_LOGGER_INITIALISED = False

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s - %(message)s"


def configure_root_logger(level: int = logging.INFO) -> None:
    """Attach the Stopwise formatter to the root logger on first use."""

    global _LOGGER_INITIALISED
    if _LOGGER_INITIALISED:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(handler)
    _LOGGER_INITIALISED = True


def set_log_level(level: Union[int, str]) -> None:
    """Change the root level, accepting names such as ``"debug"``."""

    if isinstance(level, str):
        resolved = logging.getLevelName(level.strip().upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: {level}")
        level = resolved
    configure_root_logger(level)
    logging.getLogger().setLevel(level)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a module-specific logger ensuring baseline configuration."""

    configure_root_logger()
    return logging.getLogger(name)
