"""Logging setup for command line runs."""

from __future__ import annotations

import logging
import os
from typing import Final

from .errors import ConfigurationError

LOG_FORMAT: Final[str] = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
# alembic reports every revision step at INFO
QUIET_LOGGERS: Final[tuple[str, ...]] = ("alembic.runtime.migration", "sqlalchemy.engine")


def resolve_log_level(default: int = logging.INFO) -> int:
    """Return the level named by ``BUDGETRY_LOG_LEVEL`` (``default`` when unset)."""

    raw = os.getenv("BUDGETRY_LOG_LEVEL")
    if raw is None or not raw.strip():
        return default
    level = logging.getLevelNamesMapping().get(raw.strip().upper())
    if level is None:
        raise ConfigurationError(f"BUDGETRY_LOG_LEVEL must be a logging level name, got {raw!r}")
    return level


def configure_logging(*, level: int | None = None, force: bool = False) -> None:
    resolved = resolve_log_level() if level is None else level
    logging.basicConfig(
        level=resolved,
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        force=force,
    )
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(resolved, logging.WARNING))
