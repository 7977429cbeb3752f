"""Defaults for proposal import runs."""

from __future__ import annotations

from dataclasses import dataclass

from .env import read_env_int
from .errors import ConfigurationError

DEFAULT_IMPORT_MAX_ATTEMPTS = 3


@dataclass(frozen=True, slots=True)
class ImportConfig:
    max_attempts: int = DEFAULT_IMPORT_MAX_ATTEMPTS

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ConfigurationError("Import max attempts must be at least 1")


def get_import_config() -> ImportConfig:
    return ImportConfig(
        max_attempts=read_env_int(
            "BUDGETRY_IMPORT_MAX_ATTEMPTS",
            default=DEFAULT_IMPORT_MAX_ATTEMPTS,
        )
    )
