"""Locale configuration used to fan out localized text fields."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from .env import read_env_list
from .errors import ConfigurationError

DEFAULT_LOCALES: Final[tuple[str, ...]] = ("en",)


@dataclass(frozen=True, slots=True)
class LocaleConfig:
    available_locales: tuple[str, ...] = DEFAULT_LOCALES
    default_locale: str | None = None

    def __post_init__(self) -> None:
        if not self.available_locales:
            raise ConfigurationError("At least one available locale must be configured")
        if self.default_locale is not None and self.default_locale not in self.available_locales:
            raise ConfigurationError(
                f"Default locale {self.default_locale!r} is not one of the available "
                f"locales: {', '.join(self.available_locales)}"
            )

    @property
    def resolved_default_locale(self) -> str:
        return self.default_locale or self.available_locales[0]


@dataclass(frozen=True, slots=True)
class StaticLocaleRegistry:
    """Locale registry backed by a fixed configuration value."""

    config: LocaleConfig

    def available_locales(self) -> frozenset[str]:
        return frozenset(self.config.available_locales)

    def default_locale(self) -> str:
        return self.config.resolved_default_locale


def get_locale_config() -> LocaleConfig:
    locales = read_env_list("BUDGETRY_AVAILABLE_LOCALES", default=DEFAULT_LOCALES)
    default = read_env_list("BUDGETRY_DEFAULT_LOCALE")
    return LocaleConfig(
        available_locales=locales,
        default_locale=default[0] if default else None,
    )


def get_locale_registry() -> StaticLocaleRegistry:
    return StaticLocaleRegistry(config=get_locale_config())
