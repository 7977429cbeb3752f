"""Port for looking up the configured locales."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from budgetry.domain.model import Locale


@runtime_checkable
class LocaleRegistry(Protocol):
    def available_locales(self) -> frozenset[Locale]: ...

    def default_locale(self) -> Locale: ...
