"""Domain primitives: scalar aliases + small helpers."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

type Locale = str
type LocalizedText = dict[Locale, str]
type Amount = int


def localized(text: str, locales: Iterable[Locale]) -> LocalizedText:
    """Replicate ``text`` under every locale. No translation happens."""

    return {locale: text for locale in sorted(locales)}


def translated(value: Mapping[Locale, str], locale: Locale) -> str | None:
    """Return the text stored for ``locale`` (``None`` when absent or blank)."""

    text = value.get(locale)
    if text is None or not text.strip():
        return None
    return text
