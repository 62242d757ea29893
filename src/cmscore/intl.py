"""Locale selection and message layering."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict


Catalogs = Dict[str, Dict[str, str]]

DEFAULT_LOCALE = "en"


@dataclass(frozen=True)
class IntlConfig:
    locale: str = DEFAULT_LOCALE
    default_locale: str = DEFAULT_LOCALE
    messages: Dict[str, str] = field(default_factory=dict)


def resolve_intl(
    intl: Dict[str, Any] | None,
    plugin_messages: Catalogs | None = None,
    hoc_messages: Catalogs | None = None,
) -> IntlConfig:
    intl = intl or {}
    locale = intl.get("locale") or DEFAULT_LOCALE
    default_locale = intl.get("default_locale") or locale
    # hoc catalogs are keyed by ``lang``, not ``locale``
    lang = intl.get("lang") or DEFAULT_LOCALE
    messages: Dict[str, str] = {}
    messages.update((plugin_messages or {}).get(locale, {}))
    messages.update((hoc_messages or {}).get(lang, {}))
    messages.update(intl.get("messages") or {})
    return IntlConfig(locale=locale, default_locale=default_locale, messages=messages)
