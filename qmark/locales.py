"""Numeric locale conventions and a catalog of well-known locales."""

from __future__ import annotations

import locale as _locale
from dataclasses import dataclass
from typing import Mapping

# Grouping entry meaning "no further grouping" (C ``CHAR_MAX``).
NO_MORE_GROUPING = _locale.CHAR_MAX


@dataclass(frozen=True)
class NumericLocale:
    """Decimal point, thousands separator and digit grouping for numbers.

    ``grouping`` follows C ``localeconv`` rules: group sizes counted from the
    rightmost digit, the last size repeats, a ``0`` entry repeats the previous
    size and an entry of ``CHAR_MAX`` stops grouping.
    """

    name: str = "C"
    decimal_point: str = "."
    thousands_sep: str = ""
    grouping: tuple[int, ...] = ()

    @classmethod
    def classic(cls) -> NumericLocale:
        return cls()

    @classmethod
    def from_conventions(cls, conv: Mapping, name: str = "") -> NumericLocale:
        """Build from a ``locale.localeconv()``-style mapping."""
        return cls(
            name=name or str(conv.get("name", "")),
            decimal_point=str(conv.get("decimal_point", ".")),
            thousands_sep=str(conv.get("thousands_sep", "")),
            grouping=tuple(int(g) for g in conv.get("grouping", ()) or ()),
        )

    @classmethod
    def current(cls) -> NumericLocale:
        """Snapshot the process's LC_NUMERIC conventions (read-only)."""
        name = _locale.setlocale(_locale.LC_NUMERIC)
        return cls.from_conventions(_locale.localeconv(), name=name)

    @property
    def is_classic(self) -> bool:
        return self.decimal_point == "." and not (self.thousands_sep and self.grouping)


# ---------------------------------------------------------------------------
# Static data
# ---------------------------------------------------------------------------

KNOWN_LOCALES: dict[str, NumericLocale] = {
    "C": NumericLocale("C"),
    "en_US": NumericLocale("en_US", ".", ",", (3,)),
    "en_GB": NumericLocale("en_GB", ".", ",", (3,)),
    "en_IN": NumericLocale("en_IN", ".", ",", (3, 2)),
    "de_DE": NumericLocale("de_DE", ",", ".", (3,)),
    "de_CH": NumericLocale("de_CH", ".", "\u2019", (3,)),
    "fr_FR": NumericLocale("fr_FR", ",", "\u202f", (3,)),
    "it_IT": NumericLocale("it_IT", ",", ".", (3,)),
    "es_ES": NumericLocale("es_ES", ",", ".", (3,)),
    "pt_BR": NumericLocale("pt_BR", ",", ".", (3,)),
    "ru_RU": NumericLocale("ru_RU", ",", "\u00a0", (3,)),
    "ja_JP": NumericLocale("ja_JP", ".", ",", (3,)),
}

LOCALE_ALIASES: dict[str, str] = {
    "POSIX": "C",
    "C.UTF-8": "C",
}

CURRENT = "current"


def normalize_locale_name(name: str) -> str:
    """Resolve aliases and spelling variants to a catalog key.

    ``de-DE``, ``de_de`` and ``de_DE.UTF-8`` all map to ``de_DE``.
    Raises ``KeyError`` for names that are not in the catalog.
    """
    stripped = name.strip()
    if stripped in LOCALE_ALIASES:
        return LOCALE_ALIASES[stripped]
    if stripped in KNOWN_LOCALES:
        return stripped

    base = stripped.split(".", 1)[0].split("@", 1)[0].replace("-", "_")
    if base.upper() in KNOWN_LOCALES or base.upper() in LOCALE_ALIASES:
        return LOCALE_ALIASES.get(base.upper(), base.upper())
    if "_" in base:
        lang, region = base.split("_", 1)
        candidate = f"{lang.lower()}_{region.upper()}"
        if candidate in KNOWN_LOCALES:
            return candidate

    raise KeyError(
        f"Unknown locale: {name!r}. Known: {sorted(KNOWN_LOCALES)} "
        f"(or {CURRENT!r} for the process locale)"
    )


def get_locale(name: str) -> NumericLocale:
    """Look up a catalog locale by name; ``"current"`` reads the process locale."""
    if name.strip().lower() == CURRENT:
        return NumericLocale.current()
    return KNOWN_LOCALES[normalize_locale_name(name)]


def list_locales() -> list[NumericLocale]:
    return [KNOWN_LOCALES[key] for key in sorted(KNOWN_LOCALES)]
