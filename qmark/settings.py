"""Render settings dataclass and YAML loader."""

from __future__ import annotations

from dataclasses import dataclass, field

import yaml

from qmark.flags import DEFAULT_FLAGS, FmtFlag, parse_flags
from qmark.locales import NumericLocale, get_locale


@dataclass(frozen=True)
class RenderSettings:
    """Precision, numeric locale and flags used to render one format call."""

    precision: int = 6
    locale: NumericLocale = field(default_factory=NumericLocale.classic)
    flags: FmtFlag = DEFAULT_FLAGS

    def __post_init__(self):
        if isinstance(self.precision, bool) or not isinstance(self.precision, int):
            raise ValueError(f"precision must be an integer, got {self.precision!r}")
        if self.precision < 0:
            raise ValueError(f"precision must be >= 0, got {self.precision}")
        if not isinstance(self.flags, FmtFlag):
            object.__setattr__(self, "flags", FmtFlag(self.flags))


_TOP_KEYS = frozenset(f.name for f in RenderSettings.__dataclass_fields__.values())
_LOCALE_KEYS = frozenset(f.name for f in NumericLocale.__dataclass_fields__.values())


def default_render_settings() -> RenderSettings:
    return RenderSettings()


def load_render_settings(path: str) -> RenderSettings:
    """Load render settings from a YAML file.

    Unknown keys, flag names or locale names cause a ``ValueError``
    so typos are caught early.
    """
    with open(path, encoding="utf-8") as f:
        raw = yaml.safe_load(f)

    if raw is None:
        return default_render_settings()
    if not isinstance(raw, dict):
        raise ValueError(f"Render settings YAML must be a mapping, got {type(raw).__name__}")

    _validate_keys("render settings", raw, _TOP_KEYS)

    kwargs = {}
    if raw.get("precision") is not None:
        kwargs["precision"] = raw["precision"]
    if raw.get("flags") is not None:
        kwargs["flags"] = parse_flags(raw["flags"])
    if raw.get("locale") is not None:
        kwargs["locale"] = _parse_locale(raw["locale"])

    return RenderSettings(**kwargs)


def _parse_locale(raw) -> NumericLocale:
    if isinstance(raw, str):
        try:
            return get_locale(raw)
        except KeyError as exc:
            raise ValueError(exc.args[0]) from exc
    if isinstance(raw, dict):
        _validate_keys("locale", raw, _LOCALE_KEYS)
        grouping = raw.get("grouping") or ()
        if not isinstance(grouping, (list, tuple)):
            raise ValueError(f"'locale.grouping' must be a list, got {type(grouping).__name__}")
        return NumericLocale.from_conventions(raw, name=str(raw.get("name", "custom")))
    raise ValueError(
        f"'locale' must be a locale name or a mapping, got {type(raw).__name__}"
    )


def _validate_keys(section: str, raw: dict, allowed: frozenset[str]) -> None:
    unknown = set(raw) - allowed
    if unknown:
        raise ValueError(
            f"Unknown keys in '{section}': {sorted(str(k) for k in unknown)}. "
            f"Allowed: {sorted(allowed)}"
        )
