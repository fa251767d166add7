"""Formatting flags for scalar rendering, modelled on iostream format flags."""

from __future__ import annotations

import enum
from typing import Iterable, Union


class FmtFlag(enum.IntFlag):
    """Bit-set of scalar formatting options."""

    NONE = 0
    BOOLALPHA = 1 << 0   # only affects bools forced through the scalar path
    DEC = 1 << 1
    OCT = 1 << 2
    HEX = 1 << 3
    FIXED = 1 << 4
    SCIENTIFIC = 1 << 5
    SHOWBASE = 1 << 6
    SHOWPOINT = 1 << 7
    SHOWPOS = 1 << 8
    SKIPWS = 1 << 9      # input-only, kept so default flag sets round-trip
    UPPERCASE = 1 << 10

    BASEFIELD = DEC | OCT | HEX
    FLOATFIELD = FIXED | SCIENTIFIC


DEFAULT_FLAGS = FmtFlag.SKIPWS | FmtFlag.DEC

# Single-bit flags addressable by name (masks excluded).
FLAG_NAMES: dict[str, FmtFlag] = {
    "boolalpha": FmtFlag.BOOLALPHA,
    "dec": FmtFlag.DEC,
    "oct": FmtFlag.OCT,
    "hex": FmtFlag.HEX,
    "fixed": FmtFlag.FIXED,
    "scientific": FmtFlag.SCIENTIFIC,
    "showbase": FmtFlag.SHOWBASE,
    "showpoint": FmtFlag.SHOWPOINT,
    "showpos": FmtFlag.SHOWPOS,
    "skipws": FmtFlag.SKIPWS,
    "uppercase": FmtFlag.UPPERCASE,
}


def parse_flags(spec: Union[str, Iterable[str], None]) -> FmtFlag:
    """Build a flag set from ``"hex,showbase"`` or ``["hex", "showbase"]``.

    Names are case-insensitive. Unknown names raise ``ValueError``.
    """
    if spec is None:
        return FmtFlag.NONE
    if isinstance(spec, str):
        names = spec.split(",")
    else:
        names = list(spec)

    flags = FmtFlag.NONE
    unknown = []
    for raw in names:
        if not isinstance(raw, str):
            unknown.append(raw)
            continue
        name = raw.strip().lower()
        if not name:
            continue
        flag = FLAG_NAMES.get(name)
        if flag is None:
            unknown.append(raw)
        else:
            flags |= flag

    if unknown:
        raise ValueError(
            f"Unknown format flags: {unknown}. Allowed: {sorted(FLAG_NAMES)}"
        )
    return flags


def flag_names(flags: FmtFlag) -> list[str]:
    """Return the names of the single-bit flags set in *flags*."""
    return [name for name, flag in FLAG_NAMES.items() if flags & flag]
