"""Number-to-text conversion driven by render settings.

Produces what a configured formatted-output stream would: radix and case for
integers, notation and precision for reals, sign and base prefixes, and the
locale's decimal point and digit grouping.
"""

from __future__ import annotations

import math
import numbers
from decimal import Decimal

from qmark.flags import FmtFlag
from qmark.locales import NO_MORE_GROUPING, NumericLocale
from qmark.settings import RenderSettings

_CHUNK_DIGITS = 1000
_CHUNK_BASE = 10 ** _CHUNK_DIGITS


def group_digits(digits: str, loc: NumericLocale) -> str:
    """Insert the locale's thousands separator into a run of digits."""
    if not loc.thousands_sep or not loc.grouping:
        return digits

    sizes = loc.grouping
    groups: list[str] = []
    size = 0
    idx = 0
    end = len(digits)
    while end > 0:
        if idx < len(sizes):
            if sizes[idx] == 0:
                idx = len(sizes)  # repeat the previous size from here on
            else:
                size = sizes[idx]
                idx += 1
        if size <= 0 or size >= NO_MORE_GROUPING:
            break
        start = max(0, end - size)
        groups.append(digits[start:end])
        end = start
    if end > 0:
        groups.append(digits[:end])
    return loc.thousands_sep.join(reversed(groups))


def format_integer(value: int, settings: RenderSettings) -> str:
    flags = settings.flags
    base = flags & FmtFlag.BASEFIELD
    upper = bool(flags & FmtFlag.UPPERCASE)
    magnitude = abs(value)
    sign = "-" if value < 0 else ""
    prefix = ""

    if base == FmtFlag.HEX:
        digits = format(magnitude, "X" if upper else "x")
        if flags & FmtFlag.SHOWBASE and magnitude:
            prefix = "0X" if upper else "0x"
    elif base == FmtFlag.OCT:
        digits = format(magnitude, "o")
        if flags & FmtFlag.SHOWBASE and magnitude:
            prefix = "0"
    else:
        digits = _decimal_digits(magnitude)
        if not sign and flags & FmtFlag.SHOWPOS:
            sign = "+"

    return sign + prefix + group_digits(digits, settings.locale)


def _decimal_digits(magnitude: int) -> str:
    # int -> str is capped by sys.get_int_max_str_digits(); convert in chunks.
    if magnitude < _CHUNK_BASE:
        return str(magnitude)
    chunks = []
    while magnitude >= _CHUNK_BASE:
        magnitude, low = divmod(magnitude, _CHUNK_BASE)
        chunks.append(str(low).zfill(_CHUNK_DIGITS))
    chunks.append(str(magnitude))
    return "".join(reversed(chunks))


def format_float(value: float, settings: RenderSettings) -> str:
    flags = settings.flags
    upper = bool(flags & FmtFlag.UPPERCASE)
    notation = flags & FmtFlag.FLOATFIELD

    if notation == FmtFlag.FLOATFIELD:
        text = _hexfloat(value)
        if upper:
            text = text.upper()
        if flags & FmtFlag.SHOWPOS and not text.startswith("-"):
            text = "+" + text
    else:
        if notation == FmtFlag.FIXED:
            kind = "f"
        elif notation == FmtFlag.SCIENTIFIC:
            kind = "e"
        else:
            kind = "g"
        spec = "%s%s.%d%s" % (
            "+" if flags & FmtFlag.SHOWPOS else "",
            "#" if flags & FmtFlag.SHOWPOINT else "",
            settings.precision,
            kind.upper() if upper else kind,
        )
        text = format(value, spec)

    return _localize(text, settings.locale)


def format_complex(value: complex, settings: RenderSettings) -> str:
    real = format_float(value.real, settings)
    imag = format_float(value.imag, settings)
    return f"({real},{imag})"


def format_number(value, settings: RenderSettings) -> str:
    """Render any ``numbers.Number`` (or ``Decimal``) under *settings*.

    Raises ``ValueError``/``OverflowError`` when the value cannot be
    converted (e.g. a signalling NaN); callers decide how to degrade.
    """
    if isinstance(value, numbers.Integral):
        return format_integer(int(value), settings)
    if isinstance(value, (numbers.Real, Decimal)):
        return format_float(float(value), settings)
    if isinstance(value, numbers.Complex):
        return format_complex(complex(value), settings)
    return str(value)


def _hexfloat(value: float) -> str:
    if math.isinf(value) or math.isnan(value):
        return format(value, "g")
    mantissa, exponent = value.hex().split("p")
    if "." in mantissa:
        mantissa = mantissa.rstrip("0").rstrip(".")
    return f"{mantissa}p{exponent}"


def _localize(text: str, loc: NumericLocale) -> str:
    if loc.is_classic:
        return text
    sign = text[:1] if text[:1] in ("+", "-") else ""
    body = text[len(sign):]
    if body[:2].lower() == "0x":
        return sign + body.replace(".", loc.decimal_point, 1)

    end = 0
    while end < len(body) and body[end].isdigit():
        end += 1
    if end == 0:
        # inf / nan
        return text
    rest = body[end:].replace(".", loc.decimal_point, 1)
    return sign + group_digits(body[:end], loc) + rest
