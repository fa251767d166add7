"""Type-directed rendering of a single argument to text.

Every value falls into one renderable shape, checked most specific first:

1. boolean     -> ``true`` / ``false``
2. text        -> as-is
3. pair        -> ``{A : B}``
4. collection  -> ``[e1, e2, ...]`` (mappings iterate their items)
5. scalar      -> numbers via ``qmark.numeric``, other objects via ``str()``
6. unknown     -> ``?``

Values wrapped in ``Streamable`` and types registered in a
``ConverterRegistry`` always take the scalar path.
"""

from __future__ import annotations

import enum
import logging
import numbers
from collections.abc import Collection, Mapping
from typing import Any, Optional

from qmark.flags import FmtFlag
from qmark.numeric import format_number
from qmark.registry import ConverterRegistry
from qmark.settings import RenderSettings

logger = logging.getLogger(__name__)

FALLBACK = "?"

# Composites nested deeper than this render as FALLBACK.
MAX_DEPTH = 64

_TEXT_TYPES = (str, bytes, bytearray)


class Shape(enum.Enum):
    BOOLEAN = "boolean"
    TEXT = "text"
    PAIR = "pair"
    COLLECTION = "collection"
    SCALAR = "scalar"
    UNKNOWN = "unknown"


class Streamable:
    """Force a value through the scalar path.

    Use it for objects whose ``str()`` is meaningful but that automatic
    dispatch would otherwise render as ``?`` or as a composite.
    """

    __slots__ = ("value",)

    def __init__(self, value: Any) -> None:
        self.value = value

    def __repr__(self) -> str:
        return f"Streamable({self.value!r})"


def shape_of(value: Any, converters: Optional[ConverterRegistry] = None) -> Shape:
    """Classify *value* into the shape that selects its rendering."""
    if isinstance(value, Streamable):
        return Shape.SCALAR
    if isinstance(value, bool):
        return Shape.BOOLEAN
    if isinstance(value, _TEXT_TYPES):
        return Shape.TEXT
    if converters is not None and converters.lookup(value) is not None:
        return Shape.SCALAR
    if isinstance(value, tuple) and len(value) == 2:
        return Shape.PAIR
    if isinstance(value, Collection):
        return Shape.COLLECTION
    if isinstance(value, numbers.Number) or type(value).__str__ is not object.__str__:
        return Shape.SCALAR
    return Shape.UNKNOWN


def render(
    value: Any,
    settings: Optional[RenderSettings] = None,
    converters: Optional[ConverterRegistry] = None,
) -> str:
    """Render *value* to text. Never raises; unrenderable input yields ``?``."""
    if settings is None:
        settings = RenderSettings()
    return _RenderPass(settings, converters).render(value)


class _RenderPass:
    """State for rendering one top-level value: the stack of open composites."""

    def __init__(self, settings: RenderSettings, converters: Optional[ConverterRegistry]):
        self.settings = settings
        self.converters = converters
        self._open: list[int] = []

    def render(self, value: Any) -> str:
        shape = shape_of(value, self.converters)
        if shape is Shape.BOOLEAN:
            return "true" if value else "false"
        if shape is Shape.TEXT:
            return _text(value)
        if shape is Shape.SCALAR:
            return self._scalar(value)
        if shape is Shape.UNKNOWN:
            logger.debug("No text conversion for %s", type(value).__name__)
            return FALLBACK
        return self._composite(value, shape)

    def _scalar(self, value: Any) -> str:
        if isinstance(value, Streamable):
            value = value.value
        try:
            convert = self.converters.lookup(value) if self.converters is not None else None
            if convert is not None:
                return str(convert(value))
            if isinstance(value, bool):
                if self.settings.flags & FmtFlag.BOOLALPHA:
                    return "true" if value else "false"
                value = int(value)
            if isinstance(value, numbers.Number):
                return format_number(value, self.settings)
            return str(value)
        except Exception as exc:
            logger.warning("Rendering %s failed: %s", type(value).__name__, exc)
            return FALLBACK

    def _composite(self, value: Any, shape: Shape) -> str:
        key = id(value)
        if key in self._open:
            logger.debug("%s contains itself, cutting the cycle", type(value).__name__)
            return FALLBACK
        if len(self._open) >= MAX_DEPTH:
            logger.debug("Composite nesting exceeds %d levels", MAX_DEPTH)
            return FALLBACK

        self._open.append(key)
        try:
            if shape is Shape.PAIR:
                first, second = value
                return "{%s : %s}" % (self.render(first), self.render(second))
            items = value.items() if isinstance(value, Mapping) else value
            return "[" + ", ".join(self.render(item) for item in items) + "]"
        except Exception as exc:
            logger.warning("Rendering %s failed: %s", type(value).__name__, exc)
            return FALLBACK
        finally:
            self._open.pop()


def _text(value) -> str:
    if isinstance(value, str):
        return value
    return bytes(value).decode("utf-8", errors="replace")
