"""Converter registry — declare types whose instances render as scalars."""

from __future__ import annotations

from typing import Any, Callable, Optional

Converter = Callable[[Any], str]

# Bools and text are classified before converters are consulted.
_BUILTIN_SHAPES = (bool, str, bytes, bytearray)


class ConverterRegistry:
    """Maps types to text converters.

    A registered type renders through its converter instead of the automatic
    shape dispatch, so it wins over pair/collection detection. Bools, strings
    and bytes (and their subclasses) always render as themselves and cannot be
    registered. Lookup walks the value type's MRO, so subclasses inherit
    their base's converter.
    """

    def __init__(self) -> None:
        self._converters: dict[type, Converter] = {}

    def register(self, cls: type, convert: Converter = str) -> None:
        """Register *convert* for instances of *cls*."""
        if not isinstance(cls, type):
            raise TypeError(f"Expected a type, got {cls!r}")
        if issubclass(cls, _BUILTIN_SHAPES):
            raise TypeError(f"{cls.__name__} always renders as itself; it cannot take a converter")
        if not callable(convert):
            raise TypeError(f"Converter for {cls.__name__} must be callable")
        self._converters[cls] = convert

    def unregister(self, cls: type) -> None:
        if cls not in self._converters:
            raise KeyError(
                f"No converter registered for {cls!r}. "
                f"Registered: {[t.__name__ for t in self._converters]}"
            )
        del self._converters[cls]

    def lookup(self, value: Any) -> Optional[Converter]:
        """Return the converter for *value*'s type, or ``None``."""
        if not self._converters:
            return None
        for klass in type(value).__mro__:
            convert = self._converters.get(klass)
            if convert is not None:
                return convert
        return None

    def registered_types(self) -> list[type]:
        """Return all registered types, in registration order."""
        return list(self._converters)

    def __contains__(self, cls: object) -> bool:
        return cls in self._converters

    def __len__(self) -> int:
        return len(self._converters)
