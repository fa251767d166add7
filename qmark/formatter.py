"""Formatter — the caller-facing engine holding render settings across calls."""

from __future__ import annotations

import dataclasses
import logging
import threading
from typing import Any, Optional, Union

from qmark.flags import FmtFlag
from qmark.locales import NumericLocale, get_locale
from qmark.registry import ConverterRegistry, Converter
from qmark.renderer import Streamable
from qmark.settings import RenderSettings, load_render_settings
from qmark.template_engine import render_string

logger = logging.getLogger(__name__)


class Formatter:
    """Fills strings with formatted arguments.

    The marker is ``%?``; ``%%?`` produces a literal ``%?``. Arguments render
    the way a stream configured with the formatter's precision, locale and
    flags would print them. Example::

        formatter = Formatter()
        formatter.format("Num value: %?, string value: %?", 10.5, "xyz")
        # 'Num value: 10.5, string value: xyz'

    Each setter returns the value in effect before the call. Settings are an
    immutable snapshot: a ``format`` call uses the snapshot taken when it
    started, and changes apply to later calls only.
    """

    def __init__(
        self,
        settings: Optional[RenderSettings] = None,
        converters: Optional[ConverterRegistry] = None,
    ):
        self._settings = settings if settings is not None else RenderSettings()
        self.converters = converters if converters is not None else ConverterRegistry()
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, path: str) -> Formatter:
        """Create a formatter from a YAML render-settings file."""
        return cls(load_render_settings(path))

    @property
    def settings(self) -> RenderSettings:
        return self._settings

    def format(self, template: str, *args: Any) -> str:
        return render_string(template, self._settings, args, self.converters)

    def output(self, value: Any) -> Streamable:
        """Wrap *value* so it renders through ``str()``/number formatting."""
        return Streamable(value)

    def register(self, cls: type, convert: Converter = str) -> None:
        self.converters.register(cls, convert)

    def unregister(self, cls: type) -> None:
        self.converters.unregister(cls)

    # -- flags --

    def get_flags(self) -> FmtFlag:
        return self._settings.flags

    def set_flags(self, flags: FmtFlag) -> FmtFlag:
        """Replace all flags."""
        return self._swap(lambda s: {"flags": FmtFlag(flags)}).flags

    def add_flags(self, flags: FmtFlag, mask: Optional[FmtFlag] = None) -> FmtFlag:
        """Set *flags*; with *mask*, clear the bits under it first and only set ``flags & mask``."""
        if mask is None:
            return self._swap(lambda s: {"flags": s.flags | flags}).flags
        return self._swap(lambda s: {"flags": (s.flags & ~mask) | (flags & mask)}).flags

    def clear_flags(self, flags: FmtFlag) -> FmtFlag:
        return self._swap(lambda s: {"flags": s.flags & ~flags}).flags

    # -- locale --

    def get_locale(self) -> NumericLocale:
        return self._settings.locale

    def set_locale(self, loc: Union[NumericLocale, str]) -> NumericLocale:
        """Switch the numeric locale; accepts a ``NumericLocale`` or a catalog name."""
        if isinstance(loc, str):
            loc = get_locale(loc)
        return self._swap(lambda s: {"locale": loc}).locale

    # -- precision --

    def get_precision(self) -> int:
        return self._settings.precision

    def set_precision(self, precision: int) -> int:
        return self._swap(lambda s: {"precision": precision}).precision

    def _swap(self, changes) -> RenderSettings:
        """Atomically replace the settings snapshot; return the previous one."""
        with self._lock:
            old = self._settings
            new = dataclasses.replace(old, **changes(old))
            self._settings = new
        logger.debug("Render settings changed: %s -> %s", old, new)
        return old
