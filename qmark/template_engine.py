"""Positional template engine — fills %? markers with rendered arguments."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional, Sequence

from qmark.registry import ConverterRegistry
from qmark.renderer import FALLBACK, render
from qmark.settings import RenderSettings

logger = logging.getLogger(__name__)

MARKER = "%?"
ESCAPE = "%"


def substitute(template: str, rendered: Sequence[str]) -> str:
    """Replace %? markers left to right with pre-rendered arguments.

    ``%%?`` emits a literal ``%?`` without consuming an argument. Markers
    beyond the last argument emit ``?``; unused arguments are dropped.
    """
    pieces: list[str] = []
    cursor = 0
    arg_index = 0
    markers = 0
    while True:
        pos = template.find(MARKER, cursor)
        if pos == -1:
            break
        if pos > 0 and template[pos - 1] == ESCAPE:
            pieces.append(template[cursor:pos - 1])
            pieces.append(MARKER)
        else:
            markers += 1
            pieces.append(template[cursor:pos])
            if arg_index < len(rendered):
                pieces.append(rendered[arg_index])
                arg_index += 1
            else:
                pieces.append(FALLBACK)
        cursor = pos + len(MARKER)
    pieces.append(template[cursor:])

    if markers != len(rendered):
        logger.debug(
            "Template has %d markers for %d arguments", markers, len(rendered)
        )
    return "".join(pieces)


def render_string(
    template: str,
    settings: Optional[RenderSettings] = None,
    args: Sequence[Any] = (),
    converters: Optional[ConverterRegistry] = None,
) -> str:
    """Render every argument once, in order, then splice them into *template*.

    With no arguments the template is returned unchanged, markers and all.
    """
    if not args:
        return template
    if settings is None:
        settings = RenderSettings()
    rendered = [render(arg, settings, converters) for arg in args]
    return substitute(template, rendered)


def render_template(
    template_path: str,
    settings: Optional[RenderSettings] = None,
    args: Sequence[Any] = (),
    converters: Optional[ConverterRegistry] = None,
) -> str:
    """Same as render_string but reads the template from a UTF-8 file."""
    content = Path(template_path).read_text(encoding="utf-8")
    return render_string(content, settings, args, converters)
