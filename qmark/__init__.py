"""qmark — fill ``%?`` markers in a template with stream-style rendered values."""

from qmark.flags import DEFAULT_FLAGS, FmtFlag, parse_flags
from qmark.formatter import Formatter
from qmark.locales import NumericLocale, get_locale
from qmark.registry import ConverterRegistry
from qmark.renderer import FALLBACK, MAX_DEPTH, Shape, Streamable, render, shape_of
from qmark.settings import RenderSettings, default_render_settings, load_render_settings
from qmark.template_engine import MARKER, render_string, render_template, substitute

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_FLAGS",
    "FALLBACK",
    "MARKER",
    "MAX_DEPTH",
    "ConverterRegistry",
    "FmtFlag",
    "Formatter",
    "NumericLocale",
    "RenderSettings",
    "Shape",
    "Streamable",
    "default_render_settings",
    "get_locale",
    "load_render_settings",
    "parse_flags",
    "render",
    "render_string",
    "render_template",
    "shape_of",
    "substitute",
]
