"""CLI entry point: python -m qmark format|demo|locales ..."""

from __future__ import annotations

import argparse
import logging
import sys

import yaml

from qmark.flags import FmtFlag, flag_names, parse_flags
from qmark.formatter import Formatter
from qmark.locales import list_locales
from qmark.settings import RenderSettings
from qmark.template_engine import render_string, render_template

logger = logging.getLogger(__name__)


def parse_argument(text: str):
    """Read a command-line argument as a YAML value (``10``, ``[1, 2]``, ``{a: 1}``).

    Text that is not valid YAML, or that parses to null, stays a string.
    """
    try:
        value = yaml.safe_load(text)
    except yaml.YAMLError:
        return text
    return text if value is None else value


def _build_formatter(args: argparse.Namespace) -> Formatter:
    # Settings: defaults <- YAML <- CLI flags
    formatter = Formatter.from_config(args.settings) if args.settings else Formatter()
    if args.precision is not None:
        formatter.set_precision(args.precision)
    if args.flags is not None:
        formatter.set_flags(parse_flags(args.flags))
    if args.locale is not None:
        formatter.set_locale(args.locale)
    logger.debug(
        "Render settings: precision=%d flags=%s locale=%s",
        formatter.get_precision(),
        ",".join(flag_names(formatter.get_flags())),
        formatter.get_locale().name,
    )
    return formatter


def cmd_format(args: argparse.Namespace) -> None:
    try:
        formatter = _build_formatter(args)
        values = [parse_argument(a) for a in args.args]
        logger.debug("Parsed arguments: %r", values)
        if args.template_file:
            result = render_template(
                args.template, formatter.settings, values, formatter.converters
            )
        else:
            result = formatter.format(args.template, *values)
    except (ValueError, KeyError, OSError) as exc:
        message = exc.args[0] if isinstance(exc, KeyError) and exc.args else exc
        print(f"Error: {message}", file=sys.stderr)
        sys.exit(1)
    print(result)


class _Opaque:
    """Has no text conversion."""


class _Described:
    def __str__(self) -> str:
        return "Type Y"


class _Point:
    def __init__(self, x, y):
        self.x = x
        self.y = y

    def __repr__(self) -> str:
        return f"Point({self.x}, {self.y})"


def cmd_demo(args: argparse.Namespace) -> None:
    formatter = Formatter()

    print(formatter.format("Number: %?, string: %?", 100.1, "abc"))
    print(formatter.format(
        "Integer value: %?, double value: %?, wrong odd arguments: %?, %?, %?", 10, 20.5
    ))

    fruits = ["apple", "pear", "banana"]
    print(formatter.format("List of %? elements: %?", len(fruits), fruits))

    map_example = {2.0: True, 4.5: False, 8: True}
    print(formatter.format("Map of %? elements: %?", len(map_example), map_example))

    print(formatter.format(
        "Unknown type is shown as '%?', known type example: '%?'", _Opaque(), _Described()
    ))
    point = _Point(1, 2)
    print(formatter.format("Repr-only object: %?, forced: %?", point, formatter.output(point)))

    old = formatter.add_flags(
        FmtFlag.HEX | FmtFlag.SHOWBASE, FmtFlag.BASEFIELD | FmtFlag.SHOWBASE
    )
    print(formatter.format("Hex: %?, escaped marker: %%?", 255))
    formatter.set_flags(old)

    print(formatter.format("No args"))


def cmd_locales(args: argparse.Namespace) -> None:
    sample = 1234567.891
    for loc in list_locales():
        settings = RenderSettings(precision=2, locale=loc, flags=FmtFlag.FIXED)
        rendered = render_string("%?", settings, [sample])
        print(
            f"{loc.name:<6} decimal={loc.decimal_point!r:<5} "
            f"thousands={loc.thousands_sep!r:<10} grouping={list(loc.grouping)!s:<8} "
            f"{rendered}"
        )


def main() -> None:
    parser = argparse.ArgumentParser(
        prog="qmark",
        description="Fill %? markers in a template with rendered values",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # -- format --
    p_format = subparsers.add_parser("format", help="Render a template with arguments")
    p_format.add_argument("template", help="Template text (or a path with --template-file)")
    p_format.add_argument("args", nargs="*",
                          help="Arguments, each read as YAML (e.g. 10, 2.5, true, '[1, 2]')")
    p_format.add_argument("--template-file", action="store_true", default=False,
                          help="Treat TEMPLATE as a path to a UTF-8 template file")
    p_format.add_argument("--precision", type=int, default=None,
                          help="Digits for floating-point output (default: 6)")
    p_format.add_argument("--flags", default=None,
                          help="Comma-separated flags replacing the defaults "
                               "(e.g. hex,showbase or fixed,showpos)")
    p_format.add_argument("--locale", default=None,
                          help="Numeric locale name (e.g. de_DE, en_US, current)")
    p_format.add_argument("--settings", default=None,
                          help="Path to YAML file with render settings")
    p_format.set_defaults(func=cmd_format)

    # -- demo --
    p_demo = subparsers.add_parser("demo", help="Print formatting examples")
    p_demo.set_defaults(func=cmd_demo)

    # -- locales --
    p_locales = subparsers.add_parser("locales", help="List known numeric locales")
    p_locales.set_defaults(func=cmd_locales)

    args = parser.parse_args()

    level = logging.DEBUG if args.verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    args.func(args)


if __name__ == "__main__":
    main()
