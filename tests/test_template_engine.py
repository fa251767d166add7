"""Tests for qmark.template_engine."""

import logging

from qmark.flags import FmtFlag
from qmark.settings import RenderSettings
from qmark.template_engine import render_string, render_template, substitute


class _CountingValue:
    def __init__(self):
        self.calls = 0

    def __str__(self):
        self.calls += 1
        return f"call-{self.calls}"


class TestSubstitute:
    def test_basic_replacement(self):
        assert substitute("hello %?", ["world"]) == "hello world"

    def test_multiple_replacements_in_order(self):
        assert substitute("%? and %?", ["X", "Y"]) == "X and Y"

    def test_adjacent_markers(self):
        assert substitute("%?%?", ["a", "b"]) == "ab"

    def test_escaped_marker(self):
        assert substitute("100%%? sure", ["x"]) == "100%? sure"

    def test_escaped_marker_consumes_no_argument(self):
        assert substitute("%%? then %?", ["X"]) == "%? then X"
        assert substitute("%%?%?", ["X"]) == "%?X"

    def test_escape_keeps_earlier_percent_signs(self):
        assert substitute("%%%?", ["x"]) == "%%?"

    def test_excess_markers_render_fallback(self):
        assert substitute("%?-%?-%?", ["1", "2"]) == "1-2-?"

    def test_excess_arguments_ignored(self):
        assert substitute("%?", ["1", "2", "3"]) == "1"

    def test_no_markers(self):
        assert substitute("no placeholders here", ["x"]) == "no placeholders here"

    def test_lone_percent_and_question_mark_untouched(self):
        assert substitute("50% ? done%", ["x"]) == "50% ? done%"

    def test_rendered_text_is_not_rescanned(self):
        assert substitute("%? %?", ["%?", "b"]) == "%? b"

    def test_multiline(self):
        template = "line1=%?\nline2=%?"
        assert substitute(template, ["1", "2"]) == "line1=1\nline2=2"

    def test_mismatch_logged(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="qmark.template_engine"):
            substitute("%? %?", ["a"])
        assert "2 markers for 1 arguments" in caplog.text


class TestRenderString:
    def test_no_args_returns_template_unchanged(self):
        template = "a %? b %%? c"
        assert render_string(template) == template
        assert render_string(template, RenderSettings(), []) == template

    def test_mixed_arguments(self):
        result = render_string("Number: %?, string: %?", RenderSettings(), [100.1, "abc"])
        assert result == "Number: 100.1, string: abc"

    def test_excess_markers(self):
        result = render_string(
            "Integer value: %?, double value: %?, wrong odd arguments: %?, %?, %?",
            RenderSettings(),
            [10, 20.5],
        )
        assert result == "Integer value: 10, double value: 20.5, wrong odd arguments: ?, ?, ?"

    def test_escaped_marker_with_args(self):
        assert render_string("%%?", RenderSettings(), [1]) == "%?"

    def test_each_argument_rendered_once(self):
        value = _CountingValue()
        assert render_string("%? %?", None, [value]) == "call-1 ?"
        assert value.calls == 1

    def test_unused_arguments_still_rendered_once(self):
        value = _CountingValue()
        assert render_string("nothing here", None, [value]) == "nothing here"
        assert value.calls == 1

    def test_settings_apply_to_all_arguments(self):
        settings = RenderSettings(flags=FmtFlag.HEX)
        assert render_string("%? %?", settings, [255, [16, 17]]) == "ff [10, 11]"

    def test_precision_honoured(self):
        assert render_string("pi=%?", RenderSettings(precision=2), [3.14159]) == "pi=3.1"


class TestRenderTemplate:
    def test_reads_file_and_replaces(self, tmp_path):
        path = tmp_path / "report.txt"
        path.write_text("items=%? total=%?", encoding="utf-8")
        settings = RenderSettings(precision=2, flags=FmtFlag.FIXED)
        result = render_template(str(path), settings, [["apple", "pear"], 3.5])
        assert result == "items=[apple, pear] total=3.50"

    def test_no_args_returns_file_contents(self, tmp_path):
        path = tmp_path / "tpl.txt"
        path.write_text("keep %? and %%?", encoding="utf-8")
        assert render_template(str(path)) == "keep %? and %%?"
