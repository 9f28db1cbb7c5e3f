"""Unit tests for dailynotes.templates (rendering and template loading)."""

import datetime as dt
import textwrap
from pathlib import Path

import arrow
import pytest

from dailynotes.folds import FoldManager
from dailynotes.templates import RULES, TemplateSource, render
from dailynotes.ui import NoticeLog

DAY = dt.date(2024, 3, 10)
NOW = arrow.get(2024, 10, 1, 14, 30, 5)


def _write_note(root: Path, path: str, content: str = "") -> Path:
    target = root / path
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(textwrap.dedent(content), encoding="utf-8")
    return target


def _render(body: str, date=DAY, fmt: str = "YYYY-MM-DD") -> str:
    return render(body, date, fmt, now=NOW)


# ---------------------------------------------------------------------------
# Fixed tokens
# ---------------------------------------------------------------------------


class TestFixedTokens:
    def test_date(self):
        assert _render("{{date}}") == "2024-03-10"

    def test_title(self):
        assert _render("# {{title}}") == "# 2024-03-10"

    def test_time(self):
        assert _render("{{time}}") == "14:30"

    def test_case_and_whitespace_tolerant(self):
        assert _render("{{ DATE }} {{Title}} {{  time}}") == "2024-03-10 2024-03-10 14:30"

    def test_every_occurrence(self):
        assert _render("{{date}}/{{date}}/{{date}}") == "2024-03-10/2024-03-10/2024-03-10"

    def test_naming_format(self):
        assert _render("{{date}}", fmt="dddd, MMMM D") == "Sunday, March 10"

    def test_yesterday_and_tomorrow(self):
        assert _render("{{yesterday}} < {{tomorrow}}") == "2024-03-09 < 2024-03-11"

    def test_yesterday_tomorrow_are_inverses(self):
        yesterday = arrow.get(_render("{{yesterday}}"), "YYYY-MM-DD")
        tomorrow = arrow.get(_render("{{tomorrow}}"), "YYYY-MM-DD")
        assert yesterday.shift(days=1).date() == DAY == tomorrow.shift(days=-1).date()

    def test_month_boundary(self):
        assert _render("{{yesterday}}", date=dt.date(2024, 3, 1)) == "2024-02-29"

    def test_example_body(self):
        body = "Today: {{date}}, Yesterday: {{yesterday}}"
        assert _render(body) == "Today: 2024-03-10, Yesterday: 2024-03-09"

    def test_unknown_placeholders_untouched(self):
        assert _render("{{weather}} {{ date }}") == "{{weather}} 2024-03-10"


# ---------------------------------------------------------------------------
# Relative / custom-format tokens
# ---------------------------------------------------------------------------


class TestRelativeTokens:
    @pytest.mark.parametrize(
        "token, expected",
        [
            ("{{date+1d}}", "2024-03-11"),
            ("{{date-1d}}", "2024-03-09"),
            ("{{date+2w}}", "2024-03-24"),
            ("{{date-1m}}", "2024-02-10"),
            ("{{date+1M}}", "2024-04-10"),
            ("{{date+1q}}", "2024-06-10"),
            ("{{date+1y}}", "2025-03-10"),
            ("{{ date +3d }}", "2024-03-13"),
        ],
    )
    def test_offsets(self, token, expected):
        assert _render(token) == expected

    def test_custom_format(self):
        assert _render("{{date:YYYY}}") == "2024"

    def test_custom_format_is_trimmed(self):
        assert _render("{{date: MMMM }}") == "March"

    def test_offset_and_format(self):
        assert _render("{{date-1y:YYYY}}") == "2023"

    def test_time_of_day_overlay(self):
        assert _render("{{date:YYYY-MM-DD HH:mm}}") == "2024-03-10 14:30"

    def test_time_offsets(self):
        assert _render("{{time+2h:HH:mm}}") == "16:30"
        assert _render("{{time+30s:HH:mm:ss}}") == "14:30:35"

    def test_hours_roll_over_the_date(self):
        assert _render("{{date+10h:YYYY-MM-DD}}") == "2024-03-11"

    def test_bare_date_skips_overlay(self):
        """A plain {{date}} is consumed before the overlay rule sees it."""
        morning = dt.datetime(2024, 3, 10, 8, 0)
        fmt = "YYYY-MM-DD HH:mm"
        assert _render("{{date}}", date=morning, fmt=fmt) == "2024-03-10 08:00"
        assert _render("{{date+0d}}", date=morning, fmt=fmt) == "2024-03-10 14:30"

    def test_unsupported_tokens_left_as_is(self, caplog):
        assert _render("{{date:[W]ww}} {{date:Q}} {{date:YYYY}}") == "{{date:[W]ww}} {{date:Q}} 2024"
        assert "ww" in caplog.text

    def test_out_of_range_offset_left_as_is(self):
        assert _render("{{date+100000y}} {{date+1d}}") == "{{date+100000y}} 2024-03-11"

    def test_mixed_body(self):
        body = "# {{date:dddd}}\n\n- prev: [[{{date-1d}}]]\n- next: [[{{tomorrow}}]]\n- at {{time}}\n"
        assert _render(body) == (
            "# Sunday\n\n- prev: [[2024-03-09]]\n- next: [[2024-03-11]]\n- at 14:30\n"
        )


class TestRuleOrder:
    def test_fixed_tokens_before_relative(self):
        names = [rule.name for rule in RULES]
        assert names.index("date") < names.index("relative")
        assert names.index("time") < names.index("relative")
        assert names.index("title") < names.index("relative")

    def test_render_default_clock(self):
        assert render("{{date}}", DAY) == "2024-03-10"


# ---------------------------------------------------------------------------
# TemplateSource
# ---------------------------------------------------------------------------


class TestTemplateSource:
    def test_no_template(self, store):
        assert TemplateSource(store, FoldManager()).load("") == ("", None)

    def test_loads_without_extension(self, store, tmp_path):
        _write_note(tmp_path, "templates/daily.md", "# {{date}}\n")
        assert TemplateSource(store, FoldManager()).load("templates/daily") == ("# {{date}}\n", None)

    def test_loads_with_extension_and_slashes(self, store, tmp_path):
        _write_note(tmp_path, "templates/daily.md", "body")
        body, _ = TemplateSource(store, FoldManager()).load("/templates//daily.md")
        assert body == "body"

    def test_fold_info(self, store, tmp_path):
        _write_note(tmp_path, "templates/daily.md", "body")
        folds = FoldManager()
        folds.save("templates/daily.md", {"folds": [{"from": 0, "to": 2}], "lines": 3})
        _, info = TemplateSource(store, folds).load("templates/daily")
        assert info == {"folds": [{"from": 0, "to": 2}], "lines": 3}

    def test_missing_template_notifies(self, store, caplog):
        notices = NoticeLog()
        result = TemplateSource(store, FoldManager(), notices).load("templates/nope")
        assert result == ("", None)
        assert notices.messages == ["Failed to read the daily note template"]
        assert "templates/nope" in caplog.text

    def test_folder_is_not_a_template(self, store, tmp_path):
        (tmp_path / "templates").mkdir()
        notices = NoticeLog()
        assert TemplateSource(store, FoldManager(), notices).load("templates") == ("", None)
        assert len(notices.messages) == 1
