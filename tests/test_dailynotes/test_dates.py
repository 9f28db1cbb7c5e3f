"""Unit tests for dailynotes.dates."""

import datetime as dt

import arrow
import pytest

from dailynotes.dates import (
    UnsupportedFormatError,
    check_format,
    date_from_file,
    date_from_uid,
    date_uid,
    date_uid_from_file,
    parse_date,
    to_arrow,
)
from dailynotes.note import NoteFile


class TestDateUid:
    def test_same_day_same_uid(self):
        morning = dt.datetime(2024, 3, 10, 0, 0, 1)
        night = dt.datetime(2024, 3, 10, 23, 59, 59)
        assert date_uid(morning) == date_uid(night)

    def test_accepts_dates_and_arrows(self):
        assert date_uid(dt.date(2024, 3, 10)) == "day-2024-03-10"
        assert date_uid(arrow.get(2024, 3, 10, 18, 0)) == "day-2024-03-10"

    def test_aware_datetime_keeps_local_day(self):
        late = arrow.get(dt.datetime(2024, 3, 10, 23, 30), "US/Pacific")
        assert date_uid(late) == "day-2024-03-10"

    def test_different_days_differ(self):
        assert date_uid(dt.date(2024, 3, 10)) != date_uid(dt.date(2024, 3, 11))

    def test_round_trip_to_date(self):
        assert date_from_uid(date_uid(dt.date(2024, 3, 10))) == dt.date(2024, 3, 10)

    def test_rejects_other_types(self):
        with pytest.raises(TypeError):
            to_arrow("2024-03-10")


class TestParseDate:
    def test_matches(self):
        assert parse_date("2024-03-10", "YYYY-MM-DD").date() == dt.date(2024, 3, 10)

    @pytest.mark.parametrize("text", ["2024-3-10", "2024-03-10 copy", "notes", "", "2024-02-30"])
    def test_strict(self, text):
        assert parse_date(text, "YYYY-MM-DD") is None

    def test_custom_format(self):
        assert parse_date("10.03.2024", "DD.MM.YYYY").date() == dt.date(2024, 3, 10)


class TestDateFromFile:
    def test_note_file(self):
        parsed = date_from_file(NoteFile("journal/2024-03-10.md"))
        assert parsed.date() == dt.date(2024, 3, 10)

    def test_path_string(self):
        assert date_from_file("journal/2024-03-10.md").date() == dt.date(2024, 3, 10)

    def test_nested_format_uses_last_segment(self):
        parsed = date_from_file(NoteFile("journal/2024/03/2024-03-10.md"), "YYYY/MM/YYYY-MM-DD")
        assert parsed.date() == dt.date(2024, 3, 10)

    def test_unparseable(self):
        assert date_from_file(NoteFile("journal/readme.md")) is None

    def test_uid_from_file(self):
        assert date_uid_from_file(NoteFile("2024-03-10.md")) == "day-2024-03-10"
        assert date_uid_from_file(NoteFile("todo.md")) is None


class TestCheckFormat:
    @pytest.mark.parametrize(
        "fmt",
        ["YYYY-MM-DD", "DD.MM.YYYY", "dddd, MMMM Do", "YYYY/MM/YYYY-MM-DD", "[Week of] YYYY-MM-DD", "W"],
    )
    def test_supported(self, fmt):
        assert check_format(fmt) == fmt

    @pytest.mark.parametrize("fmt", ["[W]ww", "YYYY-[Q]Q", "gggg-[W]ww", "YYYY-MM-DD E"])
    def test_unsupported(self, fmt):
        with pytest.raises(UnsupportedFormatError):
            check_format(fmt)
