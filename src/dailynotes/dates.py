"""Date identities and filename date parsing.

Formats use the moment-style tokens that :mod:`arrow` implements for both
formatting and parsing: ``YYYY YY M MM MMM MMMM D DD Do DDD DDDD d ddd dddd
H HH h hh m mm s ss S.. A a X x W ZZZ ZZ Z``, plus ``[...]`` for literal
text.  Moment tokens arrow lacks (``Q``, ``w``/``ww``, ``gggg``, ``E``...)
would be printed verbatim, so :func:`check_format` rejects them.
"""

from __future__ import annotations

import datetime as dt
import re
from pathlib import PurePosixPath
from typing import Union

import arrow

from dailynotes.note import NoteFile

DEFAULT_FORMAT = "YYYY-MM-DD"

DateLike = Union[arrow.Arrow, dt.datetime, dt.date]

# Same alternation as arrow's formatter
_TOKEN_RE = re.compile(
    r"(\[(?:(?!\]).)*\]|YYY?Y?|MM?M?M?|Do|DD?D?D?|d?dd?d?|HH?|hh?|mm?|ss?|SS?S?S?S?S?|ZZ?Z?|a|A|X|x|W)"
)
_LETTER_RE = re.compile(r"[A-Za-z]+")


class UnsupportedFormatError(ValueError):
    """A date format uses tokens arrow cannot format."""


def check_format(fmt: str) -> str:
    """Return *fmt* unchanged, or raise if it holds an unknown letter token."""
    leftover = _LETTER_RE.findall(_TOKEN_RE.sub("", fmt))
    if leftover:
        raise UnsupportedFormatError(
            f"Unsupported date token(s) {', '.join(leftover)} in format {fmt!r}"
        )
    return fmt


def to_arrow(value: DateLike) -> arrow.Arrow:
    """Coerce *value* to an :class:`arrow.Arrow`, keeping its wall-clock time.

    Naive datetimes and plain dates are taken as-is (no timezone shift).
    """
    if isinstance(value, arrow.Arrow):
        return value
    if isinstance(value, dt.datetime):
        return arrow.Arrow.fromdatetime(value)
    if isinstance(value, dt.date):
        return arrow.Arrow.fromdate(value)
    raise TypeError(f"Expected a date, datetime or Arrow, got {type(value).__name__}")


def date_uid(value: DateLike) -> str:
    """Return the day-granularity identity key for *value*.

    Any two values on the same calendar day map to the same key.
    """
    return "day-" + to_arrow(value).floor("day").format("YYYY-MM-DD")


def date_from_uid(uid: str) -> dt.date:
    return dt.date.fromisoformat(uid.removeprefix("day-"))


def parse_date(text: str, fmt: str = DEFAULT_FORMAT) -> arrow.Arrow | None:
    """Strictly parse *text* with *fmt*; ``None`` when it does not match.

    Strict means the parsed date must format back to exactly *text*, so
    ``2024-03-10 copy`` or ``2024-3-10`` are rejected under ``YYYY-MM-DD``.
    """
    try:
        parsed = arrow.get(text, fmt)
    except (ValueError, TypeError):
        return None
    if parsed.format(fmt) != text:
        return None
    return parsed


def date_from_file(note: NoteFile | str, fmt: str = DEFAULT_FORMAT) -> arrow.Arrow | None:
    """Parse the date encoded in a note's filename.

    Only the last segment of *fmt* is matched: a format like
    ``YYYY/MM/YYYY-MM-DD`` turns its leading segments into folders.
    """
    basename = note.basename if isinstance(note, NoteFile) else PurePosixPath(note).stem
    return parse_date(basename, fmt.split("/")[-1])


def date_uid_from_file(note: NoteFile | str, fmt: str = DEFAULT_FORMAT) -> str | None:
    parsed = date_from_file(note, fmt)
    return date_uid(parsed) if parsed is not None else None
