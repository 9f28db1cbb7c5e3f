"""Template rendering for new daily notes.

Supported placeholders (case-insensitive, spaces allowed inside the braces)
-----------------------------------------------------------------------------
- ``{{date}}`` / ``{{title}}``  : the note's date in the naming format
- ``{{time}}``                  : the current time, ``HH:mm``
- ``{{date+1d}}``, ``{{time-2h:HH:mm}}``, ``{{date:dddd}}``
                                : the note's date at the current time of day,
                                  shifted by a signed amount of ``y`` years,
                                  ``q`` quarters, ``m`` months, ``w`` weeks,
                                  ``d`` days, ``h`` hours or ``s`` seconds,
                                  then formatted with the optional format
- ``{{yesterday}}`` / ``{{tomorrow}}``

An offset or format that cannot be rendered leaves its placeholder untouched.

Rules are applied one after another, in the order above.  A bare
``{{date}}`` is consumed by the first rule, so it never picks up the current
time of day the way ``{{date:YYYY-MM-DD HH:mm}}`` does.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

import arrow

from dailynotes.dates import DEFAULT_FORMAT, DateLike, check_format, to_arrow
from dailynotes.folds import FoldInfo, FoldManager
from dailynotes.note import NoteFile
from dailynotes.paths import EXTENSION, normalize_path

if TYPE_CHECKING:
    from dailynotes.store import FileStore
    from dailynotes.ui import NoticeLog

logger = logging.getLogger(__name__)

_SHIFT_UNITS = {
    "y": "years",
    "q": "quarters",
    "m": "months",
    "w": "weeks",
    "d": "days",
    "h": "hours",
    "s": "seconds",
}


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RenderContext:
    date: arrow.Arrow
    now: arrow.Arrow
    format: str

    @property
    def title(self) -> str:
        return self.date.format(self.format)


@dataclass(frozen=True)
class SubstitutionRule:
    """One placeholder pattern and the function producing its replacement."""

    name: str
    pattern: re.Pattern[str]
    replace: Callable[[re.Match[str], RenderContext], str]

    def apply(self, text: str, ctx: RenderContext) -> str:
        return self.pattern.sub(lambda m: self.replace(m, ctx), text)


def _relative(match: re.Match[str], ctx: RenderContext) -> str:
    current = ctx.date.replace(hour=ctx.now.hour, minute=ctx.now.minute, second=ctx.now.second)
    custom = match.group("fmt")
    fmt = custom[1:].strip() if custom else ctx.format
    try:
        if match.group("calc"):
            unit = _SHIFT_UNITS[match.group("unit").lower()]
            current = current.shift(**{unit: int(match.group("delta"))})
        return current.format(check_format(fmt))
    except (ValueError, OverflowError) as exc:
        logger.warning("Leaving placeholder %s as-is: %s", match.group(0), exc)
        return match.group(0)


RULES: tuple[SubstitutionRule, ...] = (
    SubstitutionRule(
        "date",
        re.compile(r"{{\s*date\s*}}", re.IGNORECASE),
        lambda m, ctx: ctx.title,
    ),
    SubstitutionRule(
        "time",
        re.compile(r"{{\s*time\s*}}", re.IGNORECASE),
        lambda m, ctx: ctx.now.format("HH:mm"),
    ),
    SubstitutionRule(
        "title",
        re.compile(r"{{\s*title\s*}}", re.IGNORECASE),
        lambda m, ctx: ctx.title,
    ),
    SubstitutionRule(
        "relative",
        re.compile(
            r"{{\s*(?:date|time)\s*(?P<calc>(?P<delta>[+-]\d+)(?P<unit>[yqmwdhs]))?\s*(?P<fmt>:.+?)?}}",
            re.IGNORECASE,
        ),
        _relative,
    ),
    SubstitutionRule(
        "yesterday",
        re.compile(r"{{\s*yesterday\s*}}", re.IGNORECASE),
        lambda m, ctx: ctx.date.shift(days=-1).format(ctx.format),
    ),
    SubstitutionRule(
        "tomorrow",
        re.compile(r"{{\s*tomorrow\s*}}", re.IGNORECASE),
        lambda m, ctx: ctx.date.shift(days=1).format(ctx.format),
    ),
)


def render(
    body: str,
    date: DateLike,
    fmt: str = DEFAULT_FORMAT,
    now: arrow.Arrow | None = None,
) -> str:
    """Expand every placeholder in *body* for a note dated *date*."""
    ctx = RenderContext(date=to_arrow(date), now=now or arrow.now(), format=fmt)
    for rule in RULES:
        body = rule.apply(body, ctx)
    return body


# ---------------------------------------------------------------------------
# Template source
# ---------------------------------------------------------------------------


class TemplateSource:
    """Loads a template note and the fold state saved for it."""

    def __init__(
        self,
        store: "FileStore",
        folds: FoldManager,
        notices: "NoticeLog | None" = None,
    ) -> None:
        self.store = store
        self.folds = folds
        self.notices = notices

    def locate(self, template: str) -> str | None:
        """Resolve a template setting to an existing file path (``.md`` optional)."""
        path = normalize_path(template)
        candidates = [path] if path.endswith(EXTENSION) else [path, path + EXTENSION]
        for candidate in candidates:
            if isinstance(self.store.get(candidate), NoteFile):
                return candidate
        return None

    def _report(self, template: str, reason: object) -> None:
        logger.error("Failed to read the daily note template '%s': %s", template, reason)
        if self.notices is not None:
            self.notices.notify("Failed to read the daily note template")

    def load(self, template: str) -> tuple[str, FoldInfo | None]:
        if not template.strip():
            return "", None
        path = self.locate(template)
        if path is None:
            self._report(template, "no such note")
            return "", None
        try:
            body = self.store.read(path)
        except OSError as exc:
            self._report(template, exc)
            return "", None
        return body, self.folds.load(path)
