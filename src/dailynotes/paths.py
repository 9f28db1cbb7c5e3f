"""Note path resolution: joining, normalization and age-numbered buckets."""

from __future__ import annotations

import math
import re
import unicodedata
from dataclasses import dataclass
from typing import TYPE_CHECKING

import arrow

if TYPE_CHECKING:
    from dailynotes.store import FileStore

EXTENSION = ".md"

#: 365.25 days; ages are approximate near birthdays in leap-affected years
MS_PER_JULIAN_YEAR = 365.25 * 86400 * 1000

_BUCKET_RE = re.compile(r"^\d{1,3}$")
_NBSP_RE = re.compile("[\u00a0\u202f]")


# ---------------------------------------------------------------------------
# Joining / normalization
# ---------------------------------------------------------------------------


def _segments(parts: tuple[str, ...]) -> list[str]:
    result: list[str] = []
    for part in parts:
        for segment in part.replace("\\", "/").split("/"):
            if not segment or segment == ".":
                continue
            if segment == "..":
                # Never climb above the vault root
                if result:
                    result.pop()
                continue
            result.append(segment)
    return result


def join(*parts: str) -> str:
    """Join path fragments, dropping empty and dot segments.

    A leading slash on the first fragment is kept::

        >>> join("journal//2024", "./", "03-10.md")
        'journal/2024/03-10.md'
        >>> join("/journal", "x.md")
        '/journal/x.md'
    """
    joined = "/".join(_segments(parts))
    if parts and parts[0].replace("\\", "/").startswith("/"):
        return "/" + joined
    return joined


def normalize_path(path: str) -> str:
    """Vault-rooted form of *path*: no leading or trailing slash, NFC text."""
    path = unicodedata.normalize("NFC", _NBSP_RE.sub(" ", path))
    return "/".join(_segments((path,)))


# ---------------------------------------------------------------------------
# Age buckets
# ---------------------------------------------------------------------------


def compute_age(birthday: str | None, now: arrow.Arrow | None = None) -> int | None:
    """Whole years elapsed since *birthday* (``YYYY-MM-DD``).

    Returns ``None`` for an absent, malformed or future birthday.
    """
    if not birthday:
        return None
    try:
        born = arrow.get(birthday.strip(), "YYYY-MM-DD")
    except (ValueError, TypeError):
        return None
    now = now or arrow.now()
    elapsed_ms = (now - born).total_seconds() * 1000
    age = math.floor(elapsed_ms / MS_PER_JULIAN_YEAR)
    if not 0 <= age <= 999:
        return None
    return age


def strip_bucket(folder: str) -> str:
    """Remove a trailing 1-3 digit bucket segment from *folder*, if any."""
    leading = folder.replace("\\", "/").startswith("/")
    segments = _segments((folder,))
    if segments and _BUCKET_RE.match(segments[-1]):
        segments.pop()
    joined = "/".join(segments)
    return "/" + joined if leading else joined


def is_bucket(name: str) -> bool:
    return bool(_BUCKET_RE.match(name))


@dataclass(frozen=True)
class AgeBucket:
    """Routes notes into a subfolder named after the owner's current age.

    Disabled (every method is a no-op) unless *birthday* parses as
    ``YYYY-MM-DD``.
    """

    birthday: str | None = None

    def age(self, now: arrow.Arrow | None = None) -> int | None:
        return compute_age(self.birthday, now)

    @property
    def enabled(self) -> bool:
        return self.age() is not None

    def apply(self, folder: str, now: arrow.Arrow | None = None) -> str:
        age = self.age(now)
        if age is None:
            return folder
        return join(strip_bucket(folder), str(age))


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------


def ensure_folder_exists(store: "FileStore", path: str) -> None:
    """Create every missing directory above *path*, top-down."""
    directories = _segments((path,))[:-1]
    for depth in range(1, len(directories) + 1):
        folder = "/".join(directories[:depth])
        if not store.exists(folder):
            store.create_folder(folder)


def resolve_note_path(
    store: "FileStore",
    folder: str,
    filename: str,
    bucket: AgeBucket | None = None,
    now: arrow.Arrow | None = None,
) -> str:
    """Return the ``.md`` path for *filename* under *folder*, creating folders.

    With an enabled *bucket* the folder becomes ``<folder>/<age>``, replacing
    any bucket segment already present.  The result is vault-relative, with no
    leading slash.
    """
    if bucket is not None:
        folder = bucket.apply(folder, now)
    if not filename.endswith(EXTENSION):
        filename += EXTENSION
    path = normalize_path(join(folder, filename))
    ensure_folder_exists(store, path)
    return path
