"""NoteIndex: in-memory map from date identity to daily-note file."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import TYPE_CHECKING

import polars as pl

from dailynotes.dates import DateLike, date_from_file, date_from_uid, date_uid, date_uid_from_file
from dailynotes.note import Folder, NoteFile
from dailynotes.paths import EXTENSION, is_bucket, normalize_path, strip_bucket
from dailynotes.settings import ConfigurationError, Settings

if TYPE_CHECKING:
    from dailynotes.store import FileStore
    from dailynotes.ui import NoticeLog

logger = logging.getLogger(__name__)


class NotesFolderMissingError(ConfigurationError):
    """The configured daily-notes folder does not exist in the vault."""


# ---------------------------------------------------------------------------
# Scanning
# ---------------------------------------------------------------------------


def iter_files(store: "FileStore", folder: str) -> Iterator[NoteFile]:
    """Yield every file below *folder*, depth-first."""
    for entry in store.list_children(folder):
        if isinstance(entry, Folder):
            yield from iter_files(store, entry.path)
        else:
            yield entry


def scan_folders(store: "FileStore", settings: Settings) -> list[str]:
    """Return the folders holding daily notes for *settings*.

    With age buckets enabled the notes live in ``<folder>/<age>`` for every
    age so far, so the scan starts one level up and covers each bucket.
    """
    folder = normalize_path(settings.folder)
    bucketed = settings.bucket.enabled
    if bucketed:
        folder = normalize_path(strip_bucket(folder))

    if not isinstance(store.get(folder), Folder):
        raise NotesFolderMissingError(f"Failed to find daily notes folder '{folder}'")

    if not bucketed:
        return [folder]
    return [
        entry.path
        for entry in store.list_children(folder)
        if isinstance(entry, Folder) and is_bucket(entry.name)
    ]


def get_all_notes(store: "FileStore", settings: Settings) -> dict[str, NoteFile]:
    """Scan the vault and map every dated note by its date identity."""
    notes: dict[str, NoteFile] = {}
    for folder in scan_folders(store, settings):
        for note in iter_files(store, folder):
            if not note.name.endswith(EXTENSION):
                continue
            parsed = date_from_file(note, settings.format)
            if parsed is not None:
                notes[date_uid(parsed)] = note
    return notes


# ---------------------------------------------------------------------------
# Index
# ---------------------------------------------------------------------------


class NoteIndex:
    """Snapshot of the daily notes in a vault.

    Nothing here watches the file system: call :meth:`reindex` (or
    :meth:`refresh` after :meth:`invalidate`) to pick up changes.
    """

    def __init__(
        self,
        store: "FileStore",
        settings: Settings,
        notices: "NoticeLog | None" = None,
    ) -> None:
        self.store = store
        self.settings = settings
        self.notices = notices
        self.notes: dict[str, NoteFile] = {}
        #: Set after a failed reindex so the failure is reported once
        self.has_error = False
        self.stale = True
        #: Date identity of the note open in the active pane, if it is a daily note
        self.active_uid: str | None = None

    # ------------------------------------------------------------------
    # Build / refresh
    # ------------------------------------------------------------------

    def reindex(self) -> None:
        """(Re-)scan the vault and replace the snapshot."""
        try:
            notes = get_all_notes(self.store, self.settings)
        except (ConfigurationError, OSError) as exc:
            if not self.has_error:
                logger.error("Failed to find daily notes folder: %s", exc)
                if self.notices is not None:
                    self.notices.notify(str(exc))
            self.notes = {}
            self.has_error = True
        else:
            self.notes = notes
            self.has_error = False
            logger.debug("Indexed %d daily notes", len(notes))
        self.stale = False

    def invalidate(self) -> None:
        self.stale = True

    def refresh(self) -> None:
        """Reindex only if the snapshot was invalidated."""
        if self.stale:
            self.reindex()

    # ------------------------------------------------------------------
    # Query helpers
    # ------------------------------------------------------------------

    def lookup(self, date: DateLike) -> NoteFile | None:
        return self.notes.get(date_uid(date))

    def __contains__(self, date: DateLike) -> bool:
        return self.lookup(date) is not None

    def __len__(self) -> int:
        return len(self.notes)

    # ------------------------------------------------------------------
    # Active file
    # ------------------------------------------------------------------

    def set_active_file(self, note: NoteFile | None) -> None:
        """Record which note was opened; non-daily notes clear the selection."""
        self.active_uid = (
            date_uid_from_file(note, self.settings.format) if note is not None else None
        )

    def is_active(self, date: DateLike) -> bool:
        return self.active_uid is not None and self.active_uid == date_uid(date)

    # ------------------------------------------------------------------
    # Frames
    # ------------------------------------------------------------------

    def to_frame(self) -> pl.DataFrame:
        """Return ``uid``, ``date``, ``path`` and ``active`` columns, oldest first."""
        rows = [
            {
                "uid": uid,
                "date": date_from_uid(uid),
                "path": note.path,
                "active": uid == self.active_uid,
            }
            for uid, note in self.notes.items()
        ]
        schema = {"uid": pl.Utf8, "date": pl.Date, "path": pl.Utf8, "active": pl.Boolean}
        return pl.DataFrame(rows, schema=schema).sort("date")
