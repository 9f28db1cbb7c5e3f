"""NoteCreator: materialize a daily note from the template and open it.

Usage::

    creator = NoteCreator(
        LocalVault(vault_dir),
        load_settings(settings_file),
        workspace=PaneWorkspace(),
        confirm=ask_user,          # async (Prompt) -> bool
        index=index,
    )
    note = await creator.create_note(date(2024, 3, 10))

Failures never escape :meth:`NoteCreator.create_note`: they are logged,
reported through the notice log, and ``None`` is returned.  Requiring
confirmation without a prompt is a wiring error raised by the constructor.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable

import arrow

from dailynotes.dates import DateLike, to_arrow
from dailynotes.folds import FoldManager
from dailynotes.paths import resolve_note_path
from dailynotes.templates import TemplateSource, render
from dailynotes.ui import NoticeLog, Prompt

if TYPE_CHECKING:
    from dailynotes.index import NoteIndex
    from dailynotes.note import NoteFile
    from dailynotes.settings import Settings
    from dailynotes.store import FileStore
    from dailynotes.ui import ConfirmPrompt, Workspace

logger = logging.getLogger(__name__)


class NoteCreator:
    def __init__(
        self,
        store: "FileStore",
        settings: "Settings",
        *,
        workspace: "Workspace",
        confirm: "ConfirmPrompt | None" = None,
        notices: NoticeLog | None = None,
        folds: FoldManager | None = None,
        index: "NoteIndex | None" = None,
        clock: Callable[[], arrow.Arrow] = arrow.now,
    ) -> None:
        self.store = store
        self.settings = settings
        self.workspace = workspace
        self.confirm = confirm
        self.notices = notices if notices is not None else NoticeLog()
        self.folds = folds if folds is not None else FoldManager()
        self.index = index
        self.clock = clock
        self.templates = TemplateSource(store, self.folds, self.notices)

        if settings.confirm_before_create and confirm is None:
            raise ValueError("confirm_before_create is set but no confirmation prompt was given")

    def filename_for(self, date: DateLike) -> str:
        return to_arrow(date).format(self.settings.format)

    async def create_daily_note(self, date: DateLike) -> "NoteFile | None":
        """Write the note for *date* without prompting or opening it."""
        filename = self.filename_for(date)
        body, fold_info = self.templates.load(self.settings.template)
        now = self.clock()
        path = filename
        try:
            path = resolve_note_path(
                self.store, self.settings.folder, filename, self.settings.bucket, now
            )
            note = self.store.create(path, render(body, date, self.settings.format, now))
        except (OSError, ValueError, OverflowError) as exc:
            logger.error("Failed to create file: '%s': %s", path, exc)
            self.notices.notify("Unable to create new file.")
            return None

        self.folds.save(note, fold_info)
        if self.index is not None:
            self.index.invalidate()
        logger.info("Created daily note %s", note.path)
        return note

    async def create_note(
        self,
        date: DateLike,
        open_in_split: bool = False,
        confirm_before_create: bool | None = None,
    ) -> "NoteFile | None":
        """Create the note for *date* and open it in a pane.

        Returns ``None`` when the user declines the confirmation or the file
        could not be created.
        """
        if confirm_before_create is None:
            confirm_before_create = self.settings.confirm_before_create

        if confirm_before_create:
            if self.confirm is None:
                raise ValueError("confirm_before_create=True needs a confirmation prompt")
            prompt = Prompt(
                title="New Daily Note",
                text=f"File {self.filename_for(date)} does not exist. Would you like to create it?",
                cta="Create",
            )
            if not await self.confirm(prompt):
                logger.debug("Creation of %s declined", self.filename_for(date))
                return None

        note = await self.create_daily_note(date)
        if note is None:
            return None

        leaf = self.workspace.split_active_leaf() if open_in_split else self.workspace.get_unpinned_leaf()
        await leaf.open_file(note, active=True)
        if self.index is not None:
            self.index.set_active_file(note)
        return note
