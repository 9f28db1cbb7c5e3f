"""UI collaborators: confirmation prompts, notices and editor panes.

Only the protocols matter to the core; :class:`NoticeLog` and
:class:`PaneWorkspace` are small in-process implementations used by the
marimo app and the tests.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from dailynotes.note import NoteFile

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Confirmation
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Prompt:
    title: str
    text: str
    cta: str = "OK"


@runtime_checkable
class ConfirmPrompt(Protocol):
    async def __call__(self, prompt: Prompt) -> bool:
        """Suspend until the user accepts (``True``) or declines."""
        ...


# ---------------------------------------------------------------------------
# Notices
# ---------------------------------------------------------------------------


class NoticeLog:
    """Non-blocking user-visible messages, kept in arrival order."""

    def __init__(self) -> None:
        self.messages: list[str] = []

    def notify(self, message: str) -> None:
        logger.info("Notice: %s", message)
        self.messages.append(message)

    def clear(self) -> None:
        self.messages.clear()


# ---------------------------------------------------------------------------
# Panes
# ---------------------------------------------------------------------------


@runtime_checkable
class Leaf(Protocol):
    async def open_file(self, note: NoteFile, *, active: bool = True) -> None: ...


@runtime_checkable
class Workspace(Protocol):
    def split_active_leaf(self) -> Leaf: ...
    def get_unpinned_leaf(self) -> Leaf: ...


@dataclass(eq=False)
class Pane:
    note: NoteFile | None = None
    pinned: bool = False
    active: bool = False

    async def open_file(self, note: NoteFile, *, active: bool = True) -> None:
        self.note = note
        self.active = active


@dataclass
class PaneWorkspace:
    """Keeps a list of panes and tracks which one is active."""

    panes: list[Pane] = field(default_factory=lambda: [Pane()])

    @property
    def active_pane(self) -> Pane | None:
        return next((p for p in self.panes if p.active), None)

    def _activate(self, pane: Pane) -> Pane:
        for other in self.panes:
            other.active = other is pane
        return pane

    def split_active_leaf(self) -> Pane:
        pane = Pane()
        current = self.active_pane
        index = self.panes.index(current) + 1 if current else len(self.panes)
        self.panes.insert(index, pane)
        return self._activate(pane)

    def get_unpinned_leaf(self) -> Pane:
        current = self.active_pane
        if current is not None and not current.pinned:
            return current
        for pane in self.panes:
            if not pane.pinned:
                return self._activate(pane)
        pane = Pane()
        self.panes.append(pane)
        return self._activate(pane)
