"""Per-file fold state (which headings/sections are collapsed).

The state is opaque to this package: whatever the editor stored for the
template is copied onto each note created from it.  When given a state file
the manager persists everything as JSON, otherwise it lives in memory.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from dailynotes.note import NoteFile

logger = logging.getLogger(__name__)

FoldInfo = dict[str, Any]


class FoldManager:
    def __init__(self, state_file: Path | None = None) -> None:
        self.state_file = Path(state_file) if state_file else None
        self._folds: dict[str, FoldInfo] = {}
        if self.state_file and self.state_file.exists():
            self._folds = self._read()

    def _read(self) -> dict[str, FoldInfo]:
        try:
            data = json.loads(self.state_file.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Ignoring unreadable fold state %s: %s", self.state_file, exc)
            return {}
        return data if isinstance(data, dict) else {}

    def load(self, note: NoteFile | str) -> FoldInfo | None:
        path = note.path if isinstance(note, NoteFile) else note
        return self._folds.get(path)

    def save(self, note: NoteFile | str, info: FoldInfo | None) -> None:
        """Record *info* for *note*; persistence failures are only logged."""
        if info is None:
            return
        path = note.path if isinstance(note, NoteFile) else note
        self._folds[path] = info
        if self.state_file is None:
            return
        try:
            self.state_file.parent.mkdir(parents=True, exist_ok=True)
            self.state_file.write_text(json.dumps(self._folds, indent=2), encoding="utf-8")
        except OSError as exc:
            logger.warning("Failed to persist fold state for %s: %s", path, exc)
