"""File-store protocol and the local-directory vault that implements it."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol, Union, runtime_checkable

from dailynotes.note import Folder, NoteFile
from dailynotes.paths import normalize_path

logger = logging.getLogger(__name__)

Entry = Union[NoteFile, Folder]


@runtime_checkable
class FileStore(Protocol):
    """Hierarchical storage holding notes and folders.

    Paths are slash-separated and relative to the vault root; ``""`` names
    the root itself.
    """

    def create(self, path: str, content: str) -> NoteFile:
        """Create a new file; raise :class:`FileExistsError` if it exists."""
        ...

    def read(self, path: str) -> str:
        ...

    def exists(self, path: str) -> bool:
        ...

    def create_folder(self, path: str) -> None:
        """Create a folder; succeed quietly if it already exists."""
        ...

    def list_children(self, path: str) -> list[Entry]:
        ...

    def get(self, path: str) -> Entry | None:
        ...


class LocalVault:
    """A vault backed by a directory on disk.

    Dot-prefixed entries (``.git``, ``.dailynotes``) are hidden from listings.
    """

    def __init__(self, root: Path) -> None:
        self.root = Path(root)

    def _resolve(self, path: str) -> Path:
        normalized = normalize_path(path)
        return self.root / normalized if normalized else self.root

    def _entry(self, absolute: Path) -> Entry:
        relative = absolute.relative_to(self.root).as_posix()
        if relative == ".":
            relative = ""
        return Folder(relative) if absolute.is_dir() else NoteFile(relative)

    # ------------------------------------------------------------------
    # Files
    # ------------------------------------------------------------------

    def create(self, path: str, content: str) -> NoteFile:
        target = self._resolve(path)
        # "x" fails on collision instead of overwriting
        with target.open("x", encoding="utf-8") as fh:
            fh.write(content)
        logger.debug("Created %s", target)
        return NoteFile(normalize_path(path))

    def read(self, path: str) -> str:
        return self._resolve(path).read_text(encoding="utf-8")

    # ------------------------------------------------------------------
    # Folders / lookup
    # ------------------------------------------------------------------

    def exists(self, path: str) -> bool:
        return self._resolve(path).exists()

    def create_folder(self, path: str) -> None:
        self._resolve(path).mkdir(parents=True, exist_ok=True)

    def list_children(self, path: str) -> list[Entry]:
        directory = self._resolve(path)
        return [
            self._entry(child)
            for child in sorted(directory.iterdir())
            if not child.name.startswith(".")
        ]

    def get(self, path: str) -> Entry | None:
        absolute = self._resolve(path)
        if not absolute.exists():
            return None
        return self._entry(absolute)
