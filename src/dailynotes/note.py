"""File and folder handles returned by the vault."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class NoteFile:
    """A single file in the vault, addressed by its vault-relative path."""

    #: Slash-separated, no leading slash (``journal/2024-03-10.md``)
    path: str

    @property
    def name(self) -> str:
        return self.path.rsplit("/", 1)[-1]

    @property
    def basename(self) -> str:
        """Filename without its extension (the date-bearing part)."""
        stem, dot, _ = self.name.rpartition(".")
        return stem if dot else self.name

    @property
    def extension(self) -> str:
        _, dot, ext = self.name.rpartition(".")
        return ext if dot else ""

    @property
    def parent(self) -> str:
        return self.path.rpartition("/")[0]


@dataclass(frozen=True)
class Folder:
    """A directory in the vault; ``""`` is the vault root."""

    path: str

    @property
    def name(self) -> str:
        return self.path.rsplit("/", 1)[-1]
