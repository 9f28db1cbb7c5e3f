"""Daily notes for a markdown vault: resolve, render, create, index."""

from dailynotes.creator import NoteCreator
from dailynotes.dates import UnsupportedFormatError, check_format, date_from_file, date_uid
from dailynotes.folds import FoldManager
from dailynotes.index import NoteIndex, NotesFolderMissingError
from dailynotes.note import Folder, NoteFile
from dailynotes.paths import AgeBucket, join, resolve_note_path
from dailynotes.settings import ConfigurationError, Settings, SettingsError, load_settings
from dailynotes.store import FileStore, LocalVault
from dailynotes.templates import TemplateSource, render
from dailynotes.ui import NoticeLog, PaneWorkspace, Prompt

__all__ = [
    "AgeBucket",
    "ConfigurationError",
    "FileStore",
    "Folder",
    "FoldManager",
    "LocalVault",
    "NoteCreator",
    "NoteFile",
    "NoteIndex",
    "NotesFolderMissingError",
    "NoticeLog",
    "PaneWorkspace",
    "Prompt",
    "Settings",
    "SettingsError",
    "TemplateSource",
    "UnsupportedFormatError",
    "check_format",
    "date_from_file",
    "date_uid",
    "join",
    "load_settings",
    "render",
    "resolve_note_path",
]
