"""Daily-notes settings, loaded from a YAML file::

    format: YYYY-MM-DD            # moment-style naming format
    folder: journal               # base folder inside the vault ("" = root)
    template: templates/daily     # template note, ".md" optional
    birthday: 1990-05-15          # enables age-numbered subfolders
    confirm_before_create: true

Every key is optional.
"""

from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

import yaml

from dailynotes.dates import DEFAULT_FORMAT, UnsupportedFormatError, check_format
from dailynotes.paths import AgeBucket

logger = logging.getLogger(__name__)


class ConfigurationError(Exception):
    """The vault or settings are not in a usable state."""


class SettingsError(ConfigurationError):
    """The settings file exists but cannot be parsed or holds a bad value."""


@dataclass(frozen=True)
class Settings:
    format: str = DEFAULT_FORMAT
    folder: str = ""
    template: str = ""
    birthday: str | None = None
    confirm_before_create: bool = True

    def __post_init__(self) -> None:
        try:
            check_format(self.format)
        except UnsupportedFormatError as exc:
            raise SettingsError(str(exc)) from exc

    @property
    def bucket(self) -> AgeBucket:
        return AgeBucket(self.birthday)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Settings":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning("Ignoring unknown settings: %s", ", ".join(unknown))

        birthday = data.get("birthday")
        # Unquoted YAML dates arrive as datetime.date
        if isinstance(birthday, dt.date):
            birthday = birthday.isoformat()

        confirm = data.get("confirm_before_create", True)
        if not isinstance(confirm, bool):
            raise SettingsError(f"confirm_before_create must be true or false, got {confirm!r}")

        return cls(
            format=str(data.get("format") or DEFAULT_FORMAT).strip(),
            folder=str(data.get("folder") or "").strip(),
            template=str(data.get("template") or "").strip(),
            birthday=str(birthday).strip() if birthday else None,
            confirm_before_create=confirm,
        )


def load_settings(path: Path) -> Settings:
    """Read settings from *path*; a missing file yields the defaults."""
    path = Path(path)
    if not path.exists():
        logger.debug("No settings file at %s, using defaults", path)
        return Settings()
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise SettingsError(f"Invalid settings file {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise SettingsError(f"Settings file {path} must contain a mapping")
    return Settings.from_dict(data)
