"""Shared fixtures for the dailynotes unit tests."""

from __future__ import annotations

from pathlib import Path

import arrow
import pytest

from dailynotes.store import LocalVault


@pytest.fixture()
def store(tmp_path: Path) -> LocalVault:
    """An empty vault rooted at the test's temporary directory."""
    return LocalVault(tmp_path)


@pytest.fixture()
def now() -> arrow.Arrow:
    """Fixed wall-clock time; someone born 1990-05-15 is 34 at this point."""
    return arrow.get(2024, 10, 1, 14, 30, 5)
