from __future__ import annotations

from pathlib import Path

import pytest

from goldfile.errors import StorageError
from goldfile.storage import LocalFileStorage


class ReadOnlyStorage(LocalFileStorage):
    """Local storage whose writes always fail, as with an unwritable path."""

    def __init__(self) -> None:
        self.write_attempts = 0

    def write(self, path: Path, data: bytes) -> None:
        self.write_attempts += 1
        raise StorageError("Permission denied", fixture_path=path)


@pytest.fixture
def fixture_path(tmp_path: Path) -> Path:
    return tmp_path / "golden" / "tests-test_api-test_get_user.json"


@pytest.fixture
def existing_fixture(fixture_path: Path) -> Path:
    fixture_path.parent.mkdir(parents=True, exist_ok=True)
    fixture_path.write_text('{\n  "name": "June",\n  "age": 1\n}', encoding="utf-8")
    return fixture_path


@pytest.fixture
def read_only_storage() -> ReadOnlyStorage:
    return ReadOnlyStorage()
