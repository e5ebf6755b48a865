"""Fixture storage adapter and on-disk serialization.

The session only needs three operations from storage: exists, read and
write. File contents are opaque to the session; `serialize_content` picks
the representation from the content's type.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Protocol

from pydantic import TypeAdapter

from .errors import StorageError

logger = logging.getLogger(__name__)

_ANY_ADAPTER: TypeAdapter[Any] = TypeAdapter(Any)


class FixtureStorage(Protocol):
    def exists(self, path: Path) -> bool: ...

    def read(self, path: Path) -> bytes: ...

    def write(self, path: Path, data: bytes) -> None: ...


class LocalFileStorage:
    """Fixture storage backed by the local filesystem."""

    def exists(self, path: Path) -> bool:
        return Path(path).is_file()

    def read(self, path: Path) -> bytes:
        try:
            return Path(path).read_bytes()
        except OSError as e:
            raise StorageError(f"Failed to read fixture: {e}", fixture_path=path) from e

    def write(self, path: Path, data: bytes) -> None:
        path = Path(path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except OSError as e:
            raise StorageError(f"Failed to write fixture: {e}", fixture_path=path) from e
        logger.debug(
            "Wrote %d bytes to fixture",
            len(data),
            extra={"goldfile_fixture_path": str(path)},
        )


def serialize_content(content: Any) -> bytes:
    """Convert fetched content into its canonical on-disk bytes.

    bytes are stored verbatim, str as UTF-8, everything else (dicts, lists,
    pydantic models, dataclasses) as JSON indented by two spaces.
    """
    if isinstance(content, (bytes, bytearray, memoryview)):
        return bytes(content)
    if isinstance(content, str):
        return content.encode("utf-8")
    try:
        return _ANY_ADAPTER.dump_json(content, indent=2)
    except (ValueError, TypeError) as e:
        raise StorageError(f"Content is not serializable: {e}") from e
