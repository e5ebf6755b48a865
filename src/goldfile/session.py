"""Per-test fixture session with a save obligation.

A FixtureSession resolves its response source once at construction. When
the session was configured to refresh fixtures, the test must call
`save(content)` before the session closes; closing with the obligation
unmet raises ObligationViolation. Use the session as a context manager (or
through the `fixture_session` pytest fixture) so the check runs on every
exit path, including failing test bodies. A session discarded unclosed with
the obligation unmet logs an error and emits a ResourceWarning.

    with FixtureSession(path, allow_external=True, refresh_fixtures=True) as session:
        if session.response_source == LOCAL:
            body = session.load_json()
        else:
            body = fetch_live()
        session.save(body)
"""

from __future__ import annotations

import json
import logging
import warnings
from collections.abc import Callable
from pathlib import Path
from types import TracebackType
from typing import Any, TypeVar

from .config import SessionConfig, Settings
from .decision import LOCAL, ResponseSource, resolve_response_source
from .errors import ObligationViolation, StorageError
from .naming import current_test_id, fixture_path_for
from .storage import FixtureStorage, LocalFileStorage, serialize_content

logger = logging.getLogger(__name__)

T = TypeVar("T")


class FixtureSession:
    def __init__(
        self,
        fixture_path: str | Path,
        *,
        allow_external: bool,
        refresh_fixtures: bool,
        storage: FixtureStorage | None = None,
    ):
        self.fixture_path = Path(fixture_path)
        self.storage: FixtureStorage = storage if storage is not None else LocalFileStorage()
        self.config = SessionConfig.for_path(
            self.fixture_path,
            allow_external=allow_external,
            refresh_fixtures=refresh_fixtures,
            storage=self.storage,
        )
        # Raises ConfigError before any state exists for contradictory input.
        self.response_source: ResponseSource = resolve_response_source(
            self.config.allow_external,
            self.config.refresh_fixtures,
            self.config.fixture_exists,
            fixture_path=self.fixture_path,
        )
        self._save_obligation_met = not self.config.refresh_fixtures
        self.closed = False
        logger.debug(
            "Fixture session created",
            extra=self._log_extra(),
        )

    @classmethod
    def from_settings(
        cls,
        fixture_path: str | Path,
        settings: Settings,
        storage: FixtureStorage | None = None,
    ) -> "FixtureSession":
        return cls(
            fixture_path,
            allow_external=settings.allow_external,
            refresh_fixtures=settings.refresh_fixtures,
            storage=storage,
        )

    @classmethod
    def for_current_test(
        cls,
        settings: Settings | None = None,
        storage: FixtureStorage | None = None,
    ) -> "FixtureSession":
        """Session for the running pytest test, configured from the environment."""
        if settings is None:
            settings = Settings.from_env()
        path = fixture_path_for(current_test_id(), settings.fixture_dir)
        return cls.from_settings(path, settings, storage=storage)

    @property
    def save_obligation_met(self) -> bool:
        return self._save_obligation_met

    def save(self, content: Any) -> None:
        """Persist `content` as the fixture when the session refreshes fixtures.

        A no-op otherwise, so callers can save unconditionally after either
        branch. Saving again overwrites. A StorageError leaves the obligation
        unmet.
        """
        if not self.config.refresh_fixtures:
            logger.debug("Fixture refresh disabled, skipping save", extra=self._log_extra())
            return

        try:
            data = serialize_content(content)
        except StorageError as e:
            raise StorageError(e.reason, fixture_path=self.fixture_path) from e

        try:
            self.storage.write(self.fixture_path, data)
        except StorageError:
            logger.warning("Failed to save fixture", extra=self._log_extra())
            raise
        self._save_obligation_met = True
        logger.debug("Saved fixture", extra=self._log_extra())

    def mark_saved(self) -> None:
        """Record that the fixture was persisted by other means (e.g. a recorder)."""
        self._save_obligation_met = True

    def load(self) -> bytes:
        """Raw bytes of the recorded fixture."""
        if not self.storage.exists(self.fixture_path):
            raise StorageError("Fixture does not exist", fixture_path=self.fixture_path)
        return self.storage.read(self.fixture_path)

    def load_json(self) -> Any:
        raw = self.load()
        try:
            return json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise StorageError(f"Fixture is not valid JSON: {e}", fixture_path=self.fixture_path) from e

    def dispatch(self, on_local: Callable[[], T], on_external: Callable[[], T]) -> T:
        """Run the procedure matching the resolved response source."""
        if self.response_source == LOCAL:
            return on_local()
        return on_external()

    def close(self) -> None:
        """Check the save obligation. Safe to call more than once."""
        if self.closed:
            return
        self.closed = True
        if not self._save_obligation_met:
            logger.error("Fixture session closed without saving", extra=self._log_extra())
            raise ObligationViolation(
                fixture_path=self.fixture_path,
                allow_external=self.config.allow_external,
                refresh_fixtures=self.config.refresh_fixtures,
                fixture_exists=self.config.fixture_exists,
            )

    def __enter__(self) -> "FixtureSession":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        # A violation raised here chains to any exception already in flight.
        self.close()

    def __del__(self) -> None:
        # Exceptions cannot escape a finalizer; report the unmet obligation instead.
        # Sessions that failed construction never set `closed`.
        if getattr(self, "closed", True) or self._save_obligation_met:
            return
        self.closed = True
        logger.error("Fixture session discarded without saving", extra=self._log_extra())
        warnings.warn(
            f"Fixture session for {str(self.fixture_path)!r} was discarded without saving "
            "a refreshed fixture; call `save(content)` or use the session as a context manager",
            ResourceWarning,
            stacklevel=2,
        )

    def __repr__(self) -> str:
        return (
            f"FixtureSession(fixture_path={str(self.fixture_path)!r}, "
            f"response_source={self.response_source!r}, "
            f"save_obligation_met={self._save_obligation_met})"
        )

    def _log_extra(self) -> dict[str, Any]:
        return {
            "goldfile_fixture_path": str(self.fixture_path),
            "goldfile_response_source": self.response_source,
            "goldfile_refresh_fixtures": self.config.refresh_fixtures,
        }
