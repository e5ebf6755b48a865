"""Error taxonomy for golden-file sessions.

ConfigError          — contradictory or unparseable configuration (fatal).
StorageError         — fixture read/write failed (surfaced to the caller).
ObligationViolation  — a refreshing session ended without saving (test defect).
"""

from __future__ import annotations

from pathlib import Path


def describe_combination(
    allow_external: bool | None,
    refresh_fixtures: bool | None,
    fixture_exists: bool | None,
) -> str:
    return (
        f"allow_external={allow_external}, "
        f"refresh_fixtures={refresh_fixtures}, "
        f"fixture_exists={fixture_exists}"
    )


class GoldfileError(Exception):
    """Base class for all goldfile errors."""


class ConfigError(GoldfileError):
    def __init__(
        self,
        reason: str,
        *,
        allow_external: bool | None = None,
        refresh_fixtures: bool | None = None,
        fixture_exists: bool | None = None,
        fixture_path: str | Path | None = None,
    ):
        self.reason = reason
        self.allow_external = allow_external
        self.refresh_fixtures = refresh_fixtures
        self.fixture_exists = fixture_exists
        self.fixture_path = fixture_path

        message = reason
        if fixture_path is not None:
            message += f" (fixture_path={str(fixture_path)!r})"
        if allow_external is not None or refresh_fixtures is not None:
            message += f" [{describe_combination(allow_external, refresh_fixtures, fixture_exists)}]"
        super().__init__(message)


class StorageError(GoldfileError):
    def __init__(self, reason: str, *, fixture_path: str | Path | None = None):
        self.reason = reason
        self.fixture_path = fixture_path
        if fixture_path is not None:
            reason = f"{reason} (fixture_path={str(fixture_path)!r})"
        super().__init__(reason)


class ObligationViolation(GoldfileError, AssertionError):
    """Raised at teardown when a refreshing session never saved its fixture.

    Subclasses AssertionError so test runners report it as a failing test
    rather than an internal error.
    """

    def __init__(
        self,
        *,
        fixture_path: str | Path,
        allow_external: bool,
        refresh_fixtures: bool,
        fixture_exists: bool,
    ):
        self.fixture_path = fixture_path
        self.allow_external = allow_external
        self.refresh_fixtures = refresh_fixtures
        self.fixture_exists = fixture_exists
        super().__init__(
            "Fixture session ended without saving a refreshed fixture; "
            "call `save(content)` after the external call "
            f"(fixture_path={str(fixture_path)!r}) "
            f"[{describe_combination(allow_external, refresh_fixtures, fixture_exists)}]"
        )
