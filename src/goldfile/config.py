import os
from dataclasses import dataclass
from pathlib import Path

from .errors import ConfigError
from .storage import FixtureStorage

DEFAULT_FIXTURE_DIR = "tests/golden"

_TRUE_VALUES = frozenset({"true", "1", "yes", "on"})
_FALSE_VALUES = frozenset({"false", "0", "no", "off"})


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    normalized = raw.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ConfigError(f"{name} must be parseable as a boolean, got {raw!r}")


def log_format_from_env() -> str | None:
    log_format = os.environ.get("GOLDFILE_LOG_FORMAT", "").strip().lower() or None
    if log_format is not None and log_format not in {"json", "text"}:
        raise ConfigError(f"GOLDFILE_LOG_FORMAT must be 'json' or 'text', got {log_format!r}")
    return log_format


@dataclass(frozen=True)
class Settings:
    fixture_dir: Path = Path(DEFAULT_FIXTURE_DIR)
    allow_external: bool = True
    refresh_fixtures: bool = True
    log_format: str | None = None

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            fixture_dir=Path(os.environ.get("GOLDFILE_DIR") or DEFAULT_FIXTURE_DIR),
            allow_external=_env_bool("GOLDFILE_ALLOW_EXTERNAL_CALL", True),
            refresh_fixtures=_env_bool("GOLDFILE_REFRESH_FIXTURES", True),
            log_format=log_format_from_env(),
        )


@dataclass(frozen=True)
class SessionConfig:
    """The three resolved inputs of one fixture session.

    Validity is checked when the response source is resolved, not here.
    """

    allow_external: bool
    refresh_fixtures: bool
    fixture_exists: bool

    @classmethod
    def for_path(
        cls,
        fixture_path: str | Path,
        *,
        allow_external: bool,
        refresh_fixtures: bool,
        storage: FixtureStorage,
    ) -> "SessionConfig":
        return cls(
            allow_external=bool(allow_external),
            refresh_fixtures=bool(refresh_fixtures),
            fixture_exists=storage.exists(Path(fixture_path)),
        )
