"""goldfile — golden-file fixtures for tests that call external APIs.

Each test either replays a recorded fixture (local) or performs the live
call (external) and, when refreshing, records the response as the new
fixture. See `goldfile.session.FixtureSession`.
"""

from .config import SessionConfig, Settings
from .decision import EXTERNAL, LOCAL, ResponseSource, resolve_response_source
from .errors import ConfigError, GoldfileError, ObligationViolation, StorageError
from .naming import current_test_id, fixture_path_for, test_id_from_nodeid
from .session import FixtureSession
from .storage import FixtureStorage, LocalFileStorage, serialize_content

__all__ = [
    "EXTERNAL",
    "LOCAL",
    "ConfigError",
    "FixtureSession",
    "FixtureStorage",
    "GoldfileError",
    "LocalFileStorage",
    "ObligationViolation",
    "ResponseSource",
    "SessionConfig",
    "Settings",
    "StorageError",
    "current_test_id",
    "fixture_path_for",
    "resolve_response_source",
    "serialize_content",
    "test_id_from_nodeid",
]
