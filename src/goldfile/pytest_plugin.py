"""pytest plugin: one fixture session per test, obligation checked at teardown.

Registered through the `pytest11` entry point, so installing goldfile makes
the fixtures available everywhere:

    def test_get_user(fixture_session):
        if fixture_session.response_source == "local":
            ...serve fixture_session.load() from a mock transport...
        else:
            ...call the real API...
        fixture_session.save(body)

Environment:
    GOLDFILE_DIR                  — fixture directory (default: tests/golden)
    GOLDFILE_ALLOW_EXTERNAL_CALL  — permit live calls (default: true)
    GOLDFILE_REFRESH_FIXTURES     — overwrite fixtures from live calls (default: true)
    GOLDFILE_LOG_FORMAT           — "json" or "text" to log session decisions
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest

from .config import Settings, log_format_from_env
from .logging import setup_logging
from .naming import fixture_path_for, test_id_from_nodeid
from .session import FixtureSession


def pytest_configure(config: pytest.Config) -> None:
    log_format = log_format_from_env()
    if log_format is not None:
        setup_logging(log_format, level=logging.DEBUG)


@pytest.fixture(scope="session")
def goldfile_settings() -> Settings:
    """Environment configuration, read once per test run."""
    return Settings.from_env()


@pytest.fixture
def fixture_session(
    request: pytest.FixtureRequest,
    goldfile_settings: Settings,
) -> Iterator[FixtureSession]:
    path = fixture_path_for(test_id_from_nodeid(request.node.nodeid), goldfile_settings.fixture_dir)
    session = FixtureSession.from_settings(path, goldfile_settings)
    yield session
    session.close()
