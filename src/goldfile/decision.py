"""Response-source decision: replay a recorded fixture or call out live."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal

from .errors import ConfigError

logger = logging.getLogger(__name__)

ResponseSource = Literal["local", "external"]

LOCAL: ResponseSource = "local"
EXTERNAL: ResponseSource = "external"

RESPONSE_SOURCES: tuple[ResponseSource, ...] = (LOCAL, EXTERNAL)


def resolve_response_source(
    allow_external: bool,
    refresh_fixtures: bool,
    fixture_exists: bool,
    *,
    fixture_path: str | Path | None = None,
) -> ResponseSource:
    """Resolve the response source from the three session inputs.

    An existing fixture wins over a live call unless a refresh is requested.
    Refreshing without external access, or running with neither a fixture
    nor external access, raises ConfigError. `fixture_path` only enriches
    the error message.
    """
    allow_external = bool(allow_external)
    refresh_fixtures = bool(refresh_fixtures)
    fixture_exists = bool(fixture_exists)
    combination = {
        "allow_external": allow_external,
        "refresh_fixtures": refresh_fixtures,
        "fixture_exists": fixture_exists,
        "fixture_path": fixture_path,
    }

    # Row order is significant: first match wins.
    if not allow_external and refresh_fixtures:
        raise ConfigError(
            "Cannot refresh fixtures without allowing external calls",
            **combination,
        )
    if not allow_external and not fixture_exists:
        raise ConfigError(
            "Cannot run without external calls when the fixture does not exist",
            **combination,
        )

    if not allow_external:
        source, reason = LOCAL, "local fixture, external calls disabled"
    elif refresh_fixtures:
        source, reason = EXTERNAL, "external call, fixture will be refreshed"
    elif fixture_exists:
        source, reason = LOCAL, "local fixture, even though external calls are allowed"
    else:
        source, reason = EXTERNAL, "external call, fixture will not be persisted"

    logger.debug(
        "Resolved response source: %s",
        reason,
        extra={
            "goldfile_response_source": source,
            "goldfile_fixture_path": str(fixture_path) if fixture_path is not None else None,
        },
    )
    return source
