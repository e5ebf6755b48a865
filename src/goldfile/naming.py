"""Fixture names derived from the identity of the running test.

`tests/test_api.py::TestClient::test_get[json]` becomes
`tests-test_api-TestClient-test_get-json`, stored as `<dir>/<id>.json`.
Parametrize ids that need rewriting to be filename-safe get a short digest
of the original id appended, so `test_get[a b]` and `test_get[a-b]` keep
separate fixtures. One fixture per test: tests needing several should be
split.
"""

from __future__ import annotations

import hashlib
import os
import re
from pathlib import Path

from .errors import ConfigError

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_.-]+")
_PARAM_ID = re.compile(r"\[(.*)\]$", re.DOTALL)


def _param_slug(param_id: str) -> str:
    slug = _UNSAFE_CHARS.sub("-", param_id).strip("-")
    if slug == param_id:
        return slug
    digest = hashlib.sha256(param_id.encode("utf-8")).hexdigest()[:8]
    return f"{slug}-{digest}" if slug else digest


def test_id_from_nodeid(nodeid: str) -> str:
    parts = [part for part in nodeid.strip().split("::") if part]
    if not parts:
        raise ValueError("nodeid must not be empty")
    module = parts[0].replace("\\", "/")
    if module.endswith(".py"):
        module = module[: -len(".py")]
    segments = [s for s in module.split("/") if s and s != "."] + parts[1:]

    param_id = None
    match = _PARAM_ID.search(segments[-1])
    if match:
        param_id = match.group(1)
        segments[-1] = segments[-1][: match.start()]

    test_id = _UNSAFE_CHARS.sub("-", "-".join(segments)).strip("-")
    if param_id:
        test_id = f"{test_id}-{_param_slug(param_id)}"
    return test_id


def current_test_id() -> str:
    """Test id of the pytest test currently running in this process."""
    current = os.environ.get("PYTEST_CURRENT_TEST", "").strip()
    if not current:
        raise ConfigError(
            "PYTEST_CURRENT_TEST is not set; pass an explicit fixture path outside of pytest"
        )
    # Value looks like "tests/test_x.py::test_y (call)".
    nodeid = current.rsplit(" ", 1)[0] if current.endswith(")") else current
    return test_id_from_nodeid(nodeid)


def fixture_path_for(test_id: str, fixture_dir: str | Path) -> Path:
    return Path(fixture_dir) / f"{test_id}.json"


# Not test functions, despite the prefix.
test_id_from_nodeid.__test__ = False  # type: ignore[attr-defined]
