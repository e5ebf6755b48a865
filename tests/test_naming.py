from __future__ import annotations

import re
from pathlib import Path

import pytest

from goldfile.errors import ConfigError
from goldfile.naming import current_test_id, fixture_path_for, test_id_from_nodeid


@pytest.mark.parametrize(
    ("nodeid", "expected"),
    [
        ("tests/test_api.py::test_get_user", "tests-test_api-test_get_user"),
        ("tests/test_api.py::TestClient::test_get", "tests-test_api-TestClient-test_get"),
        ("test_api.py::test_get[json]", "test_api-test_get-json"),
        ("tests\\unit\\test_api.py::test_get", "tests-unit-test_api-test_get"),
        ("./tests/test_api.py::test_get", "tests-test_api-test_get"),
    ],
)
def test_test_id_from_nodeid(nodeid: str, expected: str) -> None:
    assert test_id_from_nodeid(nodeid) == expected


def test_rewritten_param_ids_get_a_digest_suffix() -> None:
    test_id = test_id_from_nodeid("tests/test_api.py::test_get[a b/c]")
    assert re.fullmatch(r"tests-test_api-test_get-a-b-c-[0-9a-f]{8}", test_id)


def test_distinct_param_ids_map_to_distinct_fixture_names() -> None:
    ids = {
        test_id_from_nodeid(f"tests/test_api.py::test_get[{param}]")
        for param in ("a b", "a-b", "a/b", "a_b", " ")
    }
    assert len(ids) == 5
    assert "tests-test_api-test_get-a-b" in ids


def test_test_id_from_nodeid_rejects_empty() -> None:
    with pytest.raises(ValueError):
        test_id_from_nodeid("  ")


def test_current_test_id_strips_phase_suffix(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PYTEST_CURRENT_TEST", "tests/test_api.py::test_get_user (setup)")
    assert current_test_id() == "tests-test_api-test_get_user"


def test_current_test_id_matches_running_test(request: pytest.FixtureRequest) -> None:
    assert current_test_id() == test_id_from_nodeid(request.node.nodeid)


def test_current_test_id_outside_pytest_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("PYTEST_CURRENT_TEST", raising=False)
    with pytest.raises(ConfigError, match="PYTEST_CURRENT_TEST is not set"):
        current_test_id()


def test_fixture_path_for_appends_json_suffix() -> None:
    assert fixture_path_for("tests-test_api-test_get", "tests/golden") == Path(
        "tests/golden/tests-test_api-test_get.json"
    )
