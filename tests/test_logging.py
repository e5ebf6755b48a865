from __future__ import annotations

import json
import logging
import sys

import pytest

from goldfile.logging import JSONFormatter, setup_logging


@pytest.fixture
def goldfile_logger():
    logger = logging.getLogger("goldfile")
    saved_handlers = logger.handlers[:]
    saved_level = logger.level
    yield logger
    logger.handlers[:] = saved_handlers
    logger.setLevel(saved_level)


def _record(msg: str = "Saved fixture", **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="goldfile.session",
        level=logging.DEBUG,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_emits_single_line_with_goldfile_extras() -> None:
    record = _record(
        goldfile_fixture_path="tests/golden/t.json",
        goldfile_response_source="external",
        unrelated="dropped",
    )

    line = JSONFormatter().format(record)
    entry = json.loads(line)

    assert "\n" not in line
    assert entry["level"] == "DEBUG"
    assert entry["logger"] == "goldfile.session"
    assert entry["message"] == "Saved fixture"
    assert entry["goldfile_fixture_path"] == "tests/golden/t.json"
    assert entry["goldfile_response_source"] == "external"
    assert "unrelated" not in entry


def test_json_formatter_includes_exception() -> None:
    try:
        raise OSError("disk full")
    except OSError:
        record = _record("Failed to save fixture")
        record.exc_info = sys.exc_info()

    entry = json.loads(JSONFormatter().format(record))
    assert "disk full" in entry["exception"]


@pytest.mark.parametrize(("log_format", "formatter_type"), [("json", JSONFormatter), ("text", logging.Formatter)])
def test_setup_logging_installs_single_handler(goldfile_logger, log_format, formatter_type) -> None:
    first = setup_logging(log_format, level=logging.DEBUG)
    second = setup_logging(log_format, level=logging.DEBUG)

    assert first not in goldfile_logger.handlers
    assert second in goldfile_logger.handlers
    assert type(second.formatter) is formatter_type
    assert goldfile_logger.level == logging.DEBUG


def test_setup_logging_keeps_handlers_it_did_not_install(goldfile_logger) -> None:
    host_handler = logging.NullHandler()
    goldfile_logger.addHandler(host_handler)

    installed = setup_logging("json")
    setup_logging("text")

    assert host_handler in goldfile_logger.handlers
    assert installed not in goldfile_logger.handlers
    assert [h for h in goldfile_logger.handlers if getattr(h, "_goldfile_handler", False)] == [
        goldfile_logger.handlers[-1]
    ]


def test_json_formatter_omits_unset_extras() -> None:
    record = _record(goldfile_fixture_path="tests/golden/t.json", goldfile_response_source=None)

    entry = json.loads(JSONFormatter().format(record))

    assert entry["goldfile_fixture_path"] == "tests/golden/t.json"
    assert "goldfile_response_source" not in entry
