"""Structured logging for goldfile sessions.

Enabled by the pytest plugin when GOLDFILE_LOG_FORMAT is "json" or "text".
Only the `goldfile` logger is configured; handlers the host attached to it
are left in place.
"""

import json
import logging
import sys
import traceback
from datetime import datetime, timezone

EXTRA_PREFIX = "goldfile_"
TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class JSONFormatter(logging.Formatter):
    """One JSON object per record, with the session's goldfile_* extras."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        log_entry.update(session_fields(record))

        if record.exc_info and record.exc_info[1] is not None:
            log_entry["exception"] = "".join(traceback.format_exception(*record.exc_info))

        return json.dumps(log_entry, default=str)


def session_fields(record: logging.LogRecord) -> dict:
    # Unset fields are omitted rather than serialized as null.
    return {
        key: value
        for key, value in record.__dict__.items()
        if key.startswith(EXTRA_PREFIX) and value is not None
    }


def setup_logging(log_format: str, level: int = logging.INFO) -> logging.Handler:
    """Attach a stderr handler to the goldfile logger and return it.

    Calling again replaces the handler installed by the previous call.
    """
    logger = logging.getLogger("goldfile")
    logger.setLevel(level)

    for handler in logger.handlers[:]:
        if getattr(handler, "_goldfile_handler", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(JSONFormatter() if log_format == "json" else logging.Formatter(TEXT_FORMAT))
    handler._goldfile_handler = True  # type: ignore[attr-defined]

    logger.addHandler(handler)
    return handler
