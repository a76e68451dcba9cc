"""JSON log formatting for strategy decisions.

The strategy attaches its per-track decision (which of mime type, size,
frame rate and keyframe interval already meet the target) to log records
through ``extra``. JSONFormatter lifts those fields into a ``context``
object so the decision can be filtered without parsing the message.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from transcode_strategy.size import ExactSize, Size

# Attributes every LogRecord carries; anything else arrived through ``extra``.
_RECORD_ATTRS: frozenset[str] = frozenset(vars(logging.makeLogRecord({}))) | {
    "message",
    "asctime",
    "taskName",
}


def _json_default(value: Any) -> Any:
    if isinstance(value, (Size, ExactSize, Path)):
        return str(value)
    return repr(value)


def record_context(record: logging.LogRecord) -> dict[str, Any]:
    """Return the ``extra`` fields attached to a record, sorted by key."""
    return {
        key: record.__dict__[key]
        for key in sorted(record.__dict__)
        if key not in _RECORD_ATTRS and not key.startswith("_")
    }


class JSONFormatter(logging.Formatter):
    """Render each record as one JSON object per line.

    Keys: ``timestamp`` (ISO-8601 UTC), ``level``, ``message``, ``logger``
    (omitted for the root logger), ``context`` (only when the record has
    extra fields), ``source`` (when ``include_source`` is set) and
    ``exception``.
    """

    def __init__(self, include_source: bool = False) -> None:
        super().__init__()
        self.include_source = include_source

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        entry: dict[str, Any] = {
            "timestamp": created.isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
        }
        if record.name != "root":
            entry["logger"] = record.name
        if self.include_source:
            entry["source"] = f"{record.module}:{record.lineno}"

        context = record_context(record)
        if context:
            entry["context"] = context
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=_json_default)
