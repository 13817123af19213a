# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Structured JSON logging for the planner.

Each record becomes one JSON line. Planner context passed through ``extra=``
(storage key, schedule, weekday, period, note, teacher) is lifted into
top-level fields so log queries can filter on it, e.g.::

    logger.info("Daily period updated", extra={"schedule": "daily", "period_id": pid})
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from studypilot.core.config import settings

# Record attributes copied into the JSON line when a caller sets them.
CONTEXT_FIELDS = (
    "request_id",
    "key",
    "schedule",
    "day",
    "period_id",
    "note_id",
    "user_id",
)


class PlannerJSONFormatter(logging.Formatter):
    """One JSON object per record, tagged with service name and version."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "service": settings.SERVICE_NAME,
            "version": settings.SERVICE_VERSION,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for field in CONTEXT_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                entry[field] = value
        if record.exc_info and record.exc_info[1]:
            exc = record.exc_info[1]
            entry["error"] = str(exc)
            entry["error_type"] = type(exc).__name__
        return json.dumps(entry, default=str)


def get_logger(name: str | None = None) -> logging.Logger:
    """Logger writing planner JSON lines to stdout, configured once per name."""
    logger = logging.getLogger(name or settings.SERVICE_NAME)
    if logger.handlers:
        return logger
    logger.setLevel(getattr(logging, settings.LOG_LEVEL, logging.INFO))
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(PlannerJSONFormatter())
    logger.addHandler(handler)
    logger.propagate = False
    return logger
