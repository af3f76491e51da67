"""Structured Logging — one JSON object per record, with request-scoped extras.

Invariants:
    - Every record carries timestamp (record creation time, UTC), level, logger, message
    - Known extras (owner_id, action, requested, affected, period, error_code, path,
      operation) are copied only when set
    - setup_logging is idempotent: calling it twice never duplicates output

Design Decisions:
    - stdlib logging + a small formatter; "text" format for local development
"""

import json
import logging
from datetime import datetime, timezone

EXTRA_FIELDS = (
    "owner_id", "action", "requested", "affected", "period",
    "error_code", "path", "operation",
)

_TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(
            (key, getattr(record, key))
            for key in EXTRA_FIELDS
            if getattr(record, key, None) is not None
        )
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        # UUIDs, Decimals and enums in extras
        return json.dumps(entry, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    root = logging.getLogger()
    for existing in list(root.handlers):
        if getattr(existing, "_invoicing", False):
            root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler._invoicing = True
    handler.setFormatter(
        JSONFormatter() if fmt == "json" else logging.Formatter(_TEXT_FORMAT),
    )
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
