"""Structured Logging — one JSON object per log line.

Invariants:
    - Every line carries timestamp, level, logger and message
    - Merge context passed via `extra=` (pull_request_id, status_id, error_code,
      outcome, path) is copied into the line as strings when present
    - setup_logging replaces previously installed root handlers, so calling it
      again (tests, reloads) does not duplicate output
"""

import json
import logging
from datetime import datetime, timezone

EXTRA_FIELDS = ("pull_request_id", "status_id", "error_code", "outcome", "path")

TEXT_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        line = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        line.update(
            (key, str(record.__dict__[key]))
            for key in EXTRA_FIELDS
            if record.__dict__.get(key) is not None
        )
        if record.exc_info:
            line["exception"] = self.formatException(record.exc_info)
        return json.dumps(line, ensure_ascii=False)


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    """Install a single stream handler on the root logger."""
    handler = logging.StreamHandler()
    handler.setFormatter(
        JSONFormatter() if fmt == "json" else logging.Formatter(TEXT_FORMAT),
    )
    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
