# app/observability.py
"""Logging setup: JSON lines for production, plain text for local runs."""

import json
import logging
from datetime import datetime, timezone

_EXTRA_FIELDS = ("method", "path", "status_code", "error_kind", "duration_ms")


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


def setup_logging(level: str = "INFO", fmt: str = "text") -> logging.Handler:
    """Install the single root handler, replacing one from an earlier call."""
    for existing in list(logging.root.handlers):
        if getattr(existing, "_products_api", False):
            logging.root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler._products_api = True
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s - %(message)s",
        ))
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler
