from __future__ import annotations

import json
import logging
import os
import sys

LOG_LEVEL_ENV = "READMYREADME_LOG_LEVEL"
_HANDLER_FLAG = "_readmyreadme_stderr"


class JsonLineFormatter(logging.Formatter):
    """One JSON object per record; ``log_event`` fields ride on ``record.fields``."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object] = {
            "ts": self.formatTime(record, "%Y-%m-%dT%H:%M:%S%z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(getattr(record, "fields", {}))
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, sort_keys=True, default=str)


def setup_logging(level: str | None = None) -> None:
    """Route readmyreadme logs to stderr; stdout carries the LSP stream."""
    level_name = (level or os.getenv(LOG_LEVEL_ENV, "INFO")).upper()
    resolved = logging.getLevelName(level_name)
    if not isinstance(resolved, int):
        resolved = logging.INFO
    root = logging.getLogger()
    root.setLevel(resolved)
    handler = next(
        (h for h in root.handlers if getattr(h, _HANDLER_FLAG, False)), None
    )
    if handler is None:
        handler = logging.StreamHandler()
        handler.setFormatter(JsonLineFormatter())
        setattr(handler, _HANDLER_FLAG, True)
        root.addHandler(handler)
    # A previous stderr may be gone (captured streams); no flush on swap.
    handler.stream = sys.stderr
    handler.setLevel(resolved)


def log_event(logger: logging.Logger, event: str, **fields: object) -> None:
    logger.info(event, extra={"fields": {"event": event, **fields}})
