"""Process-wide logging setup: one JSON object per line, or plain text for dev."""

import json
import logging
import os

_TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry)


def configure_logging(log_format: str | None = None, level: str | None = None) -> None:
    """Replace the root handlers with a single stderr handler.

    *log_format* is ``json`` or ``text`` and *level* a level name; they default
    to ``ASSETHUB_LOG_FORMAT`` (json) and ``ASSETHUB_LOG_LEVEL`` (INFO).
    """
    log_format = log_format or os.environ.get("ASSETHUB_LOG_FORMAT", "json")
    level = level or os.environ.get("ASSETHUB_LOG_LEVEL", "INFO")

    handler = logging.StreamHandler()
    if log_format == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(_TEXT_FORMAT))

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level.upper())
