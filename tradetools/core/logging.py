"""
Structured JSON logging.

One JSON object per line on stdout, suitable for CloudWatch / Railway log
collection.
"""

import json
import logging
import sys

from tradetools.core.config import settings


class JsonFormatter(logging.Formatter):
    """Render records as single-line JSON objects."""

    def __init__(self, service: str):
        super().__init__()
        self.service = service

    def format(self, record: logging.LogRecord) -> str:
        log_object = {
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname.lower(),
            "service": self.service,
            "logger": record.name,
        }
        # Dict messages are merged into the log object
        if isinstance(record.msg, dict):
            log_object.update(record.msg)
        else:
            log_object["message"] = record.getMessage()
        if record.exc_info:
            log_object["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_object, default=str)


def setup_logging(level: str = None) -> None:
    """Install the JSON formatter on the root logger (idempotent)."""
    root = logging.getLogger()
    root.setLevel((level or settings.log_level).upper())

    for handler in root.handlers:
        if isinstance(handler.formatter, JsonFormatter):
            return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter(settings.app_name))
    root.addHandler(handler)


def mask_api_key(api_key: str = None) -> str:
    """Mask an API key for logging: first and last four characters only."""
    if not api_key:
        return "none"
    if len(api_key) <= 8:
        return "***"
    return f"{api_key[:4]}***{api_key[-4:]}"
