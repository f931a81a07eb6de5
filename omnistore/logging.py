from __future__ import annotations

import json
import logging
import os

# Extra attributes the store attaches to its records.
STORE_FIELDS = ("command", "key", "reason", "category", "path", "entries", "latency_ms")


class JsonFormatter(logging.Formatter):
    """One JSON object per record, carrying the store's event fields."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
            "event_type": getattr(record, "event_type", record.getMessage()),
        }
        for field in STORE_FIELDS:
            payload[field] = getattr(record, field, None)
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def configure_logging(level: str | int | None = None) -> None:
    """Install the root handler for the store process.

    ``LOG_LEVEL`` picks the level (``INFO`` by default) and ``LOG_FORMAT=json``
    switches from the plain line format to :class:`JsonFormatter`. Records
    never include stored values, only keys and event metadata.
    """

    if level is None:
        level = os.getenv("LOG_LEVEL", "INFO").upper()

    handler = logging.StreamHandler()
    if os.getenv("LOG_FORMAT", "plain").lower() == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s %(levelname)s %(name)s %(message)s", datefmt="%H:%M:%S"
            )
        )
    logging.basicConfig(level=level, handlers=[handler], force=True)
