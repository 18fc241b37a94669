"""
Structured logging configuration.

Every module logs through logging.getLogger(__name__), so all
records flow into the "mini_ledger" logger configured here and
come out as one JSON object per line.
"""

import json
import logging
from datetime import datetime, timezone


class JSONFormatter(logging.Formatter):
    """Render a log record as a single JSON line."""

    def format(self, record):
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "account_id": getattr(record, "account_id", None),
            "operation": getattr(record, "operation", None),
        }
        log_entry = {k: v for k, v in log_entry.items() if v is not None}

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


def setup_logging(level: str = "INFO", logger_name: str = "mini_ledger") -> logging.Logger:
    """
    Attach a JSON stream handler to the application logger.

    Calling this more than once replaces the handler instead of
    stacking duplicates, so building several apps in one process
    (as the tests do) does not multiply log lines.
    """
    logger = logging.getLogger(logger_name)

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter())
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    logger.propagate = False

    return logger
