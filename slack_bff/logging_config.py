"""Logging setup for the proxy.

Console output by default, one JSON object per line when JSON_LOGGING=true.
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Optional

JSON_LOGGING = os.getenv("JSON_LOGGING", "false").lower() == "true"


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_data)


class ConsoleFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.now().strftime("%H:%M:%S")
        msg = f"[{timestamp}] [{record.levelname:7}] [{record.name}] {record.getMessage()}"
        if record.exc_info:
            msg += "\n" + self.formatException(record.exc_info)
        return msg


def setup_logging(level: Optional[str] = None, json_output: Optional[bool] = None) -> None:
    """
    Set up logging for the application.

    Args:
        level: Log level (debug, info, warning, error). Uses LOG_LEVEL env if not provided.
        json_output: Force JSON output on or off. Uses JSON_LOGGING env if not provided.
    """
    log_level = getattr(logging, (level or os.getenv("LOG_LEVEL", "info")).upper(), logging.INFO)
    use_json = JSON_LOGGING if json_output is None else json_output

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)
    handler.setFormatter(JSONFormatter() if use_json else ConsoleFormatter())
    root_logger.addHandler(handler)

    # Quiet third-party loggers
    logging.getLogger("aiohttp").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
