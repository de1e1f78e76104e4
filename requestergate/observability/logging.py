from __future__ import annotations

import json
import logging
from datetime import datetime, timezone

from requestergate.config import get_log_format, get_log_level


class JsonLogFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, separators=(",", ":"), ensure_ascii=False)


class GitHubActionsFormatter(logging.Formatter):
    """
    Emits workflow commands so warnings and errors show up as annotations
    on the run summary. INFO lines are printed as-is.
    """

    _COMMANDS = {
        logging.DEBUG: "debug",
        logging.WARNING: "warning",
        logging.ERROR: "error",
        logging.CRITICAL: "error",
    }

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        command = self._COMMANDS.get(record.levelno)
        if command is None:
            return message
        # workflow commands are single-line; newlines must be escaped
        escaped = message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")
        return f"::{command}::{escaped}"


def build_formatter(log_format: str) -> logging.Formatter:
    if log_format == "json":
        return JsonLogFormatter()
    if log_format == "github":
        return GitHubActionsFormatter()
    return logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")


def configure_logging() -> None:
    level_value = getattr(logging, get_log_level(), logging.INFO)

    root = logging.getLogger()
    root.setLevel(level_value)
    formatter = build_formatter(get_log_format())

    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(formatter)
        root.addHandler(handler)
        return

    for handler in root.handlers:
        handler.setFormatter(formatter)
