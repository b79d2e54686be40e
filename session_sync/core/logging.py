"""Secure logging for Forge Session Sync.

The hook runs inside the host's compaction step, so log records never go to
stdout or stderr.  They are appended to a rotating diagnostic log file under
the state root instead.

Features:
    - Sensitive data masking (bearer tokens, access tokens, API keys)
    - Optional JSON structured logging format
    - Size-based rotation (1MB, one backup)
"""

from __future__ import annotations

import json
import logging
import logging.handlers
import re
from datetime import datetime, timezone
from pathlib import Path

LOGGER_NAME = "session_sync"
MAX_LOG_BYTES = 1_048_576  # 1MB
LOG_BACKUP_COUNT = 1

# Patterns to mask in logs
SENSITIVE_PATTERNS = [
    (re.compile(r"Bearer\s+[\w\-.=]+", re.I), "Bearer ***MASKED***"),
    (
        re.compile(r'access[_-]?token["\']?\s*[:=]\s*["\']?[\w\-.=]+', re.I),
        "access_token=***MASKED***",
    ),
    (re.compile(r'api[_-]?key["\']?\s*[:=]\s*["\']?[\w-]+', re.I), "api_key=***MASKED***"),
]


def mask_sensitive(message: str) -> str:
    """Apply all sensitive-data patterns to *message*."""
    for pattern, replacement in SENSITIVE_PATTERNS:
        message = pattern.sub(replacement, message)
    return message


class SecureFormatter(logging.Formatter):
    """Formatter that masks sensitive data."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record and mask sensitive data.

        Args:
            record: The log record to format.

        Returns:
            Formatted log message with sensitive data masked.
        """
        return mask_sensitive(super().format(record))


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON with sensitive data masked.

        Args:
            record: The log record to format.

        Returns:
            JSON-formatted log message with sensitive data masked.
        """
        log_data: dict[str, str] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return mask_sensitive(json.dumps(log_data))


def silence_logging() -> None:
    """Detach the ``session_sync`` logger from the root logger.

    Called before settings are loaded, so a failure that happens before
    ``configure_logging`` runs is dropped instead of reaching the host's
    stderr through ``logging.lastResort``.
    """
    package_logger = logging.getLogger(LOGGER_NAME)
    package_logger.propagate = False
    if not package_logger.handlers:
        package_logger.addHandler(logging.NullHandler())


def configure_logging(
    level: str = "INFO",
    log_file: Path | None = None,
    json_format: bool = False,
) -> None:
    """Configure the ``session_sync`` logger.

    Replaces any handlers previously installed on the package logger and
    stops propagation to the root logger.  When *log_file* is ``None`` a
    ``NullHandler`` is installed so nothing is emitted.

    Setup failures (unwritable state root, bad level name) are swallowed:
    diagnostics must never stop the hook from acknowledging the host.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR).
        log_file: Path of the append-only diagnostic log.
        json_format: Use JSON format for structured logging.
    """
    package_logger = logging.getLogger(LOGGER_NAME)
    package_logger.propagate = False

    for handler in package_logger.handlers[:]:
        package_logger.removeHandler(handler)
        handler.close()

    try:
        package_logger.setLevel(level.upper())
    except ValueError:
        package_logger.setLevel(logging.INFO)

    if log_file is None:
        package_logger.addHandler(logging.NullHandler())
        return

    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=MAX_LOG_BYTES,
            backupCount=LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
    except OSError:
        package_logger.addHandler(logging.NullHandler())
        return

    if json_format:
        formatter: logging.Formatter = JSONFormatter()
    else:
        formatter = SecureFormatter(
            fmt="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    file_handler.setFormatter(formatter)
    package_logger.addHandler(file_handler)
