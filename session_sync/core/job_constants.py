"""Outbox job file constants (hardcoded, not configurable)."""

from __future__ import annotations

JOB_TYPE = "session_sync"
JOB_STATUS_PENDING = "pending"
JOB_FILE_VERSION = 1

OUTBOX_DIR_NAME = "outbox"
OUTBOX_TMP_DIR = "tmp"
OUTBOX_NEW_DIR = "new"
