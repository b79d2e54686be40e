"""Domain types for the session capture hook.

The stdin record and the pipeline result are plain dataclasses; the job
record that leaves the process lives in ``session_sync.core.models``.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import PurePath

from session_sync.hooks.hook_helpers import (
    sanitize_session_id,
    validate_cwd,
    validate_transcript_path,
)

logger = logging.getLogger(__name__)

DEFAULT_TRIGGER = "unknown"
DEFAULT_EVENT = "PreCompact"
DEFAULT_PROJECT_ID = "default"


@dataclass(frozen=True)
class HookInput:
    """Parsed representation of the PreCompact stdin JSON.

    Frozen dataclass: immutable after construction.
    """

    session_id: str = ""
    transcript_path: str = ""
    cwd: str = ""
    trigger: str = DEFAULT_TRIGGER  # "manual" | "auto" | other
    hook_event_name: str = DEFAULT_EVENT
    session_id_rejected: bool = False  # non-empty but failed sanitization


@dataclass
class CaptureResult:
    """Result of the capture pipeline."""

    skipped: bool = False
    skip_reason: str = ""
    dispatched: bool = False
    transport: str = ""
    job_path: str = ""
    error: str = ""


def _str_field(data: dict[str, object], key: str) -> str:
    value = data.get(key)
    return value if isinstance(value, str) else ""


def parse_hook_input(data: dict[str, object], default_cwd: str | None = None) -> HookInput:
    """Build a ``HookInput`` from parsed stdin, applying defaults.

    Unsafe ``session_id`` and ``transcript_path`` values become ``""``;
    a rejected session ID is flagged with ``session_id_rejected``.
    A missing or invalid ``cwd`` falls back to *default_cwd* (the process
    working directory when not given).

    Never raises.
    """
    raw_cwd = _str_field(data, "cwd")
    cwd = validate_cwd(raw_cwd)
    if not cwd:
        if raw_cwd:
            logger.warning("Rejected invalid cwd, using the process working directory")
        cwd = default_cwd if default_cwd is not None else os.getcwd()

    raw_session_id = _str_field(data, "session_id")
    session_id = sanitize_session_id(raw_session_id)

    return HookInput(
        session_id=session_id,
        transcript_path=validate_transcript_path(_str_field(data, "transcript_path")),
        cwd=cwd,
        trigger=_str_field(data, "trigger") or DEFAULT_TRIGGER,
        hook_event_name=_str_field(data, "hook_event_name") or DEFAULT_EVENT,
        session_id_rejected=bool(raw_session_id) and not session_id,
    )


def derive_project_id(cwd: str) -> str:
    """Project identifier from the working directory.

    Last path component, lowercased, spaces replaced by dashes.
    """
    name = PurePath(cwd).name if cwd else ""
    project_id = name.lower().replace(" ", "-")
    return project_id or DEFAULT_PROJECT_ID
