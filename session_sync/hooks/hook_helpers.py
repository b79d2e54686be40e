"""Shared utilities for hook entrypoints.

Input sanitization and the stdin/stdout contract with the host.  All
functions here are pure string checks or best-effort I/O: none of them
raise.
"""

from __future__ import annotations

import json
import os
import re
import sys
from pathlib import PurePath
from typing import TextIO

MAX_STDIN_CHARS = 524_288  # 512KB

ACK_RESPONSE: dict[str, object] = {"continue": True}
"""Acknowledgment printed on every run: the host may proceed with compaction."""

# ---------------------------------------------------------------------------
# Input sanitization
# ---------------------------------------------------------------------------

_CONTROL_CHAR_RE = re.compile(r"[\x00-\x1f\x7f]")
"""ASCII control characters, never allowed in a session ID."""

_WINDOWS_DEVICE_RE = re.compile(r"^(CON|NUL|PRN|AUX|COM[1-9]|LPT[1-9])(\..+)?$", re.IGNORECASE)

_MAX_SESSION_ID_LENGTH = 128
_MAX_PATH_LENGTH = 4096


def sanitize_session_id(session_id: str) -> str:
    """Sanitize a session ID.

    Session IDs are opaque to the hook: any non-empty string is accepted
    as long as it is at most 128 characters and holds no control
    characters.  Job filenames never include it.

    Args:
        session_id: Raw session ID from stdin JSON.

    Returns:
        The validated session ID, or ``""`` if invalid.
    """
    if not session_id:
        return ""

    if len(session_id) > _MAX_SESSION_ID_LENGTH:
        return ""

    if _CONTROL_CHAR_RE.search(session_id):
        return ""

    return session_id


def _has_traversal(path: str) -> bool:
    """Whether *path* contains a ``..`` component (``app..v2`` is fine)."""
    return ".." in PurePath(path).parts


def validate_transcript_path(path: str) -> str:
    """Validate a transcript path for safe use.

    Rejects paths containing a traversal component (``..``) or relative
    paths.  The host always sends an absolute path.

    Args:
        path: Raw transcript path from stdin JSON.

    Returns:
        The validated path, or ``""`` if invalid.
    """
    if not path:
        return ""

    if len(path) > _MAX_PATH_LENGTH or "\x00" in path:
        return ""

    if not os.path.isabs(path):
        return ""

    if _has_traversal(path):
        return ""

    return path


def validate_cwd(cwd: str) -> str:
    """Validate a working directory path.

    Rejects empty, overly long, traversal-containing, relative, and
    Windows device name paths.  All string ops, no I/O.

    Args:
        cwd: Raw working directory path.

    Returns:
        The validated path, or ``""`` if invalid.
    """
    if not cwd:
        return ""

    if len(cwd) > _MAX_PATH_LENGTH or "\x00" in cwd:
        return ""

    if not os.path.isabs(cwd):
        return ""

    if _has_traversal(cwd):
        return ""

    basename = os.path.basename(cwd)
    if basename and _WINDOWS_DEVICE_RE.match(basename):
        return ""

    return cwd


# ---------------------------------------------------------------------------
# stdin / stdout helpers
# ---------------------------------------------------------------------------


def read_stdin(stream: TextIO | None = None) -> dict[str, object]:
    """Read and parse the JSON payload from stdin.

    Args:
        stream: Stream to read instead of ``sys.stdin``.

    Returns:
        Parsed dict, or empty dict on any error.
    """
    try:
        raw = (stream or sys.stdin).read(MAX_STDIN_CHARS)
        if not raw or not raw.strip():
            return {}
        data = json.loads(raw)
        if not isinstance(data, dict):
            return {}
        return data
    except Exception:
        return {}


def write_stdout_response(stream: TextIO | None = None) -> None:
    """Write the acknowledgment to stdout and flush.

    Output: ``{"continue": true}``
    """
    try:
        out = stream or sys.stdout
        json.dump(ACK_RESPONSE, out)
        out.write("\n")
        out.flush()
    except Exception:
        pass
