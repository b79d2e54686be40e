"""Bounded transcript reader.

Transcripts grow without limit over a long session.  The job record only
carries a fixed-size window of raw bytes, base64-encoded so arbitrary
content (partial UTF-8 sequences at the cut, embedded binary) survives the
JSON envelope.
"""

from __future__ import annotations

import base64
import logging
import os
from collections import deque
from pathlib import Path
from typing import Literal

from session_sync.core.errors import TranscriptError
from session_sync.hooks.hook_helpers import validate_transcript_path

logger = logging.getLogger(__name__)

DEFAULT_MAX_BYTES: int = 512_000

SUMMARY_MAX_LINES: int = 20
SUMMARY_MAX_CHARS: int = 5_000


def _read_window(path: Path, max_bytes: int, window: Literal["tail", "head"]) -> bytes:
    """Raw bytes of the window.

    Raises:
        TranscriptError: If the file cannot be opened or read.
    """
    try:
        with open(path, "rb") as f:
            if window == "tail":
                size = f.seek(0, os.SEEK_END)
                f.seek(max(0, size - max_bytes))
            return f.read(max_bytes)
    except OSError as e:
        raise TranscriptError(
            f"Cannot read transcript {path.name}: {e.strerror or type(e).__name__}"
        ) from e


def _read_last_lines(path: Path, max_lines: int) -> list[str]:
    try:
        with open(path, encoding="utf-8", errors="replace") as f:
            return list(deque(f, maxlen=max_lines))
    except OSError as e:
        raise TranscriptError(
            f"Cannot read transcript {path.name}: {e.strerror or type(e).__name__}"
        ) from e


def read_transcript_window(
    transcript_path: str,
    max_bytes: int = DEFAULT_MAX_BYTES,
    window: Literal["tail", "head"] = "tail",
) -> str:
    """Base64 of at most *max_bytes* bytes of the transcript.

    Args:
        transcript_path: Absolute path from the hook input.
        max_bytes: Byte ceiling of the window.
        window: ``"tail"`` keeps the most recent bytes, ``"head"`` the first.

    Returns:
        Base64 text, or ``""`` when the path is missing, invalid or
        unreadable.
    """
    transcript_path = validate_transcript_path(transcript_path)
    if not transcript_path or max_bytes <= 0:
        return ""

    path = Path(transcript_path)
    if not path.is_file():
        logger.debug("Transcript not found: %s", path.name)
        return ""

    try:
        raw = _read_window(path, max_bytes, window)
    except TranscriptError as e:
        logger.warning("%s", e)
        return ""

    return base64.b64encode(raw).decode("ascii")


def read_transcript_summary(
    transcript_path: str,
    max_lines: int = SUMMARY_MAX_LINES,
    max_chars: int = SUMMARY_MAX_CHARS,
) -> str:
    """Plain-text excerpt: the last *max_lines* lines, cut to *max_chars*.

    Returns ``""`` when the transcript is missing or unreadable.
    """
    transcript_path = validate_transcript_path(transcript_path)
    if not transcript_path:
        return ""

    path = Path(transcript_path)
    if not path.is_file():
        return ""

    try:
        lines = _read_last_lines(path, max_lines)
    except TranscriptError as e:
        logger.warning("%s", e)
        return ""

    return "".join(lines)[:max_chars]
