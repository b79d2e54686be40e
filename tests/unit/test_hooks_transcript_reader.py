"""Unit tests for session_sync.hooks.transcript_reader.

Tests cover:
1. Bounded window - tail and head, files smaller and larger than the window
2. Missing, invalid and unreadable paths
3. Plain-text summary excerpt
"""

from __future__ import annotations

import base64
import json
from pathlib import Path
from unittest.mock import patch

import pytest

from session_sync.core.errors import TranscriptError
from session_sync.hooks.transcript_reader import (
    _read_window,
    read_transcript_summary,
    read_transcript_window,
)


def _write_transcript(path: Path, lines: int) -> Path:
    with open(path, "w", encoding="utf-8") as f:
        for i in range(lines):
            f.write(json.dumps({"type": "assistant", "n": i}) + "\n")
    return path


# =============================================================================
# read_transcript_window
# =============================================================================


@pytest.mark.unit
class TestReadTranscriptWindow:
    """Test the bounded base64 window."""

    def test_small_file_fully_encoded(self, tmp_path: Path) -> None:
        path = tmp_path / "t.jsonl"
        path.write_bytes(b"hello\n")
        assert base64.b64decode(read_transcript_window(str(path))) == b"hello\n"

    def test_large_file_tail_bounded(self, tmp_path: Path) -> None:
        path = tmp_path / "t.jsonl"
        content = b"".join(f"{i:08d}\n".encode() for i in range(20_000))  # 180KB
        path.write_bytes(content)

        encoded = read_transcript_window(str(path), max_bytes=1_000)
        decoded = base64.b64decode(encoded)

        assert len(decoded) == 1_000
        assert decoded == content[-1_000:]
        assert len(encoded) == 4 * ((1_000 + 2) // 3)

    def test_large_file_head_bounded(self, tmp_path: Path) -> None:
        path = tmp_path / "t.jsonl"
        content = bytes(range(256)) * 40
        path.write_bytes(content)

        decoded = base64.b64decode(read_transcript_window(str(path), max_bytes=500, window="head"))
        assert decoded == content[:500]

    def test_default_window_is_512kb(self, tmp_path: Path) -> None:
        path = tmp_path / "big.jsonl"
        path.write_bytes(b"x" * 600_000)
        assert len(base64.b64decode(read_transcript_window(str(path)))) == 512_000

    def test_binary_content_survives(self, tmp_path: Path) -> None:
        path = tmp_path / "t.jsonl"
        path.write_bytes(b"\xff\xfe\x00caf\xc3")
        assert base64.b64decode(read_transcript_window(str(path))) == b"\xff\xfe\x00caf\xc3"

    def test_missing_file(self, tmp_path: Path) -> None:
        assert read_transcript_window(str(tmp_path / "nope.jsonl")) == ""

    def test_empty_path(self) -> None:
        assert read_transcript_window("") == ""

    def test_relative_path_rejected(self) -> None:
        assert read_transcript_window("t.jsonl") == ""

    def test_directory_rejected(self, tmp_path: Path) -> None:
        assert read_transcript_window(str(tmp_path)) == ""

    def test_unreadable_file(self, tmp_path: Path) -> None:
        path = tmp_path / "t.jsonl"
        path.write_bytes(b"data")
        with patch("builtins.open", side_effect=PermissionError("denied")):
            assert read_transcript_window(str(path)) == ""

    def test_read_failure_raises_transcript_error(self, tmp_path: Path) -> None:
        path = tmp_path / "private" / "t.jsonl"
        with pytest.raises(TranscriptError, match="t.jsonl") as exc_info:
            _read_window(path, 100, "tail")
        assert "private" not in str(exc_info.value)


# =============================================================================
# read_transcript_summary
# =============================================================================


@pytest.mark.unit
class TestReadTranscriptSummary:
    """Test the plain-text excerpt used by the direct transport."""

    def test_last_twenty_lines(self, tmp_path: Path) -> None:
        path = _write_transcript(tmp_path / "t.jsonl", 50)
        summary = read_transcript_summary(str(path))
        lines = summary.splitlines()
        assert len(lines) == 20
        assert json.loads(lines[0])["n"] == 30
        assert json.loads(lines[-1])["n"] == 49

    def test_char_cap(self, tmp_path: Path) -> None:
        path = tmp_path / "t.jsonl"
        path.write_text(("y" * 1_000 + "\n") * 10, encoding="utf-8")
        assert len(read_transcript_summary(str(path))) == 5_000

    def test_unreadable_file(self, tmp_path: Path) -> None:
        path = tmp_path / "t.jsonl"
        path.write_text("line\n", encoding="utf-8")
        with patch("builtins.open", side_effect=PermissionError(13, "Permission denied")):
            assert read_transcript_summary(str(path)) == ""

    def test_missing_file(self, tmp_path: Path) -> None:
        assert read_transcript_summary(str(tmp_path / "nope.jsonl")) == ""
