"""Unit tests for session_sync.hooks.models."""

from __future__ import annotations

import dataclasses

import pytest

from session_sync.hooks.models import (
    CaptureResult,
    HookInput,
    derive_project_id,
    parse_hook_input,
)


@pytest.mark.unit
class TestParseHookInput:
    """Test stdin field extraction and defaults."""

    def test_all_fields(self) -> None:
        hook_input = parse_hook_input(
            {
                "session_id": "abc-123",
                "transcript_path": "/home/u/t.jsonl",
                "cwd": "/work/project",
                "trigger": "manual",
                "hook_event_name": "PreCompact",
            }
        )
        assert hook_input == HookInput(
            session_id="abc-123",
            transcript_path="/home/u/t.jsonl",
            cwd="/work/project",
            trigger="manual",
            hook_event_name="PreCompact",
        )

    def test_defaults(self) -> None:
        hook_input = parse_hook_input({}, default_cwd="/fallback")
        assert hook_input.session_id == ""
        assert hook_input.transcript_path == ""
        assert hook_input.cwd == "/fallback"
        assert hook_input.trigger == "unknown"
        assert hook_input.hook_event_name == "PreCompact"

    def test_cwd_defaults_to_process_cwd(self, tmp_path, monkeypatch) -> None:
        monkeypatch.chdir(tmp_path)
        assert parse_hook_input({"session_id": "s1"}).cwd == str(tmp_path)

    def test_invalid_values_dropped(self) -> None:
        hook_input = parse_hook_input(
            {
                "session_id": "bad\nid",
                "transcript_path": "relative.jsonl",
                "cwd": "not/absolute",
            },
            default_cwd="/fallback",
        )
        assert hook_input.session_id == ""
        assert hook_input.session_id_rejected is True
        assert hook_input.transcript_path == ""
        assert hook_input.cwd == "/fallback"

    def test_opaque_session_id_kept(self) -> None:
        hook_input = parse_hook_input({"session_id": "sess.2024:01"}, default_cwd="/w")
        assert hook_input.session_id == "sess.2024:01"
        assert hook_input.session_id_rejected is False

    def test_absent_session_id_not_flagged(self) -> None:
        assert parse_hook_input({}, default_cwd="/w").session_id_rejected is False

    def test_dotted_directory_name_kept(self) -> None:
        hook_input = parse_hook_input({"cwd": "/work/app..v2"}, default_cwd="/elsewhere")
        assert hook_input.cwd == "/work/app..v2"

    def test_non_string_values_ignored(self) -> None:
        hook_input = parse_hook_input({"session_id": 42, "trigger": None}, default_cwd="/w")
        assert hook_input.session_id == ""
        assert hook_input.trigger == "unknown"

    def test_unknown_trigger_kept(self) -> None:
        assert parse_hook_input({"trigger": "scheduled"}, default_cwd="/w").trigger == "scheduled"

    def test_hook_input_is_frozen(self) -> None:
        hook_input = HookInput(session_id="s1")
        with pytest.raises(dataclasses.FrozenInstanceError):
            hook_input.session_id = "s2"  # type: ignore[misc]


@pytest.mark.unit
class TestDeriveProjectId:
    """Test project identifier derivation from the working directory."""

    def test_lowercases_basename(self) -> None:
        assert derive_project_id("/work/MyProject") == "myproject"

    def test_spaces_become_dashes(self) -> None:
        assert derive_project_id("/work/My Cool Project") == "my-cool-project"

    def test_trailing_slash(self) -> None:
        assert derive_project_id("/work/repo/") == "repo"

    def test_empty_defaults(self) -> None:
        assert derive_project_id("") == "default"
        assert derive_project_id("/") == "default"


@pytest.mark.unit
class TestCaptureResult:
    def test_defaults(self) -> None:
        result = CaptureResult()
        assert not result.skipped
        assert not result.dispatched
        assert result.error == ""
