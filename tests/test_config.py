"""Tests for configuration system."""

import json
from pathlib import Path

import pytest

from session_sync.config import (
    Settings,
    get_settings,
    load_access_token,
    load_service_url,
    override_settings,
    reset_settings,
)
from session_sync.core.errors import ConfigurationError


class TestSettings:
    """Tests for Settings class."""

    def test_default_values(self) -> None:
        """Test default configuration values."""
        settings = Settings()
        assert settings.transport == "outbox"
        assert settings.transcript_max_bytes == 512_000
        assert settings.transcript_window == "tail"
        assert settings.plan_max_age_minutes == 60
        assert settings.max_plans == 5
        assert settings.max_commits == 10
        assert settings.log_level == "INFO"
        assert settings.state_root == Path.home() / ".forge"

    def test_custom_values(self) -> None:
        """Test custom configuration values."""
        settings = Settings(
            state_root="/custom/forge",
            transport="api",
            transcript_window="head",
        )
        assert settings.state_root == Path("/custom/forge")
        assert settings.transport == "api"
        assert settings.transcript_window == "head"

    def test_resolved_paths_follow_state_root(self) -> None:
        settings = Settings(state_root="/srv/forge")
        assert settings.outbox_dir == Path("/srv/forge/outbox")
        assert settings.resolved_config_file == Path("/srv/forge/config.json")
        assert settings.resolved_credentials_file == Path("/srv/forge/credentials.json")
        assert settings.resolved_log_file == Path("/srv/forge/logs/session-sync.log")

    def test_explicit_paths_override_state_root(self) -> None:
        settings = Settings(
            state_root="/srv/forge",
            config_file="/etc/forge.json",
            log_file="/var/log/sync.log",
        )
        assert settings.resolved_config_file == Path("/etc/forge.json")
        assert settings.resolved_log_file == Path("/var/log/sync.log")

    def test_limits_bounds(self) -> None:
        """Plan and commit caps cannot be raised past the job record limits."""
        with pytest.raises(ValueError):
            Settings(max_plans=6)

        with pytest.raises(ValueError):
            Settings(max_commits=11)

        with pytest.raises(ValueError):
            Settings(transport="carrier-pigeon")

    def test_env_prefix(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SESSION_SYNC_TRANSPORT", "api")
        monkeypatch.setenv("SESSION_SYNC_MAX_PLANS", "2")
        settings = Settings()
        assert settings.transport == "api"
        assert settings.max_plans == 2


class TestSettingsInjection:
    """Tests for settings dependency injection."""

    def test_get_settings_returns_singleton(self) -> None:
        reset_settings()
        try:
            assert get_settings() is get_settings()
        finally:
            reset_settings()

    def test_override_settings(self, tmp_path: Path) -> None:
        custom = Settings(state_root=tmp_path)
        override_settings(custom)
        try:
            assert get_settings() is custom
        finally:
            reset_settings()


class TestForgeConfigFiles:
    """Tests for reading the Forge config and credentials files."""

    def test_load_service_url(self, tmp_path: Path) -> None:
        config = tmp_path / "config.json"
        config.write_text(json.dumps({"services": {"sessions": "https://api.example.com/"}}))
        assert load_service_url(config) == "https://api.example.com"

    def test_missing_config_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError, match="No config found"):
            load_service_url(tmp_path / "config.json")

    def test_missing_sessions_key(self, tmp_path: Path) -> None:
        config = tmp_path / "config.json"
        config.write_text(json.dumps({"services": {"other": "https://x"}}))
        with pytest.raises(ConfigurationError, match="No sessions URL"):
            load_service_url(config)

    def test_invalid_json(self, tmp_path: Path) -> None:
        config = tmp_path / "config.json"
        config.write_text("{not json")
        with pytest.raises(ConfigurationError, match="Invalid JSON"):
            load_service_url(config)

    def test_load_access_token(self, tmp_path: Path) -> None:
        creds = tmp_path / "credentials.json"
        creds.write_text(json.dumps({"access_token": " tok-123 "}))
        assert load_access_token(creds) == "tok-123"

    def test_empty_access_token(self, tmp_path: Path) -> None:
        creds = tmp_path / "credentials.json"
        creds.write_text(json.dumps({"access_token": ""}))
        with pytest.raises(ConfigurationError, match="No access_token"):
            load_access_token(creds)

    def test_error_message_hides_directory(self, tmp_path: Path) -> None:
        secret_dir = tmp_path / "private-home"
        with pytest.raises(ConfigurationError) as exc_info:
            load_access_token(secret_dir / "credentials.json")
        assert "private-home" not in str(exc_info.value)
