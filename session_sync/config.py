"""Configuration system for Forge Session Sync.

Two layers:

* ``Settings`` holds the hook's own tunables (paths, limits, transport),
  read from ``SESSION_SYNC_*`` environment variables and an optional
  ``.env`` file.
* The Forge files under the state root (``config.json`` with service URLs,
  ``credentials.json`` with the bearer token) are owned by other tools and
  only read here, through ``load_service_url`` and ``load_access_token``.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Literal

from pydantic import Field
from pydantic_settings import BaseSettings

from session_sync.core.errors import ConfigurationError, sanitize_path_for_error
from session_sync.core.job_constants import OUTBOX_DIR_NAME


class Settings(BaseSettings):
    """Forge Session Sync configuration."""

    # Storage
    state_root: Path = Field(
        default=Path.home() / ".forge",
        description="Root directory for the outbox, logs and Forge config files",
    )
    config_file: Path | None = Field(
        default=None,
        description="Forge config JSON (defaults to <state_root>/config.json)",
    )
    credentials_file: Path | None = Field(
        default=None,
        description="Forge credentials JSON (defaults to <state_root>/credentials.json)",
    )
    log_file: Path | None = Field(
        default=None,
        description="Diagnostic log (defaults to <state_root>/logs/session-sync.log)",
    )
    plans_dir: Path = Field(
        default=Path.home() / ".claude" / "plans",
        description="Directory scanned for recently modified plan documents",
    )

    # Dispatch
    transport: Literal["outbox", "api"] = Field(
        default="outbox",
        description="'outbox' writes a job file, 'api' posts to the sessions service",
    )
    api_timeout_seconds: float = Field(
        default=10.0,
        gt=0.0,
        description="Timeout for the sessions API call",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    log_json: bool = Field(
        default=False,
        description="Write JSON lines to the diagnostic log",
    )

    # Transcript
    transcript_max_bytes: int = Field(
        default=512_000,
        ge=1,
        description="Maximum transcript bytes embedded in a job record",
    )
    transcript_window: Literal["tail", "head"] = Field(
        default="tail",
        description="Read the end ('tail') or the start ('head') of the transcript",
    )

    # Plans
    plan_max_age_minutes: int = Field(
        default=60,
        ge=1,
        description="Only plans modified within this many minutes are collected",
    )
    max_plans: int = Field(
        default=5,
        ge=0,
        le=5,
        description="Maximum plan documents per job record",
    )
    plan_max_bytes: int = Field(
        default=100_000,
        ge=1,
        description="Maximum bytes read from each plan document",
    )

    # Git
    max_commits: int = Field(
        default=10,
        ge=1,
        le=10,
        description="Number of recent commits captured",
    )
    git_timeout_seconds: float = Field(
        default=5.0,
        gt=0.0,
        description="Timeout for each git subprocess",
    )

    model_config = {
        "env_prefix": "SESSION_SYNC_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @property
    def outbox_dir(self) -> Path:
        """Outbox directory under the state root."""
        return self.state_root / OUTBOX_DIR_NAME

    @property
    def resolved_config_file(self) -> Path:
        return self.config_file or self.state_root / "config.json"

    @property
    def resolved_credentials_file(self) -> Path:
        return self.credentials_file or self.state_root / "credentials.json"

    @property
    def resolved_log_file(self) -> Path:
        return self.log_file or self.state_root / "logs" / "session-sync.log"


# =============================================================================
# Forge config files
# =============================================================================


def _read_json_file(path: Path) -> dict[str, Any]:
    """Read a JSON object from *path*.

    Raises:
        ConfigurationError: If the file is missing, unreadable, not JSON or
            not an object.
    """
    name = sanitize_path_for_error(path)
    if not path.is_file():
        raise ConfigurationError(f"No config found at {name}")
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationError(f"Cannot read {name}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in {name}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigurationError(f"Expected a JSON object in {name}")
    return data


def load_service_url(config_file: Path, service: str = "sessions") -> str:
    """Return ``services.<service>`` from the Forge config file.

    Trailing slashes are stripped so callers can append paths.

    Raises:
        ConfigurationError: If the file or the key is missing.
    """
    data = _read_json_file(config_file)
    services = data.get("services")
    url = services.get(service) if isinstance(services, dict) else None
    if not isinstance(url, str) or not url.strip():
        raise ConfigurationError(f"No {service} URL in config")
    return url.strip().rstrip("/")


def load_access_token(credentials_file: Path) -> str:
    """Return ``access_token`` from the Forge credentials file.

    Raises:
        ConfigurationError: If the file or the token is missing.
    """
    data = _read_json_file(credentials_file)
    token = data.get("access_token")
    if not isinstance(token, str) or not token.strip():
        raise ConfigurationError("No access_token in credentials")
    return token.strip()


# =============================================================================
# Settings injection
# =============================================================================

_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the settings instance (lazy-loaded singleton).

    Returns:
        The Settings instance.
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def override_settings(new_settings: Settings) -> None:
    """Override the settings instance (for testing).

    Args:
        new_settings: The new Settings instance to use.

    Example:
        from session_sync.config import override_settings, Settings
        override_settings(Settings(state_root="/tmp/forge"))
    """
    global _settings
    _settings = new_settings


def reset_settings() -> None:
    """Reset settings to None (forces reload on next get_settings call)."""
    global _settings
    _settings = None
