"""Forge Session Sync - pre-compaction session capture hook for coding assistants."""

__version__ = "0.1.0"

from session_sync.config import Settings, get_settings
from session_sync.core.errors import (
    ConfigurationError,
    DispatchError,
    GitError,
    OutboxWriteError,
    SessionSyncError,
    TranscriptError,
)
from session_sync.core.models import (
    CapturedContext,
    GitCommit,
    GitMetadata,
    GitStats,
    JobRecord,
    PlanDocument,
)

__all__ = [
    "__version__",
    # Configuration
    "Settings",
    "get_settings",
    # Errors
    "SessionSyncError",
    "ConfigurationError",
    "DispatchError",
    "GitError",
    "OutboxWriteError",
    "TranscriptError",
    # Models
    "CapturedContext",
    "GitCommit",
    "GitMetadata",
    "GitStats",
    "JobRecord",
    "PlanDocument",
]
