"""Core components for Forge Session Sync."""

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
from session_sync.core.utils import utc_now, utc_now_iso

__all__ = [
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
    # Utils
    "utc_now",
    "utc_now_iso",
]
