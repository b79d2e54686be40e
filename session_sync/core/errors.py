"""Custom exceptions for Forge Session Sync."""

from pathlib import Path


def sanitize_path_for_error(path: str | Path) -> str:
    """Extract only the filename from a path for safe error messages.

    Prevents leaking full home-directory paths into the diagnostic log
    when an error is recorded.

    Args:
        path: Full path or filename.

    Returns:
        Just the filename portion.
    """
    if isinstance(path, Path):
        return path.name
    return Path(path).name


class SessionSyncError(Exception):
    """Base exception for all session sync errors."""

    pass


class ConfigurationError(SessionSyncError):
    """Raised when local configuration or credentials are missing or invalid."""

    pass


class GitError(SessionSyncError):
    """Raised when a git query fails."""

    pass


class TranscriptError(SessionSyncError):
    """Raised when the transcript cannot be read."""

    pass


class DispatchError(SessionSyncError):
    """Raised when the sessions API call fails.

    Carries the HTTP status code when the server answered, ``None`` for
    transport-level failures (DNS, refused connection, timeout).
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class OutboxWriteError(SessionSyncError):
    """Raised when a job file cannot be delivered to the outbox."""

    def __init__(self, filename: str, reason: str) -> None:
        self.filename = sanitize_path_for_error(filename)
        self.reason = reason
        super().__init__(f"Failed to write job file '{self.filename}': {reason}")
