"""Adapters for external systems (git)."""

from session_sync.adapters.git_utils import (
    GitCLI,
    collect_git_metadata,
    normalize_remote_url,
    parse_remote_url,
)

__all__ = [
    "GitCLI",
    "collect_git_metadata",
    "normalize_remote_url",
    "parse_remote_url",
]
