"""Port interfaces for Forge Session Sync."""

from session_sync.ports.git import GitMetadataSource

__all__ = [
    "GitMetadataSource",
]
