"""Protocol interface for version-control metadata.

The hook only needs a handful of read-only queries.  Keeping them behind
this protocol lets the subprocess implementation in
``session_sync.adapters.git_utils`` be swapped for a library binding
without touching the pipeline.

Every method must return an empty value instead of raising.
"""

from __future__ import annotations

from typing import Protocol

from session_sync.core.models import GitCommit, GitStats


class GitMetadataSource(Protocol):
    """Read-only queries against one working tree."""

    def is_repository(self) -> bool:
        """Whether the working directory is inside a work tree."""
        ...

    def remote(self) -> str:
        """Normalized preferred remote (``host/org/repo``), or ``""``."""
        ...

    def branch(self) -> str:
        """Current branch name, ``"unknown"`` when detached or unavailable."""
        ...

    def recent_commits(self, n: int) -> list[GitCommit]:
        """Up to *n* most recent commits, newest first."""
        ...

    def changed_files(self, since: str) -> list[str]:
        """Paths touched between *since* and the working tree."""
        ...

    def diff_stats(self, since: str) -> GitStats:
        """Aggregate file/line counts between *since* and the working tree."""
        ...
