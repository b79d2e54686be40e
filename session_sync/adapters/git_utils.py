"""Git utilities for session capture.

Provides remote URL parsing and normalization, and ``GitCLI``, an
implementation of ``GitMetadataSource`` that shells out to the ``git``
executable.  Every query degrades to an empty value on failure: a missing
repository, an empty history or a missing ``git`` binary is never an error
for the hook.
"""

from __future__ import annotations

import logging
import re
import subprocess
from dataclasses import dataclass

from session_sync.core.errors import GitError
from session_sync.core.models import GitCommit, GitMetadata, GitStats
from session_sync.ports.git import GitMetadataSource

logger = logging.getLogger(__name__)

DEFAULT_GIT_TIMEOUT = 5.0

EMPTY_TREE = "4b825dc642cb6eb9a060e54bf8d69288fbee4904"
"""Object id of the empty tree; diffing against it covers the whole history."""

_FIELD_SEP = "\x1f"
_LOG_FORMAT = _FIELD_SEP.join(["%H", "%s", "%an", "%aI"])


@dataclass(frozen=True)
class ParsedRemoteURL:
    """Parsed components of a git remote URL."""

    host: str
    path: str  # org/repo (without .git suffix)
    scheme: str  # https, ssh, git, etc.
    user: str  # git, user, etc.


# Regex patterns for various git URL formats
# HTTPS: https://github.com/org/repo.git
_HTTPS_RE = re.compile(
    r"^https?://(?:(?P<user>[^@]+)@)?(?P<host>[^/:]+)"
    r"(?::(?P<port>\d+))?/(?P<path>.+?)(?:\.git)?/?$"
)

# SSH URL: ssh://git@github.com/org/repo.git or ssh://git@github.com:22/org/repo.git
_SSH_URL_RE = re.compile(
    r"^ssh://(?:(?P<user>[^@]+)@)?(?P<host>[^/:]+)"
    r"(?::(?P<port>\d+))?/(?P<path>.+?)(?:\.git)?/?$"
)

# SCP-like: git@github.com:org/repo.git
_SCP_RE = re.compile(r"^(?:(?P<user>[^@]+)@)?(?P<host>[^:/]+):(?!/)(?P<path>.+?)(?:\.git)?/?$")

# Git protocol: git://github.com/org/repo.git
_GIT_RE = re.compile(r"^git://(?P<host>[^/:]+)(?::(?P<port>\d+))?/(?P<path>.+?)(?:\.git)?/?$")

# Azure DevOps: https://dev.azure.com/org/project/_git/repo
_AZURE_RE = re.compile(
    r"^https?://(?:[^@/]+@)?(?P<host>dev\.azure\.com|[^./]+\.visualstudio\.com)/(?P<path>.+?)/?$"
)

_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*://")
_USER_RE = re.compile(r"^[^@/]+@")
_SCP_SEPARATOR_RE = re.compile(r"^(?P<host>[^/:]+):(?!/)(?P<path>.*)$")


def parse_remote_url(url: str) -> ParsedRemoteURL | None:
    """Parse a git remote URL into its components.

    Supports: HTTPS, SSH (URL and SCP-like), git://, Azure DevOps.

    Args:
        url: Git remote URL string.

    Returns:
        ParsedRemoteURL or None if the URL cannot be parsed.
    """
    url = url.strip()

    # Try Azure DevOps first (more specific)
    m = _AZURE_RE.match(url)
    if m:
        path = m.group("path")
        # org/project/_git/repo -> org/project/repo
        path = re.sub(r"/_git/", "/", path)
        return ParsedRemoteURL(
            host=m.group("host").lower(),
            path=path,
            scheme="https",
            user="",
        )

    m = _HTTPS_RE.match(url)
    if m:
        return ParsedRemoteURL(
            host=m.group("host").lower(),
            path=m.group("path"),
            scheme="https",
            user=m.group("user") or "",
        )

    m = _SSH_URL_RE.match(url)
    if m:
        return ParsedRemoteURL(
            host=m.group("host").lower(),
            path=m.group("path"),
            scheme="ssh",
            user=m.group("user") or "git",
        )

    m = _SCP_RE.match(url)
    if m:
        return ParsedRemoteURL(
            host=m.group("host").lower(),
            path=m.group("path"),
            scheme="ssh",
            user=m.group("user") or "git",
        )

    m = _GIT_RE.match(url)
    if m:
        return ParsedRemoteURL(
            host=m.group("host").lower(),
            path=m.group("path"),
            scheme="git",
            user="",
        )

    logger.debug("Could not parse git remote URL: %s", url)
    return None


def _strip_suffixes(path: str) -> str:
    path = path.rstrip("/")
    if path.endswith(".git"):
        path = path[:-4]
    return path.rstrip("/")


def normalize_remote_url(url: str) -> str:
    """Normalize a remote URL to ``host/path``.

    Strips the protocol scheme, the SSH user prefix and a trailing
    ``.git``, converts the SCP ``:`` separator to ``/`` and lowercases the
    host.  The result is stable under repeated normalization, so
    ``git@github.com:org/repo.git``, ``https://github.com/org/repo.git``
    and ``github.com/org/repo`` all map to ``github.com/org/repo``.

    Args:
        url: Raw remote URL.

    Returns:
        Normalized remote, or ``""`` for an empty input.
    """
    url = url.strip()
    if not url:
        return ""

    parsed = parse_remote_url(url)
    if parsed is not None:
        return f"{parsed.host}/{_strip_suffixes(parsed.path)}"

    # Fallback for forms the parsers do not cover (already normalized
    # values, file:// remotes, unusual schemes)
    rest = _SCHEME_RE.sub("", url, count=1)
    rest = _USER_RE.sub("", rest, count=1)
    m = _SCP_SEPARATOR_RE.match(rest)
    if m:
        rest = f"{m.group('host')}/{m.group('path')}"
    rest = _strip_suffixes(rest)

    host, sep, path = rest.partition("/")
    return f"{host.lower()}{sep}{path}"


class GitCLI:
    """``GitMetadataSource`` backed by the ``git`` command line."""

    def __init__(self, cwd: str, timeout: float = DEFAULT_GIT_TIMEOUT) -> None:
        self.cwd = cwd
        self.timeout = timeout

    def _run(self, *args: str) -> str:
        """Run ``git <args>`` in the working directory.

        Raises:
            GitError: On a non-zero exit, a timeout, or a missing binary or
                directory.
        """
        try:
            proc = subprocess.run(
                ["git", *args],
                cwd=self.cwd,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                timeout=self.timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as e:
            raise GitError(f"git {args[0]} timed out after {self.timeout}s") from e
        except OSError as e:
            raise GitError(f"git {args[0]} could not run: {e}") from e

        if proc.returncode != 0:
            raise GitError(f"git {args[0]} exited {proc.returncode}: {proc.stderr.strip()}")
        return proc.stdout

    def _diff(self, since: str, *options: str) -> str:
        """Run ``git diff`` against *since*.

        A *since* beyond the start of history (``HEAD~N`` in a short repo,
        the parent of the root commit) falls back to the empty tree, so the
        diff spans every commit.  ``HEAD`` itself has no fallback: without
        commits there is nothing to diff.
        """
        try:
            return self._run("diff", *options, since, "--")
        except GitError as e:
            if since in ("HEAD", EMPTY_TREE):
                raise
            logger.debug("diff against %s failed (%s), diffing from the root", since, e)
        return self._run("diff", *options, EMPTY_TREE, "--")

    def is_repository(self) -> bool:
        try:
            return self._run("rev-parse", "--is-inside-work-tree").strip() == "true"
        except GitError as e:
            logger.debug("Not a git work tree: %s", e)
            return False

    def remote(self) -> str:
        """Preferred remote, normalized.  Priority: upstream > origin > first."""
        try:
            names = self._run("remote").split()
            if not names:
                return ""
            name = next((n for n in ("upstream", "origin") if n in names), names[0])
            return normalize_remote_url(self._run("remote", "get-url", name))
        except GitError as e:
            logger.debug("Remote lookup failed: %s", e)
            return ""

    def branch(self) -> str:
        try:
            name = self._run("symbolic-ref", "--short", "-q", "HEAD").strip()
        except GitError as e:
            # Exit 1 with -q means detached HEAD
            logger.debug("Branch lookup failed: %s", e)
            return "unknown"
        return name or "unknown"

    def recent_commits(self, n: int) -> list[GitCommit]:
        try:
            output = self._run("log", f"-n{int(n)}", f"--format={_LOG_FORMAT}")
        except GitError as e:
            # Fresh repository without commits
            logger.debug("Commit log unavailable: %s", e)
            return []

        commits: list[GitCommit] = []
        for line in output.splitlines():
            parts = line.split(_FIELD_SEP)
            if len(parts) != 4 or not parts[0]:
                continue
            commits.append(
                GitCommit(hash=parts[0], message=parts[1], author=parts[2], date=parts[3])
            )
        return commits

    def changed_files(self, since: str) -> list[str]:
        try:
            output = self._diff(since, "--name-only")
        except GitError as e:
            logger.debug("Changed files unavailable: %s", e)
            return []
        return sorted({line.strip() for line in output.splitlines() if line.strip()})

    def diff_stats(self, since: str) -> GitStats:
        try:
            output = self._diff(since, "--numstat")
        except GitError as e:
            logger.debug("Diff stats unavailable: %s", e)
            return GitStats()

        files = additions = deletions = 0
        for line in output.splitlines():
            parts = line.split("\t", 2)
            if len(parts) != 3:
                continue
            files += 1
            # Binary files report "-" for both counts
            if parts[0].isdigit():
                additions += int(parts[0])
            if parts[1].isdigit():
                deletions += int(parts[1])
        return GitStats(files=files, additions=additions, deletions=deletions)


def collect_git_metadata(
    cwd: str,
    max_commits: int = 10,
    timeout: float = DEFAULT_GIT_TIMEOUT,
    source: GitMetadataSource | None = None,
) -> GitMetadata:
    """Gather git metadata for *cwd*.

    Args:
        cwd: Working directory from the hook input.
        max_commits: Size of the commit window (at most 10).
        timeout: Per-command timeout for the default ``GitCLI`` source.
        source: Alternative metadata source (tests, library bindings).

    Returns:
        Populated ``GitMetadata``, or ``GitMetadata()`` when *cwd* is not
        inside a work tree.
    """
    if not cwd:
        return GitMetadata()

    git = source if source is not None else GitCLI(cwd, timeout=timeout)
    if not git.is_repository():
        return GitMetadata()

    commits = git.recent_commits(max_commits)[:max_commits]
    # Files and stats span the captured commits plus uncommitted changes
    since = f"{commits[-1].hash}~1" if commits else "HEAD"
    return GitMetadata(
        remote=git.remote(),
        branch=git.branch(),
        commits=commits,
        files_changed=git.changed_files(since),
        stats=git.diff_stats(since),
    )
