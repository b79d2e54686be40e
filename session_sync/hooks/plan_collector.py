"""Collect recently modified plan documents.

Plan mode writes markdown files into a single directory.  Only the ones
touched within the last hour are relevant to the session being compacted.
"""

from __future__ import annotations

import base64
import logging
import time
from pathlib import Path

from session_sync.core.models import PlanDocument

logger = logging.getLogger(__name__)

DEFAULT_MAX_AGE_MINUTES = 60
DEFAULT_LIMIT = 5
DEFAULT_MAX_BYTES = 100_000


def collect_recent_plans(
    plans_dir: Path,
    max_age_minutes: int = DEFAULT_MAX_AGE_MINUTES,
    limit: int = DEFAULT_LIMIT,
    max_bytes: int = DEFAULT_MAX_BYTES,
    now: float | None = None,
) -> list[PlanDocument]:
    """Return up to *limit* plans modified within *max_age_minutes*.

    Newest first.  Each document carries the base64 of its first
    *max_bytes* bytes.

    Args:
        plans_dir: Directory holding ``*.md`` plan files.
        max_age_minutes: Recency window.
        limit: Maximum number of documents.
        max_bytes: Per-document byte ceiling.
        now: Reference time (epoch seconds); defaults to ``time.time()``.

    Returns:
        List of plan documents; empty when the directory is missing or
        nothing is recent.
    """
    if limit <= 0 or not plans_dir.is_dir():
        return []

    cutoff = (now if now is not None else time.time()) - max_age_minutes * 60

    recent: list[tuple[float, Path]] = []
    try:
        candidates = list(plans_dir.glob("*.md"))
    except OSError as e:
        logger.warning("Cannot scan plans directory: %s", e)
        return []

    for path in candidates:
        try:
            if not path.is_file():
                continue
            mtime = path.stat().st_mtime
        except OSError:
            continue
        if mtime >= cutoff:
            recent.append((mtime, path))

    recent.sort(key=lambda item: item[0], reverse=True)

    plans: list[PlanDocument] = []
    for _mtime, path in recent:
        if len(plans) >= limit:
            break
        try:
            with open(path, "rb") as f:
                raw = f.read(max_bytes)
        except OSError as e:
            logger.warning("Skipping unreadable plan %s: %s", path.name, e)
            continue
        plans.append(PlanDocument(name=path.name, content=base64.b64encode(raw).decode("ascii")))

    return plans
