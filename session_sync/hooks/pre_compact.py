"""PreCompact hook entrypoint.

Reads the host's stdin payload, captures git metadata, the transcript
window and recent plans, and hands them to the configured transport
before context is compacted.

**Fail-open**: All exceptions are caught; the hook always prints
``{"continue": true}`` and exits 0.  Exit 2 would block the host's
compaction step and is reserved, never used.

Exit codes:
    0 - Always.  Success, skip, or silent failure.
"""

from __future__ import annotations

import logging
from functools import partial
from typing import Any, TextIO

from session_sync.adapters.git_utils import collect_git_metadata
from session_sync.config import Settings, get_settings
from session_sync.core.logging import configure_logging, silence_logging
from session_sync.hooks.hook_helpers import read_stdin, write_stdout_response
from session_sync.hooks.models import CaptureResult, parse_hook_input
from session_sync.hooks.outbox_writer import write_job_file
from session_sync.hooks.pipeline import run_capture_pipeline
from session_sync.hooks.plan_collector import collect_recent_plans
from session_sync.hooks.sessions_client import post_session
from session_sync.hooks.transcript_reader import read_transcript_summary, read_transcript_window

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_BLOCK = 2  # Reserved by the host contract; never returned


def pipeline_dependencies(settings: Settings) -> dict[str, Any]:
    """Production collaborators for ``run_capture_pipeline``, bound to *settings*."""
    return {
        "git_fn": partial(
            collect_git_metadata,
            max_commits=settings.max_commits,
            timeout=settings.git_timeout_seconds,
        ),
        "transcript_fn": partial(
            read_transcript_window,
            max_bytes=settings.transcript_max_bytes,
            window=settings.transcript_window,
        ),
        "plans_fn": partial(
            collect_recent_plans,
            settings.plans_dir,
            max_age_minutes=settings.plan_max_age_minutes,
            limit=settings.max_plans,
            max_bytes=settings.plan_max_bytes,
        ),
        "summary_fn": read_transcript_summary,
        "outbox_fn": write_job_file,
        "api_fn": post_session,
    }


def handle(data: dict[str, object], settings: Settings) -> CaptureResult:
    """Run the capture pipeline for an already-parsed stdin payload."""
    hook_input = parse_hook_input(data)
    return run_capture_pipeline(hook_input, settings, **pipeline_dependencies(settings))


def main(
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
    settings: Settings | None = None,
) -> int:
    """Entrypoint. Fail-open: catches all exceptions, always returns 0."""
    try:
        silence_logging()
        settings = settings or get_settings()
        configure_logging(
            level=settings.log_level,
            log_file=settings.resolved_log_file,
            json_format=settings.log_json,
        )

        data = read_stdin(stdin)
        logger.info("Hook triggered with input: %s", data or "<empty or invalid>")

        result = handle(data, settings)
        if result.skipped:
            logger.info("Skipped: %s", result.skip_reason)
    except Exception:
        try:
            logger.exception("Unhandled error in PreCompact hook")
        except Exception:
            pass

    write_stdout_response(stdout)
    return EXIT_OK
