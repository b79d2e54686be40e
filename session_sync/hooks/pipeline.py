"""Application-layer orchestration for the PreCompact hook.

Chains input gating, local enrichment (git, transcript, plans) and one of
the two transports into a single pass.  Enrichment and dispatch functions
are **injected as callable parameters** so the pipeline is testable with
plain stubs.

Nothing raised by a collaborator escapes: ``SessionSyncError`` subclasses
are recorded on the ``CaptureResult`` and logged.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

from session_sync.config import Settings, load_access_token, load_service_url
from session_sync.core.errors import ConfigurationError, SessionSyncError
from session_sync.core.models import CapturedContext, GitMetadata, JobRecord, PlanDocument
from session_sync.core.utils import utc_now_iso
from session_sync.hooks.models import CaptureResult, HookInput, derive_project_id

logger = logging.getLogger(__name__)

GitFn = Callable[[str], GitMetadata]
TranscriptFn = Callable[[str], str]
PlansFn = Callable[[], list[PlanDocument]]
OutboxFn = Callable[[JobRecord, Path], Path]
ApiFn = Callable[..., dict[str, Any]]


def build_captured_context(
    hook_input: HookInput,
    *,
    git_fn: GitFn,
    transcript_fn: TranscriptFn,
    plans_fn: PlansFn,
) -> CapturedContext:
    """Gather all local enrichment for *hook_input*."""
    captured_at = utc_now_iso()
    git = git_fn(hook_input.cwd)
    transcript = transcript_fn(hook_input.transcript_path) if hook_input.transcript_path else ""
    plans = plans_fn()

    return CapturedContext(
        captured_at=captured_at,
        git=git,
        transcript_base64=transcript,
        plans=plans,
    )


def _dispatch_outbox(
    hook_input: HookInput,
    settings: Settings,
    result: CaptureResult,
    *,
    git_fn: GitFn,
    transcript_fn: TranscriptFn,
    plans_fn: PlansFn,
    outbox_fn: OutboxFn,
) -> None:
    context = build_captured_context(
        hook_input,
        git_fn=git_fn,
        transcript_fn=transcript_fn,
        plans_fn=plans_fn,
    )
    record = JobRecord.new(
        session_id=hook_input.session_id,
        trigger=hook_input.trigger,
        cwd=hook_input.cwd,
        project_id=derive_project_id(hook_input.cwd),
        transcript_path=hook_input.transcript_path,
        context=context,
    )

    path = outbox_fn(record, settings.outbox_dir)
    result.dispatched = True
    result.job_path = str(path)
    logger.info(
        "Queued job %s for session %s (%d commits, %d plans, transcript %d chars)",
        record.id,
        hook_input.session_id,
        len(context.git.commits),
        len(context.plans),
        len(context.transcript_base64),
    )


def _dispatch_api(
    hook_input: HookInput,
    settings: Settings,
    result: CaptureResult,
    *,
    summary_fn: TranscriptFn,
    api_fn: ApiFn,
) -> None:
    try:
        base_url = load_service_url(settings.resolved_config_file, "sessions")
        access_token = load_access_token(settings.resolved_credentials_file)
    except ConfigurationError as e:
        result.skipped = True
        result.skip_reason = "missing_configuration"
        result.error = str(e)
        logger.info("%s - skipping sync", e)
        return

    project_id = derive_project_id(hook_input.cwd)
    summary = summary_fn(hook_input.transcript_path) if hook_input.transcript_path else ""
    logger.info(
        "Syncing session %s for project %s (trigger: %s)",
        hook_input.session_id,
        project_id,
        hook_input.trigger,
    )

    api_fn(
        hook_input,
        base_url=base_url,
        access_token=access_token,
        project_id=project_id,
        summary=summary,
        timeout=settings.api_timeout_seconds,
    )
    result.dispatched = True


def run_capture_pipeline(
    hook_input: HookInput,
    settings: Settings,
    *,
    git_fn: GitFn,
    transcript_fn: TranscriptFn,
    plans_fn: PlansFn,
    summary_fn: TranscriptFn,
    outbox_fn: OutboxFn,
    api_fn: ApiFn,
) -> CaptureResult:
    """Run the capture pipeline once.

    Steps:
        1. Gate: skip when ``session_id`` is empty or was rejected
        2. ``outbox``: gather enrichment, build the job record, write it
        3. ``api``: load Forge config and token, post session identity

    Args:
        hook_input: Parsed hook input.
        settings: Paths, limits and the chosen transport.
        git_fn: ``(cwd) -> GitMetadata``.
        transcript_fn: ``(transcript_path) -> base64 window``.
        plans_fn: ``() -> list[PlanDocument]``.
        summary_fn: ``(transcript_path) -> plain-text excerpt`` (api only).
        outbox_fn: ``write_job_file(record, outbox_dir) -> Path``.
        api_fn: ``post_session(hook_input, *, base_url, ...) -> dict``.

    Returns:
        CaptureResult describing what happened.
    """
    result = CaptureResult(transport=settings.transport)

    if not hook_input.session_id:
        result.skipped = True
        if hook_input.session_id_rejected:
            result.skip_reason = "invalid_session_id"
            logger.error("Rejected invalid session_id")
        else:
            result.skip_reason = "missing_session_id"
            logger.error("No session_id provided")
        return result

    try:
        if settings.transport == "api":
            _dispatch_api(hook_input, settings, result, summary_fn=summary_fn, api_fn=api_fn)
        else:
            _dispatch_outbox(
                hook_input,
                settings,
                result,
                git_fn=git_fn,
                transcript_fn=transcript_fn,
                plans_fn=plans_fn,
                outbox_fn=outbox_fn,
            )
    except SessionSyncError as e:
        result.error = str(e)
        logger.error("Session sync failed (%s): %s", type(e).__name__, e)

    return result
