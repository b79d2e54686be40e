"""Direct transport: register the session with the Forge sessions API.

One synchronous POST per invocation, no retries.  The caller decides what
to do with failures; this module only turns them into ``DispatchError``.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from session_sync.core.errors import DispatchError
from session_sync.hooks.models import HookInput

logger = logging.getLogger(__name__)

SESSIONS_PATH = "/v1/sessions"
DEFAULT_TIMEOUT = 10.0


def build_session_payload(hook_input: HookInput, summary: str = "") -> dict[str, Any]:
    """Request body for ``POST /v1/sessions``.

    *summary* (a short transcript excerpt) is sent only when non-empty.
    """
    payload: dict[str, Any] = {
        "actorType": "agent",
        "source": "claude-code",
        "environment": "local",
        "clientContext": {
            "sessionId": hook_input.session_id,
            "trigger": hook_input.trigger,
            "cwd": hook_input.cwd,
        },
    }
    if summary:
        payload["clientContext"]["summary"] = summary
    return payload


def build_headers(access_token: str, project_id: str) -> dict[str, str]:
    """Authorization headers for sessions API requests."""
    return {
        "Authorization": f"Bearer {access_token}",
        "Content-Type": "application/json",
        "X-Project-Id": project_id,
    }


def post_session(
    hook_input: HookInput,
    *,
    base_url: str,
    access_token: str,
    project_id: str,
    summary: str = "",
    timeout: float = DEFAULT_TIMEOUT,
    client: httpx.Client | None = None,
) -> dict[str, Any]:
    """Create or update the session on the sessions API.

    Args:
        hook_input: Parsed hook input.
        base_url: ``services.sessions`` from the Forge config.
        access_token: Bearer token from the Forge credentials.
        project_id: Value of the ``X-Project-Id`` header.
        summary: Optional transcript excerpt.
        timeout: Request timeout in seconds.
        client: Pre-built client (tests inject an ``httpx.MockTransport``).

    Returns:
        Decoded JSON response body (``{}`` for an empty or non-JSON body).

    Raises:
        DispatchError: On transport failure or a non-2xx response.
    """
    url = f"{base_url.rstrip('/')}{SESSIONS_PATH}"
    owns_client = client is None
    http = client if client is not None else httpx.Client(timeout=timeout)

    try:
        response = http.post(
            url,
            json=build_session_payload(hook_input, summary),
            headers=build_headers(access_token, project_id),
            timeout=timeout,
        )
    except httpx.HTTPError as e:
        raise DispatchError(f"Sessions API request failed: {e}") from e
    finally:
        if owns_client:
            http.close()

    if not response.is_success:
        raise DispatchError(
            f"Sessions API returned status {response.status_code}",
            status_code=response.status_code,
        )

    logger.info("Session created/updated: status %s", response.status_code)
    if not response.content:
        return {}
    try:
        body = response.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {"data": body}
