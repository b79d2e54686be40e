"""Generate hook configuration for the coding-assistant host.

Prints the ``hooks`` block to merge into ``.claude/settings.json`` so the
host runs ``session-sync hook pre-compact`` before every compaction.
"""

from __future__ import annotations

import sys
from typing import Any

DEFAULT_HOOK_TIMEOUT = 30
"""Seconds the host waits before killing the hook (git + one HTTP call)."""

_CONSOLE_COMMAND = "session-sync hook pre-compact"


def _resolve_python() -> str:
    """Resolve the current Python interpreter path."""
    return sys.executable


def build_hook_command(python_path: str = "") -> str:
    """Command line the host runs.

    With *python_path* the module form is used so the hook works without
    the console script on ``PATH``.
    """
    if python_path:
        return f'"{python_path}" -m session_sync hook pre-compact'
    return _CONSOLE_COMMAND


def generate_hook_config(
    python_path: str = "",
    timeout: int = DEFAULT_HOOK_TIMEOUT,
) -> dict[str, Any]:
    """Build the host hook configuration.

    Args:
        python_path: Interpreter to run the module with; empty uses the
            ``session-sync`` console script.
        timeout: Host-side timeout in seconds.

    Returns:
        Dict with ``hooks``, ``paths`` and ``instructions`` keys.
    """
    if timeout <= 0:
        raise ValueError(f"timeout must be positive, got {timeout}")

    return {
        "hooks": {
            "PreCompact": [
                {
                    "matcher": "manual|auto",
                    "hooks": [
                        {
                            "type": "command",
                            "command": build_hook_command(python_path),
                            "timeout": timeout,
                        }
                    ],
                }
            ]
        },
        "paths": {
            "python": python_path or _resolve_python(),
        },
        "instructions": (
            "Add the 'hooks' config to your .claude/settings.json under the "
            "'hooks' key. Set SESSION_SYNC_TRANSPORT=api to post to the "
            "sessions service instead of writing outbox job files."
        ),
    }
