"""Unified dispatcher for hook events.

Routes hook invocations to the correct entrypoint based on event name.
Accepts the host's PascalCase names as well as camelCase and kebab-case
aliases.

CLI usage::

    echo '{"session_id":"s1","trigger":"manual"}' | session-sync hook pre-compact

All exceptions are caught (fail-open).  Exit code is always 0.
"""

from __future__ import annotations

import sys
from collections.abc import Callable
from typing import TextIO

from session_sync.hooks import pre_compact
from session_sync.hooks.hook_helpers import write_stdout_response

USAGE = "Usage: session-sync hook <event>\nEvents: pre-compact"

_EVENT_ALIASES: dict[str, str] = {
    "PreCompact": "PreCompact",
    "preCompact": "PreCompact",
    "pre-compact": "PreCompact",
}

_EntrypointFn = Callable[[TextIO | None, TextIO | None], int]

_HANDLER_MAP: dict[str, _EntrypointFn] = {
    "PreCompact": lambda stdin, stdout: pre_compact.main(stdin=stdin, stdout=stdout),
}


def normalize_event(raw: str) -> str | None:
    """Normalize an event name to canonical PascalCase.

    Returns ``None`` if the event is not recognized.
    """
    return _EVENT_ALIASES.get(raw)


def dispatch(event: str, stdin: TextIO | None = None, stdout: TextIO | None = None) -> int:
    """Dispatch a canonical event to its entrypoint.

    Unknown events still acknowledge the host so it is never blocked.
    """
    handler = _HANDLER_MAP.get(event)
    if handler is None:
        write_stdout_response(stdout)
        return 0
    return handler(stdin, stdout)


def main(
    argv: list[str] | None = None,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
) -> int:
    """CLI entry point for ``session-sync hook <event>``.

    Args:
        argv: Arguments after ``hook`` (defaults to ``sys.argv[1:]``).
        stdin: Stream to read instead of ``sys.stdin``.
        stdout: Stream to write instead of ``sys.stdout``.

    Returns:
        Always 0.
    """
    args = sys.argv[1:] if argv is None else argv

    if not args or args[0] in ("--help", "-h"):
        print(USAGE, file=stdout or sys.stdout)
        return 0

    try:
        event = normalize_event(args[0])
        if event is None:
            write_stdout_response(stdout)
            return 0
        dispatch(event, stdin, stdout)
    except Exception:
        # pre_compact.main already acknowledges; this guards dispatch itself
        pass
    return 0


if __name__ == "__main__":
    sys.exit(main())
