"""Entry point for the ``session-sync`` command."""

from __future__ import annotations

import argparse
import json
import sys
from typing import NoReturn


def run_version() -> None:
    """Print version information."""
    from session_sync import __version__

    print(f"forge-session-sync {__version__}")


def run_setup_hooks(args: argparse.Namespace) -> int:
    """Print the host hook configuration.

    Args:
        args: Parsed command line arguments.

    Returns:
        Exit code (0 for success, 1 for error).
    """
    from session_sync.tools.setup_hooks import generate_hook_config

    try:
        config = generate_hook_config(
            python_path=args.python_path or "",
            timeout=args.timeout,
        )
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    if args.json:
        print(json.dumps(config, indent=2))
        return 0

    print("Forge Session Sync - Hook Configuration")
    print(f"Python: {config['paths']['python']}")
    print()
    print("Hooks config:")
    print(json.dumps({"hooks": config["hooks"]}, indent=2))
    print()
    print(config["instructions"])
    return 0


def run_show_config() -> int:
    """Print the resolved settings (paths, transport, limits)."""
    from session_sync.config import get_settings

    settings = get_settings()
    resolved = settings.model_dump(mode="json")
    resolved.update(
        {
            "outbox_dir": str(settings.outbox_dir),
            "config_file": str(settings.resolved_config_file),
            "credentials_file": str(settings.resolved_credentials_file),
            "log_file": str(settings.resolved_log_file),
        }
    )
    print(json.dumps(resolved, indent=2))
    return 0


def _dispatch_hook(argv: list[str]) -> int:
    """Run the hook dispatcher with the arguments after ``hook``."""
    from session_sync.hooks.dispatcher import main as dispatcher_main

    return dispatcher_main(argv)


def main() -> NoReturn:
    """Main entry point with subcommand support."""
    # Fast-path: bypass argparse entirely for hook dispatch
    if len(sys.argv) >= 2 and sys.argv[1] == "hook":
        try:
            _dispatch_hook(sys.argv[2:])
        except Exception:
            pass  # Fail-open
        sys.exit(0)

    parser = argparse.ArgumentParser(
        prog="session-sync",
        description="Capture coding-assistant session context before compaction",
    )
    parser.add_argument(
        "--version",
        "-V",
        action="store_true",
        help="Show version and exit",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        title="commands",
        description="Available commands",
    )

    # Hook command (documented here; handled by the fast path above)
    subparsers.add_parser(
        "hook",
        help="Run a hook entrypoint: session-sync hook pre-compact < payload.json",
    )

    setup_hooks_parser = subparsers.add_parser(
        "setup-hooks",
        help="Print the hook configuration for .claude/settings.json",
    )
    setup_hooks_parser.add_argument(
        "--python-path",
        default="",
        help="Run the hook as '<python> -m session_sync' instead of the console script",
    )
    setup_hooks_parser.add_argument(
        "--timeout",
        type=int,
        default=30,
        help="Host-side hook timeout in seconds (default: 30)",
    )
    setup_hooks_parser.add_argument(
        "--json",
        action="store_true",
        help="Output raw JSON",
    )

    subparsers.add_parser(
        "config",
        help="Show the resolved configuration",
    )

    args = parser.parse_args()

    if args.version:
        run_version()
        sys.exit(0)

    if args.command == "setup-hooks":
        sys.exit(run_setup_hooks(args))
    elif args.command == "config":
        sys.exit(run_show_config())
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
