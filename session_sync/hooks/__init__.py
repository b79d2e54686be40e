"""Hook entrypoints and their building blocks.

``pre_compact`` is the PreCompact entrypoint; ``dispatcher`` maps event
names to entrypoints for the ``session-sync hook <event>`` command.

The remaining modules are the stages the pipeline wires together:
``hook_helpers`` (stdin/stdout contract, sanitization), ``models``,
``transcript_reader``, ``plan_collector``, ``outbox_writer`` and
``sessions_client``.
"""
