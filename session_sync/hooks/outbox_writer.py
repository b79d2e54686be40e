"""Maildir atomic outbox writer.

Delivers job records for the desktop worker.  Uses the Maildir protocol:
write to ``tmp/``, then ``os.replace()`` into ``new/`` so the consumer
never observes a partially written file.

Filenames are ``{job_type}-{uuid_hex}.json``; the uuid makes concurrent
invocations collision-free without locking.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from session_sync.core.errors import OutboxWriteError
from session_sync.core.job_constants import OUTBOX_NEW_DIR, OUTBOX_TMP_DIR
from session_sync.core.models import JobRecord

logger = logging.getLogger(__name__)


def write_job_file(record: JobRecord, outbox_dir: Path) -> Path:
    """Write a job record atomically.

    Directories are auto-created if needed.

    Args:
        record: The job record to deliver.
        outbox_dir: Outbox root (``tmp/`` and ``new/`` live below it).

    Returns:
        Path to the delivered file in ``new/``.

    Raises:
        OutboxWriteError: If the file cannot be written or moved.
    """
    tmp_dir = outbox_dir / OUTBOX_TMP_DIR
    new_dir = outbox_dir / OUTBOX_NEW_DIR
    filename = record.filename

    tmp_path = tmp_dir / filename
    new_path = new_dir / filename

    try:
        tmp_dir.mkdir(parents=True, exist_ok=True)
        new_dir.mkdir(parents=True, exist_ok=True)
        tmp_path.write_text(json.dumps(record.to_json(), ensure_ascii=False), encoding="utf-8")
        os.replace(str(tmp_path), str(new_path))
    except OSError as e:
        try:
            tmp_path.unlink(missing_ok=True)
        except OSError:
            pass
        raise OutboxWriteError(filename, str(e)) from e

    logger.debug("Delivered %s", filename)
    return new_path
