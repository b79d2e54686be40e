"""Data models for Forge Session Sync.

The job record is the unit handed to the outbox consumer.  Every field of
``CapturedContext`` is always present; missing enrichment is represented by
empty strings, empty lists and zero counts, never by absent keys.
"""

from __future__ import annotations

import uuid
from typing import Any

from pydantic import BaseModel, Field

from session_sync.core.job_constants import JOB_FILE_VERSION, JOB_STATUS_PENDING, JOB_TYPE
from session_sync.core.utils import utc_now_iso


class GitCommit(BaseModel):
    """A single commit from the recent history window."""

    hash: str
    message: str = ""
    author: str = ""
    date: str = Field(default="", description="ISO-8601 author date")


class GitStats(BaseModel):
    """Aggregate diff statistics across the commit window."""

    files: int = Field(default=0, ge=0)
    additions: int = Field(default=0, ge=0)
    deletions: int = Field(default=0, ge=0)


class GitMetadata(BaseModel):
    """Repository metadata for the hook's working directory.

    ``GitMetadata()`` is the value used outside a repository.
    """

    remote: str = Field(default="", description="Normalized host/path, e.g. github.com/org/repo")
    branch: str = ""
    commits: list[GitCommit] = Field(default_factory=list, max_length=10)
    files_changed: list[str] = Field(default_factory=list)
    stats: GitStats = Field(default_factory=GitStats)


class PlanDocument(BaseModel):
    """A recently modified planning document."""

    name: str
    content: str = Field(default="", description="Base64 of the bounded file head")


class CapturedContext(BaseModel):
    """Local context gathered by the hook before dispatch."""

    captured_at: str = Field(default_factory=utc_now_iso)
    git: GitMetadata = Field(default_factory=GitMetadata)
    transcript_base64: str = ""
    plans: list[PlanDocument] = Field(default_factory=list, max_length=5)


class JobRecord(BaseModel):
    """Envelope written to the outbox, one per hook invocation."""

    id: str
    type: str = JOB_TYPE
    status: str = JOB_STATUS_PENDING
    version: int = JOB_FILE_VERSION
    created_at: str = Field(default_factory=utc_now_iso)
    session_id: str
    trigger: str = "unknown"
    cwd: str = ""
    project_id: str = "default"
    transcript_path: str = ""
    context: CapturedContext = Field(default_factory=CapturedContext)

    @classmethod
    def new(
        cls,
        *,
        session_id: str,
        trigger: str = "unknown",
        cwd: str = "",
        project_id: str = "default",
        transcript_path: str = "",
        context: CapturedContext | None = None,
    ) -> JobRecord:
        """Create a pending job record with a fresh unique id."""
        return cls(
            id=uuid.uuid4().hex,
            session_id=session_id,
            trigger=trigger,
            cwd=cwd,
            project_id=project_id,
            transcript_path=transcript_path,
            context=context or CapturedContext(),
        )

    @property
    def filename(self) -> str:
        """Outbox filename: job type plus unique id."""
        return f"{self.type}-{self.id}.json"

    def to_json(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict."""
        return self.model_dump(mode="json")

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> JobRecord:
        """Parse and validate a job file JSON dict.

        Args:
            data: Raw JSON dictionary from a job file.

        Returns:
            Validated JobRecord instance.

        Raises:
            ValueError: If the version or type is unsupported, or a field
                is invalid.
        """
        version = data.get("version")
        if version != JOB_FILE_VERSION:
            raise ValueError(
                f"Unsupported job file version: {version} (expected {JOB_FILE_VERSION})"
            )

        job_type = data.get("type")
        if job_type != JOB_TYPE:
            raise ValueError(f"Unsupported job type: {job_type} (expected {JOB_TYPE})")

        if not data.get("session_id"):
            raise ValueError("Job record session_id must not be empty")

        # pydantic.ValidationError subclasses ValueError
        return cls.model_validate(data)
