# =============================================================================
# core/models/staging.py - Staged Files and Upload Progress
# =============================================================================
# A staged file is an attachment the user has picked but that has not been
# uploaded yet. Each one gets its own staging id so that two files with the
# same name can be told apart (and removed) independently.
#
# Upload progress is coarse: pending -> uploading -> done | failed.
# =============================================================================

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import Enum

from pydantic import BaseModel, Field


class UploadStatus(str, Enum):
    """
    Per-file upload state during one submission.

    Flow: pending -> uploading -> done
                              \\-> failed
    """
    PENDING = "pending"
    UPLOADING = "uploading"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True)
class StagedFile:
    """An accepted attachment held in memory until submission."""
    name: str
    content_type: str
    data: bytes = field(repr=False)
    staging_id: str = field(default_factory=lambda: uuid.uuid4().hex)

    @property
    def size(self) -> int:
        return len(self.data)

    def to_view(self, status: UploadStatus | None = None) -> StagedFileView:
        return StagedFileView(
            staging_id=self.staging_id,
            name=self.name,
            content_type=self.content_type,
            size=self.size,
            status=status,
        )


class StagedFileView(BaseModel):
    """Client-facing view of a staged file (never includes the bytes)."""

    staging_id: str
    name: str
    content_type: str
    size: int = Field(..., ge=0)
    status: UploadStatus | None = None


class UploadProgress(BaseModel):
    """One status update emitted by the upload pipeline."""

    staging_id: str
    name: str
    status: UploadStatus
    path: str | None = None
    url: str | None = None
    error: str | None = None

    model_config = {"frozen": True}


class StagingResponse(BaseModel):
    """Outcome of offering a batch of files to the staging list."""

    accepted: list[StagedFileView] = Field(default_factory=list)
    rejected: list[str] = Field(
        default_factory=list,
        description="Names of files whose type is neither an image nor a PDF",
    )
    files: list[StagedFileView] = Field(default_factory=list)
