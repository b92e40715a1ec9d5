# =============================================================================
# core/models/submission.py - Submission Outcome and Draft State
# =============================================================================
# A submission ends in exactly one of three ways:
# - invalid: a required field was blank, nothing was sent anywhere
# - failed: a remote call failed; earlier steps are NOT rolled back, so
#   activity_id may be set even though the result is a failure
# - created: the activity and every asset row exist
# =============================================================================

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from .activity import ActivityForm, ActivityListResponse, ActivityResponse, AssetResponse
from .staging import StagedFileView, UploadProgress
from .taxonomy import TaxonomyResponse


class SubmissionStatus(str, Enum):
    CREATED = "created"
    INVALID = "invalid"
    FAILED = "failed"


class SubmissionResult(BaseModel):
    """Result of one ActivitySubmission.submit() call."""

    status: SubmissionStatus
    message: str
    field_errors: dict[str, str] = Field(default_factory=dict)
    activity_id: str | None = Field(
        default=None,
        description="Set once the activity row exists, including partial failures",
    )
    activity: ActivityResponse | None = None
    assets: list[AssetResponse] = Field(default_factory=list)
    uploads: list[UploadProgress] = Field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return self.status == SubmissionStatus.CREATED


class SubmissionResponse(BaseModel):
    """A successful submission plus the refreshed activity table."""

    submission: SubmissionResult
    activities: ActivityListResponse | None = None


class DraftResponse(BaseModel):
    """Everything the new-activity form needs to render."""

    draft_id: str
    is_open: bool
    saving: bool
    form: ActivityForm
    files: list[StagedFileView] = Field(default_factory=list)
    taxonomy: TaxonomyResponse
    error: str | None = None
    success: str | None = None
    field_errors: dict[str, str] = Field(default_factory=dict)
