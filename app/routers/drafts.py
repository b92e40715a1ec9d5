# =============================================================================
# app/routers/drafts.py - New-Activity Drafts
# =============================================================================
# A draft is an open "new activity" form kept on the server between
# requests: fields are set with PATCH, attachments are staged one batch at
# a time, and upload progress can be polled (or followed over the
# websocket) while the draft is being submitted.
# A successful submit closes the draft; it refuses changes until reopened.
# All endpoints require an administrator and only see the caller's drafts.
# =============================================================================

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, File, Path, Query, UploadFile, status

from app.auth import AuthUser, get_current_admin
from app.config import settings
from app.dependencies import BlobStoreDep, DraftRegistryDep, RecordStoreDep
from app.exceptions import (
    DraftClosedError,
    StagedFileNotFoundError,
    SubmissionInProgressError,
)
from app.routers.activities import finish_submission, read_staged_files
from app.websocket import progress_publisher
from core.backends import StaticIdentity
from core.models.activity import ActivityUpdateRequest
from core.models.staging import StagingResponse
from core.models.submission import DraftResponse, SubmissionResponse
from core.services.activity_service import ActivityListing
from core.services.submission_service import ActivitySubmission
from lib.utils import normalize_uuid

logger = logging.getLogger(__name__)

router = APIRouter()

DraftId = Annotated[str, Path(description="Draft ID returned when the draft was opened")]


def _editable(draft_id: str, submission: ActivitySubmission) -> ActivitySubmission:
    """Refuse edits while the draft is being submitted or once it is closed."""
    if submission.saving:
        raise SubmissionInProgressError(draft_id)
    if not submission.is_open:
        raise DraftClosedError(draft_id)
    return submission


@router.post("/drafts", status_code=status.HTTP_201_CREATED, response_model=DraftResponse)
async def open_draft(
    records: RecordStoreDep,
    blobs: BlobStoreDep,
    drafts: DraftRegistryDep,
    user: AuthUser = Depends(get_current_admin),
):
    """
    Open an empty new-activity form.

    Category and level options are loaded here. If either list can't be
    loaded it comes back empty and marked as still loading.
    """
    user_id = normalize_uuid(user.id)
    submission = ActivitySubmission(
        records,
        blobs,
        StaticIdentity(user.to_identity()),
        listing=ActivityListing(records),
        bucket=settings.ASSETS_BUCKET,
    )
    draft_id = drafts.create(user_id, submission)
    submission.on_progress = progress_publisher(user_id, draft_id)

    await submission.taxonomy.load()
    return submission.to_response(draft_id)


@router.get("/drafts/{draft_id}", response_model=DraftResponse)
async def get_draft(
    draft_id: DraftId,
    drafts: DraftRegistryDep,
    user: AuthUser = Depends(get_current_admin),
):
    """Get the form fields, staged files (with upload status) and messages."""
    return drafts.get(draft_id, normalize_uuid(user.id)).to_response(draft_id)


@router.patch("/drafts/{draft_id}", response_model=DraftResponse)
async def update_draft(
    draft_id: DraftId,
    request: ActivityUpdateRequest,
    drafts: DraftRegistryDep,
    user: AuthUser = Depends(get_current_admin),
):
    """Set any of the form fields. Fields left out are unchanged."""
    submission = _editable(draft_id, drafts.get(draft_id, normalize_uuid(user.id)))
    submission.update(**request.model_dump(exclude_none=True))
    return submission.to_response(draft_id)


@router.post("/drafts/{draft_id}/files", response_model=StagingResponse)
async def stage_files(
    draft_id: DraftId,
    files: Annotated[list[UploadFile], File(description="Files to attach (PDF or images)")],
    drafts: DraftRegistryDep,
    user: AuthUser = Depends(get_current_admin),
):
    """
    Add files to the draft's attachments.

    Files that are neither images nor PDFs are skipped and listed under
    "rejected". Nothing is uploaded until the draft is submitted.
    """
    submission = _editable(draft_id, drafts.get(draft_id, normalize_uuid(user.id)))
    accepted, rejected = submission.staging.offer(await read_staged_files(files))

    return StagingResponse(
        accepted=[f.to_view() for f in accepted],
        rejected=[f.name for f in rejected],
        files=[f.to_view() for f in submission.staging],
    )


@router.delete("/drafts/{draft_id}/files/{staging_id}", response_model=DraftResponse)
async def remove_staged_file(
    draft_id: DraftId,
    staging_id: Annotated[str, Path(description="Staging ID of the file to remove")],
    drafts: DraftRegistryDep,
    user: AuthUser = Depends(get_current_admin),
):
    """Remove one staged file."""
    submission = _editable(draft_id, drafts.get(draft_id, normalize_uuid(user.id)))
    if not submission.staging.remove(staging_id):
        raise StagedFileNotFoundError(draft_id, staging_id)
    return submission.to_response(draft_id)


@router.delete("/drafts/{draft_id}/files", response_model=DraftResponse)
async def remove_staged_files_by_name(
    draft_id: DraftId,
    name: Annotated[str, Query(min_length=1, description="Filename to remove")],
    drafts: DraftRegistryDep,
    user: AuthUser = Depends(get_current_admin),
):
    """Remove every staged file with this name."""
    submission = _editable(draft_id, drafts.get(draft_id, normalize_uuid(user.id)))
    removed = submission.staging.remove_by_name(name)
    logger.debug(f"Removed {removed} staged file(s) named {name} from draft {draft_id}")
    return submission.to_response(draft_id)


@router.post("/drafts/{draft_id}/submit", status_code=status.HTTP_201_CREATED, response_model=SubmissionResponse)
async def submit_draft(
    draft_id: DraftId,
    drafts: DraftRegistryDep,
    user: AuthUser = Depends(get_current_admin),
):
    """
    Create the activity from the draft.

    On success the draft is cleared and closed, and the refreshed activity
    list is returned. Submitting again while a submission is running,
    or after the draft was closed, returns 409.
    """
    submission = drafts.get(draft_id, normalize_uuid(user.id))
    if not submission.is_open:
        raise DraftClosedError(draft_id)

    result = await submission.submit()
    if result is None:
        raise SubmissionInProgressError(draft_id)

    return await finish_submission(result, user, submission.listing)


@router.delete("/drafts/{draft_id}", status_code=status.HTTP_204_NO_CONTENT)
async def discard_draft(
    draft_id: DraftId,
    drafts: DraftRegistryDep,
    user: AuthUser = Depends(get_current_admin),
):
    """Close the form and forget the draft. Refused while it is being submitted."""
    drafts.discard(draft_id, normalize_uuid(user.id))


@router.post("/drafts/{draft_id}/reopen", response_model=DraftResponse)
async def reopen_draft(
    draft_id: DraftId,
    drafts: DraftRegistryDep,
    user: AuthUser = Depends(get_current_admin),
):
    """Start a fresh form on a closed draft. Fields, files and messages are cleared."""
    submission = drafts.get(draft_id, normalize_uuid(user.id))
    if submission.saving:
        raise SubmissionInProgressError(draft_id)

    submission.open()
    return submission.to_response(draft_id)
