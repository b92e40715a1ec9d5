# =============================================================================
# app/routers/activities.py - Activity Listing and Creation
# =============================================================================
# GET lists every activity with its attachment count.
# POST creates an activity with attachments in one multipart request; the
# draft endpoints (drafts.py) offer the same flow step by step.
# =============================================================================

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, UploadFile, status

from app.auth import AuthUser, get_current_admin
from app.config import settings
from app.dependencies import BlobStoreDep, RecordStoreDep
from app.exceptions import ActivityValidationError, FileTooLargeError, SubmissionFailedError
from app.websocket import publish_activity_created
from core.backends import StaticIdentity
from core.models.activity import ActivityListResponse
from core.models.staging import StagedFile
from core.models.submission import SubmissionResponse, SubmissionResult, SubmissionStatus
from core.services.activity_service import ActivityListing
from core.services.submission_service import ActivitySubmission
from lib.utils import normalize_uuid

logger = logging.getLogger(__name__)

router = APIRouter()


# =============================================================================
# Helper Functions
# =============================================================================

async def read_staged_files(files: list[UploadFile] | None) -> list[StagedFile]:
    """
    Read uploaded parts into memory, in the order they were sent.

    Raises:
        FileTooLargeError: If any single file is over the size limit
    """
    staged: list[StagedFile] = []
    for upload in files or []:
        data = await upload.read()
        if len(data) > settings.max_upload_size_bytes:
            raise FileTooLargeError(
                upload.filename or "file",
                len(data) / (1024 * 1024),
                settings.MAX_UPLOAD_SIZE_MB,
            )
        staged.append(
            StagedFile(
                name=upload.filename or "file",
                content_type=upload.content_type or "",
                data=data,
            )
        )
    return staged


async def finish_submission(
    result: SubmissionResult,
    user: AuthUser,
    listing: ActivityListing | None,
) -> SubmissionResponse:
    """
    Turn a submission result into a response, or raise the matching error.

    Raises:
        ActivityValidationError: 422 if required fields were missing
        SubmissionFailedError: 502 if a remote step failed
    """
    if result.status == SubmissionStatus.INVALID:
        raise ActivityValidationError(result.message, result.field_errors)
    if result.status == SubmissionStatus.FAILED:
        raise SubmissionFailedError(result.message, activity_id=result.activity_id)

    if result.activity is not None:
        await publish_activity_created(normalize_uuid(user.id), result.activity)

    return SubmissionResponse(
        submission=result,
        activities=listing.to_response() if listing is not None else None,
    )


# =============================================================================
# Endpoints
# =============================================================================

@router.get("", response_model=ActivityListResponse)
async def list_activities(
    records: RecordStoreDep,
    user: AuthUser = Depends(get_current_admin),
):
    """
    List all activities, most recent first, with their attachments.

    If the database can't be read the list comes back empty with
    loaded=false instead of an error.
    """
    listing = ActivityListing(records)
    await listing.refresh()
    return listing.to_response()


@router.post("", status_code=status.HTTP_201_CREATED, response_model=SubmissionResponse)
async def create_activity(
    records: RecordStoreDep,
    blobs: BlobStoreDep,
    title: Annotated[str, Form()] = "",
    description: Annotated[str, Form()] = "",
    content: Annotated[str, Form(description="HTML body")] = "",
    algorithm_correction: Annotated[str, Form()] = "",
    code_correction: Annotated[str, Form()] = "",
    category_id: Annotated[str, Form()] = "",
    level_id: Annotated[str, Form()] = "",
    files: Annotated[
        list[UploadFile] | None,
        File(description="Attachments (PDF or images); other types are ignored"),
    ] = None,
    user: AuthUser = Depends(get_current_admin),
):
    """
    Create an activity and its attachments in one request.

    This endpoint:
    1. Stages the attached files (only images and PDFs are kept)
    2. Validates the required fields
    3. Inserts the activity
    4. Uploads each file to storage, in order
    5. Inserts the asset rows for all files in one batch

    Returns the created activity and the refreshed activity list.
    """
    listing = ActivityListing(records)
    submission = ActivitySubmission(
        records,
        blobs,
        StaticIdentity(user.to_identity()),
        listing=listing,
        bucket=settings.ASSETS_BUCKET,
    )
    submission.update(
        title=title,
        description=description,
        content=content,
        algorithm_correction=algorithm_correction,
        code_correction=code_correction,
        category_id=category_id,
        level_id=level_id,
    )

    _, rejected = submission.staging.offer(await read_staged_files(files))
    if rejected:
        logger.info(f"Ignored {len(rejected)} attachment(s) that are not images or PDFs")

    result = await submission.submit()
    return await finish_submission(result, user, listing)
