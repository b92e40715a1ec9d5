# =============================================================================
# core/services/submission_service.py - New Activity Submission
# =============================================================================
# Creates an activity together with its attachments:
#
#   validate form -> insert activity -> upload files one by one
#                 -> insert all asset rows in one batch -> refresh listing
#
# Each step runs only if the previous one succeeded. Nothing is rolled back
# on failure: an activity (and any blobs already uploaded) can outlive a
# failed submission. Those cases are logged with the orphaned paths and
# returned as failures carrying the activity id.
#
# Usage:
#   submission = ActivitySubmission(records, blobs, identity, listing=listing)
#   await submission.taxonomy.load()
#   submission.update(title="Intro to Loops", ...)
#   submission.staging.offer(files)
#   result = await submission.submit()
# =============================================================================

from __future__ import annotations

import logging
import posixpath
import time
from typing import AsyncIterator, Awaitable, Callable, Sequence

from pydantic import ValidationError

from core.backends import (
    ACTIVITIES,
    ASSETS,
    BlobStore,
    IdentityProvider,
    RecordStore,
)
from core.models.activity import (
    ActivityCreate,
    ActivityForm,
    ActivityResponse,
    AssetCreate,
)
from core.models.staging import StagedFile, UploadProgress, UploadStatus
from core.models.submission import DraftResponse, SubmissionResult, SubmissionStatus
from core.services.activity_service import ActivityListing
from core.services.staging_service import FileStaging
from core.services.taxonomy_service import TaxonomyLoader
from lib.utils import ApplicationError, display_message

logger = logging.getLogger(__name__)

DEFAULT_BUCKET = "assets"

MISSING_CONTENT_MESSAGE = "Title, Description and HTML Content are required."
MISSING_TAXONOMY_MESSAGE = "Category and Level are required."
SUCCESS_MESSAGE = "Activity created successfully"

ProgressCallback = Callable[[UploadProgress], Awaitable[None]]


def build_storage_path(activity_id: str, filename: str, index: int, stamp_ms: int) -> str:
    """
    Storage path for one attachment: {activity_id}/{stamp}-{index}-{filename}.

    The activity id keeps activities apart; the stamp and the file's
    position keep same-named files in one submission apart.
    """
    safe_name = posixpath.basename(filename.replace("\\", "/")) or "file"
    return f"{activity_id}/{stamp_ms}-{index}-{safe_name}"


class ActivitySubmission:
    """
    One new-activity form: its fields, staged files and submit action.

    Only one submission runs at a time. While it runs, submit() is a no-op
    and the form cannot be closed.
    """

    def __init__(
        self,
        records: RecordStore,
        blobs: BlobStore,
        identity: IdentityProvider,
        *,
        listing: ActivityListing | None = None,
        taxonomy: TaxonomyLoader | None = None,
        bucket: str = DEFAULT_BUCKET,
        on_progress: ProgressCallback | None = None,
        clock: Callable[[], float] = time.time,
    ):
        self._records = records
        self._blobs = blobs
        self._identity = identity
        self._bucket = bucket
        self.on_progress = on_progress
        self._clock = clock

        self.listing = listing
        self.taxonomy = taxonomy or TaxonomyLoader(records)
        self.form = ActivityForm()
        self.staging = FileStaging()
        self.progress: dict[str, UploadStatus] = {}

        self.is_open = True
        self.saving = False
        self.error: str | None = None
        self.success: str | None = None
        self.field_errors: dict[str, str] = {}

    # -------------------------------------------------------------------------
    # Form state
    # -------------------------------------------------------------------------

    def update(self, **fields: str) -> ActivityForm:
        """Set one or more form fields."""
        for name, value in fields.items():
            setattr(self.form, name, value)
        return self.form

    def reset(self) -> None:
        """Clear every field, staged file and progress entry."""
        self.form = ActivityForm()
        self.staging.clear()
        self.progress.clear()
        self.field_errors = {}

    def open(self) -> None:
        self.reset()
        self.error = None
        self.success = None
        self.is_open = True

    def close(self) -> bool:
        """Close the form. Refused (returns False) while saving."""
        if self.saving:
            return False
        self.is_open = False
        return True

    # -------------------------------------------------------------------------
    # Submission
    # -------------------------------------------------------------------------

    async def submit(self) -> SubmissionResult | None:
        """
        Validate and run the full create-and-attach sequence.

        Returns:
            SubmissionResult, or None if a submission was already in flight
        """
        if self.saving:
            logger.warning("Submit ignored: a submission is already in progress")
            return None

        self.error = None
        self.success = None
        self.field_errors = {}

        invalid = self._validate()
        if invalid is not None:
            return invalid

        self.saving = True
        try:
            return await self._create()
        finally:
            self.saving = False

    def _validate(self) -> SubmissionResult | None:
        errors = self.form.missing_fields()
        if not errors:
            return None

        if {"title", "description", "content"} & errors.keys():
            message = MISSING_CONTENT_MESSAGE
        else:
            message = MISSING_TAXONOMY_MESSAGE

        self.error = message
        self.field_errors = errors
        return SubmissionResult(
            status=SubmissionStatus.INVALID,
            message=message,
            field_errors=errors,
        )

    async def _create(self) -> SubmissionResult:
        files = self.staging.files
        activity_id: str | None = None
        uploads: list[UploadProgress] = []

        try:
            user = await self._identity.current_user()
            if user is None:
                raise ApplicationError(
                    "Not authenticated",
                    code="NOT_AUTHENTICATED",
                    suggestion="Sign in again before creating an activity",
                )

            payload = ActivityCreate.from_form(self.form, creator_id=user.id)
            activity_row = await self._records.insert_one(ACTIVITIES, payload.to_record())
            activity_id = str(activity_row["id"])
            logger.info(f"Created activity {activity_id} with {len(files)} attachment(s)")

            by_id = {staged.staging_id: staged for staged in files}
            assets: list[AssetCreate] = []
            async for update in self.upload_pipeline(activity_id, files):
                uploads.append(update)
                if update.status == UploadStatus.DONE:
                    staged = by_id[update.staging_id]
                    assets.append(
                        AssetCreate(
                            activity_id=activity_id,
                            name=staged.name,
                            file_type=staged.content_type,
                            file_size=staged.size,
                            file_url=update.url,
                        )
                    )

            asset_rows = []
            if assets:
                asset_rows = await self._records.insert_many(
                    ASSETS, [asset.to_record() for asset in assets]
                )

        except Exception as e:
            self._log_failure(e, activity_id, uploads)
            self.error = display_message(e)
            return SubmissionResult(
                status=SubmissionStatus.FAILED,
                message=self.error,
                activity_id=activity_id,
                uploads=uploads,
            )

        try:
            activity = ActivityResponse.from_row({**activity_row, "assets": asset_rows})
        except ValidationError as e:
            # The rows are stored; only the echo back to the caller is unreadable
            logger.warning(f"Created activity {activity_id} but could not read it back: {e}")
            activity = None

        self.success = SUCCESS_MESSAGE
        self.reset()
        self.is_open = False
        if self.listing is not None:
            await self.listing.refresh()

        return SubmissionResult(
            status=SubmissionStatus.CREATED,
            message=SUCCESS_MESSAGE,
            activity_id=activity_id,
            activity=activity,
            assets=activity.assets if activity is not None else [],
            uploads=uploads,
        )

    async def upload_pipeline(
        self, activity_id: str, files: Sequence[StagedFile]
    ) -> AsyncIterator[UploadProgress]:
        """
        Upload staged files strictly in order, yielding status updates.

        Every file is first reported as pending. Each file then moves to
        uploading and on to done (with its public URL) or failed. After a
        failure no further file is attempted and the error is re-raised.
        Each call starts a fresh pipeline.
        """
        for staged in files:
            yield await self._emit(UploadProgress(
                staging_id=staged.staging_id,
                name=staged.name,
                status=UploadStatus.PENDING,
            ))

        for index, staged in enumerate(files):
            path = build_storage_path(
                activity_id, staged.name, index, int(self._clock() * 1000)
            )
            yield await self._emit(UploadProgress(
                staging_id=staged.staging_id,
                name=staged.name,
                status=UploadStatus.UPLOADING,
                path=path,
            ))

            try:
                await self._blobs.upload(self._bucket, path, staged.data, staged.content_type)
                url = await self._blobs.public_url(self._bucket, path)
            except Exception as e:
                yield await self._emit(UploadProgress(
                    staging_id=staged.staging_id,
                    name=staged.name,
                    status=UploadStatus.FAILED,
                    path=path,
                    error=display_message(e),
                ))
                raise

            yield await self._emit(UploadProgress(
                staging_id=staged.staging_id,
                name=staged.name,
                status=UploadStatus.DONE,
                path=path,
                url=url,
            ))

    async def _emit(self, update: UploadProgress) -> UploadProgress:
        self.progress[update.staging_id] = update.status
        if self.on_progress is not None:
            try:
                await self.on_progress(update)
            except Exception as e:
                logger.warning(f"Progress listener failed for {update.name}: {e}")
        return update

    def _log_failure(
        self,
        error: Exception,
        activity_id: str | None,
        uploads: list[UploadProgress],
    ) -> None:
        logger.error(f"Activity create error: {error!r}")
        if isinstance(error, ApplicationError):
            logger.error(
                f"code={error.code} message={error.message} "
                f"details={error.details} hint={error.suggestion}"
            )

        if activity_id is None:
            return

        uploaded = [u.path for u in uploads if u.status == UploadStatus.DONE]
        logger.warning(
            f"Activity {activity_id} was created but its attachments are incomplete; "
            f"uploaded without asset rows: {uploaded or 'none'}"
        )

    # -------------------------------------------------------------------------
    # Views
    # -------------------------------------------------------------------------

    def to_response(self, draft_id: str) -> DraftResponse:
        return DraftResponse(
            draft_id=draft_id,
            is_open=self.is_open,
            saving=self.saving,
            form=self.form,
            files=[f.to_view(self.progress.get(f.staging_id)) for f in self.staging],
            taxonomy=self.taxonomy.to_response(),
            error=self.error,
            success=self.success,
            field_errors=self.field_errors,
        )
