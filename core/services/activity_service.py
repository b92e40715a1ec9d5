# =============================================================================
# core/services/activity_service.py - Activity Listing
# =============================================================================
# Read-only table of activities, newest first, each with its assets.
# The submission flow asks the listing to refresh after a successful create.
# =============================================================================

import logging

from pydantic import ValidationError

from core.backends import ACTIVITIES, RecordStore, RecordStoreError
from core.models.activity import ActivityListResponse, ActivityResponse

logger = logging.getLogger(__name__)


class ActivityListing:
    """
    Cached activity list that can be re-fetched on demand.

    A failed refresh is logged and keeps whatever was loaded before.
    """

    def __init__(self, records: RecordStore):
        self._records = records
        self.activities: list[ActivityResponse] = []
        self.loading = False
        self.loaded = False

    async def refresh(self) -> list[ActivityResponse]:
        self.loading = True
        try:
            rows = await self._records.select_all(
                ACTIVITIES,
                columns="*, assets(*)",
                order_by="created_at",
                descending=True,
            )
        except RecordStoreError as e:
            logger.error(
                f"Failed to load activities: {e.message} "
                f"(code={e.code}, details={e.details}, hint={e.hint})"
            )
            self.loaded = False
            return self.activities
        finally:
            self.loading = False

        activities: list[ActivityResponse] = []
        for row in rows:
            try:
                activities.append(ActivityResponse.from_row(row))
            except ValidationError as e:
                logger.warning(f"Skipping malformed activity row {row.get('id')}: {e}")
        self.activities = activities
        self.loaded = True
        logger.debug(f"Loaded {len(self.activities)} activities")
        return self.activities

    def to_response(self) -> ActivityListResponse:
        return ActivityListResponse(
            activities=self.activities,
            total=len(self.activities),
            loaded=self.loaded,
        )
