# =============================================================================
# app/websocket/events.py - Dashboard Events
# =============================================================================
# Builders for the events pushed to a user's dashboard tabs:
#   - upload_progress: one file of a draft changed upload status
#   - activity_created: a new activity exists, re-fetch the listing
# =============================================================================

from typing import Awaitable, Callable

from app.websocket.manager import websocket_manager
from core.models.activity import ActivityResponse
from core.models.staging import UploadProgress


def progress_publisher(
    user_id: str, draft_id: str
) -> Callable[[UploadProgress], Awaitable[None]]:
    """Progress callback for one draft that forwards updates to the user's tabs."""

    async def publish(update: UploadProgress) -> None:
        await websocket_manager.broadcast(user_id, {
            "type": "upload_progress",
            "draft_id": draft_id,
            **update.model_dump(mode="json", exclude={"url"}),
        })

    return publish


async def publish_activity_created(user_id: str, activity: ActivityResponse) -> int:
    return await websocket_manager.broadcast(user_id, {
        "type": "activity_created",
        "activity_id": activity.id,
        "title": activity.title,
        "attachment_count": activity.attachment_count,
    })
