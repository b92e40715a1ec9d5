# =============================================================================
# app/websocket/routes.py - WebSocket Routes
# =============================================================================
# WebSocket endpoint for live dashboard updates.
#
# Connect: ws://host/ws/activities?token={jwt}
#
# Events:
#   - {"type": "upload_progress", "draft_id": "...", "name": "a.pdf", "status": "uploading", ...}
#   - {"type": "activity_created", "activity_id": "...", "attachment_count": 2}
# =============================================================================

import logging

from fastapi import APIRouter, Query, WebSocket, WebSocketDisconnect

from app.auth.dependencies import InvalidTokenError, decode_access_token
from app.websocket.manager import websocket_manager

logger = logging.getLogger(__name__)

router = APIRouter()


@router.websocket("/ws/activities")
async def activities_websocket(
    websocket: WebSocket,
    token: str = Query(..., description="JWT token for authentication")
):
    """
    WebSocket endpoint for upload progress and listing refresh signals.

    Authentication is required via the `token` query parameter.
    """
    try:
        user = decode_access_token(token)
    except InvalidTokenError as e:
        logger.warning(f"WebSocket auth failed: {e}")
        await websocket.close(code=4001, reason="Invalid token")
        return

    user_id = str(user.id)
    await websocket_manager.connect(user_id, websocket)

    try:
        await websocket.send_json({
            "type": "connected",
            "message": "Connected to activity updates"
        })

        while True:
            data = await websocket.receive_text()

            # Handle ping/pong for keepalive
            if data == "ping":
                await websocket.send_text("pong")
            else:
                logger.debug(f"WebSocket received: {data[:100]}")

    except WebSocketDisconnect:
        logger.info(f"WebSocket client disconnected for user {user_id}")
    finally:
        websocket_manager.disconnect(user_id, websocket)


@router.get("/ws/status")
async def websocket_status():
    """Get WebSocket connection statistics."""
    return {
        "total_connections": websocket_manager.get_connection_count(),
        "connected_users": len(websocket_manager.connections),
    }
