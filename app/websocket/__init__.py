# =============================================================================
# app/websocket/__init__.py - WebSocket Module
# =============================================================================
# Pushes upload progress and "activity created" events to the dashboard.
#
# Usage:
#   from app.websocket import websocket_manager
#
#   await websocket_manager.broadcast(user_id, {
#       "type": "activity_created",
#       "activity_id": "..."
#   })
# =============================================================================

from app.websocket.events import progress_publisher, publish_activity_created
from app.websocket.manager import websocket_manager

__all__ = [
    "websocket_manager",
    "progress_publisher",
    "publish_activity_created",
]
