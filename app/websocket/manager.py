# =============================================================================
# app/websocket/manager.py - WebSocket Connection Manager
# =============================================================================
# Manages WebSocket connections per user and handles broadcasting.
#
# Usage:
#   from app.websocket import websocket_manager
#
#   # Connect a client
#   await websocket_manager.connect(user_id, websocket)
#
#   # Broadcast to every tab the user has open
#   await websocket_manager.broadcast(user_id, {"type": "upload_progress", ...})
#
#   # Disconnect a client
#   websocket_manager.disconnect(user_id, websocket)
# =============================================================================

import logging
from typing import Dict, Set

from fastapi import WebSocket

logger = logging.getLogger(__name__)


class ConnectionManager:
    """
    Manages WebSocket connections organized by user ID.

    A user can have several dashboard tabs open; every event for that user
    is sent to all of them.
    """

    def __init__(self):
        # user_id -> set of WebSocket connections
        self.connections: Dict[str, Set[WebSocket]] = {}
        self._total_connections = 0

    async def connect(self, user_id: str, websocket: WebSocket) -> None:
        await websocket.accept()

        self.connections.setdefault(user_id, set()).add(websocket)
        self._total_connections += 1

        logger.info(
            f"WebSocket connected for user {user_id}. "
            f"Total connections: {self._total_connections}"
        )

    def disconnect(self, user_id: str, websocket: WebSocket) -> None:
        if websocket in self.connections.get(user_id, set()):
            self.connections[user_id].discard(websocket)
            self._total_connections -= 1

            if not self.connections[user_id]:
                del self.connections[user_id]

        logger.info(
            f"WebSocket disconnected for user {user_id}. "
            f"Total connections: {self._total_connections}"
        )

    async def broadcast(self, user_id: str, message: dict) -> int:
        """
        Send a message to all connections of a user.

        Returns:
            int: Number of clients the message was sent to
        """
        if user_id not in self.connections:
            logger.debug(f"No connections for user {user_id}, skipping broadcast")
            return 0

        dead_connections: Set[WebSocket] = set()
        sent_count = 0

        for websocket in list(self.connections[user_id]):
            try:
                await websocket.send_json(message)
                sent_count += 1
            except Exception as e:
                logger.warning(f"Failed to send to WebSocket: {e}")
                dead_connections.add(websocket)

        for ws in dead_connections:
            self.disconnect(user_id, ws)

        logger.debug(
            f"Broadcast to user {user_id}: "
            f"type={message.get('type')}, sent to {sent_count} clients"
        )
        return sent_count

    def get_connection_count(self, user_id: str | None = None) -> int:
        if user_id:
            return len(self.connections.get(user_id, set()))
        return self._total_connections


# Global singleton instance
websocket_manager = ConnectionManager()
