"""WebSocket endpoint pushing refresh signals to connected clients."""

import json
import logging
from typing import Dict, Iterable, Set

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from youniverse.api.deps import get_user_from_token
from youniverse.database import SessionLocal

logger = logging.getLogger(__name__)

TOPICS = {"messages", "feed", "connections", "notifications"}


class ConnectionManager:
    """Tracks open WebSockets per user and fans out refresh signals.

    Signals carry no row data; clients re-fetch the named topic.
    """
    
    def __init__(self):
        # Map user_id -> Set of WebSocket connections
        self.active_connections: Dict[int, Set[WebSocket]] = {}
        # Map WebSocket -> user_id
        self.websocket_to_user: Dict[WebSocket, int] = {}
    
    async def connect(self, websocket: WebSocket, user_id: int):
        """Accept a WebSocket and register it for the user."""
        await websocket.accept()
        self.active_connections.setdefault(user_id, set()).add(websocket)
        self.websocket_to_user[websocket] = user_id
        logger.info(f"[WS] User {user_id} connected ({len(self.active_connections[user_id])} socket(s))")
    
    def disconnect(self, websocket: WebSocket):
        """Forget a WebSocket."""
        user_id = self.websocket_to_user.pop(websocket, None)
        if user_id is None:
            return
        sockets = self.active_connections.get(user_id)
        if sockets is not None:
            sockets.discard(websocket)
            if not sockets:
                del self.active_connections[user_id]
        logger.info(f"[WS] User {user_id} disconnected")
    
    def is_connected(self, user_id: int) -> bool:
        return bool(self.active_connections.get(user_id))
    
    async def send_personal_message(self, message: dict, user_id: int):
        """Send a payload to all of a user's connections, dropping dead ones."""
        disconnected = set()
        for connection in list(self.active_connections.get(user_id, ())):
            try:
                await connection.send_json(message)
            except Exception as e:
                logger.debug(f"[WS] Send to user {user_id} failed: {type(e).__name__}")
                disconnected.add(connection)
        
        for conn in disconnected:
            self.disconnect(conn)
    
    async def notify_refresh(self, user_ids: Iterable[int], topic: str):
        """Tell each user that `topic` changed and should be re-fetched."""
        if topic not in TOPICS:
            raise ValueError(f"Unknown refresh topic: {topic}")
        for user_id in set(user_ids):
            await self.send_personal_message({"type": "refresh", "topic": topic}, user_id)

    async def broadcast_refresh(self, topic: str):
        """Signal every connected user, e.g. when the shared feed changes."""
        await self.notify_refresh(list(self.active_connections), topic)


# Global connection manager instance
manager = ConnectionManager()

router = APIRouter(
    prefix="/ws",
    tags=["Real-time"],
)


@router.websocket("/updates")
async def updates_endpoint(
    websocket: WebSocket,
    token: str = None,
):
    """
    WebSocket endpoint for real-time refresh signals.
    
    Query parameters:
    - token: JWT token for authentication
    
    Server -> client: `{"type": "refresh", "topic": "messages" | "feed" | "connections" | "notifications"}`
    Client -> server: `{"type": "ping"}` answered with `{"type": "pong"}`
    """
    if not token:
        await websocket.close(code=1008, reason="Token required")
        return
    
    db = SessionLocal()
    try:
        user = get_user_from_token(db, token)
    finally:
        db.close()
    
    if user is None or not user.is_active:
        await websocket.close(code=1008, reason="Invalid token")
        return
    
    user_id = user.id
    await manager.connect(websocket, user_id)
    
    try:
        await websocket.send_json({
            "type": "connection",
            "message": "Connected to updates",
            "user_id": user_id
        })
        
        while True:
            data = await websocket.receive_text()
            
            try:
                message_data = json.loads(data)
            except json.JSONDecodeError:
                await websocket.send_json({
                    "type": "error",
                    "message": "Invalid JSON format"
                })
                continue
            
            if isinstance(message_data, dict) and message_data.get("type") == "ping":
                await websocket.send_json({"type": "pong"})
    
    except WebSocketDisconnect:
        manager.disconnect(websocket)
