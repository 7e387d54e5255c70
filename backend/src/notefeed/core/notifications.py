"""Lifecycle event broadcast to connected clients."""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Literal, Optional, Union
from uuid import UUID

from fastapi import WebSocket
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

NOTES_CHANNEL = "notes"


class NoteEvent(BaseModel):
    """One note lifecycle event.

    ``note`` is the serialized note for ``create``/``update`` and the bare
    note id for ``delete``.
    """

    action: Literal["create", "update", "delete"]
    note: Union[Dict[str, Any], UUID]
    channel: str = Field(default=NOTES_CHANNEL)

    def to_message(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")


class INotificationSink(ABC):
    """Receives note lifecycle events for broadcast."""

    @abstractmethod
    async def publish(self, event: NoteEvent) -> None:
        """Deliver an event; implementations may drop it on failure."""
        pass


class ConnectionManager:
    """Manages live WebSocket connections."""

    def __init__(self):
        self.active_connections: List[WebSocket] = []

    async def connect(self, websocket: WebSocket):
        await websocket.accept()
        self.active_connections.append(websocket)
        logger.info(f"WebSocket client connected ({len(self.active_connections)} active)")

    def disconnect(self, websocket: WebSocket):
        if websocket in self.active_connections:
            self.active_connections.remove(websocket)
            logger.info(f"WebSocket client disconnected ({len(self.active_connections)} active)")

    async def broadcast(self, data: dict) -> int:
        """Send JSON to every connection; returns how many received it."""
        delivered = 0
        disconnected = []
        for websocket in list(self.active_connections):
            try:
                await websocket.send_json(data)
                delivered += 1
            except Exception as e:
                logger.warning(f"Dropping WebSocket client after send failure: {e}")
                disconnected.append(websocket)

        for websocket in disconnected:
            self.disconnect(websocket)
        return delivered


class WebSocketNotifier(INotificationSink):
    """Notification sink that fans events out over WebSocket connections."""

    def __init__(self, manager: Optional[ConnectionManager] = None):
        self.manager = manager or ConnectionManager()

    async def publish(self, event: NoteEvent) -> None:
        delivered = await self.manager.broadcast(event.to_message())
        logger.debug(f"Broadcast '{event.action}' event to {delivered} client(s)")


_notifier: Optional[WebSocketNotifier] = None


def get_notifier() -> WebSocketNotifier:
    """FastAPI dependency returning the process notifier."""
    global _notifier
    if _notifier is None:
        _notifier = WebSocketNotifier()
    return _notifier
