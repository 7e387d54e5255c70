"""WebSocket endpoint for live note updates."""

import logging

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect

from ..core.notifications import WebSocketNotifier, get_notifier

router = APIRouter(prefix="/ws", tags=["websocket"])
logger = logging.getLogger(__name__)


@router.websocket("/notes")
async def notes_channel(websocket: WebSocket, notifier: WebSocketNotifier = Depends(get_notifier)):
    """
    Live notes channel.

    Every note create, update and delete is pushed to connected clients as
    ``{"channel": "notes", "action": ..., "note": ...}``. Incoming messages
    are ignored.
    """
    manager = notifier.manager
    await manager.connect(websocket)
    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        manager.disconnect(websocket)
