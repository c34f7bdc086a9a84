# kisan_saathi/api/websocket/endpoints.py
import json
import logging
from uuid import uuid4

from fastapi import APIRouter, WebSocket, WebSocketDisconnect, status
from fastapi.websockets import WebSocketState

from .actions import actions
from .manager import manager

logger = logging.getLogger(__name__)

router = APIRouter()


@router.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket):
    connection_id = uuid4().hex
    await manager.connect(websocket, connection_id)
    try:
        while True:
            raw_data = await websocket.receive_text()
            try:
                message = json.loads(raw_data)
                action = message.get("action")
                data = message.get("data", {})
                if action in actions:
                    await actions[action](connection_id, data)
                else:
                    await websocket.send_text(f"Unknown action: {action}")
            except (json.JSONDecodeError, AttributeError):
                await websocket.send_text("Invalid JSON")
    except WebSocketDisconnect:
        manager.disconnect(connection_id)
    except Exception:
        logger.exception("WebSocket connection %s failed", connection_id)
        manager.disconnect(connection_id)
        if websocket.client_state == WebSocketState.CONNECTED:
            await websocket.close(code=status.WS_1011_INTERNAL_ERROR)
