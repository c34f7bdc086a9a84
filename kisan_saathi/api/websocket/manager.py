# kisan_saathi/api/websocket/manager.py
from fastapi import WebSocket
from typing import Dict


class ConnectionManager:
    def __init__(self) -> None:
        self.active_connections: Dict[str, WebSocket] = {}

    async def connect(self, websocket: WebSocket, connection_id: str) -> None:
        await websocket.accept()
        self.active_connections[connection_id] = websocket

    def disconnect(self, connection_id: str) -> None:
        self.active_connections.pop(connection_id, None)

    async def send_to_connection(self, connection_id: str, message: str) -> None:
        connection = self.active_connections.get(connection_id)
        if connection is not None:
            await connection.send_text(message)


manager = ConnectionManager()
