"""Table of open sockets. Resolves the Audience of each Delivery into actual connections."""

import logging
import secrets

from fastapi import WebSocket, WebSocketDisconnect

from src.api.models import EventMessage
from src.core.shared_types import Audience
from src.services.session_router import Delivery

logger = logging.getLogger(__name__)

CONNECTION_ID_BYTES = 15  # --> 20 url-safe characters


def new_connection_id() -> str:
    return secrets.token_urlsafe(CONNECTION_ID_BYTES)


class ConnectionManager:
    def __init__(self) -> None:
        self._connections: dict[str, WebSocket] = {}

    def __len__(self) -> int:
        return len(self._connections)

    async def accept(self, websocket: WebSocket) -> str:
        """Complete the handshake and hand out the identity of the new connection."""
        await websocket.accept()
        connection_id = new_connection_id()
        self._connections[connection_id] = websocket
        return connection_id

    def release(self, connection_id: str) -> None:
        self._connections.pop(connection_id, None)

    def recipients(self, sender_id: str, audience: Audience) -> list[str]:
        if audience == Audience.SELF:
            return [sender_id] if sender_id in self._connections else []
        if audience == Audience.OTHERS:
            return [cid for cid in self._connections if cid != sender_id]
        return list(self._connections)

    async def deliver(self, sender_id: str, deliveries: list[Delivery]) -> None:
        """Send every delivery in order. A peer that cannot be reached is skipped, its own disconnect cleans it up."""
        for delivery in deliveries:
            frame = EventMessage(event=delivery.event, data=delivery.payload).model_dump(mode="json")
            for connection_id in self.recipients(sender_id, delivery.audience):
                websocket = self._connections.get(connection_id)
                if websocket is None:
                    continue
                try:
                    await websocket.send_json(frame)
                except (WebSocketDisconnect, RuntimeError) as exc:
                    logger.debug(
                        "Could not deliver %s to %s: %r", delivery.event, connection_id, exc
                    )
