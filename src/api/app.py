"""
FastAPI application: the WebSocket transport for the shared page, plus a small status surface.

Frames are JSON objects {"event": <name>, "data": <payload>} in both directions.
"""

import logging
from typing import Any, Optional

from fastapi import FastAPI, HTTPException, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from pydantic import ValidationError

from src.api.connections import ConnectionManager
from src.api.models import EventMessage
from src.core.config import Settings
from src.db.memory_repository import InMemoryPuzzleRepository
from src.pointers.registry import PointerRegistry
from src.services.puzzle_service import PuzzleService
from src.services.session_router import SessionRouter

logger = logging.getLogger(__name__)


async def receive_frame(websocket: WebSocket) -> str | bytes:
    """Next text or binary frame. Raises WebSocketDisconnect once the client is gone."""
    message = await websocket.receive()
    if message["type"] == "websocket.disconnect":
        raise WebSocketDisconnect(message.get("code", 1000))
    return message.get("text") or message.get("bytes") or b""


def build_session_router(settings: Settings) -> SessionRouter:
    """Wire up the owned state: one repository, one registry, one router."""
    service = PuzzleService(InMemoryPuzzleRepository())
    return SessionRouter(service, PointerRegistry(), default_page=settings.default_page)


def create_app(
    settings: Optional[Settings] = None, session_router: Optional[SessionRouter] = None
) -> FastAPI:
    settings = settings or Settings.from_env()
    router = session_router or build_session_router(settings)
    connections = ConnectionManager()

    app = FastAPI(title="Shared Puzzle")
    app.state.settings = settings
    app.state.session_router = router
    app.state.connections = connections

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    # --- Status surface ---
    @app.get("/mouse")
    def get_status() -> str:
        return "Mouse is active"

    @app.get("/mouse/users")
    def get_users() -> list[dict[str, Any]]:
        return router.users()

    @app.get("/mouse/puzzle")
    def get_puzzle() -> dict[str, Any]:
        state = router.puzzle_state()
        if state is None:
            raise HTTPException(404, "No puzzle has been initialized.")
        return state.to_dict()

    # --- Transport ---
    @app.websocket(settings.websocket_path)
    async def shared_page_socket(websocket: WebSocket) -> None:
        connection_id = await connections.accept(websocket)
        await connections.deliver(connection_id, router.connect(connection_id))
        try:
            while True:
                raw = await receive_frame(websocket)
                try:
                    message = EventMessage.model_validate_json(raw)
                except ValidationError:
                    logger.info("Dropped malformed frame from %s", connection_id)
                    continue
                deliveries = router.dispatch(connection_id, message.event, message.data)
                await connections.deliver(connection_id, deliveries)
        except WebSocketDisconnect:
            pass
        finally:
            connections.release(connection_id)
            await connections.deliver(connection_id, router.disconnect(connection_id))

    return app
