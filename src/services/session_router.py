"""
Maps inbound named events to the pointer registry / puzzle service, and decides who hears about the result.

The router never talks to sockets itself: every entry point returns the list of Deliveries to make,
and the transport resolves each Audience to actual connections.

All entry points run one at a time behind a single lock, so no two events ever interleave mid-mutation.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable

from pydantic import ValidationError

from src.api.models import (
    MovePointerRequest,
    PieceDragBroadcast,
    PieceDragRequest,
    PieceSnapBroadcast,
    PieceSnapRequest,
    PuzzleInitRequest,
    PuzzleStateResponse,
    ScrollUpdateRequest,
    UserPointerResponse,
)
from src.core.exceptions import SessionError, UnknownUserError
from src.core.shared_types import Audience, Container, InboundEvent, OutboundEvent
from src.pointers.registry import PointerRegistry, UserPointer
from src.services.puzzle_service import PuzzleService

logger = logging.getLogger(__name__)

Payload = Any


@dataclass(frozen=True)
class Delivery:
    """One outbound message. The payload is already JSON-ready."""

    audience: Audience
    event: OutboundEvent
    payload: Payload = None


Handler = Callable[[str, Payload], list[Delivery]]


def pointer_payload(user: UserPointer) -> dict[str, Any]:
    return UserPointerResponse(
        id=user.id,
        name=user.name,
        color=user.color,
        current_page=user.current_page,
        x=user.x,
        y=user.y,
        scroll_x=user.scroll_x,
        scroll_y=user.scroll_y,
        page_x=user.page_x,
        page_y=user.page_y,
    ).to_dict()


class SessionRouter:
    """Owns the pointer registry and the puzzle service for one shared page."""

    def __init__(
        self,
        puzzle_service: PuzzleService,
        pointers: PointerRegistry,
        default_page: str = "/",
    ) -> None:
        self.puzzles = puzzle_service
        self.pointers = pointers
        self.default_page = default_page
        # Taken both by the event loop (socket events) and by the HTTP reads in the threadpool.
        # Piece moves only touch the addressed piece, so the lock is held briefly. A full state read
        # (sync broadcast, GET /mouse/puzzle) is linear in the number of pieces.
        self._lock = threading.Lock()
        self._handlers: dict[str, Handler] = {
            InboundEvent.MOVE_POINTER: self._on_move_pointer,
            InboundEvent.SCROLL_UPDATE: self._on_scroll_update,
            InboundEvent.PUZZLE_REQUEST_STATE: self._on_request_state,
            InboundEvent.PUZZLE_INIT_REQUEST: self._on_init_request,
            InboundEvent.PUZZLE_PIECE_DRAG_START: self._on_drag_start,
            InboundEvent.PUZZLE_PIECE_DRAG_MOVE: self._on_drag_move,
            InboundEvent.PUZZLE_PIECE_DRAG_END: self._on_drag_end,
            InboundEvent.PUZZLE_PIECE_SNAP: self._on_snap,
            InboundEvent.PUZZLE_RESET_REQUEST: self._on_reset_request,
        }

    # -- Transport level events --
    def connect(self, connection_id: str) -> list[Delivery]:
        """New viewer: tell them who they are and who is here, tell everybody else about them."""
        with self._lock:
            user = self.pointers.create(connection_id, self.default_page)
            logger.info("Client connected: %s", connection_id)
            new_user = pointer_payload(user)
            return [
                Delivery(Audience.SELF, OutboundEvent.INIT, new_user),
                Delivery(
                    Audience.SELF,
                    OutboundEvent.CURRENT_USERS,
                    [pointer_payload(u) for u in self.pointers.list_all()],
                ),
                Delivery(Audience.OTHERS, OutboundEvent.NEW_USER_JOINED, new_user),
            ]

    def disconnect(self, connection_id: str) -> list[Delivery]:
        with self._lock:
            self.pointers.remove(connection_id)
            logger.info("Client disconnected: %s", connection_id)
            return [Delivery(Audience.OTHERS, OutboundEvent.USER_LEFT, connection_id)]

    def dispatch(self, connection_id: str, event: str, payload: Payload = None) -> list[Delivery]:
        """
        Handle one named message from a connection.
        ---

        Anything that goes wrong (unknown event, malformed payload, unknown id, wrong puzzle state)
        declines the event: nothing changes and nobody is told.
        """
        handler = self._handlers.get(event)
        if handler is None:
            logger.debug("Ignoring unknown event %r from %s", event, connection_id)
            return []

        with self._lock:
            try:
                return handler(connection_id, payload)
            except ValidationError as exc:
                logger.info(
                    "Declined %s from %s: malformed payload (%d errors)",
                    event,
                    connection_id,
                    exc.error_count(),
                )
            except SessionError as exc:
                logger.info("Declined %s from %s: %s", event, connection_id, exc)
            return []

    # -- Read-only queries (status surface) --
    def users(self) -> list[dict[str, Any]]:
        with self._lock:
            return [pointer_payload(user) for user in self.pointers.list_all()]

    def puzzle_state(self) -> PuzzleStateResponse | None:
        with self._lock:
            return self.puzzles.get_state()

    # -- Pointer handlers --
    def _on_move_pointer(self, connection_id: str, payload: Payload) -> list[Delivery]:
        request = MovePointerRequest.model_validate(payload)
        user = self.pointers.update_position(
            connection_id,
            request.x,
            request.y,
            request.scroll_x,
            request.scroll_y,
            request.page_x,
            request.page_y,
            request.current_page,
        )
        if user is None:
            raise UnknownUserError(f"No pointer registered for {connection_id!r}")
        return [Delivery(Audience.OTHERS, OutboundEvent.POINTER_MOVED, pointer_payload(user))]

    def _on_scroll_update(self, connection_id: str, payload: Payload) -> list[Delivery]:
        request = ScrollUpdateRequest.model_validate(payload)
        user = self.pointers.update_scroll(connection_id, request.scroll_x, request.scroll_y)
        if user is None:
            raise UnknownUserError(f"No pointer registered for {connection_id!r}")
        return [Delivery(Audience.OTHERS, OutboundEvent.POINTER_MOVED, pointer_payload(user))]

    # -- Puzzle handlers --
    def _on_request_state(self, connection_id: str, payload: Payload) -> list[Delivery]:
        state = self.puzzles.get_state()
        if state is None:
            return [Delivery(Audience.SELF, OutboundEvent.PUZZLE_NO_STATE)]
        return [Delivery(Audience.SELF, OutboundEvent.PUZZLE_STATE_SYNC, state.to_dict())]

    def _on_init_request(self, connection_id: str, payload: Payload) -> list[Delivery]:
        request = PuzzleInitRequest.model_validate(payload)
        state = self.puzzles.initialize(request)
        logger.info("Puzzle initialized from request of %s", connection_id)
        # the requester gets the state through the same broadcast as everybody else
        return [Delivery(Audience.ALL, OutboundEvent.PUZZLE_STATE_SYNC, state.to_dict())]

    def _on_drag_start(self, connection_id: str, payload: Payload) -> list[Delivery]:
        request = PieceDragRequest.model_validate(payload)
        return [self._drag_broadcast(OutboundEvent.PUZZLE_PIECE_DRAG_START, connection_id, request)]

    def _on_drag_move(self, connection_id: str, payload: Payload) -> list[Delivery]:
        request = PieceDragRequest.model_validate(payload)
        return [self._drag_broadcast(OutboundEvent.PUZZLE_PIECE_DRAG_MOVE, connection_id, request)]

    def _on_drag_end(self, connection_id: str, payload: Payload) -> list[Delivery]:
        request = PieceDragRequest.model_validate(payload)
        # NOTE: a dropped piece always lands on the board, even when dropped back onto a sidebar.
        self.puzzles.move_piece(request, container=Container.BOARD)
        return [self._drag_broadcast(OutboundEvent.PUZZLE_PIECE_DRAG_END, connection_id, request)]

    def _on_snap(self, connection_id: str, payload: Payload) -> list[Delivery]:
        request = PieceSnapRequest.model_validate(payload)
        completed = self.puzzles.snap_piece(request)
        deliveries = [
            Delivery(
                Audience.OTHERS,
                OutboundEvent.PUZZLE_PIECE_SNAP,
                PieceSnapBroadcast(user_id=connection_id, piece_id=request.piece_id).to_dict(),
            )
        ]
        if completed:
            deliveries.append(Delivery(Audience.ALL, OutboundEvent.PUZZLE_COMPLETED))
        return deliveries

    def _on_reset_request(self, connection_id: str, payload: Payload) -> list[Delivery]:
        self.puzzles.reset()
        logger.info("Puzzle reset requested by %s", connection_id)
        return [Delivery(Audience.ALL, OutboundEvent.PUZZLE_RESET)]

    def _drag_broadcast(
        self, event: OutboundEvent, connection_id: str, request: PieceDragRequest
    ) -> Delivery:
        """Drag events are relayed to the other viewers with the sender attached."""
        payload = PieceDragBroadcast(
            user_id=connection_id,
            piece_id=request.piece_id,
            x=request.x,
            y=request.y,
            rotation=request.rotation,
        ).to_dict()
        return Delivery(Audience.OTHERS, event, payload)
