"""
Type definitions used across layers
"""

from enum import StrEnum


class Container(StrEnum):
    """Where a piece is currently rendered."""

    LEFT = "left"
    RIGHT = "right"
    BOARD = "board"


class PuzzleStatus(StrEnum):
    ABSENT = "absent"
    ACTIVE = "active"
    COMPLETED = "completed"


class Audience(StrEnum):
    """Who receives an outbound message, relative to the connection that triggered it."""

    SELF = "self"
    OTHERS = "others"
    ALL = "all"


class InboundEvent(StrEnum):
    MOVE_POINTER = "move_pointer"
    SCROLL_UPDATE = "scroll_update"
    PUZZLE_REQUEST_STATE = "puzzle_request_state"
    PUZZLE_INIT_REQUEST = "puzzle_init_request"
    PUZZLE_PIECE_DRAG_START = "puzzle_piece_drag_start"
    PUZZLE_PIECE_DRAG_MOVE = "puzzle_piece_drag_move"
    PUZZLE_PIECE_DRAG_END = "puzzle_piece_drag_end"
    PUZZLE_PIECE_SNAP = "puzzle_piece_snap"
    PUZZLE_RESET_REQUEST = "puzzle_reset_request"


class OutboundEvent(StrEnum):
    INIT = "init"
    CURRENT_USERS = "current_users"
    NEW_USER_JOINED = "new_user_joined"
    USER_LEFT = "user_left"
    POINTER_MOVED = "pointer_moved"
    PUZZLE_STATE_SYNC = "puzzle_state_sync"
    PUZZLE_NO_STATE = "puzzle_no_state"
    PUZZLE_PIECE_DRAG_START = "puzzle_piece_drag_start"
    PUZZLE_PIECE_DRAG_MOVE = "puzzle_piece_drag_move"
    PUZZLE_PIECE_DRAG_END = "puzzle_piece_drag_end"
    PUZZLE_PIECE_SNAP = "puzzle_piece_snap"
    PUZZLE_COMPLETED = "puzzle_completed"
    PUZZLE_RESET = "puzzle_reset"
