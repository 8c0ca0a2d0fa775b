"""Requests, Responses, and the wire envelope.

Every inbound event name maps to exactly one request model. The models are strict: a payload is rejected,
never coerced, when a field is missing or has the wrong type (e.g. "12" for a number).
Field names on the wire are camelCase, attribute names are snake_case.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.core.exceptions import InvalidRequestError

MAX_GRID_SIZE = 100
MAX_ROTATION_RANGE = 180.0


class _APIModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class _RequestModel(_APIModel):
    model_config = ConfigDict(populate_by_name=True, strict=True, allow_inf_nan=False)


# --- ENVELOPE ---
class EventMessage(_APIModel):
    """A single frame on the socket, in either direction."""

    event: str
    data: Any = None


# --- REQUEST MODELS ---
class MovePointerRequest(_RequestModel):
    x: float
    y: float
    scroll_x: float = Field(alias="scrollX")
    scroll_y: float = Field(alias="scrollY")
    page_x: float = Field(alias="pageX")
    page_y: float = Field(alias="pageY")
    current_page: str


class ScrollUpdateRequest(_RequestModel):
    scroll_x: float = Field(alias="scrollX")
    scroll_y: float = Field(alias="scrollY")


class PuzzleInitRequest(_RequestModel):
    width: float
    height: float
    image_width: float = Field(alias="imageWidth")
    image_height: float = Field(alias="imageHeight")
    image_x: float = Field(alias="imageX")
    image_y: float = Field(alias="imageY")
    rows: int
    cols: int
    rotation_range: Optional[float] = Field(default=None, alias="rotationRange")

    @field_validator(*["width", "height", "image_width", "image_height"])
    @classmethod
    def validate_dimension(cls, value: float) -> float:
        if value <= 0:
            raise InvalidRequestError(f"Dimensions must be positive, got {value!r}.")
        return value

    @field_validator(*["rows", "cols"])
    @classmethod
    def validate_grid_size(cls, value: int) -> int:
        if not 1 <= value <= MAX_GRID_SIZE:
            raise InvalidRequestError(
                f"Grid size must be between 1 and {MAX_GRID_SIZE}, got {value!r}."
            )
        return value

    @field_validator("rotation_range")
    @classmethod
    def validate_rotation_range(cls, value: Optional[float]) -> Optional[float]:
        if value is not None and not 0 <= value <= MAX_ROTATION_RANGE:
            raise InvalidRequestError(
                f"Rotation range must be between 0 and {MAX_ROTATION_RANGE:g} degrees, got {value!r}."
            )
        return value


class _PieceRequest(_RequestModel):
    piece_id: str = Field(alias="pieceId")

    @field_validator("piece_id")
    @classmethod
    def validate_piece_id(cls, value: str) -> str:
        if not value.strip():
            raise InvalidRequestError("pieceId cannot be empty.")
        return value


class PieceDragRequest(_PieceRequest):
    """Shared by drag start, drag move and drag end."""

    x: float
    y: float
    rotation: Optional[float] = None


class PieceSnapRequest(_PieceRequest):
    pass


# --- RESPONSE MODELS ---
class UserPointerResponse(_APIModel):
    id: str
    name: str
    color: str
    current_page: str
    x: float
    y: float
    scroll_x: float = Field(alias="scrollX")
    scroll_y: float = Field(alias="scrollY")
    page_x: float = Field(alias="pageX")
    page_y: float = Field(alias="pageY")


class PieceShapeResponse(_APIModel):
    top: int
    right: int
    bottom: int
    left: int


class PuzzlePieceResponse(_APIModel):
    id: str
    col: int
    row: int
    shape: PieceShapeResponse
    x: float
    y: float
    rotation: float
    container: str
    snapped: bool
    correct_x: float = Field(alias="correctX")
    correct_y: float = Field(alias="correctY")


class ImageParamsResponse(_APIModel):
    width: float
    height: float
    image_width: float = Field(alias="imageWidth")
    image_height: float = Field(alias="imageHeight")
    image_x: float = Field(alias="imageX")
    image_y: float = Field(alias="imageY")
    rows: int
    cols: int
    piece_width: float = Field(alias="pieceWidth")
    piece_height: float = Field(alias="pieceHeight")


class PuzzleStateResponse(_APIModel):
    seed: int
    image_params: ImageParamsResponse = Field(alias="imageParams")
    pieces: list[PuzzlePieceResponse]
    is_completed: bool = Field(alias="isCompleted")


# --- BROADCAST MODELS ---
class PieceDragBroadcast(_APIModel):
    """rotation is left out of the JSON when the dragging client did not send one."""

    user_id: str = Field(alias="userId")
    piece_id: str = Field(alias="pieceId")
    x: float
    y: float
    rotation: Optional[float] = None


class PieceSnapBroadcast(_APIModel):
    user_id: str = Field(alias="userId")
    piece_id: str = Field(alias="pieceId")
