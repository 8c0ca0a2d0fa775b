"""
Boundary layer data model(s).

These objects are used to communicate with the Service.
The domain layer (src/puzzle) converts from/into them, and the repository only ever stores them.
(Decouples the repository from the domain objects, so the authoritative state is never shared by reference)
"""

from dataclasses import dataclass

# Type aliases to make the models easier to read
EdgeName = str
TabCode = int
ParamName = str


@dataclass
class PieceModel:
    """Transport-safe representation of a single puzzle piece."""

    id: str
    col: int
    row: int
    shape: dict[EdgeName, TabCode]
    x: float
    y: float
    rotation: float
    container: str
    snapped: bool
    correct_x: float
    correct_y: float


@dataclass
class PuzzleModel:
    """Transport-safe representation of the shared puzzle used between Service, DB, and Puzzle layers."""

    seed: int
    image_params: dict[ParamName, float]
    pieces: list[PieceModel]
    is_completed: bool
