"""
Where every piece belongs (its target on the image) and where it starts (scrambled in one of the sidebars).

Coordinates of a piece refer to the top-left corner of its bounding box. That box is larger than the
piece's cell in the image by a padding margin on every side, so there is room to draw the tabs.
"""

from dataclasses import dataclass
from typing import Self

from src.core.shared_types import Container
from src.puzzle.seeded_random import SeededRandom
from src.puzzle.shapes import PieceShape, ShapeGrid

# Margin around a piece's cell, as a fraction of the cell's width / height.
TAB_PADDING_RATIO = 0.35
# Sidebars have a fixed width, their height equals the viewport height.
SIDEBAR_WIDTH = 400.0
DEFAULT_ROTATION_RANGE = 45.0


def piece_id(col: int, row: int) -> str:
    return f"p_{col}_{row}"


@dataclass(frozen=True)
class ImageParams:
    """Viewport size, placement of the image in it, and the grid the image is cut into."""

    width: float
    height: float
    image_width: float
    image_height: float
    image_x: float
    image_y: float
    rows: int
    cols: int

    @property
    def piece_width(self) -> float:
        return self.image_width / self.cols

    @property
    def piece_height(self) -> float:
        return self.image_height / self.rows

    @property
    def padding_width(self) -> float:
        return self.piece_width * TAB_PADDING_RATIO

    @property
    def padding_height(self) -> float:
        return self.piece_height * TAB_PADDING_RATIO

    @classmethod
    def from_dict(cls, data: dict[str, float]) -> Self:
        """Derived values (piece_width, piece_height) are recomputed, so they are ignored if present."""
        return cls(
            width=data["width"],
            height=data["height"],
            image_width=data["image_width"],
            image_height=data["image_height"],
            image_x=data["image_x"],
            image_y=data["image_y"],
            rows=int(data["rows"]),
            cols=int(data["cols"]),
        )

    def to_dict(self) -> dict[str, float]:
        return {
            "width": self.width,
            "height": self.height,
            "image_width": self.image_width,
            "image_height": self.image_height,
            "image_x": self.image_x,
            "image_y": self.image_y,
            "rows": self.rows,
            "cols": self.cols,
            "piece_width": self.piece_width,
            "piece_height": self.piece_height,
        }


@dataclass
class PuzzlePiece:
    """
    A single piece. The target (correct_x, correct_y) is computed once from the image layout
    and no method ever changes it afterwards.
    """

    id: str
    col: int
    row: int
    shape: PieceShape
    correct_x: float
    correct_y: float
    x: float = 0.0
    y: float = 0.0
    rotation: float = 0.0
    container: Container = Container.LEFT
    snapped: bool = False

    def snap(self) -> None:
        """Commit the piece to its target: on the board, upright, exactly at (correct_x, correct_y)."""
        self.snapped = True
        self.x = self.correct_x
        self.y = self.correct_y
        self.container = Container.BOARD
        self.rotation = 0.0


def target_pieces(params: ImageParams, shapes: ShapeGrid) -> list[PuzzlePiece]:
    """One piece per cell (row-major order), positioned at the origin, with its target on the image."""
    pieces: list[PuzzlePiece] = []
    for row in range(params.rows):
        for col in range(params.cols):
            pieces.append(
                PuzzlePiece(
                    id=piece_id(col, row),
                    col=col,
                    row=row,
                    shape=shapes[row][col],
                    correct_x=params.image_x + col * params.piece_width - params.padding_width,
                    correct_y=params.image_y + row * params.piece_height - params.padding_height,
                )
            )
    return pieces


def scramble_piece(
    piece: PuzzlePiece,
    params: ImageParams,
    random: SeededRandom,
    rotation_range: float = DEFAULT_ROTATION_RANGE,
    sidebar_width: float = SIDEBAR_WIDTH,
) -> None:
    """
    Draw the starting rotation, sidebar, and position of one piece.
    ---

    Always consumes exactly four draws (rotation, side, x, y), even when rotation is disabled,
    so the draw order does not depend on the rotation range.
    """
    rotation_draw = random.random()
    side_draw = random.random()
    x_draw = random.random()
    y_draw = random.random()

    # map [0, 1) onto [-range, +range]
    piece.rotation = (rotation_draw - 0.5) * (rotation_range * 2) if rotation_range > 0 else 0.0
    piece.container = Container.LEFT if side_draw < 0.5 else Container.RIGHT

    # free area of the sidebar: the whole piece (including its padding) must fit
    footprint_width = params.piece_width + params.padding_width * 2
    footprint_height = params.piece_height + params.padding_height * 2
    max_x = max(0.0, sidebar_width - footprint_width)
    max_y = max(0.0, params.height - footprint_height)
    piece.x = x_draw * max_x
    piece.y = y_draw * max_y
    piece.snapped = False


def generate_pieces(
    params: ImageParams,
    shapes: ShapeGrid,
    random: SeededRandom,
    rotation_range: float = DEFAULT_ROTATION_RANGE,
    sidebar_width: float = SIDEBAR_WIDTH,
) -> list[PuzzlePiece]:
    """Create all pieces and scramble them, in row-major order."""
    pieces = target_pieces(params, shapes)
    for piece in pieces:
        scramble_piece(piece, params, random, rotation_range, sidebar_width)
    return pieces
