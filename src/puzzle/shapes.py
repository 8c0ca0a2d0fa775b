"""
Tab/blank pattern of every piece in the grid.

Each edge of a piece carries a code:
* 0  --> flat (the border of the puzzle)
* 1  --> tab (sticks out)
* -1 --> blank (indentation that receives the neighbour's tab)
"""

from dataclasses import asdict, dataclass
from typing import Self

from src.core.exceptions import PuzzleError
from src.puzzle.seeded_random import SeededRandom

FLAT = 0
TAB = 1
BLANK = -1
EDGE_CODES = (BLANK, FLAT, TAB)

ShapeGrid = list[list["PieceShape"]]


@dataclass(frozen=True)
class PieceShape:
    top: int
    right: int
    bottom: int
    left: int

    @classmethod
    def from_dict(cls, data: dict[str, int]) -> Self:
        shape = cls(
            top=data["top"], right=data["right"], bottom=data["bottom"], left=data["left"]
        )
        if any(code not in EDGE_CODES for code in asdict(shape).values()):
            raise PuzzleError(f"Invalid edge code in shape {data!r}")
        return shape

    def to_dict(self) -> dict[str, int]:
        return asdict(self)


def tab_from_draw(draw: float) -> int:
    """A draw strictly above one half gives a tab, anything else a blank."""
    return TAB if draw > 0.5 else BLANK


def generate_shapes(rows: int, cols: int, random: SeededRandom) -> ShapeGrid:
    """
    Build the rows x cols grid of shapes, indexed as grid[row][col].
    ---

    Cells are visited top-to-bottom, left-to-right. Only the right and bottom edge of a cell are ever drawn,
    and only when that edge is shared with a neighbour. The top and left edge are copied (negated) from the
    neighbour above / to the left, so matching edges interlock by construction.
    """
    if rows < 1 or cols < 1:
        raise PuzzleError(f"Grid must have at least one row and column, got {rows}x{cols}")

    grid: ShapeGrid = []
    for row in range(rows):
        row_shapes: list[PieceShape] = []
        for col in range(cols):
            right = tab_from_draw(random.random()) if col < cols - 1 else FLAT
            bottom = tab_from_draw(random.random()) if row < rows - 1 else FLAT
            top = -grid[row - 1][col].bottom if row > 0 else FLAT
            left = -row_shapes[col - 1].right if col > 0 else FLAT
            row_shapes.append(PieceShape(top=top, right=right, bottom=bottom, left=left))
        grid.append(row_shapes)
    return grid


def shapes_interlock(grid: ShapeGrid) -> bool:
    """Check that every shared edge is a tab/blank pair and that the border is flat all around."""
    rows = len(grid)
    for row, row_shapes in enumerate(grid):
        cols = len(row_shapes)
        for col, shape in enumerate(row_shapes):
            if row == 0 and shape.top != FLAT:
                return False
            if col == 0 and shape.left != FLAT:
                return False
            if row == rows - 1 and shape.bottom != FLAT:
                return False
            if col == cols - 1 and shape.right != FLAT:
                return False
            if col < cols - 1 and (
                shape.right == FLAT or shape.right != -row_shapes[col + 1].left
            ):
                return False
            if row < rows - 1 and (
                shape.bottom == FLAT or shape.bottom != -grid[row + 1][col].top
            ):
                return False
    return True
