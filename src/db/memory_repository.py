"""Implementation of (Puzzle)Repository keeping a single record in process memory"""

from src.core.exceptions import RepositoryError
from src.puzzle.puzzle import Puzzle


class InMemoryPuzzleRepository:
    """
    Data stored in a single slot.

    NOTE: no copies are made. Moving one piece changes one piece, whatever the size of the grid.
    """

    def __init__(self) -> None:
        self._puzzle: Puzzle | None = None

    def get_puzzle(self) -> Puzzle | None:
        """Get the current puzzle, if there is one."""
        return self._puzzle

    def create_puzzle(self, puzzle: Puzzle) -> Puzzle:
        """Store a new puzzle. Fails if a puzzle is already stored."""
        if self._puzzle is not None:
            raise RepositoryError(
                f"A puzzle (seed={self._puzzle.seed}) is already stored."
            )
        self._puzzle = puzzle
        return puzzle

    def delete_puzzle(self) -> Puzzle | None:
        """Remove the puzzle and return what was stored."""
        removed, self._puzzle = self._puzzle, None
        return removed
