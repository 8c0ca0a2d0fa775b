"""Protocol repository (only an in-memory version for now: the puzzle does not need to survive a restart)"""

from typing import Protocol

from src.puzzle.puzzle import Puzzle


class PuzzleRepository(Protocol):
    """
    Holds the one authoritative puzzle of the session. An empty repository means there is no puzzle.

    The stored instance is handed out as is and changed in place by the service,
    so every caller must hold the session lock.
    """

    def get_puzzle(self) -> Puzzle | None:
        """Get the current puzzle, if there is one."""
        ...

    def create_puzzle(self, puzzle: Puzzle) -> Puzzle:
        """Store a new puzzle. Must fail if a puzzle is already stored."""
        ...

    def delete_puzzle(self) -> Puzzle | None:
        """Remove the puzzle."""
        ...
