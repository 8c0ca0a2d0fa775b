"""Orchestration of communication from the event router to the puzzle domain and the repository (and the reverse direction)."""

import logging
from typing import Callable, Optional

from src.api.models import (
    ImageParamsResponse,
    PieceDragRequest,
    PieceShapeResponse,
    PieceSnapRequest,
    PuzzleInitRequest,
    PuzzlePieceResponse,
    PuzzleStateResponse,
)
from src.core.exceptions import PuzzleStateError
from src.core.models import PuzzleModel
from src.core.shared_types import Container, PuzzleStatus
from src.db.repository import PuzzleRepository
from src.puzzle.layout import DEFAULT_ROTATION_RANGE, ImageParams
from src.puzzle.puzzle import Puzzle
from src.puzzle.seeded_random import WallClockSeedSource

logger = logging.getLogger(__name__)

SeedSource = Callable[[], int]


class PuzzleService:
    """
    Orchestration of layers for the shared puzzle.

    Absent --(initialize)--> Active --(last snap)--> Completed --(reset)--> Absent
    """

    def __init__(
        self, repository: PuzzleRepository, seed_source: Optional[SeedSource] = None
    ) -> None:
        self.repo = repository
        self.seed_source = seed_source or WallClockSeedSource()

    # -- Event logic ---
    def status(self) -> PuzzleStatus:
        puzzle = self.repo.get_puzzle()
        if puzzle is None:
            return PuzzleStatus.ABSENT
        return puzzle.status

    def initialize(self, request: PuzzleInitRequest) -> PuzzleStateResponse:
        """
        A client asks for a puzzle to be created.
        ----

        First writer wins: only the first request of an epoch creates the puzzle, any later one is rejected.
        """
        if self.repo.get_puzzle() is not None:
            raise PuzzleStateError("Cannot initialize. A puzzle already exists.")

        params = ImageParams(
            width=request.width,
            height=request.height,
            image_width=request.image_width,
            image_height=request.image_height,
            image_x=request.image_x,
            image_y=request.image_y,
            rows=request.rows,
            cols=request.cols,
        )
        rotation_range = (
            request.rotation_range
            if request.rotation_range is not None
            else DEFAULT_ROTATION_RANGE
        )
        puzzle = self.repo.create_puzzle(
            Puzzle.generate(params, self.seed_source(), rotation_range)
        )
        logger.info(
            "Puzzle initialized: seed=%s grid=%sx%s", puzzle.seed, params.rows, params.cols
        )
        return self._create_state_response(puzzle.to_model())

    def get_state(self) -> Optional[PuzzleStateResponse]:
        """Current puzzle, or None if there is none. Never changes anything."""
        puzzle = self.repo.get_puzzle()
        if puzzle is None:
            return None
        return self._create_state_response(puzzle.to_model())

    def move_piece(
        self, request: PieceDragRequest, container: Optional[Container] = None
    ) -> None:
        """A piece was dropped somewhere. Coordinates are stored as sent."""
        self._fetch_puzzle().move_piece(
            request.piece_id,
            request.x,
            request.y,
            container=container,
            rotation=request.rotation,
        )

    def snap_piece(self, request: PieceSnapRequest) -> bool:
        """Commit a piece to its target. Returns True when this snap completed the puzzle."""
        puzzle = self._fetch_puzzle()
        completed = puzzle.snap_piece(request.piece_id)
        if completed:
            logger.info("Puzzle completed: seed=%s", puzzle.seed)
        return completed

    def reset(self) -> None:
        """Throw the puzzle away. Only a completed puzzle can be reset."""
        puzzle = self._fetch_puzzle()
        if not puzzle.is_completed:
            raise PuzzleStateError("Cannot reset. Puzzle is still in progress.")
        self.repo.delete_puzzle()
        logger.info("Puzzle reset: seed=%s", puzzle.seed)

    # -- Internal helpers --
    def _fetch_puzzle(self) -> Puzzle:
        """Any operation on pieces needs a puzzle. Raise an error if there is none."""
        puzzle = self.repo.get_puzzle()
        if puzzle is None:
            raise PuzzleStateError("No puzzle has been initialized.")
        return puzzle

    def _create_state_response(self, model: PuzzleModel) -> PuzzleStateResponse:
        """Convert info in PuzzleModel to a PuzzleStateResponse."""
        params = model.image_params
        return PuzzleStateResponse(
            seed=model.seed,
            image_params=ImageParamsResponse(
                width=params["width"],
                height=params["height"],
                image_width=params["image_width"],
                image_height=params["image_height"],
                image_x=params["image_x"],
                image_y=params["image_y"],
                rows=params["rows"],
                cols=params["cols"],
                piece_width=params["piece_width"],
                piece_height=params["piece_height"],
            ),
            pieces=[
                PuzzlePieceResponse(
                    id=piece.id,
                    col=piece.col,
                    row=piece.row,
                    shape=PieceShapeResponse(**piece.shape),
                    x=piece.x,
                    y=piece.y,
                    rotation=piece.rotation,
                    container=piece.container,
                    snapped=piece.snapped,
                    correct_x=piece.correct_x,
                    correct_y=piece.correct_y,
                )
                for piece in model.pieces
            ],
            is_completed=model.is_completed,
        )
