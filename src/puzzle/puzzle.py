"""
The Puzzle class is the entrypoint into the domain layer for the service layer.
It owns the pieces of one puzzle epoch and enforces what may happen to them -->
the repository holds the one live instance, and the service calls one operation on it at a time.

An absent puzzle is not represented here: that is simply an empty repository.
"""

from dataclasses import dataclass, field
from typing import Optional, Self

from src.core.exceptions import PuzzleStateError, UnknownPieceError
from src.core.models import PieceModel, PuzzleModel
from src.core.shared_types import Container, PuzzleStatus
from src.puzzle.layout import (
    DEFAULT_ROTATION_RANGE,
    ImageParams,
    PuzzlePiece,
    generate_pieces,
)
from src.puzzle.seeded_random import SeededRandom
from src.puzzle.shapes import generate_shapes


@dataclass
class Puzzle:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    seed: int
    image_params: ImageParams
    pieces: list[PuzzlePiece]
    _by_id: dict[str, PuzzlePiece] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        # the set of pieces is fixed for the lifetime of a puzzle, only their fields change
        self._by_id = {piece.id: piece for piece in self.pieces}

    @classmethod
    def generate(
        cls,
        params: ImageParams,
        seed: int,
        rotation_range: float = DEFAULT_ROTATION_RANGE,
    ) -> Self:
        """
        Build a brand new puzzle from nothing but the seed and the layout parameters.
        ---

        Shapes are drawn first, the scramble continues on the same sequence.
        """
        random = SeededRandom(seed)
        shapes = generate_shapes(params.rows, params.cols, random)
        pieces = generate_pieces(params, shapes, random, rotation_range)
        return cls(seed=seed, image_params=params, pieces=pieces)

    def to_model(self) -> PuzzleModel:
        """Detached snapshot for the Service layer: nothing in it refers back to the live pieces"""
        return PuzzleModel(
            seed=self.seed,
            image_params=self.image_params.to_dict(),
            pieces=[
                PieceModel(
                    id=piece.id,
                    col=piece.col,
                    row=piece.row,
                    shape=piece.shape.to_dict(),
                    x=piece.x,
                    y=piece.y,
                    rotation=piece.rotation,
                    container=piece.container.value,
                    snapped=piece.snapped,
                    correct_x=piece.correct_x,
                    correct_y=piece.correct_y,
                )
                for piece in self.pieces
            ],
            is_completed=self.is_completed,
        )

    @property
    def is_completed(self) -> bool:
        """Derived, never stored: complete when every single piece has been snapped."""
        return all(piece.snapped for piece in self.pieces)

    @property
    def status(self) -> PuzzleStatus:
        return PuzzleStatus.COMPLETED if self.is_completed else PuzzleStatus.ACTIVE

    def piece(self, piece_id: str) -> PuzzlePiece:
        piece = self._by_id.get(piece_id)
        if piece is None:
            raise UnknownPieceError(f"No piece with id {piece_id!r} in this puzzle.")
        return piece

    def move_piece(
        self,
        piece_id: str,
        x: float,
        y: float,
        container: Optional[Container] = None,
        rotation: Optional[float] = None,
    ) -> PuzzlePiece:
        """
        Overwrite where a piece is drawn.
        ----

        NOTE coordinates are trusted as sent by the client: no bounds checking.
        Container and rotation are left as they are when not supplied. Snapped state is never touched.
        """
        piece = self.piece(piece_id)
        piece.x = x
        piece.y = y
        if container is not None:
            piece.container = container
        if rotation is not None:
            piece.rotation = rotation
        return piece

    def snap_piece(self, piece_id: str) -> bool:
        """
        Commit a piece to its target position.
        ----

        Only allowed while the puzzle is still in progress.
        Returns True if exactly this snap completed the puzzle.
        """
        if self.status != PuzzleStatus.ACTIVE:
            raise PuzzleStateError(f"Cannot snap pieces. Puzzle is not in progress. status: {self.status}")

        self.piece(piece_id).snap()
        return self.is_completed
