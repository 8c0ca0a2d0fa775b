"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

import random
from itertools import count
from typing import Any, Callable

import pytest

from src.db.memory_repository import InMemoryPuzzleRepository
from src.pointers.registry import PointerRegistry
from src.puzzle.layout import ImageParams
from src.puzzle.puzzle import Puzzle
from src.services.puzzle_service import PuzzleService
from src.services.session_router import SessionRouter

# A 2x2 puzzle: 400x300 image placed at (400, 250) in a 1200x800 viewport --> 200x150 pieces
INIT_PAYLOAD: dict[str, Any] = {
    "width": 1200,
    "height": 800,
    "imageWidth": 400,
    "imageHeight": 300,
    "imageX": 400,
    "imageY": 250,
    "rows": 2,
    "cols": 2,
}
PIECE_IDS_2X2 = ["p_0_0", "p_1_0", "p_0_1", "p_1_1"]


@pytest.fixture
def image_params() -> ImageParams:
    return ImageParams(
        width=1200,
        height=800,
        image_width=400,
        image_height=300,
        image_x=400,
        image_y=250,
        rows=2,
        cols=2,
    )


@pytest.fixture
def puzzle(image_params: ImageParams) -> Puzzle:
    """2x2 puzzle generated from seed 1."""
    return Puzzle.generate(image_params, seed=1)


@pytest.fixture
def seed_source() -> Callable[[], int]:
    """Deterministic seeds: 1, 2, 3, ..."""
    return count(1).__next__


@pytest.fixture
def puzzle_service(seed_source: Callable[[], int]) -> PuzzleService:
    return PuzzleService(InMemoryPuzzleRepository(), seed_source=seed_source)


@pytest.fixture
def session_router(puzzle_service: PuzzleService) -> SessionRouter:
    return SessionRouter(puzzle_service, PointerRegistry(rng=random.Random(0)))


@pytest.fixture
def init_payload() -> dict[str, Any]:
    """Fresh copy, so tests can mess with it."""
    return dict(INIT_PAYLOAD)


@pytest.fixture
def piece_ids() -> list[str]:
    """Ids of the 2x2 puzzle, row-major."""
    return list(PIECE_IDS_2X2)
