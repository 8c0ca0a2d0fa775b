"""Unit tests for /src/puzzle/layout.py"""

import pytest

from src.core.shared_types import Container
from src.puzzle.layout import (
    SIDEBAR_WIDTH,
    TAB_PADDING_RATIO,
    ImageParams,
    generate_pieces,
    piece_id,
    target_pieces,
)
from src.puzzle.seeded_random import SeededRandom
from src.puzzle.shapes import generate_shapes


def _pieces(params: ImageParams, seed: int = 1, rotation_range: float = 45.0):
    random = SeededRandom(seed)
    shapes = generate_shapes(params.rows, params.cols, random)
    return generate_pieces(params, shapes, random, rotation_range)


# -- IMAGE PARAMETERS --
def test_derived_piece_size(image_params: ImageParams) -> None:
    assert image_params.piece_width == pytest.approx(200)
    assert image_params.piece_height == pytest.approx(150)
    assert image_params.padding_width == pytest.approx(200 * TAB_PADDING_RATIO)
    assert image_params.padding_height == pytest.approx(150 * TAB_PADDING_RATIO)


def test_image_params_dict_roundtrip(image_params: ImageParams) -> None:
    """Derived values are exported, but recomputed on the way back in."""
    data = image_params.to_dict()
    assert data["piece_width"] == pytest.approx(200)
    assert data["piece_height"] == pytest.approx(150)
    assert ImageParams.from_dict(data) == image_params


# -- TARGET POSITIONS --
@pytest.mark.parametrize(
    "col, row, expected_x, expected_y",
    [
        (0, 0, 400 - 70, 250 - 52.5),
        (1, 0, 400 + 200 - 70, 250 - 52.5),
        (0, 1, 400 - 70, 250 + 150 - 52.5),
        (1, 1, 400 + 200 - 70, 250 + 150 - 52.5),
    ],
)
def test_correct_positions(
    image_params: ImageParams, col: int, row: int, expected_x: float, expected_y: float
) -> None:
    """Target = image origin + cell offset - padding margin."""
    shapes = generate_shapes(2, 2, SeededRandom(1))
    pieces = {piece.id: piece for piece in target_pieces(image_params, shapes)}
    piece = pieces[piece_id(col, row)]
    assert piece.correct_x == pytest.approx(expected_x)
    assert piece.correct_y == pytest.approx(expected_y)
    assert piece.shape == shapes[row][col]


def test_pieces_in_row_major_order(image_params: ImageParams) -> None:
    pieces = _pieces(image_params)
    assert [piece.id for piece in pieces] == ["p_0_0", "p_1_0", "p_0_1", "p_1_1"]
    assert [(piece.col, piece.row) for piece in pieces] == [(0, 0), (1, 0), (0, 1), (1, 1)]


# -- SCRAMBLE --
@pytest.mark.parametrize("seed", [1, 2, 3, 1_700_000_000_000])
def test_scrambled_pieces_start_in_a_sidebar(image_params: ImageParams, seed: int) -> None:
    """The whole piece, padding included, fits inside the sidebar it was assigned to."""
    max_x = SIDEBAR_WIDTH - (200 + 2 * 70)
    max_y = image_params.height - (150 + 2 * 52.5)
    for piece in _pieces(image_params, seed):
        assert piece.container in (Container.LEFT, Container.RIGHT)
        assert 0 <= piece.x <= max_x
        assert 0 <= piece.y <= max_y
        assert -45 <= piece.rotation <= 45
        assert piece.snapped is False


def test_zero_rotation_range(image_params: ImageParams) -> None:
    assert all(piece.rotation == 0 for piece in _pieces(image_params, rotation_range=0))


def test_rotation_range_does_not_shift_the_scramble(image_params: ImageParams) -> None:
    """Rotation is always drawn, so positions are the same whatever the range."""
    rotated = _pieces(image_params, rotation_range=45)
    upright = _pieces(image_params, rotation_range=0)
    assert [(p.x, p.y, p.container) for p in rotated] == [(p.x, p.y, p.container) for p in upright]


def test_piece_larger_than_sidebar_sits_at_origin() -> None:
    """Free area collapses to zero instead of going negative."""
    params = ImageParams(
        width=2000, height=100, image_width=1000, image_height=400,
        image_x=0, image_y=0, rows=1, cols=1,
    )
    (piece,) = _pieces(params)
    assert piece.x == 0
    assert piece.y == 0


def test_same_seed_same_layout(image_params: ImageParams) -> None:
    assert _pieces(image_params, seed=12345) == _pieces(image_params, seed=12345)


def test_scramble_draws_four_values_per_piece(image_params: ImageParams) -> None:
    """2x2: four shape draws, then four draws per piece."""
    random = SeededRandom(1)
    shapes = generate_shapes(2, 2, random)
    generate_pieces(image_params, shapes, random)
    assert random.draws == 4 + 4 * 4


def test_snap_moves_piece_onto_target(image_params: ImageParams) -> None:
    piece = _pieces(image_params)[0]
    piece.rotation = 33.0
    piece.snap()
    assert (piece.x, piece.y) == (piece.correct_x, piece.correct_y)
    assert piece.rotation == 0
    assert piece.container == Container.BOARD
    assert piece.snapped is True
