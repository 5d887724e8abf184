"""Grid state construction, the read-only view, and the move model."""

from __future__ import annotations

import random

import pytest

from tileslide.engine.scrambler import RandomMoves, Scrambler
from tileslide.models import (
    Direction,
    GridState,
    IllegalMove,
    InvalidDimensions,
    InvalidLabeling,
    Move,
    ParseError,
    Size,
    Variant,
)

SOLVED_3x3 = GridState.solved(Size(3, 3))


# -- construction -------------------------------------------------------------


def test_solved_is_row_major_with_blank_last() -> None:
    assert SOLVED_3x3.labels == (0, 1, 2, 3, 4, 5, 6, 7, 8)
    assert SOLVED_3x3.blank_pos == (2, 2)
    assert SOLVED_3x3.is_solved()
    assert SOLVED_3x3.variant is Variant.SINGLE_BLANK


@pytest.mark.parametrize(
    "labels",
    [
        [0, 1, 2, 3, 4, 5, 6, 7],
        [0, 1, 2, 3, 4, 5, 6, 7, 8, 9],
        [0, 1, 2, 3, 4, 5, 6, 7, 7],
        [1, 2, 3, 4, 5, 6, 7, 8, 9],
        [-1, 1, 2, 3, 4, 5, 6, 7, 8],
    ],
    ids=["short", "long", "duplicate", "out-of-range", "negative"],
)
def test_invalid_labeling(labels: list[int]) -> None:
    with pytest.raises(InvalidLabeling):
        GridState(Size(3, 3), labels)


@pytest.mark.parametrize("blank_count", [0, 10])
def test_invalid_blank_count(blank_count: int) -> None:
    with pytest.raises(InvalidLabeling):
        GridState.solved(Size(3, 3), blank_count)


@pytest.mark.parametrize("rows, cols", [(0, 3), (3, 0), (-1, 2)])
def test_invalid_dimensions(rows: int, cols: int) -> None:
    with pytest.raises(InvalidDimensions):
        Size(rows, cols)


def test_invalid_labeling_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        GridState(Size(2, 2), [0, 0, 1, 2])


def test_labels_are_stored_as_tuple() -> None:
    state = GridState(Size(2, 2), [0, 1, 3, 2])
    assert state.labels == (0, 1, 3, 2)
    assert hash(state) == hash(GridState(Size(2, 2), (0, 1, 3, 2)))


def test_equality_is_positional() -> None:
    a = GridState(Size(2, 2), [0, 1, 3, 2])
    assert a == GridState(Size(2, 2), [0, 1, 3, 2])
    assert a != GridState(Size(2, 2), [0, 3, 1, 2])
    assert a != GridState(Size(4, 1), [0, 1, 3, 2])


def test_from_rows() -> None:
    state = GridState.from_rows([[0, 1, 2], [3, 4, 5]])
    assert state.size == Size(2, 3)
    assert state.is_solved()
    with pytest.raises(InvalidLabeling):
        GridState.from_rows([[0, 1], [2]])


# -- display notation ---------------------------------------------------------


def test_from_display_maps_tiles_and_blank() -> None:
    state = GridState.from_display("1 2 3/4 5 6/7 0 8")
    assert state.labels == (0, 1, 2, 3, 4, 5, 6, 8, 7)
    assert state.blank_pos == (2, 1)


def test_from_display_accepts_newlines_and_commas() -> None:
    state = GridState.from_display("1, 2\n3, 0\n")
    assert state == GridState.solved(Size(2, 2))


@pytest.mark.parametrize(
    "text",
    ["1 2 3/4 5 6/7 8 0", "4 1 2/0 5 3/7 8 6", "1 2 3 4 0", "3 1/2 0/5 4"],
)
def test_display_round_trip(text: str) -> None:
    assert str(GridState.from_display(text)) == text


@pytest.mark.parametrize(
    "text, error",
    [
        ("1 2/3 x", ParseError),
        ("1 2/3", InvalidLabeling),
        ("1 2/3 4", InvalidLabeling),
        ("1 2/2 0", InvalidLabeling),
        ("1 5/3 0", InvalidLabeling),
    ],
    ids=["not-a-number", "ragged", "no-blank", "duplicate", "gap-in-numbering"],
)
def test_from_display_rejects(text: str, error: type[Exception]) -> None:
    with pytest.raises(error):
        GridState.from_display(text)


def test_read_only_view() -> None:
    state = GridState.from_display("1 2 3/4 0 6/7 5 8")
    assert state.rows() == ((0, 1, 2), (3, 8, 5), (6, 4, 7))
    assert state.display_rows() == ((1, 2, 3), (4, 0, 6), (7, 5, 8))
    assert state.label_at(2, 1) == 4
    assert state.position_of(4) == (2, 1)
    assert state.blank_positions == ((1, 1),)
    assert state.is_tile_correct(0, 0)
    assert not state.is_tile_correct(2, 1)
    assert not state.is_tile_correct(1, 1)


# -- legal moves --------------------------------------------------------------


def test_legal_moves_from_corner() -> None:
    assert SOLVED_3x3.legal_moves() == (Move(Direction.DOWN), Move(Direction.RIGHT))


@pytest.mark.parametrize(
    "text, count",
    [
        ("1 2 3/4 5 6/7 8 0", 2),
        ("1 2 3/4 5 0/7 8 6", 3),
        ("1 2 3/4 0 5/7 8 6", 4),
        ("0 1 2/3 4 5/6 7 8", 2),
        ("1 0 2/3 4 5/6 7 8", 3),
    ],
    ids=["corner", "edge", "interior", "top-left", "top-edge"],
)
def test_legal_move_count(text: str, count: int) -> None:
    assert len(GridState.from_display(text).legal_moves()) == count


def test_legal_moves_follow_canonical_order() -> None:
    moves = GridState.from_display("1 2 3/4 0 5/7 8 6").legal_moves()
    assert [m.direction for m in moves] == [
        Direction.UP,
        Direction.DOWN,
        Direction.LEFT,
        Direction.RIGHT,
    ]


def test_multi_tile_legal_moves() -> None:
    moves = SOLVED_3x3.legal_moves(multi_tile=True)
    assert moves == (
        Move(Direction.DOWN, 1),
        Move(Direction.DOWN, 2),
        Move(Direction.RIGHT, 1),
        Move(Direction.RIGHT, 2),
    )


# -- applying moves -----------------------------------------------------------


def test_apply_slides_tile_into_blank() -> None:
    state = SOLVED_3x3.apply(Move(Direction.DOWN))
    assert state.labels == (0, 1, 2, 3, 4, 8, 6, 7, 5)
    assert state.blank_pos == (1, 2)
    # the original value is untouched
    assert SOLVED_3x3.is_solved()


def test_apply_multi_tile_slide() -> None:
    state = SOLVED_3x3.apply(Move(Direction.RIGHT, 2))
    assert state.rows()[2] == (8, 6, 7)
    assert state.apply(Move(Direction.LEFT, 2)) == SOLVED_3x3


@pytest.mark.parametrize(
    "move",
    [Move(Direction.UP), Move(Direction.LEFT), Move(Direction.DOWN, 3), Move(Direction.DOWN, blank=3)],
    ids=["up-off-grid", "left-off-grid", "slide-too-long", "not-a-blank"],
)
def test_illegal_moves(move: Move) -> None:
    with pytest.raises(IllegalMove):
        SOLVED_3x3.apply(move)
    assert SOLVED_3x3.try_apply(move) is None


def test_move_amount_must_be_positive() -> None:
    with pytest.raises(IllegalMove):
        Move(Direction.UP, 0)


def test_apply_all() -> None:
    moves = [Move(Direction.DOWN), Move(Direction.RIGHT), Move(Direction.UP), Move(Direction.LEFT)]
    state = SOLVED_3x3.apply_all(moves)
    assert str(state) == "1 2 3/4 8 5/7 6 0"


def test_moves_are_invertible() -> None:
    rng = random.Random(7)
    for rows, cols in [(2, 2), (3, 3), (3, 5), (1, 4), (4, 4)]:
        for _ in range(20):
            state = Scrambler.scramble(Size(rows, cols), rng)
            for move in state.legal_moves(multi_tile=True):
                assert state.apply(move).apply(move.inverse()) == state, (
                    f"{move} is not undone by {move.inverse()} on {state}"
                )


def test_reverse_move_is_reported_legal() -> None:
    rng = random.Random(11)
    state = Scrambler.scramble(Size(3, 3), rng, strategy=RandomMoves(moves=30))
    for move in state.legal_moves():
        after = state.apply(move)
        assert move.inverse() in after.legal_moves()


# -- multiple blanks ----------------------------------------------------------


def test_multi_blank_state() -> None:
    state = GridState.from_display("1 2 3/4 0 0")
    assert state.variant is Variant.MULTI_BLANK
    assert state.blank_count == 2
    assert state.tile_count == 4
    assert list(state.blank_labels) == [4, 5]
    assert state.is_solved()


def test_multi_blank_blanks_are_interchangeable_when_solved() -> None:
    state = GridState(Size(2, 3), (0, 1, 2, 3, 5, 4), blank_count=2)
    assert state.is_solved()


def test_multi_blank_moves_name_their_blank() -> None:
    state = GridState.from_display("1 2 3/4 0 0")
    with pytest.raises(IllegalMove):
        state.apply(Move(Direction.DOWN))

    moves = state.legal_moves()
    assert all(m.blank in (4, 5) for m in moves)
    # neither blank may take the other's place
    assert Move(Direction.RIGHT, blank=5) not in moves
    assert Move(Direction.LEFT, blank=4) not in moves

    after = state.apply(Move(Direction.DOWN, blank=4))
    assert str(after) == "1 0 3/4 2 0"
    assert after.apply(Move(Direction.UP, blank=4)) == state


def test_multi_blank_slide_cannot_push_a_blank() -> None:
    state = GridState.from_display("1 2 3/0 0 4")
    with pytest.raises(IllegalMove):
        state.apply(Move(Direction.LEFT, 2, blank=4))
