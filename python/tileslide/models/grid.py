"""Grid state model for rectangular sliding puzzles."""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from enum import StrEnum
from functools import cached_property

from tileslide.models.errors import (
    IllegalMove,
    InvalidDimensions,
    InvalidLabeling,
    ParseError,
)
from tileslide.models.moves import CANONICAL_ORDER, Move


class Variant(StrEnum):
    SINGLE_BLANK = "single-blank"
    MULTI_BLANK = "multi-blank"


@dataclass(frozen=True)
class Size:
    rows: int
    cols: int

    def __post_init__(self) -> None:
        if self.rows < 1 or self.cols < 1:
            raise InvalidDimensions(
                f"A grid needs at least one row and one column, "
                f"got {self.rows}×{self.cols}."
            )

    @property
    def area(self) -> int:
        return self.rows * self.cols

    @property
    def is_line(self) -> bool:
        """True for 1×N and N×1 grids, where tiles can never pass each other."""
        return self.rows == 1 or self.cols == 1

    def coords(self, index: int) -> tuple[int, int]:
        return divmod(index, self.cols)

    def index(self, row: int, col: int) -> int:
        return row * self.cols + col

    def contains(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def __str__(self) -> str:
        return f"{self.rows}x{self.cols}"


@dataclass(frozen=True)
class GridState:
    """An immutable arrangement of labelled tiles.

    ``labels[i]`` is the label sitting on flat cell ``i`` (row-major).  Labels
    run from ``0`` to ``R*C-1``; the last ``blank_count`` of them are blanks.
    In the solved arrangement every cell ``i`` holds label ``i``.

    Example::

        GridState(Size(3, 3), [0, 1, 2, 3, 4, 5, 6, 8, 7])
    """

    size: Size
    labels: tuple[int, ...]
    blank_count: int = field(default=1)

    def __post_init__(self) -> None:
        labels = tuple(self.labels)
        object.__setattr__(self, "labels", labels)
        n = self.size.area
        if len(labels) != n:
            raise InvalidLabeling(
                f"Expected {n} labels for a {self.size.rows}×{self.size.cols} "
                f"grid, got {len(labels)}."
            )
        if sorted(labels) != list(range(n)):
            raise InvalidLabeling(
                f"Labels must be a permutation of 0..{n - 1}, got {list(labels)}."
            )
        if not 1 <= self.blank_count <= n:
            raise InvalidLabeling(
                f"Blank count must be between 1 and {n}, got {self.blank_count}."
            )

    # -- construction helpers -------------------------------------------------

    @classmethod
    def solved(cls, size: Size, blank_count: int = 1) -> GridState:
        return cls(size, tuple(range(size.area)), blank_count)

    @classmethod
    def from_rows(
        cls, rows: Sequence[Sequence[int]], blank_count: int = 1
    ) -> GridState:
        """Build a state from a 2D list of internal labels."""
        if not rows or any(len(r) != len(rows[0]) for r in rows):
            raise InvalidLabeling("Rows must be non-empty and of equal width.")
        size = Size(len(rows), len(rows[0]))
        return cls(size, tuple(v for row in rows for v in row), blank_count)

    @classmethod
    def from_display(cls, text: str) -> GridState:
        """Parse the conventional notation with tiles numbered from 1.

        ``0`` marks a blank; rows are separated by ``/`` or newlines::

            GridState.from_display("1 2 3/4 5 6/7 8 0")
        """
        raw_rows = [r for r in re.split(r"[/\n]", text.strip()) if r.strip()]
        try:
            rows = [[int(tok) for tok in re.split(r"[\s,]+", r.strip())] for r in raw_rows]
        except ValueError:
            raise ParseError(f"Cannot parse puzzle {text!r}.") from None
        if not rows or any(len(r) != len(rows[0]) for r in rows):
            raise InvalidLabeling(f"Rows of {text!r} are not of equal width.")

        size = Size(len(rows), len(rows[0]))
        flat = [v for row in rows for v in row]
        blank_count = flat.count(0)
        tiles = size.area - blank_count
        if blank_count == 0:
            raise InvalidLabeling(f"Puzzle {text!r} has no blank (0).")
        if sorted(v for v in flat if v) != list(range(1, tiles + 1)):
            raise InvalidLabeling(
                f"Tiles of {text!r} must be numbered 1..{tiles} exactly once."
            )

        labels: list[int] = []
        next_blank = tiles
        for v in flat:
            if v == 0:
                labels.append(next_blank)
                next_blank += 1
            else:
                labels.append(v - 1)
        return cls(size, tuple(labels), blank_count)

    # -- queries --------------------------------------------------------------

    @property
    def variant(self) -> Variant:
        if self.blank_count == 1:
            return Variant.SINGLE_BLANK
        return Variant.MULTI_BLANK

    @property
    def tile_count(self) -> int:
        return self.size.area - self.blank_count

    @property
    def blank_labels(self) -> range:
        return range(self.tile_count, self.size.area)

    def is_blank(self, label: int) -> bool:
        return label >= self.tile_count

    @cached_property
    def _positions(self) -> tuple[int, ...]:
        pos = [0] * len(self.labels)
        for i, label in enumerate(self.labels):
            pos[label] = i
        return tuple(pos)

    def index_of(self, label: int) -> int:
        return self._positions[label]

    def position_of(self, label: int) -> tuple[int, int]:
        return self.size.coords(self._positions[label])

    def label_at(self, row: int, col: int) -> int:
        return self.labels[self.size.index(row, col)]

    @property
    def blank_positions(self) -> tuple[tuple[int, int], ...]:
        return tuple(self.position_of(b) for b in self.blank_labels)

    @property
    def blank_pos(self) -> tuple[int, int]:
        """Position of the blank; for multi-blank states, the first blank label."""
        return self.position_of(self.tile_count)

    def rows(self) -> tuple[tuple[int, ...], ...]:
        c = self.size.cols
        return tuple(self.labels[r * c : (r + 1) * c] for r in range(self.size.rows))

    def display_rows(self) -> tuple[tuple[int, ...], ...]:
        """Rows in display numbering: tiles from 1, blanks as 0."""
        return tuple(
            tuple(0 if self.is_blank(v) else v + 1 for v in row)
            for row in self.rows()
        )

    def is_solved(self) -> bool:
        """Check if every tile sits on its home cell (blanks are interchangeable)."""
        return all(self.labels[i] == i for i in range(self.tile_count))

    def is_tile_correct(self, row: int, col: int) -> bool:
        """Check if the cell holds its solved occupant."""
        label = self.label_at(row, col)
        if self.is_blank(label):
            return self.size.index(row, col) >= self.tile_count
        return self.size.index(row, col) == label

    def __str__(self) -> str:
        return "/".join(" ".join(str(v) for v in row) for row in self.display_rows())

    # -- moves ----------------------------------------------------------------

    def _resolve_blank(self, move: Move) -> int:
        if move.blank is None:
            if self.blank_count != 1:
                raise IllegalMove(
                    f"Move {move} must name a blank on a "
                    f"{self.blank_count}-blank puzzle."
                )
            return self.tile_count
        if not self.is_blank(move.blank) or move.blank >= self.size.area:
            raise IllegalMove(f"Label {move.blank} is not a blank.")
        return move.blank

    def _slide_cells(self, blank: int, move: Move) -> list[int]:
        """Cells from the blank back along the slide, blank cell first."""
        br, bc = self.position_of(blank)
        dr, dc = move.direction.offset
        cells = [self.size.index(br, bc)]
        for i in range(1, move.amount + 1):
            r, c = br - dr * i, bc - dc * i
            if not self.size.contains(r, c):
                raise IllegalMove(
                    f"Move {move} needs a tile at ({r}, {c}), outside the "
                    f"{self.size.rows}×{self.size.cols} grid."
                )
            idx = self.size.index(r, c)
            if self.is_blank(self.labels[idx]):
                raise IllegalMove(f"Move {move} would slide a blank at ({r}, {c}).")
            cells.append(idx)
        return cells

    def apply(self, move: Move) -> GridState:
        """Return the state after *move*; raises ``IllegalMove``."""
        blank = self._resolve_blank(move)
        cells = self._slide_cells(blank, move)
        labels = list(self.labels)
        for dst, src in zip(cells, cells[1:]):
            labels[dst] = self.labels[src]
        labels[cells[-1]] = blank
        return GridState(self.size, tuple(labels), self.blank_count)

    def try_apply(self, move: Move) -> GridState | None:
        """Like :meth:`apply` but returns ``None`` for an illegal move."""
        try:
            return self.apply(move)
        except IllegalMove:
            return None

    def apply_all(self, moves: Iterable[Move]) -> GridState:
        state = self
        for move in moves:
            state = state.apply(move)
        return state

    def legal_moves(self, multi_tile: bool = False) -> tuple[Move, ...]:
        """Moves available from this state, in canonical order.

        With ``multi_tile`` the slides of several tiles in a line are listed
        after the single-tile move of each direction.
        """
        moves: list[Move] = []
        single = self.blank_count == 1
        for blank in self.blank_labels:
            br, bc = self.position_of(blank)
            for direction in CANONICAL_ORDER:
                dr, dc = direction.offset
                reach = 0
                r, c = br - dr, bc - dc
                while self.size.contains(r, c) and not self.is_blank(self.label_at(r, c)):
                    reach += 1
                    if not multi_tile:
                        break
                    r, c = r - dr, c - dc
                for amount in range(1, reach + 1):
                    moves.append(Move(direction, amount, None if single else blank))
        return tuple(moves)
