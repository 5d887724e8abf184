"""Moves, move metrics, and move sequences.

Directions name the way the *tile* travels.  ``Direction.UP`` slides the
tile below the blank upward, so the blank itself travels down.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from tileslide.models.errors import IllegalMove, ParseError

if TYPE_CHECKING:
    from tileslide.models.grid import GridState


class Direction(StrEnum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def letter(self) -> str:
        return self.value[0].upper()

    @property
    def offset(self) -> tuple[int, int]:
        """(drow, dcol) travelled by a tile moving in this direction."""
        return _OFFSETS[self]

    def inverse(self) -> Direction:
        return _INVERSES[self]

    def transpose(self) -> Direction:
        """Reflect in the main diagonal (rows become columns)."""
        return _TRANSPOSES[self]

    @classmethod
    def from_letter(cls, letter: str) -> Direction:
        try:
            return _LETTERS[letter.upper()]
        except KeyError:
            raise ParseError(
                f"Unknown direction {letter!r}; expected one of U, D, L, R."
            ) from None


_OFFSETS = {
    Direction.UP: (-1, 0),
    Direction.DOWN: (1, 0),
    Direction.LEFT: (0, -1),
    Direction.RIGHT: (0, 1),
}
_INVERSES = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}
_TRANSPOSES = {
    Direction.UP: Direction.LEFT,
    Direction.LEFT: Direction.UP,
    Direction.DOWN: Direction.RIGHT,
    Direction.RIGHT: Direction.DOWN,
}
_LETTERS = {d.letter: d for d in Direction}

# Order in which moves are generated and explored.
CANONICAL_ORDER: tuple[Direction, ...] = (
    Direction.UP,
    Direction.DOWN,
    Direction.LEFT,
    Direction.RIGHT,
)


@dataclass(frozen=True)
class Move:
    """Slide ``amount`` tiles one cell each in ``direction``.

    ``blank`` is the label of the blank being filled; ``None`` refers to the
    only blank of a single-blank puzzle.
    """

    direction: Direction
    amount: int = 1
    blank: int | None = None

    def __post_init__(self) -> None:
        if self.amount < 1:
            raise IllegalMove(f"Move amount must be positive, got {self.amount}.")

    def inverse(self) -> Move:
        return Move(self.direction.inverse(), self.amount, self.blank)

    def transpose(self) -> Move:
        return Move(self.direction.transpose(), self.amount, self.blank)

    def __str__(self) -> str:
        text = self.direction.letter
        if self.amount > 1:
            text += str(self.amount)
        if self.blank is not None:
            text += f"#{self.blank}"
        return text

    @classmethod
    def parse(cls, text: str) -> Move:
        match = _MOVE_RE.fullmatch(text.strip())
        if match is None:
            raise ParseError(f"Cannot parse move {text!r}.")
        letter, amount, blank = match.groups()
        if amount and int(amount) < 1:
            raise ParseError(f"Move {text!r} slides no tiles.")
        return cls(
            Direction.from_letter(letter),
            int(amount) if amount else 1,
            int(blank) if blank else None,
        )


_MOVE_RE = re.compile(r"([UDLRudlr])(\d*)(?:#(\d+))?")


class Metric(StrEnum):
    """How the length of a move is counted."""

    STM = "stm"  # single tile moves
    MTM = "mtm"  # multi tile moves

    def length(self, move: Move) -> int:
        if self is Metric.STM:
            return move.amount
        return 1


class Algorithm:
    """An ordered sequence of moves."""

    __slots__ = ("_moves",)

    def __init__(self, moves: Iterable[Move] = ()) -> None:
        self._moves: tuple[Move, ...] = tuple(moves)

    # -- construction helpers -------------------------------------------------

    @classmethod
    def parse(cls, text: str) -> Algorithm:
        """Parse compact notation such as ``"U2 R D3L"``.

        Whitespace between moves is optional.
        """
        compact = "".join(text.split())
        moves: list[Move] = []
        pos = 0
        while pos < len(compact):
            match = _MOVE_RE.match(compact, pos)
            if match is None:
                raise ParseError(
                    f"Cannot parse algorithm {text!r} at position {pos}."
                )
            moves.append(Move.parse(match.group(0)))
            pos = match.end()
        return cls(moves)

    # -- sequence protocol ----------------------------------------------------

    @property
    def moves(self) -> tuple[Move, ...]:
        return self._moves

    def __iter__(self) -> Iterator[Move]:
        return iter(self._moves)

    def __len__(self) -> int:
        return len(self._moves)

    def __getitem__(self, index: int) -> Move:
        return self._moves[index]

    def __bool__(self) -> bool:
        return bool(self._moves)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Algorithm):
            return NotImplemented
        return self._moves == other._moves

    def __hash__(self) -> int:
        return hash(self._moves)

    def __add__(self, other: Algorithm) -> Algorithm:
        return Algorithm(self._moves + other._moves)

    def __repr__(self) -> str:
        return f"Algorithm({str(self)!r})"

    def __str__(self) -> str:
        return self.display(spaced=False)

    def display(self, spaced: bool = True) -> str:
        return (" " if spaced else "").join(str(m) for m in self._moves)

    # -- metrics --------------------------------------------------------------

    def length(self, metric: Metric = Metric.STM) -> int:
        return sum(metric.length(m) for m in self._moves)

    @property
    def len_stm(self) -> int:
        return self.length(Metric.STM)

    @property
    def len_mtm(self) -> int:
        return self.length(Metric.MTM)

    # -- transforms -----------------------------------------------------------

    def inverse(self) -> Algorithm:
        return Algorithm(m.inverse() for m in reversed(self._moves))

    def transpose(self) -> Algorithm:
        return Algorithm(m.transpose() for m in self._moves)

    def expanded(self) -> Algorithm:
        """Split every multi-tile slide into single-tile moves."""
        return Algorithm(
            Move(m.direction, 1, m.blank)
            for m in self._moves
            for _ in range(m.amount)
        )

    def combined(self) -> Algorithm:
        """Merge consecutive moves in the same direction into one slide."""
        out: list[Move] = []
        for m in self._moves:
            if out and _same_line(out[-1], m) and out[-1].direction == m.direction:
                last = out.pop()
                out.append(Move(m.direction, last.amount + m.amount, m.blank))
            else:
                out.append(m)
        return Algorithm(out)

    def simplified(self) -> Algorithm:
        """Merge same-direction moves and cancel opposing ones."""
        out: list[Move] = []
        for m in self._moves:
            if not out or not _same_line(out[-1], m):
                out.append(m)
                continue
            last = out[-1]
            if last.direction == m.direction:
                out[-1] = Move(m.direction, last.amount + m.amount, m.blank)
            elif last.direction == m.direction.inverse():
                out.pop()
                if last.amount > m.amount:
                    out.append(Move(last.direction, last.amount - m.amount, m.blank))
                elif m.amount > last.amount:
                    out.append(Move(m.direction, m.amount - last.amount, m.blank))
            else:
                out.append(m)
        return Algorithm(out)

    # -- application ----------------------------------------------------------

    def apply_to(self, state: GridState) -> GridState:
        """Return *state* after every move; raises ``IllegalMove``."""
        return state.apply_all(self._moves)

    def is_solution_of(self, state: GridState) -> bool:
        result = state
        for m in self._moves:
            result = result.try_apply(m)
            if result is None:
                return False
        return result.is_solved()


def _same_line(a: Move, b: Move) -> bool:
    return a.blank == b.blank
