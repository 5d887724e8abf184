"""Generates random solvable puzzles."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass

from tileslide.engine.permutation import PermutationAnalyzer
from tileslide.models.errors import InvalidDimensions, InvalidLabeling
from tileslide.models.grid import GridState, Size
from tileslide.models.moves import Move

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RandomState:
    """Uniformly random solvable state.

    Shuffles every label, then fixes an unsolvable draw by swapping two
    tiles.  The swap is a bijection between the two parity classes, so the
    result stays uniform over the solvable half.
    """

    def is_valid_size(self, size: Size) -> bool:
        return size.area >= 2

    def scramble(self, size: Size, rng: random.Random, blank_count: int = 1) -> GridState:
        n = size.area
        tiles = n - blank_count
        if size.is_line:
            # Only the blank positions are free; tiles keep their order.
            blank_cells = set(rng.sample(range(n), blank_count))
            labels: list[int] = []
            next_tile, next_blank = 0, tiles
            for cell in range(n):
                if cell in blank_cells:
                    labels.append(next_blank)
                    next_blank += 1
                else:
                    labels.append(next_tile)
                    next_tile += 1
            return GridState(size, tuple(labels), blank_count)

        labels = list(range(n))
        rng.shuffle(labels)
        state = GridState(size, tuple(labels), blank_count)
        if PermutationAnalyzer.is_solvable(state):
            return state

        i, j = [cell for cell, label in enumerate(labels) if label < tiles][:2]
        labels[i], labels[j] = labels[j], labels[i]
        logger.debug("Repaired unsolvable draw by swapping cells %d and %d", i, j)
        return GridState(size, tuple(labels), blank_count)


@dataclass(frozen=True)
class RandomInvertibleState:
    """Uniformly random solvable state with the blanks on their solved cells."""

    def is_valid_size(self, size: Size) -> bool:
        return size.rows > 1 and size.cols > 1

    def scramble(self, size: Size, rng: random.Random, blank_count: int = 1) -> GridState:
        n = size.area
        tiles = n - blank_count
        labels = list(range(n))
        parity = 0
        for i in range(tiles - 1):
            j = rng.randrange(i, tiles)
            if i != j:
                labels[i], labels[j] = labels[j], labels[i]
                parity ^= 1
        if parity and blank_count == 1:
            labels[tiles - 2], labels[tiles - 1] = labels[tiles - 1], labels[tiles - 2]
        return GridState(size, tuple(labels), blank_count)


@dataclass(frozen=True)
class RandomMoves:
    """Random walk of legal single-tile moves from the solved state.

    Not uniform for short walks.  ``moves=None`` walks ``20 * area**2``
    steps.  Immediate backtracking is avoided unless it is the only move.
    """

    moves: int | None = None
    allow_backtracking: bool = False

    def is_valid_size(self, size: Size) -> bool:
        return size.area >= 2

    def walk_length(self, size: Size) -> int:
        if self.moves is not None:
            return self.moves
        return 20 * size.area * size.area

    def scramble(self, size: Size, rng: random.Random, blank_count: int = 1) -> GridState:
        state = GridState.solved(size, blank_count)
        prev: Move | None = None
        for _ in range(self.walk_length(size)):
            candidates = list(state.legal_moves())
            if not candidates:
                break
            if not self.allow_backtracking and prev is not None:
                reverse = prev.inverse()
                if reverse in candidates and len(candidates) > 1:
                    candidates.remove(reverse)
            move = rng.choice(candidates)
            state = state.apply(move)
            prev = move
        return state


@dataclass(frozen=True)
class Cycle:
    """Solved state with the tiles on ``length`` random cells rotated.

    An even cycle is an odd permutation, so the last two tiles, kept out of
    the cycle, are swapped as well.  The blanks stay on their solved cells.
    """

    length: int = 3

    def __post_init__(self) -> None:
        if self.length < 2:
            raise ValueError(f"Cycle length must be at least 2, got {self.length}.")

    def is_valid_size(self, size: Size) -> bool:
        return size.rows > 1 and size.cols > 1

    def cycle_length(self, tiles: int) -> int:
        """Length actually used on a puzzle with *tiles* tiles."""
        length = min(self.length, tiles if tiles % 2 else tiles - 1)
        if length % 2 == 0 and length > tiles - 2:
            length -= 1
        return max(length, 0)

    def scramble(self, size: Size, rng: random.Random, blank_count: int = 1) -> GridState:
        tiles = size.area - blank_count
        labels = list(range(size.area))
        length = self.cycle_length(tiles)
        if length < 2:
            return GridState(size, tuple(labels), blank_count)

        pool = tiles if length % 2 else tiles - 2
        cells = rng.sample(range(pool), length)
        first = labels[cells[0]]
        for dst, src in zip(cells, cells[1:]):
            labels[dst] = labels[src]
        labels[cells[-1]] = first
        if length % 2 == 0:
            labels[tiles - 2], labels[tiles - 1] = labels[tiles - 1], labels[tiles - 2]
        return GridState(size, tuple(labels), blank_count)


Strategy = RandomState | RandomInvertibleState | RandomMoves | Cycle


class Scrambler:
    """Creates solvable puzzles from an explicitly owned random source."""

    @staticmethod
    def solved(size: Size, blank_count: int = 1) -> GridState:
        """Return the goal state (tiles in order, blanks last)."""
        return GridState.solved(size, blank_count)

    @staticmethod
    def scramble(
        size: Size,
        rng: random.Random,
        *,
        blank_count: int = 1,
        strategy: Strategy | None = None,
    ) -> GridState:
        """Return a random *solvable* state of the given size."""
        strategy = strategy or RandomState()
        if size.area < 2:
            raise InvalidDimensions(
                f"A {size.rows}×{size.cols} grid has fewer than 2 cells."
            )
        if not 1 <= blank_count < size.area:
            raise InvalidLabeling(
                f"Blank count must be between 1 and {size.area - 1}, got {blank_count}."
            )
        if not strategy.is_valid_size(size):
            raise InvalidDimensions(
                f"{type(strategy).__name__} cannot scramble a {size.rows}×{size.cols} grid."
            )
        state = strategy.scramble(size, rng, blank_count)
        logger.debug("Scrambled %s with %s: %s", size, type(strategy).__name__, state)
        return state


def scramble(
    size: Size,
    rng: random.Random,
    *,
    blank_count: int = 1,
    strategy: Strategy | None = None,
) -> GridState:
    return Scrambler.scramble(size, rng, blank_count=blank_count, strategy=strategy)
