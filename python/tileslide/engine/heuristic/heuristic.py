"""Admissible lower bounds on the number of single-tile moves to solve."""

from __future__ import annotations

from bisect import bisect_left
from collections.abc import Sequence
from enum import StrEnum

from tileslide.models.grid import GridState, Size
from tileslide.models.moves import Metric


class HeuristicKind(StrEnum):
    MANHATTAN = "manhattan"
    LINEAR_CONFLICT = "linear_conflict"


class Heuristic:
    """Base class for heuristics bound to one grid size and blank count.

    Heuristics work on a flat list of labels (``cells[i]`` is the label on
    cell ``i``) so the search can evaluate its working copy directly.
    """

    kind: HeuristicKind

    def __init__(self, size: Size, blank_count: int = 1) -> None:
        self.size = size
        self.blank_count = blank_count
        self.tile_count = size.area - blank_count

    def evaluate(self, cells: Sequence[int]) -> int:
        raise NotImplementedError

    def update(self, h: int, cells: Sequence[int], label: int, src: int, dst: int) -> int:
        """Value for *cells*, given tile *label* just moved from *src* to *dst*.

        *h* is the value before the move.  Subclasses may use it to avoid a
        full recomputation.
        """
        return self.evaluate(cells)

    def bound(self, state: GridState) -> int:
        return self.evaluate(state.labels)


class ManhattanDistance(Heuristic):
    """Sum of taxicab distances of every tile from its home cell."""

    kind = HeuristicKind.MANHATTAN

    def __init__(self, size: Size, blank_count: int = 1) -> None:
        super().__init__(size, blank_count)
        n = size.area
        # dist[label][cell]
        self._dist: list[list[int]] = []
        for label in range(n):
            row: list[int] = []
            lr, lc = size.coords(label)
            for cell in range(n):
                if label >= self.tile_count:
                    row.append(0)
                else:
                    r, c = size.coords(cell)
                    row.append(abs(r - lr) + abs(c - lc))
            self._dist.append(row)

    def evaluate(self, cells: Sequence[int]) -> int:
        dist = self._dist
        return sum(dist[label][cell] for cell, label in enumerate(cells))

    def update(self, h: int, cells: Sequence[int], label: int, src: int, dst: int) -> int:
        d = self._dist[label]
        return h - d[src] + d[dst]


class LinearConflict(ManhattanDistance):
    """Manhattan distance plus two moves per tile that must leave its line.

    For each row, take the tiles currently in that row whose home is also in
    that row.  Reading them left to right, their home columns must end up
    increasing; at least ``k - LIS`` of the ``k`` tiles have to step out of
    the row and back, where ``LIS`` is the longest increasing subsequence of
    the home columns.  Each such tile costs two moves beyond its Manhattan
    distance.  Columns are treated the same way with home rows.
    """

    kind = HeuristicKind.LINEAR_CONFLICT

    def evaluate(self, cells: Sequence[int]) -> int:
        return super().evaluate(cells) + self._conflicts(cells)

    def update(self, h: int, cells: Sequence[int], label: int, src: int, dst: int) -> int:
        return self.evaluate(cells)

    def _conflicts(self, cells: Sequence[int]) -> int:
        rows, cols = self.size.rows, self.size.cols
        tiles = self.tile_count
        extra = 0
        for r in range(rows):
            homes = []
            for c in range(cols):
                label = cells[r * cols + c]
                if label < tiles and label // cols == r:
                    homes.append(label % cols)
            extra += len(homes) - _lis_length(homes)
        for c in range(cols):
            homes = []
            for r in range(rows):
                label = cells[r * cols + c]
                if label < tiles and label % cols == c:
                    homes.append(label // cols)
            extra += len(homes) - _lis_length(homes)
        return 2 * extra


def _lis_length(values: list[int]) -> int:
    """Length of the longest strictly increasing subsequence."""
    tails: list[int] = []
    for v in values:
        i = bisect_left(tails, v)
        if i == len(tails):
            tails.append(v)
        else:
            tails[i] = v
    return len(tails)


_KINDS: dict[HeuristicKind, type[Heuristic]] = {
    HeuristicKind.MANHATTAN: ManhattanDistance,
    HeuristicKind.LINEAR_CONFLICT: LinearConflict,
}


def make_heuristic(
    kind: HeuristicKind, size: Size, blank_count: int = 1
) -> Heuristic:
    return _KINDS[HeuristicKind(kind)](size, blank_count)


def slide_bound(h: int, size: Size) -> int:
    """Turn a single-tile bound *h* into a bound on multi-tile slides.

    One slide carries at most ``max(rows, cols) - 1`` tiles one cell each, and
    every single-tile step changes *h* by exactly one.
    """
    reach = max(size.rows, size.cols, 2) - 1
    return -(-h // reach)


def heuristic(
    state: GridState,
    kind: HeuristicKind = HeuristicKind.MANHATTAN,
    metric: Metric = Metric.STM,
) -> int:
    """Lower bound on the moves needed to solve *state* under *metric*."""
    h = make_heuristic(kind, state.size, state.blank_count).bound(state)
    if Metric(metric) is Metric.MTM:
        return slide_bound(h, state.size)
    return h
