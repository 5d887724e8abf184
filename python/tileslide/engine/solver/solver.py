"""Optimal sliding puzzle solver (iterative deepening A*)."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterator
from dataclasses import dataclass, field, replace
from enum import StrEnum
from time import perf_counter

from tileslide.config import SearchBudget, SolverSettings, TieBreak
from tileslide.engine.heuristic import Heuristic, make_heuristic, slide_bound
from tileslide.engine.permutation import PermutationAnalyzer
from tileslide.models.grid import GridState
from tileslide.models.moves import CANONICAL_ORDER, Algorithm, Direction, Metric, Move

logger = logging.getLogger(__name__)

_FOUND = -1


class SolveStatus(StrEnum):
    SOLVED = "solved"
    UNSOLVABLE = "unsolvable"
    BUDGET_EXCEEDED = "budget_exceeded"


@dataclass(frozen=True)
class IterationStats:
    """One depth-first pass under a fixed bound."""

    bound: int
    expanded: int


@dataclass
class SearchStats:
    iterations: list[IterationStats] = field(default_factory=list)
    expanded: int = 0
    generated: int = 0
    elapsed: float = 0.0

    @property
    def final_bound(self) -> int | None:
        return self.iterations[-1].bound if self.iterations else None


@dataclass
class Solution:
    """Outcome of :meth:`Solver.solve`.

    ``moves`` is empty unless ``status`` is ``SOLVED``.  An unsolvable start
    and a search that ran out of budget are told apart by ``status``.
    """

    start: GridState
    status: SolveStatus
    moves: Algorithm = field(default_factory=Algorithm)
    stats: SearchStats = field(default_factory=SearchStats)
    reason: str = ""

    @property
    def solved(self) -> bool:
        return self.status is SolveStatus.SOLVED

    @property
    def unsolvable(self) -> bool:
        return self.status is SolveStatus.UNSOLVABLE

    @property
    def budget_exceeded(self) -> bool:
        return self.status is SolveStatus.BUDGET_EXCEEDED

    def __len__(self) -> int:
        return len(self.moves)

    def frames(self) -> Iterator[GridState]:
        """Yield the start state and the state after every move."""
        state = self.start
        yield state
        for move in self.moves:
            state = state.apply(move)
            yield state


class _OutOfBudget(Exception):
    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


# (move, blank label, source cells in slide order)
_Child = tuple[Move, int, tuple[int, ...]]


class _Frame:
    """One node on the explicit depth-first stack."""

    __slots__ = ("g", "h", "children", "applied")

    def __init__(self, g: int, h: int, children: Iterator[_Child]) -> None:
        self.g = g
        self.h = h
        self.children = children
        # (blank, cells the slide filled) of the child currently on the path
        self.applied: tuple[int, list[int]] | None = None


class _Search:
    """Mutable working copy of one puzzle for a single solve call.

    Cells are flat (row-major) with precomputed line tables, so slides are
    applied and undone in place.  The depth-first pass keeps its own stack,
    so solution length is not limited by the interpreter's recursion depth.
    """

    def __init__(self, state: GridState, heuristic: Heuristic, settings: SolverSettings) -> None:
        size = state.size
        self.size = size
        self.cells = list(state.labels)
        self.pos = [0] * size.area
        for i, label in enumerate(self.cells):
            self.pos[label] = i
        self.tile_count = state.tile_count
        self.blanks = tuple(state.blank_labels)
        self.single = state.blank_count == 1
        self.heuristic = heuristic
        self.lowest_h_first = settings.tie_break is TieBreak.LOWEST_H
        self.multi_tile = Metric(settings.metric) is Metric.MTM
        self.budget = settings.budget
        self.stats = SearchStats()
        self.path: list[Move] = []
        self.started = perf_counter()

        # lines[cell] -> ((direction, source cells), ...): the tiles on the
        # source cells, nearest first, move in `direction` toward a blank on
        # `cell`.
        self.lines: list[tuple[tuple[Direction, tuple[int, ...]], ...]] = []
        for cell in range(size.area):
            r, c = size.coords(cell)
            out: list[tuple[Direction, tuple[int, ...]]] = []
            for d in CANONICAL_ORDER:
                dr, dc = d.offset
                srcs: list[int] = []
                sr, sc = r - dr, c - dc
                while size.contains(sr, sc):
                    srcs.append(size.index(sr, sc))
                    sr, sc = sr - dr, sc - dc
                if srcs:
                    out.append((d, tuple(srcs)))
            self.lines.append(tuple(out))

    def estimate(self, h: int) -> int:
        if self.multi_tile:
            return slide_bound(h, self.size)
        return h

    # -- in-place moves -------------------------------------------------------

    def _slide(self, blank: int, src: int) -> tuple[int, int]:
        dst = self.pos[blank]
        label = self.cells[src]
        self.cells[dst] = label
        self.cells[src] = blank
        self.pos[label] = dst
        self.pos[blank] = src
        return label, dst

    def _apply(self, h: int, blank: int, srcs: tuple[int, ...]) -> tuple[int, list[int]]:
        """Slide the tiles on *srcs* one after another; returns (h, filled cells)."""
        dsts: list[int] = []
        for src in srcs:
            label, dst = self._slide(blank, src)
            h = self.heuristic.update(h, self.cells, label, src, dst)
            dsts.append(dst)
        return h, dsts

    def _undo(self, blank: int, dsts: list[int]) -> None:
        for dst in reversed(dsts):
            self._slide(blank, dst)

    def _pruned(self, last: Move | None, direction: Direction, blank: int | None) -> bool:
        if last is None or last.blank != blank:
            return False
        if self.multi_tile:
            # two slides of one blank along one axis merge into one or none
            return direction in (last.direction, last.direction.inverse())
        return direction is last.direction.inverse()

    def _children(self, h: int, last: Move | None) -> list[_Child]:
        """Every move except those that undo or extend the previous one."""
        scored: list[tuple[int, _Child]] = []
        for blank in self.blanks:
            name = None if self.single else blank
            for d, line in self.lines[self.pos[blank]]:
                if self._pruned(last, d, name):
                    continue
                reach = 0
                for src in line:
                    if self.cells[src] >= self.tile_count:
                        break
                    reach += 1
                    if not self.multi_tile:
                        break
                for amount in range(1, reach + 1):
                    child = (Move(d, amount, name), blank, line[:amount])
                    child_h = -1
                    if self.lowest_h_first:
                        child_h, dsts = self._apply(h, blank, child[2])
                        self._undo(blank, dsts)
                    scored.append((child_h, child))
        if self.lowest_h_first:
            scored.sort(key=lambda item: item[0])
        return [child for _, child in scored]

    # -- budget ---------------------------------------------------------------

    def _check_budget(self) -> None:
        budget = self.budget
        if budget.max_nodes is not None and self.stats.expanded >= budget.max_nodes:
            raise _OutOfBudget(f"expanded {budget.max_nodes} nodes without a solution")
        if budget.time_limit is not None and perf_counter() - self.started > budget.time_limit:
            raise _OutOfBudget(f"exceeded the {budget.time_limit}s time limit")

    # -- depth-first pass -----------------------------------------------------

    def _expand(self, g: int, h: int, last: Move | None) -> _Frame:
        self._check_budget()
        self.stats.expanded += 1
        return _Frame(g, h, iter(self._children(h, last)))

    def dfs(self, h0: int, bound: int) -> float:
        """Return ``_FOUND`` or the smallest f-value that exceeded *bound*."""
        f = self.estimate(h0)
        if f > bound:
            return f
        if h0 == 0:
            return _FOUND

        next_bound = math.inf
        stack = [self._expand(0, h0, None)]
        while stack:
            frame = stack[-1]
            if frame.applied is not None:
                self._undo(*frame.applied)
                frame.applied = None
                self.path.pop()

            child = next(frame.children, None)
            if child is None:
                stack.pop()
                continue

            move, blank, srcs = child
            h, dsts = self._apply(frame.h, blank, srcs)
            self.stats.generated += 1
            g = frame.g + 1
            f = g + self.estimate(h)
            if f > bound:
                self._undo(blank, dsts)
                if f < next_bound:
                    next_bound = f
                continue

            self.path.append(move)
            if h == 0:
                return _FOUND
            frame.applied = (blank, dsts)
            stack.append(self._expand(g, h, move))

        return next_bound

    def run(self) -> Algorithm:
        """Deepen the bound until a solution appears; raises ``_OutOfBudget``."""
        max_bound = self.budget.max_bound
        h0 = self.heuristic.evaluate(self.cells)
        bound = self.estimate(h0)
        while True:
            if max_bound is not None and bound > max_bound:
                raise _OutOfBudget(f"bound {bound} exceeds the maximum of {max_bound}")

            before = self.stats.expanded
            try:
                t = self.dfs(h0, bound)
            finally:
                self.stats.iterations.append(
                    IterationStats(bound=bound, expanded=self.stats.expanded - before)
                )
            logger.debug(
                "IDA* pass with bound %d expanded %d nodes",
                bound, self.stats.expanded - before,
            )
            if t == _FOUND:
                return Algorithm(self.path)
            if t == math.inf:
                raise RuntimeError("Search space exhausted on a solvable puzzle.")
            bound = int(t)


class Solver:
    """Finds solutions with the fewest moves under the configured metric.

    ``Metric.STM`` counts every tile that moves; ``Metric.MTM`` counts a slide
    of several tiles in a line as one move.
    """

    def __init__(self, settings: SolverSettings | None = None) -> None:
        self.settings = settings or SolverSettings()

    def solve(self, state: GridState) -> Solution:
        """Return the optimal solution of *state* or a typed failure."""
        if not PermutationAnalyzer.is_solvable(state):
            logger.info("Refusing to search unsolvable puzzle %s", state)
            return Solution(
                start=state,
                status=SolveStatus.UNSOLVABLE,
                reason="the arrangement is in the unreachable parity class",
            )
        if state.is_solved():
            return Solution(start=state, status=SolveStatus.SOLVED)

        heuristic = make_heuristic(self.settings.heuristic, state.size, state.blank_count)
        search = _Search(state, heuristic, self.settings)
        try:
            moves = search.run()
        except _OutOfBudget as exc:
            search.stats.elapsed = perf_counter() - search.started
            logger.info("Search stopped for %s: %s", state, exc.reason)
            return Solution(
                start=state,
                status=SolveStatus.BUDGET_EXCEEDED,
                stats=search.stats,
                reason=exc.reason,
            )

        search.stats.elapsed = perf_counter() - search.started
        logger.info(
            "Solved %s in %d moves (%d nodes, %.3fs)",
            state, len(moves), search.stats.expanded, search.stats.elapsed,
        )
        return Solution(start=state, status=SolveStatus.SOLVED, moves=moves, stats=search.stats)

    def hint(self, state: GridState) -> Move | None:
        """Return the first move of an optimal solution, or ``None`` if there is none."""
        solution = self.solve(state)
        if not solution.solved or not solution.moves:
            return None
        return solution.moves[0]


def solve(
    state: GridState,
    settings: SolverSettings | None = None,
    budget: SearchBudget | None = None,
) -> Solution:
    """Solve *state* with default settings, optionally under *budget*."""
    settings = settings or SolverSettings()
    if budget is not None:
        settings = replace(settings, budget=budget)
    return Solver(settings).solve(state)
