"""Shared fixtures: seeded random sources and breadth-first reference distances."""

from __future__ import annotations

import itertools
import random
from collections import deque
from collections.abc import Callable
from functools import cache

import pytest

from tileslide.models.grid import GridState, Size


@cache
def _bfs(
    rows: int, cols: int, blank_count: int, max_depth: int | None, multi_tile: bool
) -> dict[GridState, int]:
    """Distance of every reachable state to the nearest solved arrangement.

    With *multi_tile* a slide of several tiles counts as one move.
    """
    size = Size(rows, cols)
    tiles = size.area - blank_count
    goals = [
        GridState(size, tuple(range(tiles)) + blanks, blank_count)
        for blanks in itertools.permutations(range(tiles, size.area))
    ]
    dist = {g: 0 for g in goals}
    frontier = deque(goals)
    while frontier:
        state = frontier.popleft()
        d = dist[state]
        if max_depth is not None and d >= max_depth:
            continue
        for move in state.legal_moves(multi_tile):
            nxt = state.apply(move)
            if nxt not in dist:
                dist[nxt] = d + 1
                frontier.append(nxt)
    return dist


@pytest.fixture
def bfs_distances() -> Callable[..., dict[GridState, int]]:
    """Return ``f(rows, cols, blank_count=1, max_depth=None, multi_tile=False)``.

    The result maps every reachable state to its distance from the goal.
    """

    def _get(
        rows: int,
        cols: int,
        blank_count: int = 1,
        max_depth: int | None = None,
        multi_tile: bool = False,
    ) -> dict[GridState, int]:
        return _bfs(rows, cols, blank_count, max_depth, multi_tile)

    return _get


@pytest.fixture
def rng() -> random.Random:
    return random.Random(42)
