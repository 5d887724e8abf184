"""Permutation parity, cycle structure and solvability."""

from __future__ import annotations

from dataclasses import dataclass

from tileslide.models.grid import GridState


@dataclass(frozen=True)
class PermutationSignature:
    """Parity of the arrangement and the blank's offset from its solved cell."""

    parity: int
    blank_offset: tuple[int, int]

    @property
    def blank_parity(self) -> int:
        return (abs(self.blank_offset[0]) + abs(self.blank_offset[1])) % 2


class PermutationAnalyzer:
    """Stateless analyzer: all methods are static."""

    @staticmethod
    def cycles(state: GridState) -> list[tuple[int, ...]]:
        """Return the non-trivial cycles of the arrangement.

        Cell ``i`` maps to the solved cell of its occupant, ``labels[i]``.
        Each cycle starts at its smallest cell index.
        """
        seen = [False] * len(state.labels)
        out: list[tuple[int, ...]] = []
        for start in range(len(state.labels)):
            if seen[start]:
                continue
            cycle: list[int] = []
            i = start
            while not seen[i]:
                seen[i] = True
                cycle.append(i)
                i = state.labels[i]
            if len(cycle) > 1:
                out.append(tuple(cycle))
        return out

    @staticmethod
    def parity(state: GridState) -> int:
        """Return 0 for an even arrangement, 1 for an odd one.

        Every cell takes part, the blank included, so a single move (one
        transposition) always flips the result.
        """
        n = len(state.labels)
        seen = [False] * n
        cycle_count = 0
        for start in range(n):
            if seen[start]:
                continue
            cycle_count += 1
            i = start
            while not seen[i]:
                seen[i] = True
                i = state.labels[i]
        return (n - cycle_count) % 2

    @staticmethod
    def blank_offset(state: GridState) -> tuple[int, int]:
        """(drow, dcol) of the first blank label from its solved cell."""
        blank = state.tile_count
        r, c = state.position_of(blank)
        sr, sc = state.size.coords(blank)
        return r - sr, c - sc

    @staticmethod
    def blank_distance(state: GridState) -> int:
        dr, dc = PermutationAnalyzer.blank_offset(state)
        return abs(dr) + abs(dc)

    @staticmethod
    def signature(state: GridState) -> PermutationSignature:
        return PermutationSignature(
            parity=PermutationAnalyzer.parity(state),
            blank_offset=PermutationAnalyzer.blank_offset(state),
        )

    @staticmethod
    def is_solvable(state: GridState) -> bool:
        """Return True if *state* can reach the solved arrangement."""
        size = state.size
        if size.area == 1:
            return True
        if size.is_line:
            # Tiles in a single line can never pass one another.
            tiles = [v for v in state.labels if not state.is_blank(v)]
            return tiles == sorted(tiles)
        if state.blank_count > 1:
            return True
        sig = PermutationAnalyzer.signature(state)
        return sig.parity == sig.blank_parity
