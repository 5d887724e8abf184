"""Solver configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

from tileslide.engine.heuristic import HeuristicKind
from tileslide.models.moves import Metric

# Upper bound the command line applies when none is given.
DEFAULT_MAX_BOUND = 200


class TieBreak(StrEnum):
    """Order in which the children of a search node are explored."""

    CANONICAL = "canonical"  # up, down, left, right
    LOWEST_H = "lowest_h"  # smallest heuristic first, canonical among equals


@dataclass(frozen=True)
class SearchBudget:
    """Limits after which the search gives up with ``BUDGET_EXCEEDED``.

    ``None`` disables a limit.
    """

    max_bound: int | None = None
    max_nodes: int | None = None
    time_limit: float | None = None

    def __post_init__(self) -> None:
        for name in ("max_bound", "max_nodes", "time_limit"):
            value = getattr(self, name)
            if value is not None and value < 0:
                raise ValueError(f"{name} must be non-negative, got {value}.")

    @classmethod
    def unlimited(cls) -> SearchBudget:
        return cls()

    @property
    def is_unlimited(self) -> bool:
        return self.max_bound is None and self.max_nodes is None and self.time_limit is None


@dataclass(frozen=True)
class SolverSettings:
    heuristic: HeuristicKind = HeuristicKind.MANHATTAN
    tie_break: TieBreak = TieBreak.CANONICAL
    metric: Metric = Metric.STM  # what a move costs: one tile, or one slide
    budget: SearchBudget = field(default_factory=SearchBudget)
