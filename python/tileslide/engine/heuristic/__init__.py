from tileslide.engine.heuristic.heuristic import (
    Heuristic,
    HeuristicKind,
    LinearConflict,
    ManhattanDistance,
    heuristic,
    make_heuristic,
    slide_bound,
)

__all__ = [
    "Heuristic",
    "HeuristicKind",
    "LinearConflict",
    "ManhattanDistance",
    "heuristic",
    "make_heuristic",
    "slide_bound",
]
