"""Sliding tile puzzles: state model, solvability, scrambling and optimal solving."""

from tileslide.config import SearchBudget, SolverSettings, TieBreak
from tileslide.engine.heuristic import HeuristicKind, heuristic
from tileslide.engine.permutation import PermutationAnalyzer
from tileslide.engine.scrambler import Scrambler, scramble
from tileslide.engine.solver import Solution, SolveStatus, Solver, solve
from tileslide.models import (
    Algorithm,
    Direction,
    GridState,
    IllegalMove,
    InvalidDimensions,
    InvalidLabeling,
    Metric,
    Move,
    Size,
    TilePuzzleError,
)

__version__ = "0.1.0"

__all__ = [
    "Algorithm",
    "Direction",
    "GridState",
    "HeuristicKind",
    "IllegalMove",
    "InvalidDimensions",
    "InvalidLabeling",
    "Metric",
    "Move",
    "PermutationAnalyzer",
    "Scrambler",
    "SearchBudget",
    "Size",
    "Solution",
    "SolveStatus",
    "Solver",
    "SolverSettings",
    "TieBreak",
    "TilePuzzleError",
    "heuristic",
    "scramble",
    "solve",
]
