from tileslide.engine.solver.solver import (
    IterationStats,
    SearchStats,
    Solution,
    SolveStatus,
    Solver,
    solve,
)

__all__ = ["IterationStats", "SearchStats", "Solution", "SolveStatus", "Solver", "solve"]
