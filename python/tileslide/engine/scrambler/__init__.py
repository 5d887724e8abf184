from tileslide.engine.scrambler.scrambler import (
    Cycle,
    RandomInvertibleState,
    RandomMoves,
    RandomState,
    Scrambler,
    Strategy,
    scramble,
)

__all__ = [
    "Cycle",
    "RandomInvertibleState",
    "RandomMoves",
    "RandomState",
    "Scrambler",
    "Strategy",
    "scramble",
]
