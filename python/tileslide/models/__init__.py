from tileslide.models.errors import (
    IllegalMove,
    InvalidDimensions,
    InvalidLabeling,
    ParseError,
    TilePuzzleError,
)
from tileslide.models.grid import GridState, Size, Variant
from tileslide.models.moves import CANONICAL_ORDER, Algorithm, Direction, Metric, Move

__all__ = [
    "Algorithm",
    "CANONICAL_ORDER",
    "Direction",
    "GridState",
    "IllegalMove",
    "InvalidDimensions",
    "InvalidLabeling",
    "Metric",
    "Move",
    "ParseError",
    "Size",
    "TilePuzzleError",
    "Variant",
]
