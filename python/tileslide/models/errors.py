"""Exception types raised by the puzzle model."""

from __future__ import annotations


class TilePuzzleError(Exception):
    """Base class for every error raised by ``tileslide``."""


class InvalidLabeling(TilePuzzleError, ValueError):
    """The label sequence is not a permutation of ``0 .. R*C-1``."""


class InvalidDimensions(TilePuzzleError, ValueError):
    """The grid dimensions cannot hold a puzzle."""


class IllegalMove(TilePuzzleError, ValueError):
    """The move would push a tile off the grid or has no blank to fill."""


class ParseError(TilePuzzleError, ValueError):
    """A puzzle or move string could not be parsed."""
