"""Exception hierarchy.

Every error derives from :class:`ValueError` as well, so callers that only
guard against ``ValueError`` keep working.
"""

from __future__ import annotations


class ChessError(Exception):
    """Base class for all rules-engine errors."""


class NotationError(ChessError, ValueError):
    """Malformed board notation (FEN) handed to the core."""


class PositionError(ChessError, ValueError):
    """A state precondition was violated by the caller.

    Examples: moving from an empty square, undoing with no history, asking
    for the king square of a side that has no king.
    """


class IllegalMoveError(PositionError):
    """The requested move is not in the legal move set of the position."""
