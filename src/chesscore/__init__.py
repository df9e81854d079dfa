"""Chess rules core: board state, legal moves, make/unmake, mate detection."""

__version__ = "0.1.0"
