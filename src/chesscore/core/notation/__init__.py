"""Notation package: FEN parsing and serialization."""

from chesscore.core.notation.fen import (
    STARTING_FEN,
    board_from_placement,
    board_to_fen,
    board_to_placement,
    castling_from_fen,
    castling_to_fen,
    position_from_fen,
    position_to_fen,
)

__all__ = [
    "STARTING_FEN",
    "board_from_placement",
    "board_to_fen",
    "board_to_placement",
    "castling_from_fen",
    "castling_to_fen",
    "position_from_fen",
    "position_to_fen",
]
