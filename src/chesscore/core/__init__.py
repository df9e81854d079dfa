"""Core domain layer: pure chess rules with zero external dependencies.

Quick start::

    from chesscore.core import MoveGenerator, position_from_fen, STARTING_FEN

    pos = position_from_fen(STARTING_FEN)
    gen = MoveGenerator(pos)
    for move in gen.generate_legal_moves():
        print(move)
"""

from chesscore.core.attacks import is_in_check, is_square_attacked
from chesscore.core.board import Board
from chesscore.core.enums import CastlingRights, Color, GameResult, MoveFlag, PieceType
from chesscore.core.errors import (
    ChessError,
    IllegalMoveError,
    NotationError,
    PositionError,
)
from chesscore.core.move import Move
from chesscore.core.move_generator import MoveGenerator
from chesscore.core.notation import (
    STARTING_FEN,
    board_from_placement,
    board_to_fen,
    position_from_fen,
    position_to_fen,
)
from chesscore.core.perft import divide, perft
from chesscore.core.piece import Piece
from chesscore.core.position import Position
from chesscore.core.rules import Rules
from chesscore.core.types import (
    Square,
    file_of,
    is_valid_square,
    make_square,
    offset_square,
    parse_square,
    rank_of,
    square_name,
)

__all__ = [
    # Enums / flags
    "CastlingRights",
    "Color",
    "GameResult",
    "MoveFlag",
    "PieceType",
    # Errors
    "ChessError",
    "IllegalMoveError",
    "NotationError",
    "PositionError",
    # Types / helpers
    "Square",
    "file_of",
    "is_valid_square",
    "make_square",
    "offset_square",
    "parse_square",
    "rank_of",
    "square_name",
    # Domain objects
    "Board",
    "Move",
    "MoveGenerator",
    "Piece",
    "Position",
    "Rules",
    # Attack oracle
    "is_in_check",
    "is_square_attacked",
    # Notation
    "STARTING_FEN",
    "board_from_placement",
    "board_to_fen",
    "position_from_fen",
    "position_to_fen",
    # Perft
    "divide",
    "perft",
]
