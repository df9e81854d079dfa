"""High-level chess rules: check, checkmate, stalemate."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chesscore.core.enums import Color, GameResult
from chesscore.core.move_generator import MoveGenerator

if TYPE_CHECKING:
    from chesscore.core.position import Position


class Rules:
    """Static rule-checker that operates on a :class:`Position`."""

    # Stalemate is the only draw this core reports.  Repetition, the
    # fifty-move rule and insufficient material belong to the caller.

    @staticmethod
    def is_in_check(position: Position, color: Color | None = None) -> bool:
        """Is *color* (default: the side to move) in check?"""
        if color is None:
            color = position.side_to_move
        return MoveGenerator(position).is_in_check(color)

    @staticmethod
    def has_legal_moves(position: Position) -> bool:
        return bool(MoveGenerator(position).generate_legal_moves())

    @staticmethod
    def is_checkmate(position: Position) -> bool:
        if not Rules.is_in_check(position):
            return False
        return not Rules.has_legal_moves(position)

    @staticmethod
    def is_stalemate(position: Position) -> bool:
        if Rules.is_in_check(position):
            return False
        return not Rules.has_legal_moves(position)

    @staticmethod
    def game_result(position: Position) -> GameResult:
        """Determine the current game result."""
        gen = MoveGenerator(position)
        if gen.generate_legal_moves():
            return GameResult.IN_PROGRESS
        if gen.is_in_check(position.side_to_move):
            return (
                GameResult.BLACK_WINS
                if position.side_to_move == Color.WHITE
                else GameResult.WHITE_WINS
            )
        return GameResult.DRAW  # stalemate
