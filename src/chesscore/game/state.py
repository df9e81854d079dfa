"""Game facade: the surface consumers drive with square coordinates."""

from __future__ import annotations

import logging

from chesscore.core.board import Board
from chesscore.core.enums import Color, GameResult, PieceType
from chesscore.core.errors import IllegalMoveError
from chesscore.core.move import Move
from chesscore.core.move_generator import MoveGenerator
from chesscore.core.notation import STARTING_FEN, position_from_fen, position_to_fen
from chesscore.core.position import Position
from chesscore.core.rules import Rules
from chesscore.core.types import Square, square_name

_LOGGER = logging.getLogger(__name__)


class Game:
    """Owns one :class:`Position` and answers legality questions about it.

    Not thread-safe: a single caller owns the game.  Use :meth:`duplicate`
    to explore alternative lines without disturbing this instance.
    """

    __slots__ = ("_position",)

    def __init__(self, fen: str | None = None) -> None:
        self._position = position_from_fen(fen or STARTING_FEN)

    @classmethod
    def from_position(cls, position: Position) -> Game:
        """Wrap an existing position (not copied)."""
        game = cls.__new__(cls)
        game._position = position
        return game

    # ── State access ─────────────────────────────────────────────────────

    @property
    def position(self) -> Position:
        return self._position

    @property
    def board(self) -> Board:
        return self._position.board

    @property
    def side_to_move(self) -> Color:
        return self._position.side_to_move

    @property
    def history(self) -> tuple[Move, ...]:
        return self._position.history

    @property
    def ply_count(self) -> int:
        return self._position.ply_count

    def fen(self) -> str:
        return position_to_fen(self._position)

    # ── Move queries ─────────────────────────────────────────────────────

    def legal_moves(self) -> list[Move]:
        """Legal moves in the current position."""
        return MoveGenerator(self._position).generate_legal_moves()

    def legal_moves_from(self, sq: Square) -> list[Move]:
        """Legal moves of the piece on *sq*."""
        return MoveGenerator(self._position).legal_moves_from(sq)

    def find_move(
        self,
        from_sq: Square,
        to_sq: Square,
        promotion: PieceType | None = None,
    ) -> Move | None:
        """Resolve coordinates to the matching legal move, if any.

        A promoting pawn move requires *promotion*; without it nothing matches.
        """
        for move in self.legal_moves_from(from_sq):
            if move.to_sq == to_sq and move.promotion == promotion:
                return move
        return None

    def is_legal(
        self,
        from_sq: Square,
        to_sq: Square,
        promotion: PieceType | None = None,
    ) -> bool:
        return self.find_move(from_sq, to_sq, promotion) is not None

    # ── Mutation ─────────────────────────────────────────────────────────

    def play(
        self,
        from_sq: Square,
        to_sq: Square,
        promotion: PieceType | None = None,
    ) -> Move:
        """Validate and commit the move given by coordinates."""
        move = self.find_move(from_sq, to_sq, promotion)
        if move is None:
            uci = f"{square_name(from_sq)}{square_name(to_sq)}"
            _LOGGER.info(
                "Rejected illegal move %s (%s to move)", uci, self.side_to_move
            )
            raise IllegalMoveError(f"Illegal move: {uci}")
        return self.commit(move)

    def commit(self, move: Move) -> Move:
        """Commit *move* without a legality check.

        Returns the history copy, which carries the piece actually captured.
        """
        committed = self._position.make_move(move)
        _LOGGER.debug("Committed %s (ply %d)", committed, self.ply_count)
        return committed

    def revert(self) -> Move:
        """Undo the most recent committed move."""
        move = self._position.unmake_move()
        _LOGGER.debug("Reverted %s (ply %d)", move, self.ply_count)
        return move

    def duplicate(self) -> Game:
        """Independent copy of the full game state, history included."""
        return Game.from_position(self._position.copy())

    # ── Terminal state ───────────────────────────────────────────────────

    def in_check(self, color: Color | None = None) -> bool:
        return Rules.is_in_check(self._position, color)

    def is_checkmate(self) -> bool:
        return Rules.is_checkmate(self._position)

    def is_stalemate(self) -> bool:
        return Rules.is_stalemate(self._position)

    @property
    def result(self) -> GameResult:
        return Rules.game_result(self._position)

    @property
    def is_over(self) -> bool:
        return self.result != GameResult.IN_PROGRESS
