"""Position: complete game state (board + metadata) with make/unmake."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass

from chesscore.core.board import Board
from chesscore.core.enums import CastlingRights, Color, MoveFlag, PieceType
from chesscore.core.errors import PositionError
from chesscore.core.move import Move
from chesscore.core.types import (
    A1,
    A8,
    C1,
    C8,
    D1,
    D8,
    F1,
    F8,
    G1,
    G8,
    H1,
    H8,
    Square,
    file_of,
    make_square,
    rank_of,
    square_name,
)

# King destination -> (rook origin, rook destination)
_CASTLING_ROOK_PATHS: dict[Square, tuple[Square, Square]] = {
    G1: (H1, F1),
    C1: (A1, D1),
    G8: (H8, F8),
    C8: (A8, D8),
}

# Any move touching one of these squares ends the matching castling right:
# either the rook leaves home or something captures it there.
_ROOK_HOMES: dict[Square, CastlingRights] = {
    A1: CastlingRights.WHITE_QUEENSIDE,
    H1: CastlingRights.WHITE_KINGSIDE,
    A8: CastlingRights.BLACK_QUEENSIDE,
    H8: CastlingRights.BLACK_KINGSIDE,
}

_KING_RIGHTS: tuple[CastlingRights, CastlingRights] = (
    CastlingRights.WHITE_BOTH,
    CastlingRights.BLACK_BOTH,
)


@dataclass(frozen=True, slots=True)
class _UndoRecord:
    """History entry: the committed move plus the state it overwrote."""

    move: Move
    castling: CastlingRights
    en_passant: Square | None
    halfmove_clock: int


def en_passant_capture_square(move: Move) -> Square:
    """Square of the pawn removed by an en-passant *move*."""
    return make_square(file_of(move.to_sq), rank_of(move.from_sq))


class Position:
    """Full chess position: board + side to move + castling + en passant + clocks.

    :meth:`make_move` pushes an undo record holding the committed move and a
    snapshot of every derived field it overwrites, so :meth:`unmake_move`
    restores the predecessor state exactly.
    """

    __slots__ = (
        "board",
        "side_to_move",
        "castling",
        "en_passant",
        "halfmove_clock",
        "fullmove_number",
        "_history",
    )

    def __init__(
        self,
        board: Board | None = None,
        side_to_move: Color = Color.WHITE,
        castling: CastlingRights = CastlingRights.ALL,
        en_passant: Square | None = None,
        halfmove_clock: int = 0,
        fullmove_number: int = 1,
    ) -> None:
        self.board = board if board is not None else Board.initial()
        self.side_to_move = side_to_move
        self.castling = castling
        self.en_passant = en_passant
        self.halfmove_clock = halfmove_clock
        self.fullmove_number = fullmove_number
        self._history: list[_UndoRecord] = []

    # ── Core move operations ─────────────────────────────────────────────

    def make_move(self, move: Move) -> Move:
        """Apply *move* and return the committed copy pushed onto history."""
        board = self.board
        piece = board[move.from_sq]
        if piece is None:
            raise PositionError(f"No piece on {square_name(move.from_sq)}")
        if piece.color != self.side_to_move:
            raise PositionError(
                f"Piece on {square_name(move.from_sq)} belongs to "
                f"{piece.color.name}, but {self.side_to_move.name} is to move"
            )

        capture_sq = (
            en_passant_capture_square(move)
            if move.flag == MoveFlag.EN_PASSANT
            else move.to_sq
        )
        captured = board[capture_sq]
        committed = move.with_captured(captured)

        self._history.append(
            _UndoRecord(
                move=committed,
                castling=self.castling,
                en_passant=self.en_passant,
                halfmove_clock=self.halfmove_clock,
            )
        )

        board[move.from_sq] = None
        if capture_sq != move.to_sq:
            board[capture_sq] = None
        if move.is_promotion:
            board[move.to_sq] = piece.promoted(move.promotion)
        else:
            board[move.to_sq] = piece

        if move.is_castling:
            rook_from, rook_to = _CASTLING_ROOK_PATHS[move.to_sq]
            board[rook_to] = board[rook_from]
            board[rook_from] = None

        # Castling rights only ever shrink here
        if piece.piece_type == PieceType.KING:
            self.castling &= ~_KING_RIGHTS[piece.color]
        for sq in (move.from_sq, move.to_sq):
            right = _ROOK_HOMES.get(sq)
            if right is not None:
                self.castling &= ~right

        # En passant target lives for exactly one ply
        if move.flag == MoveFlag.DOUBLE_PAWN:
            self.en_passant = (move.from_sq + move.to_sq) // 2
        else:
            self.en_passant = None

        if piece.piece_type == PieceType.PAWN or captured is not None:
            self.halfmove_clock = 0
        else:
            self.halfmove_clock += 1

        if self.side_to_move == Color.BLACK:
            self.fullmove_number += 1
        self.side_to_move = self.side_to_move.opposite
        return committed

    def unmake_move(self) -> Move:
        """Undo the last :meth:`make_move` and return the move undone."""
        if not self._history:
            raise PositionError("No move to undo")
        record = self._history.pop()
        move = record.move
        board = self.board

        self.side_to_move = self.side_to_move.opposite
        if self.side_to_move == Color.BLACK:
            self.fullmove_number -= 1

        piece = board[move.to_sq]
        assert piece is not None
        if move.is_promotion:
            piece = piece.promoted(PieceType.PAWN)
        board[move.from_sq] = piece

        if move.flag == MoveFlag.EN_PASSANT:
            board[move.to_sq] = None
            board[en_passant_capture_square(move)] = move.captured
        else:
            board[move.to_sq] = move.captured

        if move.is_castling:
            rook_from, rook_to = _CASTLING_ROOK_PATHS[move.to_sq]
            board[rook_from] = board[rook_to]
            board[rook_to] = None

        self.castling = record.castling
        self.en_passant = record.en_passant
        self.halfmove_clock = record.halfmove_clock
        return move

    @contextmanager
    def probe(self, move: Move) -> Iterator[Move]:
        """Apply *move* for the duration of a ``with`` block.

        The move is undone on every exit path, including exceptions, so the
        position seen after the block is the one seen before it.
        """
        committed = self.make_move(move)
        try:
            yield committed
        finally:
            self.unmake_move()

    # ── Utilities ────────────────────────────────────────────────────────

    @property
    def history(self) -> tuple[Move, ...]:
        """Committed moves, oldest first."""
        return tuple(record.move for record in self._history)

    @property
    def ply_count(self) -> int:
        return len(self._history)

    def copy(self) -> Position:
        """Deep copy of the board, every derived field and the history."""
        pos = Position(
            board=self.board.duplicate(),
            side_to_move=self.side_to_move,
            castling=self.castling,
            en_passant=self.en_passant,
            halfmove_clock=self.halfmove_clock,
            fullmove_number=self.fullmove_number,
        )
        # Undo records are frozen, so sharing them is safe.
        pos._history = self._history.copy()
        return pos

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Position):
            return NotImplemented
        return (
            self.board == other.board
            and self.side_to_move == other.side_to_move
            and self.castling == other.castling
            and self.en_passant == other.en_passant
            and self.halfmove_clock == other.halfmove_clock
            and self.fullmove_number == other.fullmove_number
        )

    def __repr__(self) -> str:
        ep = square_name(self.en_passant) if self.en_passant is not None else "-"
        return (
            f"Position(side={self.side_to_move}, castling={self.castling!r}, "
            f"ep={ep}, halfmove={self.halfmove_clock}, "
            f"fullmove={self.fullmove_number})"
        )
