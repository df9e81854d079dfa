"""Legal and pseudo-legal move generation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from chesscore.core import attacks
from chesscore.core.enums import CastlingRights, Color, MoveFlag, PieceType
from chesscore.core.move import Move
from chesscore.core.piece import Piece
from chesscore.core.types import (
    A1,
    A8,
    B1,
    B8,
    C1,
    C8,
    D1,
    D8,
    E1,
    E8,
    F1,
    F8,
    G1,
    G8,
    H1,
    H8,
    Square,
    offset_square,
    rank_of,
)

if TYPE_CHECKING:
    from chesscore.core.position import Position


PROMOTION_TYPES: tuple[PieceType, ...] = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
)


@dataclass(frozen=True, slots=True)
class _CastlingPath:
    """Static description of one castling option."""

    right: CastlingRights
    flag: MoveFlag
    king_from: Square
    king_to: Square
    rook_from: Square
    # Squares that must be empty (strictly between king and rook)
    between: tuple[Square, ...]
    # Squares the king stands on, crosses, or lands on
    safe: tuple[Square, ...]


_CASTLING_PATHS: tuple[tuple[_CastlingPath, ...], tuple[_CastlingPath, ...]] = (
    (
        _CastlingPath(
            CastlingRights.WHITE_KINGSIDE, MoveFlag.CASTLE_KINGSIDE,
            E1, G1, H1, (F1, G1), (E1, F1, G1),
        ),
        _CastlingPath(
            CastlingRights.WHITE_QUEENSIDE, MoveFlag.CASTLE_QUEENSIDE,
            E1, C1, A1, (B1, C1, D1), (E1, D1, C1),
        ),
    ),
    (
        _CastlingPath(
            CastlingRights.BLACK_KINGSIDE, MoveFlag.CASTLE_KINGSIDE,
            E8, G8, H8, (F8, G8), (E8, F8, G8),
        ),
        _CastlingPath(
            CastlingRights.BLACK_QUEENSIDE, MoveFlag.CASTLE_QUEENSIDE,
            E8, C8, A8, (B8, C8, D8), (E8, D8, C8),
        ),
    ),
)


class MoveGenerator:
    """Generates legal moves for a given :class:`Position`.

    Legality filtering commits every candidate through
    :meth:`Position.probe`, which always restores the position, so callers
    see the same position before and after any query.
    """

    __slots__ = ("_pos", "_board")

    def __init__(self, position: Position) -> None:
        self._pos = position
        self._board = position.board

    # -- Public API ---------------------------------------------------------

    def generate_legal_moves(self) -> list[Move]:
        """All strictly legal moves for the side to move."""
        return self._filter_legal(self.generate_pseudo_legal_moves())

    def legal_moves_from(self, sq: Square) -> list[Move]:
        """Legal moves of the piece on *sq* (empty if it cannot move now)."""
        return self._filter_legal(self.pseudo_legal_moves_from(sq))

    def generate_pseudo_legal_moves(self) -> list[Move]:
        """All pseudo-legal moves (may leave own king in check)."""
        moves: list[Move] = []
        for sq in self._board.occupied(self._pos.side_to_move):
            self._gen_from(sq, moves)
        return moves

    def pseudo_legal_moves_from(self, sq: Square) -> list[Move]:
        moves: list[Move] = []
        piece = self._board[sq]
        if piece is not None and piece.color == self._pos.side_to_move:
            self._gen_from(sq, moves)
        return moves

    # -- Attack detection (public) -----------------------------------------

    def is_in_check(self, color: Color) -> bool:
        """Is *color*'s king attacked by the opponent?"""
        return attacks.is_in_check(self._board, color)

    def is_square_attacked(self, sq: Square, by_color: Color) -> bool:
        """Is *sq* attacked by any piece of *by_color*?"""
        return attacks.is_square_attacked(self._board, sq, by_color)

    # -- Internals ----------------------------------------------------------

    def _filter_legal(self, candidates: list[Move]) -> list[Move]:
        mover = self._pos.side_to_move
        legal: list[Move] = []
        for move in candidates:
            with self._pos.probe(move):
                safe = not attacks.is_in_check(self._board, mover)
            if safe:
                legal.append(move)
        return legal

    def _gen_from(self, sq: Square, moves: list[Move]) -> None:
        piece = self._board[sq]
        assert piece is not None
        kind = piece.piece_type
        if kind == PieceType.PAWN:
            self._gen_pawn(sq, piece.color, moves)
        elif kind == PieceType.KNIGHT:
            self._gen_steps(sq, piece.color, attacks.KNIGHT_TARGETS[sq], moves)
        elif kind == PieceType.BISHOP:
            self._gen_sliding(sq, piece.color, attacks.BISHOP_RAYS[sq], moves)
        elif kind == PieceType.ROOK:
            self._gen_sliding(sq, piece.color, attacks.ROOK_RAYS[sq], moves)
        elif kind == PieceType.QUEEN:
            self._gen_sliding(sq, piece.color, attacks.QUEEN_RAYS[sq], moves)
        else:
            self._gen_steps(sq, piece.color, attacks.KING_TARGETS[sq], moves)
            self._gen_castling(sq, piece.color, moves)

    # -- Piece-specific generators -----------------------------------------

    def _gen_pawn(self, sq: Square, color: Color, moves: list[Move]) -> None:
        board = self._board
        forward = color.forward
        last_rank = color.promotion_rank

        one_step = sq + forward
        if 0 <= one_step < 64 and board.is_empty(one_step):
            self._add_pawn_move(sq, one_step, last_rank, None, moves)
            if rank_of(sq) == color.pawn_rank:
                two_step = one_step + forward
                if board.is_empty(two_step):
                    moves.append(Move(sq, two_step, MoveFlag.DOUBLE_PAWN))

        for side in (-1, 1):
            cap_sq = offset_square(sq, forward + side, 1)
            if cap_sq is None:
                continue
            target = board[cap_sq]
            if target is not None:
                if target.color != color:
                    self._add_pawn_move(sq, cap_sq, last_rank, target, moves)
            elif cap_sq == self._pos.en_passant:
                moves.append(
                    Move(
                        sq,
                        cap_sq,
                        MoveFlag.EN_PASSANT,
                        captured=Piece(color.opposite, PieceType.PAWN),
                    )
                )

    @staticmethod
    def _add_pawn_move(
        from_sq: Square,
        to_sq: Square,
        last_rank: int,
        captured: Piece | None,
        moves: list[Move],
    ) -> None:
        if rank_of(to_sq) == last_rank:
            for pt in PROMOTION_TYPES:
                moves.append(Move(from_sq, to_sq, MoveFlag.PROMOTION, pt, captured))
        else:
            moves.append(Move(from_sq, to_sq, captured=captured))

    def _gen_steps(
        self,
        sq: Square,
        color: Color,
        targets: tuple[Square, ...],
        moves: list[Move],
    ) -> None:
        board = self._board
        for to_sq in targets:
            target = board[to_sq]
            if target is None or target.color != color:
                moves.append(Move(sq, to_sq, captured=target))

    def _gen_sliding(
        self,
        sq: Square,
        color: Color,
        rays: attacks.Rays,
        moves: list[Move],
    ) -> None:
        board = self._board
        for ray in rays:
            for to_sq in ray:
                target = board[to_sq]
                if target is None:
                    moves.append(Move(sq, to_sq))
                    continue
                if target.color != color:
                    moves.append(Move(sq, to_sq, captured=target))
                break

    def _gen_castling(self, king_sq: Square, color: Color, moves: list[Move]) -> None:
        board = self._board
        opponent = color.opposite
        rook = Piece(color, PieceType.ROOK)
        for path in _CASTLING_PATHS[color]:
            if not self._pos.castling & path.right:
                continue
            if king_sq != path.king_from or board[path.rook_from] != rook:
                continue
            if any(not board.is_empty(s) for s in path.between):
                continue
            if any(
                attacks.is_square_attacked(board, s, opponent) for s in path.safe
            ):
                continue
            moves.append(Move(king_sq, path.king_to, path.flag))
