"""Tests for Position make/unmake."""

import pytest

from chesscore.core.enums import CastlingRights, Color, MoveFlag, PieceType
from chesscore.core.errors import PositionError
from chesscore.core.move import Move
from chesscore.core.move_generator import MoveGenerator
from chesscore.core.notation import STARTING_FEN, position_from_fen, position_to_fen
from chesscore.core.piece import Piece
from chesscore.core.position import Position
from chesscore.core.types import (
    A1, A8, C1, D1, D5, D7, E1, E2, E4, E8, F1, G1, H1, H8,
    parse_square,
)

ROUND_TRIP_FENS = [
    STARTING_FEN,
    "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1",
    "r3k2r/Pppp1ppp/1b3nbN/nP6/BBP1P3/q4N2/Pp1P2PP/R2Q1RK1 w kq - 0 1",
    "rnbqkbnr/ppp1p1pp/8/3pPp2/8/8/PPPP1PPP/RNBQKBNR w KQkq f6 0 3",
    "8/2p5/3p4/KP5r/1R3p1k/8/4P1P1/8 w - - 7 40",
]


class TestMakeUnmake:
    def test_side_switches(self, start_position: Position) -> None:
        start_position.make_move(Move(E2, E4, MoveFlag.DOUBLE_PAWN))
        assert start_position.side_to_move == Color.BLACK

    def test_unmake_restores_side(self, start_position: Position) -> None:
        start_position.make_move(Move(E2, E4, MoveFlag.DOUBLE_PAWN))
        undone = start_position.unmake_move()
        assert undone == Move(E2, E4, MoveFlag.DOUBLE_PAWN)
        assert start_position.side_to_move == Color.WHITE

    @pytest.mark.parametrize("fen", ROUND_TRIP_FENS)
    def test_unmake_restores_every_field(self, fen: str) -> None:
        """After make+unmake of every legal move, the FEN must match."""
        pos = position_from_fen(fen)
        for move in MoveGenerator(pos).generate_legal_moves():
            pos.make_move(move)
            pos.unmake_move()
            assert position_to_fen(pos) == fen, f"Failed for {move}"
        assert pos.ply_count == 0

    def test_history_tracks_commits(self, start_position: Position) -> None:
        start_position.make_move(Move(E2, E4, MoveFlag.DOUBLE_PAWN))
        start_position.make_move(Move(D7, D5, MoveFlag.DOUBLE_PAWN))
        assert [m.uci for m in start_position.history] == ["e2e4", "d7d5"]
        start_position.unmake_move()
        assert [m.uci for m in start_position.history] == ["e2e4"]

    def test_unmake_empty_history_raises(self, start_position: Position) -> None:
        with pytest.raises(PositionError, match="No move to undo"):
            start_position.unmake_move()

    def test_move_from_empty_square_raises(self, start_position: Position) -> None:
        with pytest.raises(PositionError, match="No piece on e4"):
            start_position.make_move(Move(E4, parse_square("e5")))
        assert start_position.ply_count == 0

    def test_move_out_of_turn_raises(self, start_position: Position) -> None:
        with pytest.raises(PositionError, match="BLACK"):
            start_position.make_move(Move(D7, D5, MoveFlag.DOUBLE_PAWN))
        assert position_to_fen(start_position) == STARTING_FEN

    def test_capture_restores_piece(self) -> None:
        fen = "rnbqkbnr/ppp1pppp/8/3p4/4P3/8/PPPP1PPP/RNBQKBNR w KQkq d6 0 2"
        pos = position_from_fen(fen)
        committed = pos.make_move(Move(E4, D5))
        assert committed.captured == Piece(Color.BLACK, PieceType.PAWN)
        assert pos.board[D5] == Piece(Color.WHITE, PieceType.PAWN)
        pos.unmake_move()
        assert position_to_fen(pos) == fen

    def test_committed_capture_is_resolved_from_board(self) -> None:
        # A hand-built move carries no victim; the history copy does
        pos = position_from_fen("4k3/8/8/3r4/8/8/8/3QK3 w - - 0 1")
        committed = pos.make_move(Move(D1, D5))
        assert committed.captured == Piece(Color.BLACK, PieceType.ROOK)
        assert pos.history[-1].captured == committed.captured


class TestClocks:
    def test_halfmove_increments_and_resets(self, start_position: Position) -> None:
        pos = start_position
        pos.make_move(Move(G1, parse_square("f3")))
        assert pos.halfmove_clock == 1
        pos.make_move(Move(parse_square("g8"), parse_square("f6")))
        assert pos.halfmove_clock == 2
        pos.make_move(Move(E2, E4, MoveFlag.DOUBLE_PAWN))
        assert pos.halfmove_clock == 0

    def test_halfmove_restored_on_unmake(self) -> None:
        pos = position_from_fen("4k3/8/8/3r4/8/8/8/3QK3 w - - 17 30")
        pos.make_move(Move(D1, D5))
        assert pos.halfmove_clock == 0
        pos.unmake_move()
        assert pos.halfmove_clock == 17

    def test_fullmove_after_black(self, start_position: Position) -> None:
        pos = start_position
        pos.make_move(Move(E2, E4, MoveFlag.DOUBLE_PAWN))
        assert pos.fullmove_number == 1
        pos.make_move(Move(D7, D5, MoveFlag.DOUBLE_PAWN))
        assert pos.fullmove_number == 2
        pos.unmake_move()
        assert pos.fullmove_number == 1


class TestEnPassantTarget:
    def test_set_after_double_push(self, start_position: Position) -> None:
        start_position.make_move(Move(E2, E4, MoveFlag.DOUBLE_PAWN))
        assert start_position.en_passant == parse_square("e3")

    def test_replaced_by_next_double_push(self, start_position: Position) -> None:
        start_position.make_move(Move(E2, E4, MoveFlag.DOUBLE_PAWN))
        start_position.make_move(Move(D7, D5, MoveFlag.DOUBLE_PAWN))
        assert start_position.en_passant == parse_square("d6")

    def test_cleared_by_any_other_move(self, start_position: Position) -> None:
        start_position.make_move(Move(E2, E4, MoveFlag.DOUBLE_PAWN))
        start_position.make_move(Move(parse_square("g8"), parse_square("f6")))
        assert start_position.en_passant is None

    def test_restored_on_unmake(self, start_position: Position) -> None:
        start_position.make_move(Move(E2, E4, MoveFlag.DOUBLE_PAWN))
        start_position.make_move(Move(parse_square("g8"), parse_square("f6")))
        start_position.unmake_move()
        assert start_position.en_passant == parse_square("e3")

    def test_capture_removes_adjacent_pawn(self) -> None:
        fen = "4k3/8/8/3pP3/8/8/8/4K3 w - d6 0 2"
        pos = position_from_fen(fen)
        committed = pos.make_move(
            Move(parse_square("e5"), parse_square("d6"), MoveFlag.EN_PASSANT)
        )
        assert committed.captured == Piece(Color.BLACK, PieceType.PAWN)
        assert pos.board[D5] is None
        assert pos.board[parse_square("d6")] == Piece(Color.WHITE, PieceType.PAWN)
        assert pos.halfmove_clock == 0
        pos.unmake_move()
        assert position_to_fen(pos) == fen

    def test_target_only_usable_immediately(self) -> None:
        pos = position_from_fen("4k3/8/8/3pP3/8/8/8/4K3 w - d6 0 2")
        pos.make_move(Move(E1, parse_square("e2")))
        pos.make_move(Move(E8, parse_square("e7")))
        moves = MoveGenerator(pos).legal_moves_from(parse_square("e5"))
        assert all(m.flag != MoveFlag.EN_PASSANT for m in moves)


class TestCastlingRightsUpdate:
    def test_king_move_removes_rights(self, castling_position: Position) -> None:
        castling_position.make_move(Move(E1, D1))
        assert not (castling_position.castling & CastlingRights.WHITE_BOTH)
        assert castling_position.castling & CastlingRights.BLACK_BOTH

    def test_rook_move_removes_one_right(self, castling_position: Position) -> None:
        castling_position.make_move(Move(A1, parse_square("b1")))
        assert not (castling_position.castling & CastlingRights.WHITE_QUEENSIDE)
        assert castling_position.castling & CastlingRights.WHITE_KINGSIDE

    def test_rook_captured_on_home_square(self) -> None:
        pos = position_from_fen("r3k2r/8/8/8/8/8/6b1/R3K2R b KQkq - 0 1")
        pos.make_move(Move(parse_square("g2"), H1))
        assert not (pos.castling & CastlingRights.WHITE_KINGSIDE)
        assert pos.castling & CastlingRights.WHITE_QUEENSIDE

    def test_rights_restored_on_unmake(self, castling_position: Position) -> None:
        castling_position.make_move(Move(E1, D1))
        castling_position.unmake_move()
        assert castling_position.castling == CastlingRights.ALL

    def test_rights_never_come_back_by_moving_home(self) -> None:
        pos = position_from_fen("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
        pos.make_move(Move(H1, parse_square("h2")))
        pos.make_move(Move(H8, parse_square("h7")))
        pos.make_move(Move(parse_square("h2"), H1))
        assert not (pos.castling & CastlingRights.WHITE_KINGSIDE)

    def test_legality_probing_leaves_rights_alone(
        self, castling_position: Position
    ) -> None:
        MoveGenerator(castling_position).generate_legal_moves()
        assert castling_position.castling == CastlingRights.ALL

    def test_castling_kingside(self, castling_position: Position) -> None:
        pos = castling_position
        pos.make_move(Move(E1, G1, MoveFlag.CASTLE_KINGSIDE))
        assert pos.board[G1] == Piece(Color.WHITE, PieceType.KING)
        assert pos.board[F1] == Piece(Color.WHITE, PieceType.ROOK)
        assert pos.board[H1] is None
        assert not (pos.castling & CastlingRights.WHITE_BOTH)

    def test_castling_queenside_black(self) -> None:
        pos = position_from_fen("r3k2r/8/8/8/8/8/8/R3K2R b KQkq - 0 1")
        fen_before = position_to_fen(pos)
        pos.make_move(Move(E8, parse_square("c8"), MoveFlag.CASTLE_QUEENSIDE))
        assert pos.board[parse_square("c8")] == Piece(Color.BLACK, PieceType.KING)
        assert pos.board[parse_square("d8")] == Piece(Color.BLACK, PieceType.ROOK)
        assert pos.board[A8] is None
        pos.unmake_move()
        assert position_to_fen(pos) == fen_before

    def test_castling_queenside_board(self, castling_position: Position) -> None:
        pos = castling_position
        pos.make_move(Move(E1, C1, MoveFlag.CASTLE_QUEENSIDE))
        assert pos.board[C1] == Piece(Color.WHITE, PieceType.KING)
        assert pos.board[D1] == Piece(Color.WHITE, PieceType.ROOK)
        assert pos.board[A1] is None


class TestPromotion:
    FEN = "8/4P3/8/8/8/8/4k3/4K3 w - - 0 1"

    def test_promote_to_queen(self) -> None:
        pos = position_from_fen(self.FEN)
        pos.make_move(
            Move(parse_square("e7"), E8, MoveFlag.PROMOTION, PieceType.QUEEN)
        )
        assert pos.board[E8] == Piece(Color.WHITE, PieceType.QUEEN)

    def test_promote_unmake_restores_pawn(self) -> None:
        pos = position_from_fen(self.FEN)
        pos.make_move(
            Move(parse_square("e7"), E8, MoveFlag.PROMOTION, PieceType.KNIGHT)
        )
        pos.unmake_move()
        assert position_to_fen(pos) == self.FEN


class TestProbe:
    def test_probe_reverts(self, start_position: Position) -> None:
        with start_position.probe(Move(E2, E4, MoveFlag.DOUBLE_PAWN)) as committed:
            assert committed.uci == "e2e4"
            assert start_position.side_to_move == Color.BLACK
        assert position_to_fen(start_position) == STARTING_FEN

    def test_probe_reverts_on_error(self, start_position: Position) -> None:
        with pytest.raises(RuntimeError):
            with start_position.probe(Move(E2, E4, MoveFlag.DOUBLE_PAWN)):
                raise RuntimeError("boom")
        assert position_to_fen(start_position) == STARTING_FEN
        assert start_position.ply_count == 0


class TestCopy:
    def test_copy_is_independent_in_every_field(self) -> None:
        pos = position_from_fen("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 3 10")
        clone = pos.copy()
        assert clone == pos

        clone.make_move(Move(E1, D1))
        assert pos.board[E1] == Piece(Color.WHITE, PieceType.KING)
        assert pos.castling == CastlingRights.ALL
        assert pos.side_to_move == Color.WHITE
        assert pos.halfmove_clock == 3
        assert pos.ply_count == 0
        assert clone != pos

    def test_copy_keeps_history(self, start_position: Position) -> None:
        start_position.make_move(Move(E2, E4, MoveFlag.DOUBLE_PAWN))
        clone = start_position.copy()
        clone.unmake_move()
        assert position_to_fen(clone) == STARTING_FEN
        assert start_position.ply_count == 1
        assert start_position.board[E4] is not None
