"""Tests for Rules: check, checkmate, stalemate."""

from chesscore.core.enums import Color, GameResult, MoveFlag
from chesscore.core.move import Move
from chesscore.core.move_generator import MoveGenerator
from chesscore.core.notation import STARTING_FEN, position_from_fen, position_to_fen
from chesscore.core.rules import Rules
from chesscore.core.types import parse_square

FOOLS_MATE = "rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR w KQkq - 1 3"


class TestCheck:
    def test_starting_not_in_check(self) -> None:
        assert not Rules.is_in_check(position_from_fen(STARTING_FEN))

    def test_fools_mate_in_check(self) -> None:
        pos = position_from_fen(FOOLS_MATE)
        assert Rules.is_in_check(pos)
        assert Rules.is_in_check(pos, Color.WHITE)
        assert not Rules.is_in_check(pos, Color.BLACK)


class TestCheckmate:
    def test_fools_mate_played_out(self) -> None:
        """1.f3 e5 2.g4 Qh4# reached by committing the moves."""
        pos = position_from_fen(STARTING_FEN)
        pos.make_move(Move(parse_square("f2"), parse_square("f3")))
        pos.make_move(
            Move(parse_square("e7"), parse_square("e5"), MoveFlag.DOUBLE_PAWN)
        )
        pos.make_move(
            Move(parse_square("g2"), parse_square("g4"), MoveFlag.DOUBLE_PAWN)
        )
        pos.make_move(Move(parse_square("d8"), parse_square("h4")))

        assert Rules.is_checkmate(pos)
        assert not Rules.is_stalemate(pos)
        assert MoveGenerator(pos).generate_legal_moves() == []
        assert Rules.game_result(pos) == GameResult.BLACK_WINS
        assert position_to_fen(pos).split()[0] == FOOLS_MATE.split()[0]

    def test_back_rank_mate(self) -> None:
        # R on a8 checks black king d8; white king d6 covers all escapes
        pos = position_from_fen("R2k4/8/3K4/8/8/8/8/8 b - - 0 1")
        assert Rules.is_checkmate(pos)
        assert Rules.game_result(pos) == GameResult.WHITE_WINS

    def test_not_checkmate_when_can_escape(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/8/8/r3K3 w - - 0 1")
        assert Rules.is_in_check(pos)
        assert not Rules.is_checkmate(pos)

    def test_not_checkmate_when_checker_can_be_captured(self) -> None:
        pos = position_from_fen("6k1/5ppp/8/8/8/8/5PPP/R2r2K1 w - - 0 1")
        assert Rules.is_in_check(pos)
        assert not Rules.is_checkmate(pos)


class TestStalemate:
    def test_king_and_pawn_vs_king(self) -> None:
        # Black king a8, white pawn a7, white king b6: black has no move
        pos = position_from_fen("k7/P7/1K6/8/8/8/8/8 b - - 0 1")
        assert Rules.is_stalemate(pos)
        assert not Rules.is_checkmate(pos)
        assert Rules.game_result(pos) == GameResult.DRAW

    def test_king_trapped_by_queen(self) -> None:
        pos = position_from_fen("7k/8/5KQ1/8/8/8/8/8 b - - 0 1")
        assert Rules.is_stalemate(pos)

    def test_not_stalemate_when_has_moves(self) -> None:
        pos = position_from_fen("7k/8/5K2/8/8/8/8/8 b - - 0 1")
        assert not Rules.is_stalemate(pos)
        assert Rules.game_result(pos) == GameResult.IN_PROGRESS


class TestGameResult:
    def test_in_progress_at_start(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        assert Rules.game_result(pos) == GameResult.IN_PROGRESS

    def test_queries_leave_position_untouched(self) -> None:
        pos = position_from_fen(FOOLS_MATE)
        Rules.is_checkmate(pos)
        Rules.is_stalemate(pos)
        Rules.game_result(pos)
        assert position_to_fen(pos) == FOOLS_MATE
