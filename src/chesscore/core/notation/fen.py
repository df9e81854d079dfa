"""FEN parsing and serialization."""

from __future__ import annotations

from chesscore.core.board import Board
from chesscore.core.enums import CastlingRights, Color
from chesscore.core.errors import NotationError
from chesscore.core.piece import Piece
from chesscore.core.position import Position
from chesscore.core.types import Square, make_square, parse_square, rank_of, square_name

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

_CASTLING_LETTERS: tuple[tuple[str, CastlingRights], ...] = (
    ("K", CastlingRights.WHITE_KINGSIDE),
    ("Q", CastlingRights.WHITE_QUEENSIDE),
    ("k", CastlingRights.BLACK_KINGSIDE),
    ("q", CastlingRights.BLACK_QUEENSIDE),
)


# ── Piece placement ──────────────────────────────────────────────────────────


def board_from_placement(placement: str) -> Board:
    """Parse the piece-placement field of a FEN into a :class:`Board`.

    Only the 64 cells are populated; side to move, castling and en passant
    are left to the caller.
    """
    rows = placement.split("/")
    if len(rows) != 8:
        raise NotationError(
            f"Invalid FEN board (must contain 8 ranks, got {len(rows)}): {placement!r}"
        )
    board = Board()
    for row_idx, row in enumerate(rows):
        rank = 7 - row_idx
        file = 0
        for ch in row:
            if ch.isascii() and ch.isdigit():
                step = int(ch)
                if not (1 <= step <= 8):
                    raise NotationError(f"Invalid FEN digit {ch!r}: {placement!r}")
                file += step
            else:
                if file >= 8:
                    raise NotationError(f"Invalid FEN rank width: {placement!r}")
                try:
                    board[make_square(file, rank)] = Piece.from_char(ch)
                except ValueError as exc:
                    raise NotationError(f"{exc} in {placement!r}") from None
                file += 1
            if file > 8:
                raise NotationError(f"Invalid FEN rank width: {placement!r}")
        if file != 8:
            raise NotationError(f"Invalid FEN rank width: {placement!r}")
    return board


def board_to_placement(board: Board) -> str:
    """Run-length encode the board, rank 8 first."""
    rows: list[str] = []
    for rank in range(7, -1, -1):
        empty = 0
        row = ""
        for file in range(8):
            piece = board[make_square(file, rank)]
            if piece is None:
                empty += 1
                continue
            if empty:
                row += str(empty)
                empty = 0
            row += str(piece)
        if empty:
            row += str(empty)
        rows.append(row)
    return "/".join(rows)


def board_to_fen(
    board: Board,
    side_to_move: Color,
    castling: str,
    en_passant: str,
    halfmove_clock: int = 0,
    fullmove_number: int = 1,
) -> str:
    """FEN for *board* with caller-supplied trailing fields, written verbatim."""
    side = "w" if side_to_move == Color.WHITE else "b"
    return (
        f"{board_to_placement(board)} {side} {castling} {en_passant} "
        f"{halfmove_clock} {fullmove_number}"
    )


# ── Derived fields ───────────────────────────────────────────────────────────


def castling_to_fen(castling: CastlingRights) -> str:
    text = "".join(letter for letter, right in _CASTLING_LETTERS if castling & right)
    return text or "-"


def castling_from_fen(text: str) -> CastlingRights:
    castling = CastlingRights.NONE
    if text == "-":
        return castling
    rights = dict(_CASTLING_LETTERS)
    for ch in text:
        right = rights.get(ch)
        if right is None or castling & right:
            raise NotationError(f"Invalid FEN castling field: {text!r}")
        castling |= right
    return castling


# ── Full FEN ─────────────────────────────────────────────────────────────────


def position_from_fen(fen: str) -> Position:
    """Parse a FEN string into a :class:`Position`."""
    parts = fen.split()
    if not (4 <= len(parts) <= 6):
        raise NotationError(f"Invalid FEN (need 4-6 fields): {fen!r}")

    placement, side_part, castling_part, ep_part = parts[:4]
    board = board_from_placement(placement)

    if side_part == "w":
        side = Color.WHITE
    elif side_part == "b":
        side = Color.BLACK
    else:
        raise NotationError(f"Invalid FEN side-to-move field: {side_part!r}")

    castling = castling_from_fen(castling_part)

    ep: Square | None = None
    if ep_part != "-":
        try:
            ep = parse_square(ep_part)
        except ValueError:
            raise NotationError(f"Invalid FEN en-passant square: {ep_part!r}") from None
        expected_rank = 5 if side == Color.WHITE else 2
        if rank_of(ep) != expected_rank:
            raise NotationError(
                f"Invalid FEN en-passant square for side-to-move: {ep_part!r}"
            )

    halfmove = _parse_counter(parts[4], "halfmove clock", 0) if len(parts) > 4 else 0
    fullmove = _parse_counter(parts[5], "fullmove number", 1) if len(parts) > 5 else 1

    return Position(board, side, castling, ep, halfmove, fullmove)


def position_to_fen(pos: Position) -> str:
    """Serialise a :class:`Position` to FEN."""
    ep = square_name(pos.en_passant) if pos.en_passant is not None else "-"
    return board_to_fen(
        pos.board,
        pos.side_to_move,
        castling_to_fen(pos.castling),
        ep,
        pos.halfmove_clock,
        pos.fullmove_number,
    )


def _parse_counter(text: str, name: str, minimum: int) -> int:
    try:
        value = int(text)
    except ValueError:
        raise NotationError(f"Invalid FEN {name}: {text!r}") from None
    if value < minimum:
        raise NotationError(f"Invalid FEN {name}: {text!r}")
    return value
