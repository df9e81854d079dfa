"""Attack oracle: does any piece of a given color threaten a square?

All offset tables are built once at import time from linear square offsets.
Each step goes through :func:`offset_square`, so moves that would wrap
around the a/h-file edge never make it into a table.
"""

from __future__ import annotations

from chesscore.core.board import Board
from chesscore.core.enums import Color, PieceType
from chesscore.core.types import Square, offset_square

KNIGHT_OFFSETS: tuple[int, ...] = (-17, -15, -10, -6, 6, 10, 15, 17)
KING_OFFSETS: tuple[int, ...] = (-9, -8, -7, -1, 1, 7, 8, 9)
BISHOP_DIRS: tuple[int, ...] = (-9, -7, 7, 9)
ROOK_DIRS: tuple[int, ...] = (-8, -1, 1, 8)
QUEEN_DIRS: tuple[int, ...] = BISHOP_DIRS + ROOK_DIRS

Rays = tuple[tuple[Square, ...], ...]


# -- Precomputed lookup tables ---------------------------------------------


def _build_targets(
    offsets: tuple[int, ...], max_file_delta: int
) -> tuple[tuple[Square, ...], ...]:
    table: list[tuple[Square, ...]] = []
    for sq in range(64):
        hops = (offset_square(sq, off, max_file_delta) for off in offsets)
        table.append(tuple(to_sq for to_sq in hops if to_sq is not None))
    return tuple(table)


def _build_rays(directions: tuple[int, ...]) -> tuple[Rays, ...]:
    table: list[Rays] = []
    for sq in range(64):
        rays: list[tuple[Square, ...]] = []
        for step in directions:
            ray: list[Square] = []
            cur: Square | None = offset_square(sq, step, 1)
            while cur is not None:
                ray.append(cur)
                cur = offset_square(cur, step, 1)
            rays.append(tuple(ray))
        table.append(tuple(rays))
    return tuple(table)


def _build_pawn_sources(color: Color) -> tuple[tuple[Square, ...], ...]:
    """Squares from which a *color* pawn attacks each square."""
    behind = -color.forward
    return _build_targets((behind - 1, behind + 1), 1)


KNIGHT_TARGETS = _build_targets(KNIGHT_OFFSETS, 2)
KING_TARGETS = _build_targets(KING_OFFSETS, 1)
BISHOP_RAYS = _build_rays(BISHOP_DIRS)
ROOK_RAYS = _build_rays(ROOK_DIRS)
QUEEN_RAYS = _build_rays(QUEEN_DIRS)

# [attacking color][target square] -> squares an attacking pawn could stand on
_PAWN_SOURCES = (_build_pawn_sources(Color.WHITE), _build_pawn_sources(Color.BLACK))

_DIAGONAL_ATTACKERS = frozenset((PieceType.BISHOP, PieceType.QUEEN))
_ORTHOGONAL_ATTACKERS = frozenset((PieceType.ROOK, PieceType.QUEEN))


# -- Queries ---------------------------------------------------------------


def _hits(
    board: Board, squares: tuple[Square, ...], by_color: Color, kind: PieceType
) -> bool:
    for sq in squares:
        piece = board[sq]
        if piece is not None and piece.color == by_color and piece.piece_type == kind:
            return True
    return False


def _ray_hits(
    board: Board, rays: Rays, by_color: Color, kinds: frozenset[PieceType]
) -> bool:
    for ray in rays:
        for sq in ray:
            piece = board[sq]
            if piece is None:
                continue
            if piece.color == by_color and piece.piece_type in kinds:
                return True
            break
    return False


def is_square_attacked(board: Board, sq: Square, by_color: Color) -> bool:
    """Is *sq* attacked by any piece of *by_color*?

    Only geometry is considered: an attacker pinned to its own king still
    counts.
    """
    return (
        _hits(board, _PAWN_SOURCES[by_color][sq], by_color, PieceType.PAWN)
        or _hits(board, KNIGHT_TARGETS[sq], by_color, PieceType.KNIGHT)
        or _hits(board, KING_TARGETS[sq], by_color, PieceType.KING)
        or _ray_hits(board, BISHOP_RAYS[sq], by_color, _DIAGONAL_ATTACKERS)
        or _ray_hits(board, ROOK_RAYS[sq], by_color, _ORTHOGONAL_ATTACKERS)
    )


def is_in_check(board: Board, color: Color) -> bool:
    """Is *color*'s king attacked by the opponent?"""
    return is_square_attacked(board, board.king_square(color), color.opposite)
