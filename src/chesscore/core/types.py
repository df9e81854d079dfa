"""Square indexing and the offset guard shared by every neighbour lookup.

Squares are plain ints, a1=0 through h8=63, rank-major:

    56 57 58 59 60 61 62 63    rank 8
    ...
     0  1  2  3  4  5  6  7    rank 1

A step such as +9 (one up-right) is a linear offset.  Near the h-file the
same offset lands on the a-file one rank higher, so neighbours are always
taken through :func:`offset_square`.
"""

from __future__ import annotations

from typing import TypeAlias

Square: TypeAlias = int

_FILES = "abcdefgh"
_RANKS = "12345678"


def file_of(sq: Square) -> int:
    return sq & 7


def rank_of(sq: Square) -> int:
    return sq >> 3


def make_square(file: int, rank: int) -> Square:
    return (rank << 3) | file


def is_valid_square(sq: int) -> bool:
    return 0 <= sq < 64


def offset_square(sq: Square, offset: int, max_file_delta: int) -> Square | None:
    """Step *offset* away from *sq*, or ``None`` when the step leaves the board.

    *max_file_delta* bounds the sideways travel: 1 for king and ray steps,
    2 for knight jumps.  A larger file change means the offset wrapped.
    """
    target = sq + offset
    if not is_valid_square(target):
        return None
    if abs(file_of(target) - file_of(sq)) > max_file_delta:
        return None
    return target


def square_name(sq: Square) -> str:
    """Algebraic name: ``square_name(28) == "e4"``."""
    return _FILES[file_of(sq)] + _RANKS[rank_of(sq)]


def parse_square(name: str) -> Square:
    """Inverse of :func:`square_name`; raises ``ValueError`` on bad input."""
    if len(name) != 2 or name[0] not in _FILES or name[1] not in _RANKS:
        raise ValueError(f"Invalid square name: {name!r}")
    return make_square(_FILES.index(name[0]), _RANKS.index(name[1]))


# -- Named squares ------------------------------------------------------------

(A1, B1, C1, D1, E1, F1, G1, H1,
 A2, B2, C2, D2, E2, F2, G2, H2,
 A3, B3, C3, D3, E3, F3, G3, H3,
 A4, B4, C4, D4, E4, F4, G4, H4,
 A5, B5, C5, D5, E5, F5, G5, H5,
 A6, B6, C6, D6, E6, F6, G6, H6,
 A7, B7, C7, D7, E7, F7, G7, H7,
 A8, B8, C8, D8, E8, F8, G8, H8) = range(64)
