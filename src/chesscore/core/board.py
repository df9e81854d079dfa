"""Board - piece placement on an 8x8 board."""

from __future__ import annotations

from chesscore.core.enums import Color, PieceType
from chesscore.core.errors import PositionError
from chesscore.core.piece import Piece
from chesscore.core.types import Square, make_square

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


class Board:
    """Flat 64-cell mapping from square to optional :class:`Piece`.

    Besides the cells, the board keeps the set of occupied squares per color
    and a king-square cache so that move generation and check detection do
    not have to scan all 64 cells.
    """

    __slots__ = ("_cells", "_occupied", "_kings")

    def __init__(self) -> None:
        self._cells: list[Piece | None] = [None] * 64
        self._occupied: tuple[set[Square], set[Square]] = (set(), set())
        self._kings: list[Square | None] = [None, None]

    # -- Element access -----------------------------------------------------

    def get(self, sq: Square) -> Piece | None:
        """Piece on *sq*, or ``None`` for an empty cell."""
        return self._cells[sq]

    def set(self, sq: Square, piece: Piece | None) -> None:
        """Overwrite *sq* with *piece* (``None`` empties it)."""
        old = self._cells[sq]
        if old is not None:
            self._occupied[old.color].discard(sq)
            if old.piece_type == PieceType.KING and self._kings[old.color] == sq:
                self._kings[old.color] = None

        self._cells[sq] = piece
        if piece is None:
            return

        self._occupied[piece.color].add(sq)
        if piece.piece_type == PieceType.KING:
            self._kings[piece.color] = sq

    __getitem__ = get
    __setitem__ = set

    def is_empty(self, sq: Square) -> bool:
        return self._cells[sq] is None

    # -- Query helpers ------------------------------------------------------

    def occupied(self, color: Color) -> list[Square]:
        """Squares holding *color*'s pieces, in ascending order."""
        return sorted(self._occupied[color])

    def pieces(self, color: Color, piece_type: PieceType) -> list[Square]:
        """Squares occupied by *color*'s *piece_type*."""
        cells = self._cells
        return [
            sq
            for sq in sorted(self._occupied[color])
            if cells[sq].piece_type == piece_type  # type: ignore[union-attr]
        ]

    def king_square(self, color: Color) -> Square:
        """Return the king square for *color*."""
        sq = self._kings[color]
        if sq is None:
            raise PositionError(f"No {color.name} king on board")
        return sq

    # -- Copying ------------------------------------------------------------

    def duplicate(self) -> Board:
        """Independent copy; later writes to either board stay local."""
        b = Board()
        b._cells = self._cells.copy()
        b._occupied = (set(self._occupied[0]), set(self._occupied[1]))
        b._kings = self._kings.copy()
        return b

    def clear(self) -> None:
        self._cells = [None] * 64
        self._occupied = (set(), set())
        self._kings = [None, None]

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        b = cls()
        for f, pt in enumerate(_BACK_RANK):
            b[make_square(f, 0)] = Piece(Color.WHITE, pt)
            b[make_square(f, 1)] = Piece(Color.WHITE, PieceType.PAWN)
            b[make_square(f, 6)] = Piece(Color.BLACK, PieceType.PAWN)
            b[make_square(f, 7)] = Piece(Color.BLACK, pt)
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._cells == other._cells

    def __repr__(self) -> str:
        rows: list[str] = []
        for rank in range(7, -1, -1):
            cells = (self._cells[make_square(f, rank)] for f in range(8))
            rows.append(f"{rank + 1} " + " ".join(str(p) if p else "." for p in cells))
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
