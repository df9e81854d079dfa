"""Move value object (UCI-style representation)."""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from chesscore.core.enums import MoveFlag, PieceType
from chesscore.core.piece import Piece
from chesscore.core.types import Square, square_name

_PROMO_CHARS: dict[PieceType, str] = {
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
}


@dataclass(frozen=True, slots=True)
class Move:
    """A single move from one square to another.

    ``captured`` records the piece the move removes.  It is informational on
    generated moves and authoritative on the copy returned by
    :meth:`Position.make_move`.  It does not take part in equality, so a
    move built by hand compares equal to its generated counterpart.
    """

    from_sq: Square
    to_sq: Square
    flag: MoveFlag = MoveFlag.NORMAL
    promotion: PieceType | None = None
    captured: Piece | None = field(default=None, compare=False)

    # ── Classification ───────────────────────────────────────────────────

    @property
    def is_capture(self) -> bool:
        return self.captured is not None

    @property
    def is_en_passant(self) -> bool:
        return self.flag == MoveFlag.EN_PASSANT

    @property
    def is_castling(self) -> bool:
        return self.flag in (MoveFlag.CASTLE_KINGSIDE, MoveFlag.CASTLE_QUEENSIDE)

    @property
    def is_promotion(self) -> bool:
        return self.promotion is not None

    def with_captured(self, captured: Piece | None) -> Move:
        return replace(self, captured=captured)

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        base = f"{square_name(self.from_sq)}{square_name(self.to_sq)}"
        if self.promotion is not None:
            base += _PROMO_CHARS.get(self.promotion, "")
        return base

    @property
    def uci(self) -> str:
        """UCI long-algebraic notation."""
        return str(self)
