"""Piece value object."""

from __future__ import annotations

from dataclasses import dataclass

from chesscore.core.enums import Color, PieceType

_LETTERS: dict[PieceType, str] = {
    PieceType.PAWN: "p",
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
    PieceType.KING: "k",
}
_KINDS: dict[str, PieceType] = {v: k for k, v in _LETTERS.items()}


@dataclass(frozen=True, slots=True)
class Piece:
    """Immutable (color, kind) pair.

    Because pieces are frozen, placing the same instance on several cells or
    in a history record never aliases mutable state.
    """

    color: Color
    piece_type: PieceType

    def __str__(self) -> str:
        """FEN letter (uppercase = white, lowercase = black)."""
        letter = _LETTERS[self.piece_type]
        return letter.upper() if self.color == Color.WHITE else letter

    @classmethod
    def from_char(cls, char: str) -> Piece:
        """Create piece from FEN letter, e.g. 'N' → white knight."""
        kind = _KINDS.get(char.lower()) if len(char) == 1 else None
        if kind is None:
            raise ValueError(f"Invalid piece character: {char!r}")
        return cls(Color.WHITE if char.isupper() else Color.BLACK, kind)

    def promoted(self, piece_type: PieceType) -> Piece:
        """Same-colored piece of another kind."""
        return Piece(self.color, piece_type)
