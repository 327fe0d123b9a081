"""Piece value object."""

from __future__ import annotations

from dataclasses import dataclass

from gambit.core.enums import Color, PieceType

_LETTERS: dict[PieceType, str] = {
    PieceType.PAWN: "p",
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
    PieceType.KING: "k",
}

# Setup letter -> (Color, PieceType); uppercase is White.
_FROM_LETTER: dict[str, tuple[Color, PieceType]] = {
    **{ch.upper(): (Color.WHITE, pt) for pt, ch in _LETTERS.items()},
    **{ch: (Color.BLACK, pt) for pt, ch in _LETTERS.items()},
}


@dataclass(frozen=True, slots=True)
class Piece:
    """Immutable (color, kind) pair occupying a square."""

    color: Color
    piece_type: PieceType

    def __str__(self) -> str:
        letter = _LETTERS[self.piece_type]
        return letter.upper() if self.color == Color.WHITE else letter

    @classmethod
    def from_char(cls, char: str) -> Piece:
        """Piece for a setup letter such as ``"N"`` (white knight).

        Raises:
            ValueError: If *char* is not one of ``PNBRQKpnbrqk``.
        """
        try:
            color, ptype = _FROM_LETTER[char]
        except KeyError:
            raise ValueError(f"Invalid piece character: {char!r}") from None
        return cls(color, ptype)

    def is_a(self, color: Color, *piece_types: PieceType) -> bool:
        return self.color == color and self.piece_type in piece_types
