"""Move value object."""

from __future__ import annotations

from dataclasses import dataclass, replace

from gambit.core.enums import CastleSide, PieceType
from gambit.core.types import Square, square_name

_PROMO_CHARS: dict[PieceType, str] = {
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
}


@dataclass(frozen=True, slots=True)
class Move:
    """A transition from one square to another.

    Only meaningful against the :class:`~gambit.core.state.GameState` it was
    generated for.  Generated moves never carry a promotion; the caller
    supplies one when applying a move that lands a pawn on the last rank.
    """

    from_sq: Square
    to_sq: Square
    castle: CastleSide | None = None
    promotion: PieceType | None = None

    def with_promotion(self, piece_type: PieceType) -> Move:
        return replace(self, promotion=piece_type)

    @property
    def is_castle(self) -> bool:
        return self.castle is not None

    def __str__(self) -> str:
        base = f"{square_name(self.from_sq)}{square_name(self.to_sq)}"
        if self.promotion is not None:
            base += _PROMO_CHARS.get(self.promotion, "?")
        return base
