"""Core enumerations and flags for the rules engine."""

from __future__ import annotations

from enum import IntEnum, IntFlag, auto


class Color(IntEnum):
    """Side color."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    def __str__(self) -> str:
        return self.name.lower()


class PieceType(IntEnum):
    """Chess piece types ordered by conventional value."""

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6


PROMOTION_TYPES: tuple[PieceType, ...] = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
)


class CastleSide(IntEnum):
    """Which rook the king castles with."""

    KINGSIDE = 1
    QUEENSIDE = 2


class CastlingRights(IntFlag):
    """Bitmask for castling availability."""

    NONE = 0
    WHITE_KINGSIDE = auto()
    WHITE_QUEENSIDE = auto()
    BLACK_KINGSIDE = auto()
    BLACK_QUEENSIDE = auto()

    WHITE_BOTH = WHITE_KINGSIDE | WHITE_QUEENSIDE
    BLACK_BOTH = BLACK_KINGSIDE | BLACK_QUEENSIDE
    ALL = WHITE_BOTH | BLACK_BOTH

    @classmethod
    def for_side(cls, color: Color, side: CastleSide) -> CastlingRights:
        """Single right for *color* castling on *side*."""
        if color == Color.WHITE:
            return (
                cls.WHITE_KINGSIDE if side == CastleSide.KINGSIDE else cls.WHITE_QUEENSIDE
            )
        return cls.BLACK_KINGSIDE if side == CastleSide.KINGSIDE else cls.BLACK_QUEENSIDE

    @classmethod
    def both(cls, color: Color) -> CastlingRights:
        return cls.WHITE_BOTH if color == Color.WHITE else cls.BLACK_BOTH


class GameStatus(IntEnum):
    """Result of applying a move, as seen by the caller."""

    ONGOING = 0
    ONGOING_IN_CHECK = 1
    CHECKMATE = 2
    STALEMATE = 3
    DRAW_FIFTY_MOVE = 4
    AWAITING_PROMOTION_CHOICE = 5
    ILLEGAL_MOVE = 6

    @property
    def is_terminal(self) -> bool:
        return self in (
            GameStatus.CHECKMATE,
            GameStatus.STALEMATE,
            GameStatus.DRAW_FIFTY_MOVE,
        )

    @property
    def is_committed(self) -> bool:
        """Whether the move that produced this status changed the game."""
        return self not in (
            GameStatus.AWAITING_PROMOTION_CHOICE,
            GameStatus.ILLEGAL_MOVE,
        )


class GameResult(IntEnum):
    """Outcome of a game."""

    IN_PROGRESS = 0
    WHITE_WINS = 1
    BLACK_WINS = 2
    DRAW = 3
