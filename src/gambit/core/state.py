"""GameState — the complete rules-relevant state of one game."""

from __future__ import annotations

from collections.abc import Hashable
from dataclasses import dataclass, field

from gambit.core.board import Board
from gambit.core.enums import CastlingRights, Color, PieceType
from gambit.core.types import Square


@dataclass(slots=True)
class GameState:
    """Board + side to move + castling + en passant + clocks + captures.

    This aggregate is the unit of snapshot/restore.  Engine functions never
    mutate a state they are given; they copy it and return the copy.
    """

    board: Board = field(default_factory=Board.initial)
    side_to_move: Color = Color.WHITE
    castling: CastlingRights = CastlingRights.ALL
    en_passant: Square | None = None
    halfmove_clock: int = 0
    fullmove_number: int = 1
    # Kinds captured *by* each side, in capture order.
    white_captures: tuple[PieceType, ...] = ()
    black_captures: tuple[PieceType, ...] = ()

    @classmethod
    def new_game(cls) -> GameState:
        """Standard initial position, White to move."""
        return cls()

    def copy(self) -> GameState:
        """Independent snapshot; mutating it never affects this state."""
        return GameState(
            board=self.board.copy(),
            side_to_move=self.side_to_move,
            castling=self.castling,
            en_passant=self.en_passant,
            halfmove_clock=self.halfmove_clock,
            fullmove_number=self.fullmove_number,
            white_captures=self.white_captures,
            black_captures=self.black_captures,
        )

    def captures_by(self, color: Color) -> tuple[PieceType, ...]:
        return self.white_captures if color == Color.WHITE else self.black_captures

    def position_key(self) -> Hashable:
        """Key identifying the position for repetition purposes.

        Clocks and capture lists are deliberately excluded.
        """
        return (
            self.board.key(),
            self.side_to_move,
            self.castling,
            self.en_passant,
        )
