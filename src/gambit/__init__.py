"""gambit — a two-player chess rules engine.

The engine is a function library over an explicit :class:`GameState`:

    state = new_game()
    moves = legal_moves(square, state)
    outcome = apply_move(state, moves[0])
    state = outcome.state
"""

from gambit.core import (
    Board,
    CastleSide,
    CastlingRights,
    Color,
    GameResult,
    GameState,
    GameStatus,
    Move,
    MoveOutcome,
    Piece,
    PieceType,
    Rules,
    Square,
    apply_move,
    legal_moves,
    parse_square,
    square_name,
)
from gambit.core import attacks as _attacks

__version__ = "0.1.0"


def new_game() -> GameState:
    """Initial position, White to move, all castling rights."""
    return GameState.new_game()


def is_in_check(color: Color, state: GameState) -> bool:
    """Whether *color*'s king is attacked in *state*."""
    return _attacks.is_in_check(color, state.board)


__all__ = [
    "Board",
    "CastleSide",
    "CastlingRights",
    "Color",
    "GameResult",
    "GameState",
    "GameStatus",
    "Move",
    "MoveOutcome",
    "Piece",
    "PieceType",
    "Rules",
    "Square",
    "apply_move",
    "is_in_check",
    "legal_moves",
    "new_game",
    "parse_square",
    "square_name",
]
