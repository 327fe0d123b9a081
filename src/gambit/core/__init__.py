"""Core domain layer — pure chess rules with zero external dependencies.

Quick start::

    from gambit.core import GameState, apply_move, legal_moves, parse_square

    state = GameState.new_game()
    move = legal_moves(parse_square("e2"), state)[-1]
    outcome = apply_move(state, move)
    print(outcome.status, outcome.state.en_passant)
"""

from gambit.core.applier import MoveOutcome, apply_move
from gambit.core.attacks import is_square_attacked
from gambit.core.board import Board
from gambit.core.enums import (
    PROMOTION_TYPES,
    CastleSide,
    CastlingRights,
    Color,
    GameResult,
    GameStatus,
    PieceType,
)
from gambit.core.move import Move
from gambit.core.move_generator import (
    MoveGenerator,
    all_legal_moves,
    has_legal_moves,
    legal_moves,
    project_board,
    pseudo_legal_moves,
)
from gambit.core.piece import Piece
from gambit.core.rules import Rules
from gambit.core.state import GameState
from gambit.core.types import (
    Square,
    is_on_board,
    make_square,
    parse_square,
    square_name,
)

__all__ = [
    # Enums / flags
    "CastleSide",
    "CastlingRights",
    "Color",
    "GameResult",
    "GameStatus",
    "PROMOTION_TYPES",
    "PieceType",
    # Types / helpers
    "Square",
    "is_on_board",
    "make_square",
    "parse_square",
    "square_name",
    # Domain objects
    "Board",
    "GameState",
    "Move",
    "MoveGenerator",
    "MoveOutcome",
    "Piece",
    "Rules",
    # Operations
    "all_legal_moves",
    "apply_move",
    "has_legal_moves",
    "is_square_attacked",
    "legal_moves",
    "project_board",
    "pseudo_legal_moves",
]
