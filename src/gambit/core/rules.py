"""High-level chess rules: check, checkmate, stalemate, fifty-move draw."""

from __future__ import annotations

from gambit.core.enums import Color, GameResult, GameStatus
from gambit.core.move_generator import MoveGenerator
from gambit.core.state import GameState

FIFTY_MOVE_HALFMOVES = 100  # 100 half-moves = 50 full moves


class Rules:
    """Static rule-checker that operates on a :class:`GameState`."""

    @staticmethod
    def is_in_check(state: GameState) -> bool:
        return MoveGenerator(state).is_in_check()

    @staticmethod
    def is_checkmate(state: GameState) -> bool:
        gen = MoveGenerator(state)
        return gen.is_in_check() and not gen.has_legal_moves()

    @staticmethod
    def is_stalemate(state: GameState) -> bool:
        gen = MoveGenerator(state)
        return not gen.is_in_check() and not gen.has_legal_moves()

    @staticmethod
    def is_fifty_move_rule(state: GameState) -> bool:
        return state.halfmove_clock >= FIFTY_MOVE_HALFMOVES

    @staticmethod
    def status(state: GameState) -> GameStatus:
        """Status of *state* from the side to move's point of view.

        Checkmate and stalemate take precedence over the fifty-move draw;
        a check with legal replies is an ongoing status.
        """
        return Rules.evaluate(state)[0]

    @staticmethod
    def evaluate(state: GameState) -> tuple[GameStatus, bool]:
        """``(status, side to move is in check)`` from a single pass."""
        gen = MoveGenerator(state)
        in_check = gen.is_in_check()

        if not gen.has_legal_moves():
            status = GameStatus.CHECKMATE if in_check else GameStatus.STALEMATE
        elif Rules.is_fifty_move_rule(state):
            status = GameStatus.DRAW_FIFTY_MOVE
        elif in_check:
            status = GameStatus.ONGOING_IN_CHECK
        else:
            status = GameStatus.ONGOING
        return status, in_check

    @staticmethod
    def game_result(state: GameState) -> GameResult:
        """Determine the current game result."""
        status = Rules.status(state)
        if status == GameStatus.CHECKMATE:
            return (
                GameResult.BLACK_WINS
                if state.side_to_move == Color.WHITE
                else GameResult.WHITE_WINS
            )
        if status.is_terminal:
            return GameResult.DRAW
        return GameResult.IN_PROGRESS
