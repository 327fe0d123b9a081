"""GameSession — owns one game: current state, undo history, promotion flow.

The rules engine itself is stateless; this is the caller-side orchestrator a
UI talks to.  Emits events via simple callbacks so the UI / tests can
subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import IntEnum

from gambit.core.applier import MoveOutcome, apply_move
from gambit.core.enums import PROMOTION_TYPES, Color, GameResult, GameStatus, PieceType
from gambit.core.move import Move
from gambit.core.move_generator import legal_moves
from gambit.core.rules import Rules
from gambit.core.state import GameState
from gambit.core.types import Square
from gambit.game.config import SessionConfig

_LOGGER = logging.getLogger(__name__)


class GameEndReason(IntEnum):
    """Why a game stopped."""

    NONE = 0
    CHECKMATE = 1
    STALEMATE = 2
    FIFTY_MOVE_RULE = 3
    RESIGNATION = 4
    TIME_FORFEIT = 5


_STATUS_REASONS: dict[GameStatus, GameEndReason] = {
    GameStatus.CHECKMATE: GameEndReason.CHECKMATE,
    GameStatus.STALEMATE: GameEndReason.STALEMATE,
    GameStatus.DRAW_FIFTY_MOVE: GameEndReason.FIFTY_MOVE_RULE,
}


# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[MoveOutcome], None]
PromotionCallback = Callable[[Move], None]
GameOverCallback = Callable[[GameResult, GameEndReason], None]
StateCallback = Callable[[GameState], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_promotion_required: list[PromotionCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)
    on_undo: list[StateCallback] = field(default_factory=list)


def _winner(color: Color) -> GameResult:
    return GameResult.WHITE_WINS if color == Color.WHITE else GameResult.BLACK_WINS


class GameSession:
    """One two-player game and its snapshot history.

    ``history`` always starts with the position the game began from and ends
    with the current state.  Snapshots are kept until undone or, when
    ``config.max_history`` is set, until they fall off the old end.
    """

    __slots__ = (
        "_config",
        "_history",
        "_pending",
        "_result",
        "_end_reason",
        "events",
    )

    def __init__(self, config: SessionConfig | None = None) -> None:
        self._config = config if config is not None else SessionConfig()
        self._history: list[GameState] = []
        self._pending: Move | None = None
        self._result = GameResult.IN_PROGRESS
        self._end_reason = GameEndReason.NONE
        self.events = GameEvents()
        self.new_game()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def config(self) -> SessionConfig:
        return self._config

    @property
    def state(self) -> GameState:
        """Current state.  Treat as read-only; use :meth:`snapshot` to keep one."""
        return self._history[-1]

    @property
    def history(self) -> tuple[GameState, ...]:
        return tuple(self._history)

    @property
    def side_to_move(self) -> Color:
        return self.state.side_to_move

    @property
    def result(self) -> GameResult:
        return self._result

    @property
    def end_reason(self) -> GameEndReason:
        return self._end_reason

    @property
    def is_game_over(self) -> bool:
        return self._result != GameResult.IN_PROGRESS

    @property
    def pending_promotion(self) -> Move | None:
        """Move waiting for :meth:`choose_promotion`, if any."""
        return self._pending

    @property
    def white_captures(self) -> tuple[PieceType, ...]:
        return self.state.white_captures

    @property
    def black_captures(self) -> tuple[PieceType, ...]:
        return self.state.black_captures

    # ── Lifecycle ────────────────────────────────────────────────────────

    def new_game(self, start: GameState | None = None) -> None:
        """Initialise (or reset) the game, optionally from a custom position."""
        first = start.copy() if start is not None else GameState.new_game()
        self._history = [first]
        self._pending = None
        self._result = GameResult.IN_PROGRESS
        self._end_reason = GameEndReason.NONE
        _LOGGER.debug("New game, %s to move", first.side_to_move)
        self._check_terminal(Rules.status(first), first)

    # ── Moves ────────────────────────────────────────────────────────────

    def legal_moves(self, sq: Square) -> list[Move]:
        """Legal moves for the piece on *sq*; empty while no move can be made."""
        if self.is_game_over or self._pending is not None:
            return []
        return legal_moves(sq, self.state)

    def submit_move(self, move: Move, promotion: PieceType | None = None) -> MoveOutcome:
        """Apply *move*; the outcome's status says what happened.

        A promoting move without a choice becomes the pending promotion and
        nothing is committed until :meth:`choose_promotion`.  A rejected move
        leaves any pending promotion in place.
        """
        state = self.state
        if self.is_game_over:
            _LOGGER.warning("Rejected %s: game is over", move)
            return MoveOutcome(state, GameStatus.ILLEGAL_MOVE, move)

        outcome = apply_move(state, move, promotion)

        if outcome.status == GameStatus.AWAITING_PROMOTION_CHOICE:
            self._pending = outcome.move
            _LOGGER.debug("Awaiting promotion choice for %s", outcome.move)
            for cb in self.events.on_promotion_required:
                cb(outcome.move)
            return outcome

        if outcome.status == GameStatus.ILLEGAL_MOVE:
            _LOGGER.warning("Rejected illegal move %s", move)
            return outcome

        self._pending = None
        self._push(outcome.state)
        _LOGGER.debug(
            "Applied %s (%s), %d snapshot(s) held",
            outcome.move,
            outcome.status.name,
            len(self._history),
        )
        for cb in self.events.on_move:
            cb(outcome)

        self._check_terminal(outcome.status, outcome.state)
        return outcome

    def choose_promotion(self, piece_type: PieceType) -> MoveOutcome | None:
        """Complete the pending promotion. Returns None if nothing is pending.

        A kind other than queen, rook, bishop or knight is rejected and the
        promotion stays pending.
        """
        pending = self._pending
        if pending is None:
            return None
        if piece_type not in PROMOTION_TYPES:
            _LOGGER.warning("Rejected promotion of %s to %s", pending, piece_type)
            return MoveOutcome(self.state, GameStatus.ILLEGAL_MOVE, pending)
        return self.submit_move(pending, piece_type)

    def cancel_promotion(self) -> None:
        self._pending = None

    # ── History ──────────────────────────────────────────────────────────

    def snapshot(self) -> GameState:
        """Independent copy of the current state."""
        return self.state.copy()

    def undo(self) -> bool:
        """Step back one half-move. Returns True on success."""
        if len(self._history) < 2:
            return False

        self._history.pop()
        self._pending = None
        self._result = GameResult.IN_PROGRESS
        self._end_reason = GameEndReason.NONE
        _LOGGER.debug("Undo, %d snapshot(s) left", len(self._history))

        state = self.state
        for cb in self.events.on_undo:
            cb(state)
        return True

    def restore(self, snapshot: GameState) -> None:
        """Continue the game from *snapshot*; the jump itself can be undone."""
        state = snapshot.copy()
        self._push(state)
        self._pending = None
        self._result = GameResult.IN_PROGRESS
        self._end_reason = GameEndReason.NONE
        self._check_terminal(Rules.status(state), state)

    def repetition_count(self) -> int:
        """How many held snapshots share the current position.

        Only snapshots still in the history are counted.
        """
        key = self.state.position_key()
        return sum(1 for s in self._history if s.position_key() == key)

    def is_threefold_repetition(self) -> bool:
        return self.repetition_count() >= 3

    # ── Resignation / time ───────────────────────────────────────────────

    def resign(self, color: Color) -> None:
        if self.is_game_over:
            return
        self._finish(_winner(color.opposite), GameEndReason.RESIGNATION)

    def flag_fall(self, color: Color) -> None:
        """Time ran out for *color*, as reported by an external clock."""
        if self.is_game_over:
            return
        self._finish(_winner(color.opposite), GameEndReason.TIME_FORFEIT)

    # ── Internal ─────────────────────────────────────────────────────────

    def _push(self, state: GameState) -> None:
        self._history.append(state)
        limit = self._config.max_history
        if limit is not None and len(self._history) > limit:
            del self._history[: len(self._history) - limit]

    def _check_terminal(self, status: GameStatus, state: GameState) -> None:
        if not status.is_terminal:
            return
        if status == GameStatus.CHECKMATE:
            result = _winner(state.side_to_move.opposite)
        else:
            result = GameResult.DRAW
        self._finish(result, _STATUS_REASONS[status])

    def _finish(self, result: GameResult, reason: GameEndReason) -> None:
        self._pending = None
        self._result = result
        self._end_reason = reason
        _LOGGER.info("Game over: %s by %s", result.name, reason.name)
        for cb in self.events.on_game_over:
            cb(result, reason)
