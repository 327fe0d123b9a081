"""Qt bridge exposing a GameSession through signals and slots."""

from __future__ import annotations

import logging

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from gambit.core.applier import MoveOutcome
from gambit.core.enums import PROMOTION_TYPES, Color, GameResult, GameStatus, PieceType
from gambit.core.move import Move
from gambit.game.session import GameEndReason, GameSession

_LOGGER = logging.getLogger(__name__)


class SessionBridge(QObject):
    """Thread-affine adapter between a renderer and a :class:`GameSession`.

    Signals carry engine objects as ``object`` payloads; enum values travel
    as ``int``.
    """

    move_applied = pyqtSignal(object)  # MoveOutcome
    move_rejected = pyqtSignal(str)
    promotion_required = pyqtSignal(object)  # Move
    game_over = pyqtSignal(int, int)  # GameResult, GameEndReason
    state_changed = pyqtSignal(object)  # GameState

    __slots__ = ("_session",)

    def __init__(self, session: GameSession | None = None) -> None:
        super().__init__()
        self._session = session if session is not None else GameSession()
        events = self._session.events
        events.on_move.append(self._on_move)
        events.on_promotion_required.append(self.promotion_required.emit)
        events.on_game_over.append(self._on_game_over)
        events.on_undo.append(self.state_changed.emit)

    @property
    def session(self) -> GameSession:
        return self._session

    # ── Slots ────────────────────────────────────────────────────────────

    @pyqtSlot()
    def new_game(self) -> None:
        self._session.new_game()
        self.state_changed.emit(self._session.state)

    @pyqtSlot(object)
    def submit_move(self, move_obj: object) -> None:
        """Submit *move_obj*; rejection is reported via ``move_rejected``."""
        if not isinstance(move_obj, Move):
            self.move_rejected.emit("Bridge received invalid move")
            return

        outcome = self._session.submit_move(move_obj)
        if outcome.status == GameStatus.ILLEGAL_MOVE:
            self.move_rejected.emit(f"Illegal move: {move_obj}")

    @pyqtSlot(int)
    def choose_promotion(self, piece_type: int) -> None:
        if piece_type not in PROMOTION_TYPES:
            self.move_rejected.emit(f"Invalid promotion piece: {piece_type}")
            return
        if self._session.choose_promotion(PieceType(piece_type)) is None:
            self.move_rejected.emit("No promotion pending")

    @pyqtSlot()
    def undo(self) -> None:
        if not self._session.undo():
            _LOGGER.debug("Nothing to undo")

    @pyqtSlot(int)
    def resign(self, color: int) -> None:
        self._session.resign(Color(color))

    @pyqtSlot(int)
    def flag_fall(self, color: int) -> None:
        self._session.flag_fall(Color(color))

    # ── Session callbacks ────────────────────────────────────────────────

    def _on_move(self, outcome: MoveOutcome) -> None:
        self.move_applied.emit(outcome)
        self.state_changed.emit(outcome.state)

    def _on_game_over(self, result: GameResult, reason: GameEndReason) -> None:
        self.game_over.emit(int(result), int(reason))
