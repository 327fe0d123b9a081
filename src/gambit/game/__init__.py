"""Game management layer — session, undo history, promotion flow.

Quick start::

    from gambit.core import parse_square
    from gambit.game import GameSession

    session = GameSession()
    session.events.on_game_over.append(print)
    moves = session.legal_moves(parse_square("e2"))
    session.submit_move(moves[-1])

The Qt bridge lives in :mod:`gambit.game.qt_bridge` and needs the ``qt``
extra; it is not imported here.
"""

from gambit.game.config import SessionConfig
from gambit.game.session import GameEndReason, GameEvents, GameSession

__all__ = [
    "GameEndReason",
    "GameEvents",
    "GameSession",
    "SessionConfig",
]
