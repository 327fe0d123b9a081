"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import os
import sys
from collections.abc import Callable, Iterator, Sequence

import pytest

from gambit.core.board import Board
from gambit.core.enums import CastlingRights, Color
from gambit.core.state import GameState
from gambit.core.types import Square

# Linux CI runners are often headless. Force an offscreen backend only there.
if (
    sys.platform.startswith("linux")
    and "QT_QPA_PLATFORM" not in os.environ
    and "DISPLAY" not in os.environ
    and "WAYLAND_DISPLAY" not in os.environ
):
    os.environ["QT_QPA_PLATFORM"] = "offscreen"


StateFactory = Callable[..., GameState]


@pytest.fixture(scope="session")
def qapp() -> Iterator[object]:
    """Provide a singleton QCoreApplication for Qt bridge tests."""
    qtcore = pytest.importorskip("PyQt6.QtCore")

    app = qtcore.QCoreApplication.instance()
    if app is None:
        app = qtcore.QCoreApplication([])
    yield app


@pytest.fixture
def make_state() -> StateFactory:
    """Build a GameState from eight board rows (rank 8 first).

    Castling rights default to none so hand-made positions only castle when
    a test asks for it.
    """

    def _make(
        rows: Sequence[str],
        side: Color = Color.WHITE,
        castling: CastlingRights = CastlingRights.NONE,
        en_passant: Square | None = None,
        halfmove_clock: int = 0,
        fullmove_number: int = 1,
    ) -> GameState:
        return GameState(
            board=Board.from_rows(rows),
            side_to_move=side,
            castling=castling,
            en_passant=en_passant,
            halfmove_clock=halfmove_clock,
            fullmove_number=fullmove_number,
        )

    return _make
