"""Session configuration."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SessionConfig:
    """Immutable settings for a :class:`~gambit.game.session.GameSession`.

    Args:
        max_history: Maximum number of snapshots kept for undo, including the
            current one.  ``None`` keeps every snapshot.
    """

    max_history: int | None = None

    def __post_init__(self) -> None:
        if self.max_history is not None and self.max_history < 2:
            raise ValueError(
                f"max_history must be at least 2 to allow undo, got {self.max_history}"
            )

    @classmethod
    def unbounded(cls) -> SessionConfig:
        return cls()

    @classmethod
    def last_moves(cls, count: int) -> SessionConfig:
        """Keep enough snapshots to undo *count* half-moves."""
        return cls(max_history=count + 1)
