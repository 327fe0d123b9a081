"""Square type alias and coordinate helpers.

Board layout is (row, column), rows counted from Black's side:
    row 0 = rank 8 (Black's back rank) ... row 7 = rank 1 (White's back rank)
    col 0 = file a ... col 7 = file h

So ``e1`` is ``(7, 4)`` and ``e8`` is ``(0, 4)``.  White pawns advance toward
row 0, Black pawns toward row 7.
"""

from __future__ import annotations

from typing import TypeAlias

Square: TypeAlias = tuple[int, int]

BOARD_SIZE = 8


def is_on_board(row: int, col: int) -> bool:
    """Bounds test used by every geometry walk."""
    return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE


def make_square(row: int, col: int) -> Square:
    """Create a square, failing fast on out-of-range coordinates."""
    if not is_on_board(row, col):
        raise ValueError(f"Square out of bounds: ({row}, {col})")
    return (row, col)


def square_name(sq: Square) -> str:
    """Human-readable name, e.g. (7, 4) → 'e1'."""
    row, col = sq
    return chr(ord("a") + col) + str(BOARD_SIZE - row)


def parse_square(name: str) -> Square:
    """Parse square name, e.g. 'e4' → (4, 4)."""
    if len(name) != 2 or name[0] not in "abcdefgh" or name[1] not in "12345678":
        raise ValueError(f"Invalid square name: {name!r}")
    return (BOARD_SIZE - int(name[1]), ord(name[0]) - ord("a"))


def all_squares() -> list[Square]:
    """Every square in row-major order from a8 to h1."""
    return [(row, col) for row in range(BOARD_SIZE) for col in range(BOARD_SIZE)]


# ── Named square constants ──────────────────────────────────────────────────

A8, B8, C8, D8, E8, F8, G8, H8 = ((0, c) for c in range(8))
A7, B7, C7, D7, E7, F7, G7, H7 = ((1, c) for c in range(8))
A6, B6, C6, D6, E6, F6, G6, H6 = ((2, c) for c in range(8))
A5, B5, C5, D5, E5, F5, G5, H5 = ((3, c) for c in range(8))
A4, B4, C4, D4, E4, F4, G4, H4 = ((4, c) for c in range(8))
A3, B3, C3, D3, E3, F3, G3, H3 = ((5, c) for c in range(8))
A2, B2, C2, D2, E2, F2, G2, H2 = ((6, c) for c in range(8))
A1, B1, C1, D1, E1, F1, G1, H1 = ((7, c) for c in range(8))
