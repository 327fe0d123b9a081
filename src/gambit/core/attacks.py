"""Attack detection: is a square attacked, is a king in check.

Every function here is a pure read of a :class:`Board`, which is what lets
the move generator test hypothetical boards without touching live state.
"""

from __future__ import annotations

from gambit.core.board import Board
from gambit.core.enums import Color, PieceType
from gambit.core.types import Square, all_squares, is_on_board

Offset = tuple[int, int]

KNIGHT_OFFSETS: tuple[Offset, ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[Offset, ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[Offset, ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[Offset, ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[Offset, ...] = BISHOP_DIRS + ROOK_DIRS


def pawn_direction(color: Color) -> int:
    """Row delta of a forward pawn step for *color*."""
    return -1 if color == Color.WHITE else 1


# -- Precomputed lookup tables ---------------------------------------------


def _build_targets(offsets: tuple[Offset, ...]) -> dict[Square, tuple[Square, ...]]:
    return {
        (row, col): tuple(
            (row + dr, col + dc)
            for dr, dc in offsets
            if is_on_board(row + dr, col + dc)
        )
        for row, col in all_squares()
    }


def _build_rays(
    directions: tuple[Offset, ...],
) -> dict[Square, tuple[tuple[Square, ...], ...]]:
    rays: dict[Square, tuple[tuple[Square, ...], ...]] = {}
    for row, col in all_squares():
        square_rays: list[tuple[Square, ...]] = []
        for dr, dc in directions:
            r, c = row + dr, col + dc
            ray: list[Square] = []
            while is_on_board(r, c):
                ray.append((r, c))
                r += dr
                c += dc
            square_rays.append(tuple(ray))
        rays[(row, col)] = tuple(square_rays)
    return rays


KNIGHT_TARGETS = _build_targets(KNIGHT_OFFSETS)
KING_TARGETS = _build_targets(KING_OFFSETS)
BISHOP_RAYS = _build_rays(BISHOP_DIRS)
ROOK_RAYS = _build_rays(ROOK_DIRS)
QUEEN_RAYS = _build_rays(QUEEN_DIRS)


# -- Public API ---------------------------------------------------------------


def is_square_attacked(sq: Square, by_color: Color, board: Board) -> bool:
    """Is *sq* attacked by any piece of *by_color*?

    Independent of whose turn it is.  Walks outward from *sq*: pawn and
    knight/king geometries are single steps, sliding geometries stop at the
    first occupant, which only counts if it is a matching attacker.
    """
    row, col = sq

    # A pawn attacks diagonally forward, so an attacking pawn sits one step
    # *behind* the target from its own point of view.
    pawn_row = row - pawn_direction(by_color)
    for dc in (-1, 1):
        if is_on_board(pawn_row, col + dc):
            piece = board[(pawn_row, col + dc)]
            if piece is not None and piece.is_a(by_color, PieceType.PAWN):
                return True

    for from_sq in KNIGHT_TARGETS[sq]:
        piece = board[from_sq]
        if piece is not None and piece.is_a(by_color, PieceType.KNIGHT):
            return True

    if _ray_hits(board, ROOK_RAYS[sq], by_color, PieceType.ROOK):
        return True

    if _ray_hits(board, BISHOP_RAYS[sq], by_color, PieceType.BISHOP):
        return True

    for from_sq in KING_TARGETS[sq]:
        piece = board[from_sq]
        if piece is not None and piece.is_a(by_color, PieceType.KING):
            return True

    return False


def is_in_check(color: Color, board: Board) -> bool:
    """Is *color*'s king attacked by the opponent?

    A board without a king for *color* is reported as not in check.
    """
    king_sq = board.find_king(color)
    if king_sq is None:
        return False
    return is_square_attacked(king_sq, color.opposite, board)


def _ray_hits(
    board: Board,
    rays: tuple[tuple[Square, ...], ...],
    by_color: Color,
    slider: PieceType,
) -> bool:
    for ray in rays:
        for to_sq in ray:
            piece = board[to_sq]
            if piece is None:
                continue
            if piece.is_a(by_color, slider, PieceType.QUEEN):
                return True
            break
    return False
