"""Board - piece placement on an 8x8 grid."""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence

from gambit.core.enums import Color, PieceType
from gambit.core.piece import Piece
from gambit.core.types import BOARD_SIZE, Square, parse_square

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


class Board:
    """Mutable 8x8 grid of optional pieces, indexed by ``(row, col)``.

    Engine code only ever mutates boards it has just copied; a board handed
    to the engine by a caller is never written to.
    """

    __slots__ = ("_grid",)

    def __init__(self) -> None:
        self._grid: list[list[Piece | None]] = [
            [None] * BOARD_SIZE for _ in range(BOARD_SIZE)
        ]

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        row, col = sq
        return self._grid[row][col]

    def __setitem__(self, sq: Square, piece: Piece | None) -> None:
        row, col = sq
        self._grid[row][col] = piece

    def is_empty(self, sq: Square) -> bool:
        return self[sq] is None

    # -- Query helpers ------------------------------------------------------

    def pieces(self, color: Color) -> Iterator[tuple[Square, Piece]]:
        """Yield ``(square, piece)`` for every piece of *color*."""
        for row, rank in enumerate(self._grid):
            for col, piece in enumerate(rank):
                if piece is not None and piece.color == color:
                    yield (row, col), piece

    def find_king(self, color: Color) -> Square | None:
        """Square of *color*'s king, or None on a malformed board."""
        for sq, piece in self.pieces(color):
            if piece.piece_type == PieceType.KING:
                return sq
        return None

    def count(self, color: Color, piece_type: PieceType) -> int:
        return sum(1 for _, p in self.pieces(color) if p.piece_type == piece_type)

    # -- Copying ------------------------------------------------------------

    def copy(self) -> Board:
        b = Board()
        b._grid = [rank.copy() for rank in self._grid]
        return b

    # -- Factories ----------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        b = cls()
        for col, pt in enumerate(_BACK_RANK):
            b[(0, col)] = Piece(Color.BLACK, pt)
            b[(1, col)] = Piece(Color.BLACK, PieceType.PAWN)
            b[(6, col)] = Piece(Color.WHITE, PieceType.PAWN)
            b[(7, col)] = Piece(Color.WHITE, pt)
        return b

    @classmethod
    def from_placement(cls, placement: Mapping[str, str]) -> Board:
        """Build a board from ``{"e1": "K", "e8": "k", ...}``."""
        b = cls()
        for name, char in placement.items():
            b[parse_square(name)] = Piece.from_char(char)
        return b

    @classmethod
    def from_rows(cls, rows: Sequence[str]) -> Board:
        """Build a board from eight 8-character rows, row 0 (rank 8) first.

        ``.`` marks an empty square, letters are pieces as in
        :meth:`Piece.from_char`; spaces are ignored.
        """
        if len(rows) != BOARD_SIZE:
            raise ValueError(f"Expected {BOARD_SIZE} rows, got {len(rows)}")
        b = cls()
        for row, text in enumerate(rows):
            cells = text.replace(" ", "")
            if len(cells) != BOARD_SIZE:
                raise ValueError(f"Row {row} must have {BOARD_SIZE} squares: {text!r}")
            for col, char in enumerate(cells):
                if char != ".":
                    b[(row, col)] = Piece.from_char(char)
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._grid == other._grid

    def key(self) -> tuple[Piece | None, ...]:
        """Hashable snapshot of the placement."""
        return tuple(piece for rank in self._grid for piece in rank)

    def __repr__(self) -> str:
        rows: list[str] = []
        for row, rank in enumerate(self._grid):
            cells = " ".join(str(p) if p else "." for p in rank)
            rows.append(f"{BOARD_SIZE - row} {cells}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
