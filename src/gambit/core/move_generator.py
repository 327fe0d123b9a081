"""Pseudo-legal and legal move generation."""

from __future__ import annotations

from gambit.core.attacks import (
    BISHOP_RAYS,
    KING_TARGETS,
    KNIGHT_TARGETS,
    QUEEN_RAYS,
    ROOK_RAYS,
    is_in_check,
    is_square_attacked,
    pawn_direction,
)
from gambit.core.board import Board
from gambit.core.enums import CastleSide, CastlingRights, Color, PieceType
from gambit.core.move import Move
from gambit.core.piece import Piece
from gambit.core.state import GameState
from gambit.core.types import Square, is_on_board

_KING_HOME_COL = 4

# side -> (king destination col, rook home col, rook destination col,
#          cols that must be empty, cols the king crosses or lands on)
_CASTLE_GEOMETRY: dict[
    CastleSide, tuple[int, int, int, tuple[int, ...], tuple[int, ...]]
] = {
    CastleSide.KINGSIDE: (6, 7, 5, (5, 6), (5, 6)),
    CastleSide.QUEENSIDE: (2, 0, 3, (1, 2, 3), (3, 2)),
}


def back_row(color: Color) -> int:
    """Row of *color*'s home rank."""
    return 7 if color == Color.WHITE else 0


def promotion_row(color: Color) -> int:
    """Farthest row from *color*'s start; pawns promote on arrival."""
    return 0 if color == Color.WHITE else 7


def _pawn_start_row(color: Color) -> int:
    return 6 if color == Color.WHITE else 1


def _en_passant_row(color: Color) -> int:
    """Row a pawn of *color* must stand on to capture en passant."""
    return 3 if color == Color.WHITE else 4


def rook_castle_squares(color: Color, side: CastleSide) -> tuple[Square, Square]:
    """``(rook_from, rook_to)`` for *color* castling on *side*."""
    _, rook_home, rook_dest, _, _ = _CASTLE_GEOMETRY[side]
    row = back_row(color)
    return (row, rook_home), (row, rook_dest)


def project_board(board: Board, move: Move, en_passant: Square | None) -> Board:
    """Return a copy of *board* with *move* played on it.

    Relocates the rook for castling and removes the en-passant victim.
    Promotion is not substituted: the piece kind on the destination does not
    affect whether the mover's own king is in check.
    """
    projected = board.copy()
    piece = projected[move.from_sq]
    if piece is None:
        return projected

    projected[move.to_sq] = piece
    projected[move.from_sq] = None

    if move.castle is not None:
        rook_from, rook_to = rook_castle_squares(piece.color, move.castle)
        projected[rook_to] = projected[rook_from]
        projected[rook_from] = None
    elif is_en_passant_capture(piece, move, en_passant):
        projected[en_passant_victim(move)] = None

    return projected


def is_en_passant_capture(piece: Piece, move: Move, en_passant: Square | None) -> bool:
    return (
        piece.piece_type == PieceType.PAWN
        and en_passant is not None
        and move.to_sq == en_passant
        and move.from_sq[1] != move.to_sq[1]
    )


def requires_promotion(state: GameState, move: Move) -> bool:
    """Whether *move* lands a pawn on its farthest rank in *state*."""
    piece = state.board[move.from_sq]
    return (
        piece is not None
        and piece.piece_type == PieceType.PAWN
        and move.to_sq[0] == promotion_row(piece.color)
    )


def en_passant_victim(move: Move) -> Square:
    """The captured pawn sits beside the capturer, behind the target."""
    return (move.from_sq[0], move.to_sq[1])


class MoveGenerator:
    """Generates moves for the pieces of a given :class:`GameState`.

    Never mutates the state: candidates are tested on projected copies.
    """

    __slots__ = ("_state", "_board")

    def __init__(self, state: GameState) -> None:
        self._state = state
        self._board = state.board

    # -- Public API ---------------------------------------------------------

    def legal_moves(self, sq: Square) -> list[Move]:
        """Legal moves for the piece on *sq*; empty if none or not its turn."""
        piece = self._board[sq]
        if piece is None or piece.color != self._state.side_to_move:
            return []

        legal: list[Move] = []
        for move in self.pseudo_legal_moves(sq):
            projected = project_board(self._board, move, self._state.en_passant)
            if not is_in_check(piece.color, projected):
                legal.append(move)
        return legal

    def pseudo_legal_moves(self, sq: Square) -> list[Move]:
        """Moves obeying movement and occupancy rules for the piece on *sq*.

        May leave the mover's own king in check.
        """
        piece = self._board[sq]
        if piece is None or piece.color != self._state.side_to_move:
            return []

        moves: list[Move] = []
        color = piece.color
        ptype = piece.piece_type
        if ptype == PieceType.PAWN:
            self._gen_pawn(sq, color, moves)
        elif ptype == PieceType.KNIGHT:
            self._gen_steps(sq, color, KNIGHT_TARGETS[sq], moves)
        elif ptype == PieceType.BISHOP:
            self._gen_sliding(sq, color, BISHOP_RAYS[sq], moves)
        elif ptype == PieceType.ROOK:
            self._gen_sliding(sq, color, ROOK_RAYS[sq], moves)
        elif ptype == PieceType.QUEEN:
            self._gen_sliding(sq, color, QUEEN_RAYS[sq], moves)
        else:
            self._gen_steps(sq, color, KING_TARGETS[sq], moves)
            self._gen_castling(sq, color, moves)
        return moves

    def all_legal_moves(self) -> list[Move]:
        """Every legal move for the side to move."""
        moves: list[Move] = []
        for sq, _ in list(self._board.pieces(self._state.side_to_move)):
            moves.extend(self.legal_moves(sq))
        return moves

    def has_legal_moves(self) -> bool:
        """Whether the side to move has at least one legal move."""
        for sq, _ in list(self._board.pieces(self._state.side_to_move)):
            if self.legal_moves(sq):
                return True
        return False

    def is_in_check(self, color: Color | None = None) -> bool:
        """Is *color* (default: side to move) in check?"""
        if color is None:
            color = self._state.side_to_move
        return is_in_check(color, self._board)

    # -- Piece-specific generators (private) -------------------------------

    def _gen_pawn(self, sq: Square, color: Color, moves: list[Move]) -> None:
        board = self._board
        row, col = sq
        step = pawn_direction(color)

        one_row = row + step
        if is_on_board(one_row, col) and board.is_empty((one_row, col)):
            moves.append(Move(sq, (one_row, col)))
            two_row = row + 2 * step
            if row == _pawn_start_row(color) and board.is_empty((two_row, col)):
                moves.append(Move(sq, (two_row, col)))

        for dc in (-1, 1):
            if not is_on_board(one_row, col + dc):
                continue
            target_sq = (one_row, col + dc)
            target = board[target_sq]
            if target is not None and target.color != color:
                moves.append(Move(sq, target_sq))

        ep = self._state.en_passant
        if (
            ep is not None
            and row == _en_passant_row(color)
            and ep[0] == one_row
            and abs(ep[1] - col) == 1
        ):
            moves.append(Move(sq, ep))

    def _gen_steps(
        self,
        sq: Square,
        color: Color,
        targets: tuple[Square, ...],
        moves: list[Move],
    ) -> None:
        board = self._board
        for to_sq in targets:
            target = board[to_sq]
            if target is None or target.color != color:
                moves.append(Move(sq, to_sq))

    def _gen_sliding(
        self,
        sq: Square,
        color: Color,
        rays: tuple[tuple[Square, ...], ...],
        moves: list[Move],
    ) -> None:
        board = self._board
        for ray in rays:
            for to_sq in ray:
                target = board[to_sq]
                if target is None:
                    moves.append(Move(sq, to_sq))
                    continue
                if target.color != color:
                    moves.append(Move(sq, to_sq))
                break

    def _gen_castling(self, king_sq: Square, color: Color, moves: list[Move]) -> None:
        row = back_row(color)
        if king_sq != (row, _KING_HOME_COL):
            return
        if self.is_in_check(color):
            return

        board = self._board
        opponent = color.opposite
        own_rook = Piece(color, PieceType.ROOK)

        for side, (king_dest, rook_home, _, between, crossed) in _CASTLE_GEOMETRY.items():
            if not self._state.castling & CastlingRights.for_side(color, side):
                continue
            if board[(row, rook_home)] != own_rook:
                continue
            if any(not board.is_empty((row, c)) for c in between):
                continue
            if any(is_square_attacked((row, c), opponent, board) for c in crossed):
                continue
            moves.append(Move(king_sq, (row, king_dest), castle=side))


# -- Functional façade --------------------------------------------------------


def pseudo_legal_moves(sq: Square, state: GameState) -> list[Move]:
    return MoveGenerator(state).pseudo_legal_moves(sq)


def legal_moves(sq: Square, state: GameState) -> list[Move]:
    """Legal moves for the piece on *sq* in *state*.

    An empty list is a normal answer: empty square, piece of the side not to
    move, or no legal destinations.
    """
    return MoveGenerator(state).legal_moves(sq)


def all_legal_moves(state: GameState) -> list[Move]:
    return MoveGenerator(state).all_legal_moves()


def has_legal_moves(state: GameState) -> bool:
    return MoveGenerator(state).has_legal_moves()
