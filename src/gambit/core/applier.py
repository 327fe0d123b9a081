"""Move application: the only way a GameState advances."""

from __future__ import annotations

from dataclasses import dataclass

from gambit.core.enums import (
    PROMOTION_TYPES,
    CastlingRights,
    Color,
    GameStatus,
    PieceType,
)
from gambit.core.move import Move
from gambit.core.move_generator import (
    MoveGenerator,
    en_passant_victim,
    is_en_passant_capture,
    requires_promotion,
    rook_castle_squares,
)
from gambit.core.piece import Piece
from gambit.core.rules import Rules
from gambit.core.state import GameState
from gambit.core.types import Square, make_square

# Home corner -> (owner, right lost when the corner rook leaves or is taken)
_ROOK_CORNERS: dict[Square, tuple[Color, CastlingRights]] = {
    (7, 0): (Color.WHITE, CastlingRights.WHITE_QUEENSIDE),
    (7, 7): (Color.WHITE, CastlingRights.WHITE_KINGSIDE),
    (0, 0): (Color.BLACK, CastlingRights.BLACK_QUEENSIDE),
    (0, 7): (Color.BLACK, CastlingRights.BLACK_KINGSIDE),
}


@dataclass(frozen=True, slots=True)
class MoveOutcome:
    """What :func:`apply_move` produced.

    For ``AWAITING_PROMOTION_CHOICE`` and ``ILLEGAL_MOVE`` the ``state`` is
    the input state, untouched.
    """

    state: GameState
    status: GameStatus
    move: Move
    captured: Piece | None = None
    in_check: bool = False

    @property
    def committed(self) -> bool:
        return self.status.is_committed


def apply_move(
    state: GameState,
    move: Move,
    promotion: PieceType | None = None,
) -> MoveOutcome:
    """Apply *move* to *state* and return the next state with its status.

    *move* must be one :func:`~gambit.core.move_generator.legal_moves`
    offered (matched by origin and destination); anything else is reported
    as ``ILLEGAL_MOVE``.  A pawn reaching the last rank needs a promotion
    kind, taken from *promotion* or ``move.promotion``; without one the
    result is ``AWAITING_PROMOTION_CHOICE`` and nothing is committed.

    Raises:
        ValueError: If a square of *move* lies off the board.
    """
    make_square(*move.from_sq)
    make_square(*move.to_sq)

    piece = state.board[move.from_sq]
    if piece is None or piece.color != state.side_to_move:
        return MoveOutcome(state, GameStatus.ILLEGAL_MOVE, move)

    legal = _find_legal(state, move)
    if legal is None:
        return MoveOutcome(state, GameStatus.ILLEGAL_MOVE, move)

    choice = promotion if promotion is not None else move.promotion
    if requires_promotion(state, legal):
        if choice is None:
            return MoveOutcome(state, GameStatus.AWAITING_PROMOTION_CHOICE, legal)
        if choice not in PROMOTION_TYPES:
            return MoveOutcome(state, GameStatus.ILLEGAL_MOVE, move)
        legal = legal.with_promotion(choice)
    elif choice is not None:
        return MoveOutcome(state, GameStatus.ILLEGAL_MOVE, move)

    next_state, captured = _commit(state, legal, piece)
    status, in_check = Rules.evaluate(next_state)
    return MoveOutcome(next_state, status, legal, captured, in_check)


def _find_legal(state: GameState, move: Move) -> Move | None:
    for candidate in MoveGenerator(state).legal_moves(move.from_sq):
        if candidate.to_sq == move.to_sq:
            return candidate
    return None


def _commit(state: GameState, move: Move, piece: Piece) -> tuple[GameState, Piece | None]:
    """Play a validated *move* on a copy of *state*."""
    nxt = state.copy()
    board = nxt.board
    color = piece.color

    en_passant = is_en_passant_capture(piece, move, state.en_passant)
    if en_passant:
        captured = board[en_passant_victim(move)]
    else:
        captured = board[move.to_sq]

    nxt.castling = _next_castling(state.castling, move, piece, captured)

    placed = piece
    if move.promotion is not None:
        placed = Piece(color, move.promotion)
    board[move.to_sq] = placed
    board[move.from_sq] = None

    if move.castle is not None:
        rook_from, rook_to = rook_castle_squares(color, move.castle)
        board[rook_to] = board[rook_from]
        board[rook_from] = None
    elif en_passant:
        board[en_passant_victim(move)] = None

    if piece.piece_type == PieceType.PAWN and abs(move.to_sq[0] - move.from_sq[0]) == 2:
        nxt.en_passant = ((move.from_sq[0] + move.to_sq[0]) // 2, move.from_sq[1])
    else:
        nxt.en_passant = None

    if piece.piece_type == PieceType.PAWN or captured is not None:
        nxt.halfmove_clock = 0
    else:
        nxt.halfmove_clock += 1

    if color == Color.BLACK:
        nxt.fullmove_number += 1

    if captured is not None:
        if color == Color.WHITE:
            nxt.white_captures += (captured.piece_type,)
        else:
            nxt.black_captures += (captured.piece_type,)

    nxt.side_to_move = color.opposite
    return nxt, captured


def _next_castling(
    castling: CastlingRights,
    move: Move,
    piece: Piece,
    captured: Piece | None,
) -> CastlingRights:
    if piece.piece_type == PieceType.KING:
        castling &= ~CastlingRights.both(piece.color)

    if piece.piece_type == PieceType.ROOK and move.from_sq in _ROOK_CORNERS:
        owner, right = _ROOK_CORNERS[move.from_sq]
        if owner == piece.color:
            castling &= ~right

    # Keyed on the captured kind and the square, not on which rook it is.
    if (
        captured is not None
        and captured.piece_type == PieceType.ROOK
        and move.to_sq in _ROOK_CORNERS
    ):
        owner, right = _ROOK_CORNERS[move.to_sq]
        if owner == captured.color:
            castling &= ~right

    return castling
