"""Tests for apply_move: state transitions, special moves and statuses."""

from __future__ import annotations

import pytest

from gambit.core.applier import MoveOutcome, apply_move
from gambit.core.enums import CastleSide, CastlingRights, Color, GameStatus, PieceType
from gambit.core.move import Move
from gambit.core.piece import Piece
from gambit.core.state import GameState
from gambit.core.types import (
    A1, A2, A8, C1, D1, D5, D6, D8, E1, E2, E3, E5, E6, E7, E8, F1, G1, G4, G6,
    H1, H2, parse_square,
)

EMPTY = "........"

CASTLING_ROWS = (
    "r...k..r",
    EMPTY,
    EMPTY,
    EMPTY,
    EMPTY,
    EMPTY,
    EMPTY,
    "R...K..R",
)

PROMOTION_ROWS = (
    "...r....",
    "....P...",
    ".......k",
    EMPTY,
    EMPTY,
    EMPTY,
    EMPTY,
    "K.......",
)


def uci(text: str) -> Move:
    return Move(parse_square(text[:2]), parse_square(text[2:4]))


def play(state: GameState, *moves: str) -> MoveOutcome:
    """Apply *moves* in order, failing the test on any rejected move."""
    outcome = None
    for text in moves:
        outcome = apply_move(state, uci(text))
        assert outcome.committed, f"{text} was rejected: {outcome.status.name}"
        state = outcome.state
    assert outcome is not None
    return outcome


class TestBasicTransitions:
    def test_double_push_sets_en_passant_target(self) -> None:
        outcome = apply_move(GameState.new_game(), uci("e2e4"))
        assert outcome.status == GameStatus.ONGOING
        assert outcome.state.en_passant == E3
        assert outcome.state.side_to_move == Color.BLACK
        assert outcome.state.fullmove_number == 1
        assert outcome.captured is None

    def test_black_double_push_and_fullmove(self) -> None:
        outcome = play(GameState.new_game(), "e2e4", "e7e5")
        assert outcome.state.en_passant == E6
        assert outcome.state.fullmove_number == 2
        assert outcome.state.side_to_move == Color.WHITE

    def test_target_cleared_by_next_move(self) -> None:
        outcome = play(GameState.new_game(), "e2e4", "g8f6")
        assert outcome.state.en_passant is None

    def test_halfmove_clock(self) -> None:
        outcome = play(GameState.new_game(), "g1f3", "g8f6")
        assert outcome.state.halfmove_clock == 2
        outcome = apply_move(outcome.state, uci("e2e4"))
        assert outcome.state.halfmove_clock == 0

    def test_input_state_is_not_mutated(self) -> None:
        state = GameState.new_game()
        before = state.copy()
        apply_move(state, uci("e2e4"))
        assert state == before

    def test_returned_move_is_the_generated_one(self) -> None:
        outcome = apply_move(GameState.new_game(), uci("b1c3"))
        assert outcome.move == Move(parse_square("b1"), parse_square("c3"))


class TestIllegalMoves:
    def test_unreachable_destination(self) -> None:
        state = GameState.new_game()
        outcome = apply_move(state, Move(E2, E5))
        assert outcome.status == GameStatus.ILLEGAL_MOVE
        assert outcome.state is state
        assert not outcome.committed

    def test_wrong_side(self) -> None:
        outcome = apply_move(GameState.new_game(), Move(E7, E5))
        assert outcome.status == GameStatus.ILLEGAL_MOVE

    def test_empty_origin(self) -> None:
        outcome = apply_move(GameState.new_game(), Move(E3, parse_square("e4")))
        assert outcome.status == GameStatus.ILLEGAL_MOVE

    def test_move_leaving_king_in_check(self, make_state) -> None:
        state = make_state(
            ("k...r...", EMPTY, EMPTY, EMPTY, EMPTY, EMPTY, "....B...", "....K...")
        )
        outcome = apply_move(state, Move(E2, parse_square("d3")))
        assert outcome.status == GameStatus.ILLEGAL_MOVE

    def test_off_board_square_raises(self) -> None:
        with pytest.raises(ValueError, match="out of bounds"):
            apply_move(GameState.new_game(), Move((8, 0), A1))
        with pytest.raises(ValueError, match="out of bounds"):
            apply_move(GameState.new_game(), Move(A2, (5, -1)))

    def test_promotion_choice_on_ordinary_move(self) -> None:
        outcome = apply_move(GameState.new_game(), uci("e2e4"), PieceType.QUEEN)
        assert outcome.status == GameStatus.ILLEGAL_MOVE


class TestEnPassant:
    def test_capture_removes_victim(self, make_state) -> None:
        state = make_state(
            ("....k...", EMPTY, EMPTY, "...pP...", EMPTY, EMPTY, EMPTY, "....K..."),
            en_passant=D6,
            halfmove_clock=7,
        )
        outcome = apply_move(state, Move(E5, D6))
        assert outcome.committed
        assert outcome.captured == Piece(Color.BLACK, PieceType.PAWN)
        assert outcome.state.board[D5] is None
        assert outcome.state.board[D6] == Piece(Color.WHITE, PieceType.PAWN)
        assert outcome.state.white_captures == (PieceType.PAWN,)
        assert outcome.state.halfmove_clock == 0
        assert outcome.state.en_passant is None

    def test_right_expires_after_one_move(self) -> None:
        outcome = play(
            GameState.new_game(), "e2e4", "a7a6", "e4e5", "d7d5", "h2h3", "h7h6"
        )
        assert apply_move(outcome.state, uci("e5d6")).status == GameStatus.ILLEGAL_MOVE

    def test_immediate_capture_allowed(self) -> None:
        outcome = play(GameState.new_game(), "e2e4", "a7a6", "e4e5", "d7d5", "e5d6")
        assert outcome.state.board[D5] is None
        assert outcome.state.white_captures == (PieceType.PAWN,)


class TestCastling:
    def test_kingside_moves_rook_and_clears_rights(self, make_state) -> None:
        state = make_state(CASTLING_ROWS, castling=CastlingRights.ALL)
        outcome = apply_move(state, Move(E1, G1))
        assert outcome.move.castle == CastleSide.KINGSIDE
        board = outcome.state.board
        assert board[G1] == Piece(Color.WHITE, PieceType.KING)
        assert board[F1] == Piece(Color.WHITE, PieceType.ROOK)
        assert board[H1] is None
        assert outcome.state.castling == CastlingRights.BLACK_BOTH
        assert outcome.state.halfmove_clock == 1

    def test_queenside(self, make_state) -> None:
        state = make_state(CASTLING_ROWS, castling=CastlingRights.ALL)
        outcome = apply_move(state, Move(E1, C1))
        assert outcome.state.board[D1] == Piece(Color.WHITE, PieceType.ROOK)
        assert outcome.state.board[A1] is None

    def test_black_castles(self, make_state) -> None:
        state = make_state(CASTLING_ROWS, side=Color.BLACK, castling=CastlingRights.ALL)
        outcome = apply_move(state, Move(E8, parse_square("g8")))
        assert outcome.state.board[parse_square("f8")] == Piece(Color.BLACK, PieceType.ROOK)
        assert outcome.state.castling == CastlingRights.WHITE_BOTH

    def test_king_step_clears_both_rights(self, make_state) -> None:
        state = make_state(CASTLING_ROWS, castling=CastlingRights.ALL)
        outcome = apply_move(state, Move(E1, E2))
        assert outcome.state.castling == CastlingRights.BLACK_BOTH

    def test_rook_move_clears_its_side(self, make_state) -> None:
        state = make_state(CASTLING_ROWS, castling=CastlingRights.ALL)
        outcome = apply_move(state, Move(H1, H2))
        assert outcome.state.castling == CastlingRights.ALL & ~CastlingRights.WHITE_KINGSIDE

    def test_rook_capture_on_corner_clears_victims_right(self, make_state) -> None:
        state = make_state(CASTLING_ROWS, castling=CastlingRights.ALL)
        outcome = apply_move(state, Move(A1, A8))
        assert outcome.captured == Piece(Color.BLACK, PieceType.ROOK)
        assert outcome.state.castling == (
            CastlingRights.WHITE_KINGSIDE | CastlingRights.BLACK_KINGSIDE
        )
        assert outcome.state.white_captures == (PieceType.ROOK,)
        assert outcome.status == GameStatus.ONGOING_IN_CHECK

    def test_non_rook_capture_on_corner_keeps_right(self, make_state) -> None:
        rows = ("q...k..r",) + CASTLING_ROWS[1:]
        state = make_state(rows, castling=CastlingRights.ALL)
        outcome = apply_move(state, Move(A1, A8))
        assert outcome.captured == Piece(Color.BLACK, PieceType.QUEEN)
        assert outcome.state.castling & CastlingRights.BLACK_QUEENSIDE


class TestPromotion:
    def test_without_choice_awaits(self, make_state) -> None:
        state = make_state(PROMOTION_ROWS)
        outcome = apply_move(state, Move(E7, E8))
        assert outcome.status == GameStatus.AWAITING_PROMOTION_CHOICE
        assert outcome.state is state
        assert outcome.move == Move(E7, E8)
        assert not outcome.committed

    @pytest.mark.parametrize(
        "kind", [PieceType.QUEEN, PieceType.ROOK, PieceType.BISHOP, PieceType.KNIGHT]
    )
    def test_choice_argument(self, make_state, kind: PieceType) -> None:
        outcome = apply_move(make_state(PROMOTION_ROWS), Move(E7, E8), kind)
        assert outcome.committed
        assert outcome.state.board[E8] == Piece(Color.WHITE, kind)
        assert outcome.state.board[E7] is None
        assert outcome.move.promotion == kind

    def test_choice_carried_on_move(self, make_state) -> None:
        move = Move(E7, E8, promotion=PieceType.KNIGHT)
        outcome = apply_move(make_state(PROMOTION_ROWS), move)
        assert outcome.state.board[E8] == Piece(Color.WHITE, PieceType.KNIGHT)

    def test_capture_promotion(self, make_state) -> None:
        outcome = apply_move(make_state(PROMOTION_ROWS), Move(E7, D8), PieceType.QUEEN)
        assert outcome.captured == Piece(Color.BLACK, PieceType.ROOK)
        assert outcome.state.board[D8] == Piece(Color.WHITE, PieceType.QUEEN)
        assert outcome.state.white_captures == (PieceType.ROOK,)

    @pytest.mark.parametrize("kind", [PieceType.KING, PieceType.PAWN])
    def test_invalid_kind_is_illegal(self, make_state, kind: PieceType) -> None:
        state = make_state(PROMOTION_ROWS)
        outcome = apply_move(state, Move(E7, E8), kind)
        assert outcome.status == GameStatus.ILLEGAL_MOVE
        assert outcome.state is state


class TestStatuses:
    def test_fools_mate(self) -> None:
        outcome = play(GameState.new_game(), "f2f3", "e7e5", "g2g4", "d8h4")
        assert outcome.status == GameStatus.CHECKMATE
        assert outcome.in_check

    def test_check(self, make_state) -> None:
        state = make_state(
            ("....k...", EMPTY, EMPTY, EMPTY, EMPTY, EMPTY, EMPTY, "R...K...")
        )
        outcome = apply_move(state, Move(A1, A8))
        assert outcome.status == GameStatus.ONGOING_IN_CHECK
        assert outcome.in_check

    def test_stalemate(self, make_state) -> None:
        rows = (".......k", EMPTY, ".....K..", EMPTY, "......Q.", EMPTY, EMPTY, EMPTY)
        outcome = apply_move(make_state(rows), Move(G4, G6))
        assert outcome.status == GameStatus.STALEMATE
        assert not outcome.in_check

    def test_fifty_move_draw_on_hundredth_half_move(self) -> None:
        state = GameState(halfmove_clock=99)
        assert apply_move(state, uci("g1f3")).status == GameStatus.DRAW_FIFTY_MOVE
        assert apply_move(state, uci("e2e4")).status == GameStatus.ONGOING

    def test_check_reported_on_fifty_move_draw(self, make_state) -> None:
        state = make_state(
            ("....k...", EMPTY, EMPTY, EMPTY, EMPTY, EMPTY, EMPTY, "R...K..."),
            halfmove_clock=99,
        )
        outcome = apply_move(state, Move(A1, A8))
        assert outcome.status == GameStatus.DRAW_FIFTY_MOVE
        assert outcome.in_check

    def test_knight_shuffle_reaches_fifty_move_draw(self) -> None:
        state = GameState.new_game()
        shuffle = ("g1f3", "g8f6", "f3g1", "f6g8")
        statuses = []
        for _ in range(25):
            for text in shuffle:
                outcome = apply_move(state, uci(text))
                statuses.append(outcome.status)
                state = outcome.state
        assert state.halfmove_clock == 100
        assert statuses[-1] == GameStatus.DRAW_FIFTY_MOVE
        assert all(s == GameStatus.ONGOING for s in statuses[:-1])
        assert state.position_key() == GameState.new_game().position_key()
