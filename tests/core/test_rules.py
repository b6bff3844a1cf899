"""Tests for Rules: legality, check, checkmate, stalemate."""

import pytest

from molights.core.enums import CheckStatus, Color
from molights.core.errors import GameStateError
from molights.core.notation import position_from_fen
from molights.core.position import Position
from molights.core.rules import Rules

FOOLS_MATE = "rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR w KQkq - 1 3"


def _ucis(fen: str) -> set[str]:
    setup = position_from_fen(fen)
    return {
        m.uci
        for m in Rules.legal_moves(setup.position, setup.side_to_move, setup.last_move)
    }


class TestCheck:
    def test_starting_not_in_check(self, start: Position) -> None:
        assert not Rules.is_in_check(start, Color.WHITE)
        assert not Rules.is_in_check(start, Color.BLACK)

    def test_fools_mate_in_check(self) -> None:
        pos = position_from_fen(FOOLS_MATE).position
        assert Rules.is_in_check(pos, Color.WHITE)
        assert not Rules.is_in_check(pos, Color.BLACK)

    def test_pawn_push_square_is_not_check(self) -> None:
        # Black pawn on e3 in front of the white king on e2 gives no check.
        pos = position_from_fen("4k3/8/8/8/8/4p3/4K3/8 w - - 0 1").position
        assert not Rules.is_in_check(pos, Color.WHITE)

    def test_pawn_diagonal_is_check(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/3p4/4K3/8 w - - 0 1").position
        assert Rules.is_in_check(pos, Color.WHITE)

    def test_no_king(self) -> None:
        with pytest.raises(GameStateError):
            Rules.is_in_check(Position(), Color.WHITE)


class TestLegality:
    def test_pinned_piece_cannot_move(self) -> None:
        # Bishop on e2 pinned by the rook on e8.
        moves = _ucis("4r1k1/8/8/8/8/8/4B3/4K3 w - - 0 1")
        assert not any(uci.startswith("e2") for uci in moves)

    def test_must_answer_check(self) -> None:
        moves = _ucis("4k3/8/8/8/8/8/8/r3K3 w - - 0 1")
        assert moves == {"e1d2", "e1e2", "e1f2"}

    def test_king_cannot_step_into_pawn_attack(self) -> None:
        # The d5 pawn covers c4 and e4 but not d4.
        moves = _ucis("4k3/8/8/3p4/8/4K3/8/8 w - - 0 1")
        assert "e3e4" not in moves
        assert "e3d4" in moves
        assert "e3f4" in moves

    def test_castling_out_of_check_forbidden(self) -> None:
        moves = _ucis("4k3/8/8/8/8/8/4r3/R3K2R w KQ - 0 1")
        assert "e1g1" not in moves
        assert "e1c1" not in moves

    def test_castling_through_attacked_square_forbidden(self) -> None:
        # Rook on f8 covers f1.
        moves = _ucis("4kr2/8/8/8/8/8/8/R3K2R w KQ - 0 1")
        assert "e1g1" not in moves
        assert "e1c1" in moves

    def test_castling_into_check_forbidden(self) -> None:
        moves = _ucis("4k1r1/8/8/8/8/8/8/R3K2R w KQ - 0 1")
        assert "e1g1" not in moves

    def test_queenside_b_file_may_be_attacked(self) -> None:
        moves = _ucis("1r2k3/8/8/8/8/8/8/R3K3 w Q - 0 1")
        assert "e1c1" in moves

    def test_en_passant_exposing_king_is_illegal(self) -> None:
        # Taking on d6 would open the fifth rank for the rook on h5.
        moves = _ucis("4k3/8/8/K2pP2r/8/8/8/8 w - d6 0 1")
        assert "e5d6" not in moves


class TestCheckmate:
    def test_fools_mate(self) -> None:
        pos = position_from_fen(FOOLS_MATE).position
        assert Rules.is_checkmate(pos, Color.WHITE)
        assert Rules.check_status(pos, Color.WHITE) == CheckStatus.CHECKMATE

    def test_back_rank_mate(self) -> None:
        pos = position_from_fen("R2k4/8/3K4/8/8/8/8/8 b - - 0 1").position
        assert Rules.is_checkmate(pos, Color.BLACK)

    def test_not_checkmate_when_can_escape(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/8/8/r3K3 w - - 0 1").position
        assert not Rules.is_checkmate(pos, Color.WHITE)
        assert Rules.check_status(pos, Color.WHITE) == CheckStatus.CHECK


class TestStalemate:
    def test_king_trapped(self) -> None:
        pos = position_from_fen("7k/8/5KQ1/8/8/8/8/8 b - - 0 1").position
        assert Rules.is_stalemate(pos, Color.BLACK)
        assert not Rules.is_checkmate(pos, Color.BLACK)
        assert Rules.check_status(pos, Color.BLACK) == CheckStatus.NONE

    def test_start_is_not_stalemate(self, start: Position) -> None:
        assert not Rules.is_stalemate(start, Color.WHITE)


class TestStatusAfter:
    def test_mating_move(self) -> None:
        setup = position_from_fen(
            "rnbqkbnr/pppp1ppp/8/4p3/6P1/5P2/PPPPP2P/RNBQKBNR b KQkq - 0 2"
        )
        moves = Rules.legal_moves(setup.position, Color.BLACK)
        mate = next(m for m in moves if m.uci == "d8h4")
        assert Rules.status_after(setup.position, mate) == CheckStatus.CHECKMATE

    def test_position_untouched(self, start: Position) -> None:
        before = start.copy()
        for move in Rules.legal_moves(start, Color.WHITE):
            Rules.status_after(start, move)
        assert start == before
