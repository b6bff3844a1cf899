"""Perft tests: the gold standard for move-generator correctness.

Reference values: https://www.chessprogramming.org/Perft_Results
"""

import pytest

from molights.core.enums import Color, MoveFlag, PieceKind
from molights.core.move import Move
from molights.core.move_generator import MoveGenerator
from molights.core.notation import STARTING_FEN, position_from_fen
from molights.core.piece import Piece
from molights.core.position import Position
from molights.core.rules import Rules
from molights.core.types import parse_square


def perft(
    position: Position, side: Color, depth: int, last_move: Move | None = None
) -> int:
    """Count leaf nodes at *depth* using apply/revert."""
    moves = Rules.legal_moves(position, side, last_move)
    if depth == 1:
        return len(moves)
    nodes = 0
    for move in moves:
        position.apply(move)
        nodes += perft(position, side.opposite, depth - 1, move)
        position.revert(move)
    return nodes


def perft_fen(fen: str, depth: int) -> int:
    setup = position_from_fen(fen)
    return perft(setup.position, setup.side_to_move, depth, setup.last_move)


# ── Starting position ────────────────────────────────────────────────────────


class TestPerftStarting:
    def test_depth_1(self) -> None:
        assert perft_fen(STARTING_FEN, 1) == 20

    def test_depth_2(self) -> None:
        assert perft_fen(STARTING_FEN, 2) == 400

    def test_depth_3(self) -> None:
        assert perft_fen(STARTING_FEN, 3) == 8_902

    @pytest.mark.slow
    def test_depth_4(self) -> None:
        assert perft_fen(STARTING_FEN, 4) == 197_281


# ── Kiwipete (rich in tactics: castling, ep, promotions) ─────────────────────

KIWIPETE = "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1"


class TestPerftKiwipete:
    def test_depth_1(self) -> None:
        assert perft_fen(KIWIPETE, 1) == 48

    def test_depth_2(self) -> None:
        assert perft_fen(KIWIPETE, 2) == 2_039

    @pytest.mark.slow
    def test_depth_3(self) -> None:
        assert perft_fen(KIWIPETE, 3) == 97_862


# ── Position 3: en-passant + promotion edge cases ───────────────────────────

POS3 = "8/2p5/3p4/KP5r/1R3p1k/8/4P1P1/8 w - - 0 1"


class TestPerftPos3:
    def test_depth_1(self) -> None:
        assert perft_fen(POS3, 1) == 14

    def test_depth_2(self) -> None:
        assert perft_fen(POS3, 2) == 191

    def test_depth_3(self) -> None:
        assert perft_fen(POS3, 3) == 2_812


# ── Position 4: mirrored, many promotions ────────────────────────────────────

POS4 = "r3k2r/Pppp1ppp/1b3nbN/nP6/BBP1P3/q4N2/Pp1P2PP/R2Q1RK1 w kq - 0 1"


class TestPerftPos4:
    def test_depth_1(self) -> None:
        assert perft_fen(POS4, 1) == 6

    def test_depth_2(self) -> None:
        assert perft_fen(POS4, 2) == 264

    @pytest.mark.slow
    def test_depth_3(self) -> None:
        assert perft_fen(POS4, 3) == 9_467


# ── Position 5 ───────────────────────────────────────────────────────────────

POS5 = "rnbq1k1r/pp1Pbppp/2p5/8/2B5/8/PPP1NnPP/RNBQK2R w KQ - 1 8"


class TestPerftPos5:
    def test_depth_1(self) -> None:
        assert perft_fen(POS5, 1) == 44

    def test_depth_2(self) -> None:
        assert perft_fen(POS5, 2) == 1_486


# ── Pseudo-legal generation details ──────────────────────────────────────────


class TestPawnMoves:
    def test_start_pushes(self, start: Position) -> None:
        moves = MoveGenerator(start).moves_from(parse_square("e2"))
        assert {m.uci for m in moves} == {"e2e3", "e2e4"}
        double = next(m for m in moves if m.uci == "e2e4")
        assert double.flag == MoveFlag.DOUBLE_PAWN

    def test_blocked_pawn(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/4p3/4P3/4K3 w - - 0 1").position
        assert MoveGenerator(pos).moves_from(parse_square("e2")) == []

    def test_double_step_needs_start_rank(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/4P3/8/4K3 w - - 0 1").position
        moves = MoveGenerator(pos).moves_from(parse_square("e3"))
        assert [m.uci for m in moves] == ["e3e4"]

    def test_promotion_expands_to_four(self) -> None:
        pos = position_from_fen("4k3/P7/8/8/8/8/8/4K3 w - - 0 1").position
        moves = MoveGenerator(pos).moves_from(parse_square("a7"))
        assert {m.promotion for m in moves} == {
            PieceKind.QUEEN,
            PieceKind.ROOK,
            PieceKind.BISHOP,
            PieceKind.KNIGHT,
        }
        assert all(m.flag == MoveFlag.PROMOTION for m in moves)

    def test_en_passant_only_right_after_double_step(self) -> None:
        setup = position_from_fen("4k3/8/8/3pP3/8/8/8/4K3 w - d6 0 1")
        e5 = parse_square("e5")
        with_history = MoveGenerator(setup.position, setup.last_move).moves_from(e5)
        assert any(m.is_en_passant for m in with_history)
        without = MoveGenerator(setup.position).moves_from(e5)
        assert not any(m.is_en_passant for m in without)

    def test_en_passant_captured_piece(self) -> None:
        setup = position_from_fen("4k3/8/8/3pP3/8/8/8/4K3 w - d6 0 1")
        moves = MoveGenerator(setup.position, setup.last_move).moves_from(
            parse_square("e5")
        )
        ep = next(m for m in moves if m.is_en_passant)
        assert ep.captured is not None
        assert ep.captured.kind == PieceKind.PAWN
        assert ep.capture_square == parse_square("d5")


class TestAttacks:
    def test_pawn_attacks_diagonally_only(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/8/4P3/4K3 w - - 0 1").position
        gen = MoveGenerator(pos)
        assert gen.is_square_attacked(parse_square("d3"), Color.WHITE)
        assert gen.is_square_attacked(parse_square("f3"), Color.WHITE)
        assert not gen.is_square_attacked(parse_square("e3"), Color.WHITE)
        assert not gen.is_square_attacked(parse_square("e4"), Color.WHITE)

    def test_black_pawn_attacks_downward(self) -> None:
        pos = position_from_fen("4k3/4p3/8/8/8/8/8/4K3 w - - 0 1").position
        gen = MoveGenerator(pos)
        assert gen.is_square_attacked(parse_square("d6"), Color.BLACK)
        assert not gen.is_square_attacked(parse_square("d8"), Color.BLACK)

    def test_slider_blocked(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/8/R3P3/4K3 w - - 0 1").position
        gen = MoveGenerator(pos)
        assert gen.is_square_attacked(parse_square("d2"), Color.WHITE)
        assert not gen.is_square_attacked(parse_square("g2"), Color.WHITE)

    def test_knight_attack(self, start: Position) -> None:
        gen = MoveGenerator(start)
        assert gen.is_square_attacked(parse_square("f3"), Color.WHITE)
        assert gen.is_square_attacked(parse_square("f6"), Color.BLACK)


class TestCastlingGeneration:
    def test_not_generated_when_pieces_between(self, start: Position) -> None:
        moves = MoveGenerator(start).moves_from(parse_square("e1"))
        assert not any(m.is_castling for m in moves)

    def test_generated_when_clear(self) -> None:
        pos = position_from_fen("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1").position
        moves = MoveGenerator(pos).moves_from(parse_square("e1"))
        assert {m.uci for m in moves if m.is_castling} == {"e1g1", "e1c1"}

    def test_moved_rook_forbids_castling(self) -> None:
        # Only the kingside right remains: the a1 rook counts as moved.
        pos = position_from_fen("r3k2r/8/8/8/8/8/8/R3K2R w K - 0 1").position
        moves = MoveGenerator(pos).moves_from(parse_square("e1"))
        assert {m.uci for m in moves if m.is_castling} == {"e1g1"}

    @pytest.mark.parametrize("row_name", ["4", "8"])
    def test_king_off_home_rank_cannot_castle(self, row_name: str) -> None:
        pos = Position()
        pos[parse_square("e" + row_name)] = Piece(Color.WHITE, PieceKind.KING)
        pos[parse_square("a" + row_name)] = Piece(Color.WHITE, PieceKind.ROOK)
        pos[parse_square("h" + row_name)] = Piece(Color.WHITE, PieceKind.ROOK)
        pos[parse_square("a1")] = Piece(Color.BLACK, PieceKind.KING)
        moves = MoveGenerator(pos).moves_from(parse_square("e" + row_name))
        assert moves
        assert not any(m.is_castling for m in moves)
