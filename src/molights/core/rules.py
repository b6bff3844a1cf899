"""High-level chess rules: legality filtering, check, checkmate, stalemate."""

from __future__ import annotations

from typing import TYPE_CHECKING

from molights.core.enums import CheckStatus, Color
from molights.core.move_generator import MoveGenerator

if TYPE_CHECKING:
    from molights.core.move import Move
    from molights.core.position import Position


class Rules:
    """Static rule-checker that operates on a :class:`Position`.

    Every query takes the side to move (and the last applied move, for en
    passant) explicitly; positions are never mutated. Candidate moves are
    tried on a copy of the position.
    """

    @staticmethod
    def legal_moves(
        position: Position, side: Color, last_move: Move | None = None
    ) -> list[Move]:
        """All strictly legal moves for *side*."""
        gen = MoveGenerator(position, last_move)
        legal: list[Move] = []
        in_check: bool | None = None

        for move in gen.pseudo_legal_moves(side):
            if move.is_castling:
                if in_check is None:
                    in_check = Rules.is_in_check(position, side)
                if in_check or not Rules._transit_is_safe(gen, move, side):
                    continue
            if not Rules.leaves_king_in_check(position, move):
                legal.append(move)
        return legal

    @staticmethod
    def leaves_king_in_check(position: Position, move: Move) -> bool:
        """Would playing *move* leave its mover's king attacked?"""
        trial = position.copy()
        trial.apply(move)
        return Rules.is_in_check(trial, move.piece.color)

    @staticmethod
    def is_in_check(position: Position, color: Color) -> bool:
        """Is *color*'s king attacked by the opponent?

        Raises :class:`GameStateError` when *color* has no king.
        """
        king_sq = position.king_square(color)
        return MoveGenerator(position).is_square_attacked(king_sq, color.opposite)

    @staticmethod
    def is_checkmate(
        position: Position, side: Color, last_move: Move | None = None
    ) -> bool:
        if not Rules.is_in_check(position, side):
            return False
        return not Rules.legal_moves(position, side, last_move)

    @staticmethod
    def is_stalemate(
        position: Position, side: Color, last_move: Move | None = None
    ) -> bool:
        if Rules.is_in_check(position, side):
            return False
        return not Rules.legal_moves(position, side, last_move)

    @staticmethod
    def check_status(
        position: Position, side: Color, last_move: Move | None = None
    ) -> CheckStatus:
        """Check / checkmate state of *side* in *position*."""
        if not Rules.is_in_check(position, side):
            return CheckStatus.NONE
        if Rules.legal_moves(position, side, last_move):
            return CheckStatus.CHECK
        return CheckStatus.CHECKMATE

    @staticmethod
    def status_after(position: Position, move: Move) -> CheckStatus:
        """Check state of the opponent once *move* has been played."""
        after = position.copy()
        after.apply(move)
        return Rules.check_status(after, move.piece.color.opposite, move)

    # ── Internal ─────────────────────────────────────────────────────────

    @staticmethod
    def _transit_is_safe(gen: MoveGenerator, move: Move, side: Color) -> bool:
        # The destination is covered by the general leaves-in-check test.
        step = 1 if move.is_castle_kingside else -1
        transit = move.from_sq.offset(0, step)
        assert transit is not None
        return not gen.is_square_attacked(transit, side.opposite)
