"""Move value object."""

from __future__ import annotations

from dataclasses import dataclass

from molights.core.enums import MoveFlag, PieceKind
from molights.core.piece import Piece
from molights.core.types import Coordinate

_PROMO_CHARS: dict[PieceKind, str] = {
    PieceKind.KNIGHT: "n",
    PieceKind.BISHOP: "b",
    PieceKind.ROOK: "r",
    PieceKind.QUEEN: "q",
}


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable value object representing a single chess move.

    ``piece`` is the mover exactly as it stood before the move, so its
    ``has_moved`` flag is the value undo has to restore.
    """

    from_sq: Coordinate
    to_sq: Coordinate
    piece: Piece
    captured: Piece | None = None
    flag: MoveFlag = MoveFlag.NORMAL
    promotion: PieceKind | None = None

    # ── Classification ───────────────────────────────────────────────────

    @property
    def is_capture(self) -> bool:
        return self.captured is not None

    @property
    def is_en_passant(self) -> bool:
        return self.flag == MoveFlag.EN_PASSANT

    @property
    def is_promotion(self) -> bool:
        return self.flag == MoveFlag.PROMOTION

    @property
    def is_castle_kingside(self) -> bool:
        return self.flag == MoveFlag.CASTLE_KINGSIDE

    @property
    def is_castle_queenside(self) -> bool:
        return self.flag == MoveFlag.CASTLE_QUEENSIDE

    @property
    def is_castling(self) -> bool:
        return self.flag in (MoveFlag.CASTLE_KINGSIDE, MoveFlag.CASTLE_QUEENSIDE)

    @property
    def is_double_pawn_push(self) -> bool:
        return self.flag == MoveFlag.DOUBLE_PAWN

    @property
    def prior_moved(self) -> bool:
        """The mover's ``has_moved`` value before this move."""
        return self.piece.has_moved

    @property
    def capture_square(self) -> Coordinate | None:
        """Square the captured piece is removed from."""
        if self.captured is None:
            return None
        if self.flag == MoveFlag.EN_PASSANT:
            return Coordinate(self.from_sq.row, self.to_sq.col)
        return self.to_sq

    @property
    def rook_squares(self) -> tuple[Coordinate, Coordinate] | None:
        """``(rook_from, rook_to)`` for castling moves, else None."""
        row = self.from_sq.row
        if self.flag == MoveFlag.CASTLE_KINGSIDE:
            return Coordinate(row, 7), Coordinate(row, self.to_sq.col - 1)
        if self.flag == MoveFlag.CASTLE_QUEENSIDE:
            return Coordinate(row, 0), Coordinate(row, self.to_sq.col + 1)
        return None

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        base = f"{self.from_sq.name}{self.to_sq.name}"
        if self.promotion is not None:
            base += _PROMO_CHARS.get(self.promotion, "")
        return base

    @property
    def uci(self) -> str:
        """Long-algebraic coordinate notation, e.g. ``e7e8q``."""
        return str(self)
