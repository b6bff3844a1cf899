"""Pseudo-legal move generation + attack detection."""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING

from molights.core.enums import PROMOTION_KINDS, Color, MoveFlag, PieceKind
from molights.core.move import Move
from molights.core.piece import Piece
from molights.core.types import Coordinate, all_squares

if TYPE_CHECKING:
    from molights.core.position import Position


KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS

_KING_HOME_COL = 4


# -- Precomputed lookup tables ---------------------------------------------


def _build_targets(
    offsets: tuple[tuple[int, int], ...],
) -> tuple[tuple[Coordinate, ...], ...]:
    targets: list[tuple[Coordinate, ...]] = []
    for sq in all_squares():
        moves: list[Coordinate] = []
        for d_row, d_col in offsets:
            to_sq = sq.offset(d_row, d_col)
            if to_sq is not None:
                moves.append(to_sq)
        targets.append(tuple(moves))
    return tuple(targets)


def _build_rays(
    directions: tuple[tuple[int, int], ...],
) -> tuple[tuple[tuple[Coordinate, ...], ...], ...]:
    rays_per_square: list[tuple[tuple[Coordinate, ...], ...]] = []
    for sq in all_squares():
        square_rays: list[tuple[Coordinate, ...]] = []
        for d_row, d_col in directions:
            ray: list[Coordinate] = []
            to_sq = sq.offset(d_row, d_col)
            while to_sq is not None:
                ray.append(to_sq)
                to_sq = to_sq.offset(d_row, d_col)
            square_rays.append(tuple(ray))
        rays_per_square.append(tuple(square_rays))
    return tuple(rays_per_square)


_KNIGHT_TARGETS = _build_targets(KNIGHT_OFFSETS)
_KING_TARGETS = _build_targets(KING_OFFSETS)

_BISHOP_RAYS = _build_rays(BISHOP_DIRS)
_ROOK_RAYS = _build_rays(ROOK_DIRS)
_QUEEN_RAYS = _build_rays(QUEEN_DIRS)

_DIAGONAL_ATTACKERS = (PieceKind.BISHOP, PieceKind.QUEEN)
_ORTHOGONAL_ATTACKERS = (PieceKind.ROOK, PieceKind.QUEEN)


class MoveGenerator:
    """Generates pseudo-legal moves for a given :class:`Position`.

    Pseudo-legal moves follow each piece's movement pattern and the
    occupancy rules but may leave the mover's own king in check; filtering
    those out is :class:`molights.core.rules.Rules`' job.

    *last_move* is the most recent entry of the move history. It is the only
    piece of history move generation needs (for en passant).
    """

    __slots__ = ("_pos", "_last_move")

    def __init__(self, position: Position, last_move: Move | None = None) -> None:
        self._pos = position
        self._last_move = last_move

    # -- Public API ---------------------------------------------------------

    def pseudo_legal_moves(self, color: Color) -> list[Move]:
        """All pseudo-legal moves for every piece of *color*."""
        moves: list[Move] = []
        for sq, piece in self._pos.occupied():
            if piece.color == color:
                self._gen_piece(sq, piece, moves)
        return moves

    def moves_from(self, sq: Coordinate) -> list[Move]:
        """Pseudo-legal moves of the piece on *sq* (empty if no piece)."""
        piece = self._pos[sq]
        moves: list[Move] = []
        if piece is not None:
            self._gen_piece(sq, piece, moves)
        return moves

    # -- Attack detection (public) -----------------------------------------

    def is_square_attacked(self, sq: Coordinate, by_color: Color) -> bool:
        """Is *sq* attacked by any piece of *by_color*?

        Uses capture patterns only: pawns attack diagonally forward and
        never the square they would push to.
        """
        board = self._pos

        # A pawn of by_color on sq - (direction, ±1) attacks sq.
        back = -by_color.pawn_direction
        for d_col in (-1, 1):
            from_sq = sq.offset(back, d_col)
            if from_sq is not None and _is(board[from_sq], by_color, PieceKind.PAWN):
                return True

        for from_sq in _KNIGHT_TARGETS[sq.index]:
            if _is(board[from_sq], by_color, PieceKind.KNIGHT):
                return True

        for from_sq in _KING_TARGETS[sq.index]:
            if _is(board[from_sq], by_color, PieceKind.KING):
                return True

        if self._ray_attacked(_BISHOP_RAYS[sq.index], by_color, _DIAGONAL_ATTACKERS):
            return True
        return self._ray_attacked(_ROOK_RAYS[sq.index], by_color, _ORTHOGONAL_ATTACKERS)

    def _ray_attacked(
        self,
        rays: tuple[tuple[Coordinate, ...], ...],
        by_color: Color,
        kinds: tuple[PieceKind, ...],
    ) -> bool:
        board = self._pos
        for ray in rays:
            for to_sq in ray:
                piece = board[to_sq]
                if piece is None:
                    continue
                if piece.color == by_color and piece.kind in kinds:
                    return True
                break
        return False

    # -- Piece-specific generators (private) -------------------------------

    def _gen_piece(self, sq: Coordinate, piece: Piece, moves: list[Move]) -> None:
        kind = piece.kind
        if kind == PieceKind.PAWN:
            self._gen_pawn(sq, piece, moves)
        elif kind == PieceKind.KNIGHT:
            self._gen_step(sq, piece, _KNIGHT_TARGETS[sq.index], moves)
        elif kind == PieceKind.BISHOP:
            self._gen_sliding(sq, piece, _BISHOP_RAYS[sq.index], moves)
        elif kind == PieceKind.ROOK:
            self._gen_sliding(sq, piece, _ROOK_RAYS[sq.index], moves)
        elif kind == PieceKind.QUEEN:
            self._gen_sliding(sq, piece, _QUEEN_RAYS[sq.index], moves)
        elif kind == PieceKind.KING:
            self._gen_step(sq, piece, _KING_TARGETS[sq.index], moves)
            self._gen_castling(sq, piece, moves)
        else:
            raise AssertionError(f"Unhandled piece kind: {kind!r}")

    def _gen_pawn(self, sq: Coordinate, piece: Piece, moves: list[Move]) -> None:
        board = self._pos
        color = piece.color
        direction = color.pawn_direction
        start_row = 6 if color == Color.WHITE else 1

        one_step = sq.offset(direction, 0)
        if one_step is not None and board.is_empty(one_step):
            self._add_pawn_move(Move(sq, one_step, piece), moves)
            if sq.row == start_row:
                two_step = one_step.offset(direction, 0)
                if two_step is not None and board.is_empty(two_step):
                    moves.append(Move(sq, two_step, piece, flag=MoveFlag.DOUBLE_PAWN))

        for d_col in (-1, 1):
            cap_sq = sq.offset(direction, d_col)
            if cap_sq is None:
                continue
            target = board[cap_sq]
            if target is not None:
                if target.color != color:
                    self._add_pawn_move(Move(sq, cap_sq, piece, target), moves)
                continue
            victim_sq = sq.offset(0, d_col)
            if victim_sq is not None and self._is_en_passant_victim(victim_sq, color):
                moves.append(
                    Move(
                        sq,
                        cap_sq,
                        piece,
                        board[victim_sq],
                        flag=MoveFlag.EN_PASSANT,
                    )
                )

    def _is_en_passant_victim(self, victim_sq: Coordinate, color: Color) -> bool:
        """Did the opponent's pawn on *victim_sq* just make a double step?"""
        last = self._last_move
        if last is None or last.to_sq != victim_sq:
            return False
        if last.piece.kind != PieceKind.PAWN or last.piece.color == color:
            return False
        if abs(last.from_sq.row - last.to_sq.row) != 2:
            return False
        return _is(self._pos[victim_sq], color.opposite, PieceKind.PAWN)

    @staticmethod
    def _add_pawn_move(move: Move, moves: list[Move]) -> None:
        """Append *move*, expanded into four variants on the far rank."""
        if move.to_sq.row not in (0, 7):
            moves.append(move)
            return
        for kind in PROMOTION_KINDS:
            moves.append(replace(move, flag=MoveFlag.PROMOTION, promotion=kind))

    def _gen_step(
        self,
        sq: Coordinate,
        piece: Piece,
        targets: tuple[Coordinate, ...],
        moves: list[Move],
    ) -> None:
        board = self._pos
        for to_sq in targets:
            target = board[to_sq]
            if target is None:
                moves.append(Move(sq, to_sq, piece))
            elif target.color != piece.color:
                moves.append(Move(sq, to_sq, piece, target))

    def _gen_sliding(
        self,
        sq: Coordinate,
        piece: Piece,
        rays: tuple[tuple[Coordinate, ...], ...],
        moves: list[Move],
    ) -> None:
        board = self._pos
        for ray in rays:
            for to_sq in ray:
                target = board[to_sq]
                if target is None:
                    moves.append(Move(sq, to_sq, piece))
                    continue
                if target.color != piece.color:
                    moves.append(Move(sq, to_sq, piece, target))
                break

    def _gen_castling(
        self, king_sq: Coordinate, king: Piece, moves: list[Move]
    ) -> None:
        """Castling candidates by occupancy only; safety is checked by Rules."""
        home = Coordinate(king.color.back_row, _KING_HOME_COL)
        if king.has_moved or king_sq != home:
            return

        board = self._pos
        row = king_sq.row

        if self._rook_ready(Coordinate(row, 7), king.color) and all(
            board.is_empty(Coordinate(row, col)) for col in range(king_sq.col + 1, 7)
        ):
            moves.append(
                Move(
                    king_sq,
                    Coordinate(row, king_sq.col + 2),
                    king,
                    flag=MoveFlag.CASTLE_KINGSIDE,
                )
            )

        if self._rook_ready(Coordinate(row, 0), king.color) and all(
            board.is_empty(Coordinate(row, col)) for col in range(1, king_sq.col)
        ):
            moves.append(
                Move(
                    king_sq,
                    Coordinate(row, king_sq.col - 2),
                    king,
                    flag=MoveFlag.CASTLE_QUEENSIDE,
                )
            )

    def _rook_ready(self, sq: Coordinate, color: Color) -> bool:
        rook = self._pos[sq]
        if rook is None or rook.has_moved:
            return False
        return _is(rook, color, PieceKind.ROOK)


def _is(piece: Piece | None, color: Color, kind: PieceKind) -> bool:
    return piece is not None and piece.color == color and piece.kind == kind
