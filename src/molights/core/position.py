"""Position: piece placement on an 8x8 board with apply/revert."""

from __future__ import annotations

from collections.abc import Iterator

from molights.core.enums import Color, MoveFlag, PieceKind
from molights.core.errors import GameStateError, IllegalMoveError
from molights.core.move import Move
from molights.core.piece import Piece
from molights.core.types import Coordinate, all_squares

_BACK_RANK: tuple[PieceKind, ...] = (
    PieceKind.ROOK,
    PieceKind.KNIGHT,
    PieceKind.BISHOP,
    PieceKind.QUEEN,
    PieceKind.KING,
    PieceKind.BISHOP,
    PieceKind.KNIGHT,
    PieceKind.ROOK,
)


class Position:
    """64 optional-piece slots, cheap to copy.

    The position knows nothing about whose turn it is; that lives in
    :class:`molights.game.state.GameState`.
    """

    __slots__ = ("_squares",)

    def __init__(self) -> None:
        self._squares: list[Piece | None] = [None] * 64

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Coordinate) -> Piece | None:
        return self._squares[sq.index]

    def __setitem__(self, sq: Coordinate, piece: Piece | None) -> None:
        self._squares[sq.index] = piece

    def is_empty(self, sq: Coordinate) -> bool:
        return self._squares[sq.index] is None

    # -- Query helpers ------------------------------------------------------

    def occupied(self) -> Iterator[tuple[Coordinate, Piece]]:
        """``(square, piece)`` for every occupied square in slot order."""
        for sq, piece in zip(all_squares(), self._squares):
            if piece is not None:
                yield sq, piece

    def pieces(self, color: Color, kind: PieceKind | None = None) -> list[Coordinate]:
        """Squares occupied by *color* (optionally only of *kind*)."""
        return [
            sq
            for sq, piece in self.occupied()
            if piece.color == color and (kind is None or piece.kind == kind)
        ]

    def king_square(self, color: Color) -> Coordinate:
        """Return the king square for *color*, scanning the board."""
        for sq, piece in self.occupied():
            if piece.color == color and piece.kind == PieceKind.KING:
                return sq
        raise GameStateError(f"No {color} king on board")

    # -- Move application ---------------------------------------------------

    def apply(self, move: Move) -> None:
        """Play *move* on the board.

        Handles en passant removal, promotion, the castling rook and the
        ``has_moved`` flags. The move must have been generated for this
        position.
        """
        piece = self[move.from_sq]
        if piece is None:
            raise IllegalMoveError(f"No piece on {move.from_sq}")

        self[move.from_sq] = None
        if move.flag == MoveFlag.EN_PASSANT:
            capture_sq = move.capture_square
            assert capture_sq is not None
            self[capture_sq] = None

        if move.flag == MoveFlag.PROMOTION and move.promotion is not None:
            self[move.to_sq] = piece.promoted(move.promotion)
        else:
            self[move.to_sq] = piece.moved()

        rook_squares = move.rook_squares
        if rook_squares is not None:
            rook_from, rook_to = rook_squares
            rook = self[rook_from]
            assert rook is not None
            self[rook_from] = None
            self[rook_to] = rook.moved()

    def revert(self, move: Move) -> None:
        """Exact inverse of :meth:`apply` for the same *move*."""
        # The mover snapshot carries the pre-move has_moved flag.
        self[move.from_sq] = move.piece
        if move.flag == MoveFlag.EN_PASSANT:
            self[move.to_sq] = None
            capture_sq = move.capture_square
            assert capture_sq is not None
            self[capture_sq] = move.captured
        else:
            self[move.to_sq] = move.captured

        rook_squares = move.rook_squares
        if rook_squares is not None:
            rook_from, rook_to = rook_squares
            rook = self[rook_to]
            assert rook is not None
            self[rook_to] = None
            # Castling requires an unmoved rook.
            self[rook_from] = rook.moved(False)

    # -- Copying / factory --------------------------------------------------

    def copy(self) -> Position:
        pos = Position()
        pos._squares = self._squares.copy()
        return pos

    def clear(self) -> None:
        self._squares = [None] * 64

    @classmethod
    def initial(cls) -> Position:
        """Standard starting position, every piece unmoved."""
        pos = cls()
        for col in range(8):
            pos[Coordinate(6, col)] = Piece(Color.WHITE, PieceKind.PAWN)
            pos[Coordinate(1, col)] = Piece(Color.BLACK, PieceKind.PAWN)
        for col, kind in enumerate(_BACK_RANK):
            pos[Coordinate(7, col)] = Piece(Color.WHITE, kind)
            pos[Coordinate(0, col)] = Piece(Color.BLACK, kind)
        return pos

    # -- Rendering ----------------------------------------------------------

    def render(self, unicode: bool = False) -> str:
        """Text diagram, rank 8 at the top, with a file legend."""
        rows: list[str] = []
        for row in range(8):
            cells = []
            for col in range(8):
                p = self[Coordinate(row, col)]
                if p is None:
                    cells.append(".")
                else:
                    cells.append(p.symbol if unicode else str(p))
            rows.append(f"{8 - row} {' '.join(cells)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Position):
            return NotImplemented
        return self._squares == other._squares

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return self.render()
