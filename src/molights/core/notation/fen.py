"""FEN parsing for setting up arbitrary positions."""

from __future__ import annotations

from dataclasses import dataclass

from molights.core.enums import Color, MoveFlag, PieceKind
from molights.core.move import Move
from molights.core.piece import Piece
from molights.core.position import Position
from molights.core.types import Coordinate

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

# Castling letter → (colour, rook corner)
_CASTLING_CORNERS: dict[str, tuple[Color, Coordinate]] = {
    "K": (Color.WHITE, Coordinate(7, 7)),
    "Q": (Color.WHITE, Coordinate(7, 0)),
    "k": (Color.BLACK, Coordinate(0, 7)),
    "q": (Color.BLACK, Coordinate(0, 0)),
}


@dataclass(frozen=True, slots=True)
class FenSetup:
    """Everything a game needs to start from a FEN position.

    ``last_move`` is the double pawn push implied by the en passant field,
    or None. ``fullmove_number`` numbers the first move in game records.
    """

    position: Position
    side_to_move: Color
    last_move: Move | None = None
    fullmove_number: int = 1


_SIDES = {"w": Color.WHITE, "b": Color.BLACK}


def _parse_placement(placement: str) -> Position:
    """Board field → position with every piece marked as moved."""
    rows = placement.split("/")
    if len(rows) != 8:
        raise ValueError(f"FEN placement needs 8 ranks: {placement!r}")
    position = Position()
    for row, text in enumerate(rows):
        col = 0
        for ch in text:
            if ch in "12345678":
                col += int(ch)
            elif col < 8:
                position[Coordinate(row, col)] = Piece.from_char(ch, has_moved=True)
                col += 1
            else:
                col = 9
                break
        if col != 8:
            raise ValueError(f"FEN rank {8 - row} does not span 8 files: {text!r}")
    return position


def position_from_fen(fen: str) -> FenSetup:
    """Parse a FEN string into a :class:`FenSetup`.

    FEN has no per-piece "has moved" flag, so it is inferred: kings and
    rooks are unmoved only when a castling right names them, pawns are
    unmoved on their starting rank, everything else counts as moved.
    """
    fields = fen.split()
    if len(fields) not in (4, 5, 6):
        raise ValueError(f"FEN needs 4 to 6 fields: {fen!r}")
    placement, side_field, castling_field, ep_field = fields[:4]

    position = _parse_placement(placement)
    side = _SIDES.get(side_field)
    if side is None:
        raise ValueError(f"FEN side-to-move must be 'w' or 'b': {side_field!r}")

    if castling_field != "-":
        if len(set(castling_field)) != len(castling_field) or any(
            ch not in _CASTLING_CORNERS for ch in castling_field
        ):
            raise ValueError(f"Invalid FEN castling field: {castling_field!r}")
        for ch in castling_field:
            color, corner = _CASTLING_CORNERS[ch]
            _mark_unmoved(position, Coordinate(corner.row, 4), color, PieceKind.KING)
            _mark_unmoved(position, corner, color, PieceKind.ROOK)

    for col in range(8):
        _mark_unmoved(position, Coordinate(6, col), Color.WHITE, PieceKind.PAWN)
        _mark_unmoved(position, Coordinate(1, col), Color.BLACK, PieceKind.PAWN)

    last_move: Move | None = None
    if ep_field != "-":
        last_move = _implied_double_push(position, side, ep_field)

    # The halfmove clock is validated, not tracked.
    if not all(clock.isdigit() for clock in fields[4:]):
        raise ValueError(f"FEN clock fields must be numbers: {fen!r}")
    fullmove = max(1, int(fields[5])) if len(fields) == 6 else 1

    return FenSetup(position, side, last_move, fullmove)


def _implied_double_push(position: Position, side: Color, ep_field: str) -> Move:
    """The opponent's double step that created the en passant target."""
    try:
        target = Coordinate.parse(ep_field)
    except ValueError:
        raise ValueError(f"Invalid FEN en-passant square: {ep_field!r}") from None
    pusher = side.opposite
    # The target lies behind the pushed pawn: rank 6 for white to move.
    if target.row != pusher.back_row + 2 * pusher.pawn_direction:
        raise ValueError(f"En-passant square {ep_field!r} not on the expected rank")
    landed = Coordinate(target.row + pusher.pawn_direction, target.col)
    origin = Coordinate(target.row - pusher.pawn_direction, target.col)
    pawn = position[landed]
    if pawn is None or pawn.color != pusher or pawn.kind != PieceKind.PAWN:
        raise ValueError(f"No pawn behind en-passant square {ep_field!r}")
    return Move(origin, landed, pawn.moved(False), flag=MoveFlag.DOUBLE_PAWN)


def _mark_unmoved(
    position: Position, sq: Coordinate, color: Color, kind: PieceKind
) -> None:
    piece = position[sq]
    if piece is not None and piece.color == color and piece.kind == kind:
        position[sq] = piece.moved(False)
