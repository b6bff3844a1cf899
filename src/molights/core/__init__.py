"""Core domain layer: pure chess rules with zero external dependencies.

Quick start::

    from molights.core import Color, Position, Rules

    pos = Position.initial()
    for move in Rules.legal_moves(pos, Color.WHITE):
        print(move)
"""

from molights.core.enums import (
    CheckStatus,
    Color,
    DrawOffer,
    GameEndReason,
    GameResult,
    MoveFlag,
    PieceKind,
)
from molights.core.errors import (
    ChessError,
    GameStateError,
    IllegalMoveError,
    InvalidCoordinateError,
    NotationError,
    WrongTurnError,
)
from molights.core.move import Move
from molights.core.move_generator import MoveGenerator
from molights.core.notation import (
    STARTING_FEN,
    decode,
    encode,
    move_to_san,
    parse_san,
    position_from_fen,
)
from molights.core.piece import Piece
from molights.core.position import Position
from molights.core.rules import Rules
from molights.core.types import Coordinate, parse_square, square_name

__all__ = [
    # Enums / flags
    "CheckStatus",
    "Color",
    "DrawOffer",
    "GameEndReason",
    "GameResult",
    "MoveFlag",
    "PieceKind",
    # Errors
    "ChessError",
    "GameStateError",
    "IllegalMoveError",
    "InvalidCoordinateError",
    "NotationError",
    "WrongTurnError",
    # Types / helpers
    "Coordinate",
    "parse_square",
    "square_name",
    # Domain objects
    "Move",
    "MoveGenerator",
    "Piece",
    "Position",
    "Rules",
    # Notation
    "STARTING_FEN",
    "decode",
    "encode",
    "move_to_san",
    "parse_san",
    "position_from_fen",
]
