"""Notation package: SAN codec, game records and FEN setup."""

from molights.core.notation.fen import STARTING_FEN, FenSetup, position_from_fen
from molights.core.notation.models import ParsedRecord, RecordMove
from molights.core.notation.pgn import (
    build_record,
    default_headers,
    game_result_from_token,
    movetext_from_moves,
    movetext_from_sans,
    parse_record,
    result_token,
)
from molights.core.notation.san import (
    decode,
    disambiguation,
    encode,
    move_to_san,
    parse_san,
)

__all__ = [
    "STARTING_FEN",
    "FenSetup",
    "ParsedRecord",
    "RecordMove",
    "position_from_fen",
    "encode",
    "decode",
    "disambiguation",
    "move_to_san",
    "parse_san",
    "result_token",
    "game_result_from_token",
    "default_headers",
    "movetext_from_sans",
    "movetext_from_moves",
    "build_record",
    "parse_record",
]
