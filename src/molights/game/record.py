"""Game record import/export on top of :class:`GameState`."""

from __future__ import annotations

import logging
from pathlib import Path

from molights.core.enums import Color
from molights.core.errors import ChessError, RecordError, RecordFileError, ReplayError
from molights.core.notation.fen import STARTING_FEN, position_from_fen
from molights.core.notation.pgn import (
    build_record,
    default_headers,
    parse_record,
    result_token,
)
from molights.game.state import GameState

_LOGGER = logging.getLogger(__name__)

RECORD_SUFFIX = ".pgn"


def export_record(state: GameState, headers: dict[str, str] | None = None) -> str:
    """Record text for the moves played so far in *state*.

    Games set up from a FEN carry ``SetUp``/``FEN`` tags so they can be
    replayed from the same position.
    """
    token = result_token(state.result)
    merged = default_headers(result=token)
    if headers:
        merged.update(headers)
    merged["Result"] = token
    merged.pop("SetUp", None)
    merged.pop("FEN", None)

    first_move_number = 1
    black_first = False
    if state.start_fen != STARTING_FEN:
        merged["SetUp"] = "1"
        merged["FEN"] = state.start_fen
        setup = position_from_fen(state.start_fen)
        first_move_number = setup.fullmove_number
        black_first = setup.side_to_move == Color.BLACK
    return build_record(
        merged,
        state.sans,
        token,
        first_move_number=first_move_number,
        black_first=black_first,
    )


def replay(sans: list[str], state: GameState | None = None) -> GameState:
    """Decode and apply every token in order.

    Stops with :class:`ReplayError` at the first token that is unparseable,
    matches no legal move, or is rejected on application; skipping one
    would desynchronise the position from the recorded game.
    """
    game = state if state is not None else GameState()
    for ply, token in enumerate(sans, start=1):
        try:
            move = game.parse_san(token)
        except ChessError as exc:
            raise ReplayError(ply, token, str(exc)) from exc
        if move is None:
            _LOGGER.warning("Replay aborted at move %d: no legal move %r", ply, token)
            raise ReplayError(ply, token, "no legal move matches")
        try:
            game.apply_move(move)
        except ChessError as exc:
            raise ReplayError(ply, token, str(exc)) from exc
    return game


def import_record(text: str) -> GameState:
    """A fresh game with every recorded move replayed.

    A ``SetUp "1"`` tag with a ``FEN`` tag starts the game from that
    position instead of the standard one.
    """
    try:
        parsed = parse_record(text)
    except ValueError as exc:
        raise RecordError(str(exc)) from exc

    game = GameState()
    headers = parsed.headers
    if headers.get("SetUp") == "1" and "FEN" in headers:
        try:
            game = GameState.from_fen(headers["FEN"])
        except (ValueError, ChessError) as exc:
            raise RecordError(f"Invalid FEN tag: {exc}") from exc

    replay(parsed.sans, game)
    _LOGGER.info("Imported %d moves", game.ply_count)
    return game


def record_path(path: str | Path) -> Path:
    """*path* with the record suffix appended when missing."""
    p = Path(path)
    if p.suffix != RECORD_SUFFIX:
        p = p.with_name(p.name + RECORD_SUFFIX)
    return p


def write_record(
    path: str | Path, state: GameState, headers: dict[str, str] | None = None
) -> Path:
    target = record_path(path)
    try:
        target.write_text(export_record(state, headers), encoding="utf-8")
    except OSError as exc:
        raise RecordFileError(str(target), "write", exc) from exc
    _LOGGER.info("Saved game to %s", target)
    return target


def read_record(path: str | Path) -> GameState:
    source = record_path(path)
    try:
        text = source.read_text(encoding="utf-8")
    except OSError as exc:
        raise RecordFileError(str(source), "read", exc) from exc
    return import_record(text)
