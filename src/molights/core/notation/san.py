"""SAN (Standard Algebraic Notation) conversion and parsing."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from molights.core.enums import CheckStatus, Color, MoveFlag, PieceKind
from molights.core.errors import NotationError
from molights.core.move import Move
from molights.core.position import Position
from molights.core.rules import Rules
from molights.core.types import FILES, RANKS, Coordinate

CASTLE_KINGSIDE = "O-O"
CASTLE_QUEENSIDE = "O-O-O"
_KINGSIDE_TOKENS = ("O-O", "0-0")
_QUEENSIDE_TOKENS = ("O-O-O", "0-0-0")
_SUFFIX_CHARS = "+#!?"


def disambiguation(move: Move, legal_moves: Iterable[Move]) -> str:
    """Minimal origin hint distinguishing *move* from same-kind rivals."""
    rivals = [
        m
        for m in legal_moves
        if m.to_sq == move.to_sq
        and m.from_sq != move.from_sq
        and m.piece.kind == move.piece.kind
        and m.piece.color == move.piece.color
    ]
    if not rivals:
        return ""
    origin = move.from_sq
    if not any(m.from_sq.col == origin.col for m in rivals):
        return origin.file
    if not any(m.from_sq.row == origin.row for m in rivals):
        return origin.rank
    return origin.name


def encode(
    move: Move,
    legal_moves: Iterable[Move],
    status: CheckStatus = CheckStatus.NONE,
    zero_castling: bool = False,
) -> str:
    """Render *move* in SAN.

    *legal_moves* are the legal moves of the position the move was played
    from; *status* is the opponent's check state after the move.
    """
    if move.flag == MoveFlag.CASTLE_KINGSIDE:
        san = CASTLE_KINGSIDE
    elif move.flag == MoveFlag.CASTLE_QUEENSIDE:
        san = CASTLE_QUEENSIDE
    else:
        san = ""
        if move.piece.kind == PieceKind.PAWN:
            if move.is_capture:
                san += move.from_sq.file
        else:
            san += move.piece.kind.letter + disambiguation(move, legal_moves)

        if move.is_capture:
            san += "x"

        san += move.to_sq.name

        if move.flag == MoveFlag.PROMOTION and move.promotion is not None:
            san += "=" + move.promotion.letter

    if zero_castling and move.is_castling:
        san = san.replace("O", "0")
    return san + status.suffix


def decode(token: str, legal_moves: Sequence[Move]) -> Move | None:
    """Find the legal move written as *token*.

    Returns None when the token is well formed but no legal move matches.
    Raises :class:`NotationError` when the token cannot be parsed at all.
    """
    clean = token.strip().rstrip(_SUFFIX_CHARS)
    if not clean:
        raise NotationError(token, "empty move")

    # Castling
    if clean in _KINGSIDE_TOKENS:
        return next((m for m in legal_moves if m.is_castle_kingside), None)
    if clean in _QUEENSIDE_TOKENS:
        return next((m for m in legal_moves if m.is_castle_queenside), None)

    # Promotion
    promotion: PieceKind | None = None
    if "=" in clean:
        head, _, promo = clean.partition("=")
        if len(promo) != 1 or promo not in "QRBN":
            raise NotationError(token, "bad promotion piece")
        promotion = PieceKind.from_letter(promo)
        clean = head

    # Destination (last two chars)
    if len(clean) < 2:
        raise NotationError(token, "missing destination square")
    try:
        to_sq = Coordinate.parse(clean[-2:])
    except ValueError:
        raise NotationError(token, "bad destination square") from None
    clean = clean[:-2]

    # Piece kind
    kind = PieceKind.PAWN
    if clean and clean[0] in "KQRBN":
        kind = PieceKind.from_letter(clean[0])
        clean = clean[1:]

    # Capture marker
    is_capture = clean.endswith("x")
    if is_capture:
        clean = clean[:-1]

    from_file, from_rank = _parse_origin_hint(token, clean)

    # Without "=X" a promotion token matches the first variant (queen).
    for m in legal_moves:
        if m.to_sq != to_sq or m.piece.kind != kind:
            continue
        if from_file is not None and m.from_sq.col != from_file:
            continue
        if from_rank is not None and m.from_sq.row != from_rank:
            continue
        if is_capture and not m.is_capture:
            continue
        if kind == PieceKind.PAWN and not is_capture and m.is_capture:
            continue
        if promotion is not None and m.promotion != promotion:
            continue
        return m
    return None


def _parse_origin_hint(token: str, hint: str) -> tuple[int | None, int | None]:
    """``(col, row)`` constraints from a file / rank / square hint."""
    if not hint:
        return None, None
    if len(hint) == 2 and hint[0] in FILES and hint[1] in RANKS:
        sq = Coordinate.parse(hint)
        return sq.col, sq.row
    if len(hint) == 1 and hint in FILES:
        return FILES.index(hint), None
    if len(hint) == 1 and hint in RANKS:
        return None, 8 - int(hint)
    raise NotationError(token, f"bad disambiguation {hint!r}")


# ── Position-level helpers ───────────────────────────────────────────────────


def move_to_san(
    position: Position,
    move: Move,
    last_move: Move | None = None,
    zero_castling: bool = False,
) -> str:
    """Convert a legal *move* to SAN given the *position* before the move."""
    side: Color = move.piece.color
    legal = Rules.legal_moves(position, side, last_move)
    return encode(move, legal, Rules.status_after(position, move), zero_castling)


def parse_san(
    position: Position,
    side: Color,
    san: str,
    last_move: Move | None = None,
) -> Move | None:
    """Parse *san* into one of *side*'s legal moves in *position*."""
    return decode(san, Rules.legal_moves(position, side, last_move))
