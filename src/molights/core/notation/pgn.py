"""Game record (PGN) parsing and serialization helpers."""

from __future__ import annotations

import re
from collections.abc import Iterator
from datetime import date

from molights.core.enums import GameResult
from molights.core.notation.models import ParsedRecord, RecordMove

_RESULT_BY_TOKEN: dict[str, GameResult] = {
    "1-0": GameResult.WHITE_WINS,
    "0-1": GameResult.BLACK_WINS,
    "1/2-1/2": GameResult.DRAW,
    "*": GameResult.IN_PROGRESS,
}
_TOKEN_BY_RESULT = {result: token for token, result in _RESULT_BY_TOKEN.items()}
RESULT_TOKENS = frozenset(_RESULT_BY_TOKEN)

_TAG_RE = re.compile(r'^\[(\w+)\s+"((?:[^"\\]|\\.)*)"\]$')
# Brace comments may be left unterminated at the end of the text.
_MOVETEXT_RE = re.compile(
    r"""
      \{(?P<brace>[^}]*)\}?
    | ;(?P<line>[^\n]*)
    | (?P<open>\()
    | (?P<close>\))
    | (?P<word>[^\s{};()]+)
    """,
    re.VERBOSE,
)
_MOVE_NUMBER_RE = re.compile(r"^\d+\.+")
_NAG_RE = re.compile(r"^\$\d+$")


def result_token(result: GameResult) -> str:
    """Convert :class:`GameResult` to a record result token."""
    return _TOKEN_BY_RESULT[result]


def game_result_from_token(token: str) -> GameResult:
    """Convert a record result token to :class:`GameResult`.

    Unknown tokens read as a game still in progress.
    """
    return _RESULT_BY_TOKEN.get(token, GameResult.IN_PROGRESS)


def default_headers(
    event: str = "Casual Game",
    site: str = "?",
    white: str = "White Player",
    black: str = "Black Player",
    result: str = "*",
    played_on: date | None = None,
) -> dict[str, str]:
    """The seven standard tag pairs, in their conventional order."""
    day = played_on or date.today()
    return {
        "Event": event,
        "Site": site,
        "Date": day.strftime("%Y.%m.%d"),
        "Round": "1",
        "White": white,
        "Black": black,
        "Result": result,
    }


# ── Writing ──────────────────────────────────────────────────────────────────


def movetext_from_sans(
    sans: list[str],
    result: str,
    first_move_number: int = 1,
    black_first: bool = False,
) -> str:
    """Build numbered movetext from SAN moves and a result token."""
    return movetext_from_moves(
        [RecordMove(san=san) for san in sans], result, first_move_number, black_first
    )


def movetext_from_moves(
    moves: list[RecordMove],
    result: str,
    first_move_number: int = 1,
    black_first: bool = False,
) -> str:
    """Build numbered movetext from mainline moves with optional comments.

    With *black_first* the opening move is written ``N...`` and white's
    reply starts move ``N+1``.
    """
    words: list[str] = []
    shift = 1 if black_first else 0
    for index, move in enumerate(moves):
        ply = index + shift
        number = first_move_number + ply // 2
        if ply % 2 == 0:
            words.append(f"{number}.")
        elif index == 0:
            words.append(f"{number}...")
        words.append(move.san)
        if move.comment:
            # A closing brace would end the comment early.
            words.append("{" + move.comment.replace("}", "]") + "}")
    words.append(result)
    return " ".join(words)


def _tag_line(key: str, value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'[{key} "{escaped}"]'


def build_record(
    headers: dict[str, str],
    sans: list[str],
    result: str,
    comments: list[str | None] | None = None,
    first_move_number: int = 1,
    black_first: bool = False,
) -> str:
    """Build a single-game record document."""
    if result not in RESULT_TOKENS:
        raise ValueError(f"Invalid result token: {result!r}")
    if comments is None:
        comments = [None] * len(sans)
    elif len(comments) != len(sans):
        raise ValueError("Record comments length must match SAN move length")

    moves = [
        RecordMove(san=san, comment=comment or "")
        for san, comment in zip(sans, comments)
    ]
    tags = [_tag_line(key, value) for key, value in headers.items()]
    movetext = movetext_from_moves(moves, result, first_move_number, black_first)
    return "\n".join([*tags, "", movetext, ""])


# ── Reading ──────────────────────────────────────────────────────────────────


def _iter_mainline(movetext: str) -> Iterator[tuple[str, str]]:
    """Yield ``("move" | "comment" | "result", text)`` for the mainline.

    Everything inside parenthesised variations is skipped, as are move
    numbers and numeric annotation glyphs.
    """
    depth = 0
    for match in _MOVETEXT_RE.finditer(movetext):
        kind = match.lastgroup
        if kind == "open":
            depth += 1
            continue
        if kind == "close":
            depth = max(0, depth - 1)
            continue
        if depth:
            continue
        if kind in ("brace", "line"):
            yield "comment", match.group(kind)
            continue

        word = match.group("word")
        if word in RESULT_TOKENS:
            yield "result", word
        elif not _NAG_RE.match(word):
            # "1.", "3...", and "1.e4" written without a space
            san = _MOVE_NUMBER_RE.sub("", word)
            if san:
                yield "move", san


def _parse_movetext_mainline(movetext: str) -> tuple[list[RecordMove], str]:
    """Parse movetext and return mainline moves/comments plus result token."""
    moves: list[RecordMove] = []
    result = "*"
    for kind, text in _iter_mainline(movetext):
        if kind == "move":
            moves.append(RecordMove(san=text))
        elif kind == "result":
            result = text
        elif moves:
            clean = " ".join(text.split())
            if clean:
                last = moves[-1]
                last.comment = f"{last.comment} {clean}" if last.comment else clean
    return moves, result


def _parse_tag(line: str) -> tuple[str, str]:
    match = _TAG_RE.match(line)
    if match is None:
        raise ValueError(f"Invalid record header line: {line}")
    key, raw_value = match.groups()
    return key, raw_value.replace('\\"', '"').replace("\\\\", "\\")


def parse_record(text: str) -> ParsedRecord:
    """Parse a single game record into structured headers/moves/result.

    Tag pairs are read until the first line that is not one; ``%`` escape
    lines are ignored.
    """
    headers: dict[str, str] = {}
    movetext: list[str] = []
    lines = (raw.strip() for raw in text.splitlines())

    for line in lines:
        if not line:
            if headers:
                break
            continue
        if not line.startswith("["):
            if not line.startswith("%"):
                movetext.append(line)
            break
        key, value = _parse_tag(line)
        headers[key] = value

    movetext.extend(line for line in lines if not line.startswith("%"))
    moves, result = _parse_movetext_mainline("\n".join(movetext))

    header_result = headers.get("Result")
    if result == "*" and header_result in RESULT_TOKENS:
        result = header_result
    return ParsedRecord(headers=headers, moves=moves, result_token=result)
