"""Core enumerations and flags for chess domain."""

from __future__ import annotations

from enum import Enum, IntEnum, auto


class Color(IntEnum):
    """Side color."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    @property
    def pawn_direction(self) -> int:
        """Row delta of a pawn push (white moves toward row 0)."""
        return -1 if self == Color.WHITE else 1

    @property
    def back_row(self) -> int:
        return 7 if self == Color.WHITE else 0

    def __str__(self) -> str:
        return self.name.lower()


class PieceKind(IntEnum):
    """Chess piece kinds ordered by conventional value."""

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6

    @property
    def letter(self) -> str:
        """SAN letter; empty for pawns."""
        return _KIND_LETTERS[self]

    @classmethod
    def from_letter(cls, letter: str) -> PieceKind:
        try:
            return _LETTER_KINDS[letter]
        except KeyError:
            raise ValueError(f"Invalid piece letter: {letter!r}") from None


_KIND_LETTERS: dict[PieceKind, str] = {
    PieceKind.PAWN: "",
    PieceKind.KNIGHT: "N",
    PieceKind.BISHOP: "B",
    PieceKind.ROOK: "R",
    PieceKind.QUEEN: "Q",
    PieceKind.KING: "K",
}
_LETTER_KINDS: dict[str, PieceKind] = {v: k for k, v in _KIND_LETTERS.items() if v}

PROMOTION_KINDS: tuple[PieceKind, ...] = (
    PieceKind.QUEEN,
    PieceKind.ROOK,
    PieceKind.BISHOP,
    PieceKind.KNIGHT,
)


class MoveFlag(IntEnum):
    """Special move classification."""

    NORMAL = 0
    DOUBLE_PAWN = 1
    EN_PASSANT = 2
    CASTLE_KINGSIDE = 3
    CASTLE_QUEENSIDE = 4
    PROMOTION = 5


class CheckStatus(IntEnum):
    """Check state of the side to move, used for the SAN suffix."""

    NONE = 0
    CHECK = 1
    CHECKMATE = 2

    @property
    def suffix(self) -> str:
        if self == CheckStatus.CHECKMATE:
            return "#"
        if self == CheckStatus.CHECK:
            return "+"
        return ""


class GameResult(IntEnum):
    """Outcome of a game."""

    IN_PROGRESS = 0
    WHITE_WINS = 1
    BLACK_WINS = 2
    DRAW = 3

    @classmethod
    def win_for(cls, color: Color) -> GameResult:
        return cls.WHITE_WINS if color == Color.WHITE else cls.BLACK_WINS

    @property
    def winner(self) -> Color | None:
        if self == GameResult.WHITE_WINS:
            return Color.WHITE
        if self == GameResult.BLACK_WINS:
            return Color.BLACK
        return None


class GameEndReason(Enum):
    """Why a finished game ended."""

    CHECKMATE = "checkmate"
    STALEMATE = "stalemate"
    RESIGNATION = "resignation"
    DRAW_AGREED = "agreed"

    def __str__(self) -> str:
        return self.value


class DrawOffer(IntEnum):
    """Draw offer status between players."""

    NONE = 0
    PENDING = auto()
    ACCEPTED = auto()
    DECLINED = auto()
