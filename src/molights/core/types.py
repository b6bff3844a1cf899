"""Coordinate value type and square-name helpers.

Board layout (row-major, rank 8 first):
    a8=(0, 0), b8=(0, 1), ..., h8=(0, 7)
    ...
    a1=(7, 0), b1=(7, 1), ..., h1=(7, 7)
"""

from __future__ import annotations

from dataclasses import dataclass

from molights.core.errors import InvalidCoordinateError

FILES = "abcdefgh"
RANKS = "12345678"


@dataclass(frozen=True, slots=True, order=True)
class Coordinate:
    """A square on the board as ``(row, col)``, both 0–7."""

    row: int
    col: int

    def __post_init__(self) -> None:
        if not is_valid(self.row, self.col):
            raise InvalidCoordinateError(
                f"Invalid square position: row={self.row}, col={self.col}. "
                "Must be between 0 and 7."
            )

    # ── Conversions ──────────────────────────────────────────────────────

    @property
    def index(self) -> int:
        """Slot index 0–63 in the board's 64-square array."""
        return self.row * 8 + self.col

    @property
    def file(self) -> str:
        """File letter 'a'–'h'."""
        return FILES[self.col]

    @property
    def rank(self) -> str:
        """Rank digit '1'–'8'."""
        return str(8 - self.row)

    @property
    def name(self) -> str:
        """Algebraic name, e.g. ``Coordinate(7, 4).name == 'e1'``."""
        return self.file + self.rank

    @classmethod
    def parse(cls, name: str) -> Coordinate:
        """Parse a square name, e.g. ``'e4'`` → ``Coordinate(4, 4)``."""
        if len(name) != 2 or name[0] not in FILES or name[1] not in RANKS:
            raise InvalidCoordinateError(f"Invalid square name: {name!r}")
        return cls(8 - int(name[1]), FILES.index(name[0]))

    def offset(self, d_row: int, d_col: int) -> Coordinate | None:
        """Neighbour ``(row + d_row, col + d_col)`` or None off the board."""
        row = self.row + d_row
        col = self.col + d_col
        if is_valid(row, col):
            return _BY_INDEX[row * 8 + col]
        return None

    def __str__(self) -> str:
        return self.name


def is_valid(row: int, col: int) -> bool:
    """Check whether ``(row, col)`` lies on the board."""
    return 0 <= row < 8 and 0 <= col < 8


def parse_square(name: str) -> Coordinate:
    """Shorthand for :meth:`Coordinate.parse`."""
    return Coordinate.parse(name)


def square_name(sq: Coordinate) -> str:
    return sq.name


def all_squares() -> tuple[Coordinate, ...]:
    """All 64 coordinates in slot order (a8 … h1)."""
    return _BY_INDEX


_BY_INDEX: tuple[Coordinate, ...] = tuple(
    Coordinate(row, col) for row in range(8) for col in range(8)
)
