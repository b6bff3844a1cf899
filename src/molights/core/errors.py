"""Exception hierarchy for the rules core."""

from __future__ import annotations


class ChessError(Exception):
    """Base class for every error raised by molights."""


class InvalidCoordinateError(ChessError, ValueError):
    """A square position outside the 8x8 board, or a malformed square name."""


class WrongTurnError(ChessError):
    """A move was attempted by the side that is not on move."""


class IllegalMoveError(ChessError):
    """A move that is not in the current legal-move set."""


class NotationError(IllegalMoveError, ValueError):
    """Notation that cannot be parsed into a move at all."""

    def __init__(self, token: str, reason: str) -> None:
        super().__init__(f"Cannot parse {token!r}: {reason}")
        self.token = token
        self.reason = reason


class GameStateError(ChessError):
    """An operation that is invalid in the current game state.

    For example undoing with an empty history, or accepting a draw that was
    never offered.
    """


class RecordError(ChessError, ValueError):
    """A game record that cannot be read, written or replayed."""


class ReplayError(RecordError):
    """A recorded move that does not correspond to a legal move.

    Replay stops at the first such token; *ply* is its 1-based index.
    """

    def __init__(self, ply: int, token: str, reason: str) -> None:
        super().__init__(f"Could not replay move {ply} ({token!r}): {reason}")
        self.ply = ply
        self.token = token
        self.reason = reason


class RecordFileError(RecordError):
    """Reading or writing a record file failed."""

    def __init__(self, path: str, operation: str, cause: OSError) -> None:
        super().__init__(f"Failed to {operation} file '{path}': {cause}")
        self.path = path
        self.operation = operation
