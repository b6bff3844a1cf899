"""Game state machine: side to move, move history, result and draw offers."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from molights.core.enums import (
    CheckStatus,
    Color,
    DrawOffer,
    GameEndReason,
    GameResult,
)
from molights.core.errors import GameStateError, IllegalMoveError, WrongTurnError
from molights.core.move import Move
from molights.core.notation.fen import STARTING_FEN, position_from_fen
from molights.core.notation.san import decode, encode
from molights.core.position import Position
from molights.core.rules import Rules

_LOGGER = logging.getLogger(__name__)


@dataclass
class MoveRecord:
    """A single entry in the move history."""

    move: Move
    san: str
    was_check: bool = False
    was_capture: bool = False


@dataclass
class GameState:
    """Owns the position, the side to move, the history and the result.

    This is a pure data/logic class; no I/O, no threading.
    """

    position: Position = field(default_factory=Position.initial)
    side_to_move: Color = Color.WHITE
    result: GameResult = field(default=GameResult.IN_PROGRESS, init=False)
    end_reason: GameEndReason | None = field(default=None, init=False)
    draw_offer_by: Color | None = field(default=None, init=False)
    move_history: list[MoveRecord] = field(default_factory=list, init=False)
    zero_castling: bool = False
    # Double push preceding the first recorded move (FEN setups only).
    initial_last_move: Move | None = None
    start_fen: str = STARTING_FEN

    # ── Initialisation ───────────────────────────────────────────────────

    @classmethod
    def from_fen(cls, fen: str, zero_castling: bool = False) -> GameState:
        """A game starting from an arbitrary FEN position."""
        setup = position_from_fen(fen)
        state = cls(
            position=setup.position,
            side_to_move=setup.side_to_move,
            zero_castling=zero_castling,
            initial_last_move=setup.last_move,
            start_fen=" ".join(fen.split()),
        )
        # A FEN may describe a finished game.
        state._check_game_over()
        return state

    # ── Move application ─────────────────────────────────────────────────

    def apply_move(self, move: Move) -> MoveRecord:
        """Validate and play *move*, returning its history record."""
        if self.is_game_over:
            raise GameStateError(f"Game is over ({self.result_message})")
        if move.piece.color != self.side_to_move:
            raise WrongTurnError(
                f"It is {self.side_to_move}'s turn; "
                f"cannot move a {move.piece.color} piece"
            )

        legal = self.legal_moves()
        if move not in legal:
            raise IllegalMoveError(f"Illegal move: {move}")

        self.position.apply(move)
        self.side_to_move = self.side_to_move.opposite

        status = Rules.check_status(self.position, self.side_to_move, move)
        record = MoveRecord(
            move=move,
            san=encode(move, legal, status, self.zero_castling),
            was_check=status != CheckStatus.NONE,
            was_capture=move.is_capture,
        )
        self.move_history.append(record)
        _LOGGER.debug("Applied %s (%s)", record.san, move)

        if status == CheckStatus.CHECKMATE:
            self._finish(GameResult.win_for(move.piece.color), GameEndReason.CHECKMATE)
        elif status == CheckStatus.NONE and not Rules.legal_moves(
            self.position, self.side_to_move, move
        ):
            self._finish(GameResult.DRAW, GameEndReason.STALEMATE)

        return record

    def undo_move(self) -> Move:
        """Take back the last move and return it.

        A checkmate or stalemate result belongs to the move that produced it
        and is withdrawn with that move. Resignations and agreed draws are
        final.
        """
        if self.end_reason in (GameEndReason.RESIGNATION, GameEndReason.DRAW_AGREED):
            raise GameStateError(
                f"Cannot undo after the game is over ({self.result_message})"
            )
        if not self.move_history:
            raise GameStateError("You can't undo a move from the starting position")

        record = self.move_history.pop()
        self.position.revert(record.move)
        self.side_to_move = self.side_to_move.opposite
        self.result = GameResult.IN_PROGRESS
        self.end_reason = None
        _LOGGER.debug("Undid %s", record.san)
        return record.move

    # ── Resignation / draw ───────────────────────────────────────────────

    def resign(self, color: Color | None = None) -> None:
        """*color* (default: the side to move) resigns."""
        self._require_ongoing()
        loser = self.side_to_move if color is None else color
        self._finish(GameResult.win_for(loser.opposite), GameEndReason.RESIGNATION)

    def offer_draw(self, color: Color | None = None) -> DrawOffer:
        """Offer a draw; a cross offer finalises it.

        Returns ``DrawOffer.PENDING`` while waiting for the opponent and
        ``DrawOffer.ACCEPTED`` once both sides have offered.
        """
        self._require_ongoing()
        offerer = self.side_to_move if color is None else color
        if self.draw_offer_by is None or self.draw_offer_by == offerer:
            self.draw_offer_by = offerer
            return DrawOffer.PENDING
        self.draw_offer_by = None
        self._finish(GameResult.DRAW, GameEndReason.DRAW_AGREED)
        return DrawOffer.ACCEPTED

    def accept_draw(self, color: Color | None = None) -> None:
        """*color* (default: the side to move) accepts the pending offer."""
        self._require_ongoing()
        if self.draw_offer_by is None:
            raise GameStateError("There is no draw offer to accept")
        acceptor = self.side_to_move if color is None else color
        if acceptor == self.draw_offer_by:
            raise GameStateError("You cannot accept your own draw offer")
        self.draw_offer_by = None
        self._finish(GameResult.DRAW, GameEndReason.DRAW_AGREED)

    def decline_draw(self) -> None:
        if self.draw_offer_by is None:
            raise GameStateError("There is no draw offer to decline")
        self.draw_offer_by = None

    # ── Notation ─────────────────────────────────────────────────────────

    def san(self, move: Move) -> str:
        """SAN for a legal *move* in the current position."""
        legal = self.legal_moves()
        if move not in legal:
            raise IllegalMoveError(f"Illegal move: {move}")
        status = Rules.status_after(self.position, move)
        return encode(move, legal, status, self.zero_castling)

    def parse_san(self, token: str) -> Move | None:
        """The legal move written as *token*, or None if nothing matches."""
        return decode(token, self.legal_moves())

    # ── Query helpers ────────────────────────────────────────────────────

    @property
    def draw_offer(self) -> DrawOffer:
        return DrawOffer.NONE if self.draw_offer_by is None else DrawOffer.PENDING

    @property
    def is_game_over(self) -> bool:
        return self.result != GameResult.IN_PROGRESS

    @property
    def last_move(self) -> Move | None:
        if self.move_history:
            return self.move_history[-1].move
        return self.initial_last_move

    @property
    def moves(self) -> list[Move]:
        """Applied moves, oldest first."""
        return [record.move for record in self.move_history]

    @property
    def sans(self) -> list[str]:
        return [record.san for record in self.move_history]

    @property
    def ply_count(self) -> int:
        """Number of half-moves played."""
        return len(self.move_history)

    @property
    def fullmove_display(self) -> int:
        """Current full-move number for display."""
        return (self.ply_count // 2) + 1

    @property
    def result_message(self) -> str:
        if self.result == GameResult.IN_PROGRESS:
            return "Game in progress"
        if self.result == GameResult.DRAW:
            return f"Game ends in a draw ({self.end_reason})"
        winner = self.result.winner
        return f"{str(winner).capitalize()} wins ({self.end_reason})"

    def legal_moves(self) -> list[Move]:
        """Legal moves in the current position."""
        return Rules.legal_moves(self.position, self.side_to_move, self.last_move)

    def is_in_check(self, color: Color | None = None) -> bool:
        return Rules.is_in_check(
            self.position, self.side_to_move if color is None else color
        )

    def is_checkmate(self) -> bool:
        return Rules.is_checkmate(self.position, self.side_to_move, self.last_move)

    def is_stalemate(self) -> bool:
        return Rules.is_stalemate(self.position, self.side_to_move, self.last_move)

    # ── Internal ─────────────────────────────────────────────────────────

    def _require_ongoing(self) -> None:
        if self.is_game_over:
            raise GameStateError(f"Game is over ({self.result_message})")

    def _finish(self, result: GameResult, reason: GameEndReason) -> None:
        self.result = result
        self.end_reason = reason
        self.draw_offer_by = None
        _LOGGER.debug("Game over: %s by %s", result.name, reason)

    def _check_game_over(self) -> None:
        status = Rules.check_status(self.position, self.side_to_move, self.last_move)
        if status == CheckStatus.CHECKMATE:
            self._finish(
                GameResult.win_for(self.side_to_move.opposite), GameEndReason.CHECKMATE
            )
        elif status == CheckStatus.NONE and not self.legal_moves():
            self._finish(GameResult.DRAW, GameEndReason.STALEMATE)
