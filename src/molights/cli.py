"""Interactive console front end: main menu plus a command loop per game."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Callable
from dataclasses import replace
from typing import TextIO

from molights import __version__
from molights.config import Settings
from molights.core.enums import PROMOTION_KINDS, Color, DrawOffer, PieceKind
from molights.core.errors import ChessError, InvalidCoordinateError, RecordError
from molights.core.move import Move
from molights.core.types import parse_square
from molights.game.record import read_record, write_record
from molights.game.state import GameState
from molights.logging_utils import configure_logging

_LOGGER = logging.getLogger(__name__)

_BANNER = "=" * 33

_HELP = """\
Commands:
  - Enter move (algebraic): e4, Nf3, Bxe5, O-O, e8=Q
  - Enter move (coordinate): e2 e4, g1 f3
  - Undo: undo
  - Show moves: moves
  - Resign: resign
  - Offer a draw: draw  (opponent answers with accept / decline)
  - Save game: save <filename>
  - Main menu: menu
  - Help: help"""


class ConsoleApp:
    """Text-mode game driver.

    *input_fn* and *out* are injectable so the loop can be driven from tests.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        input_fn: Callable[[str], str] = input,
        out: TextIO | None = None,
    ) -> None:
        self._settings = settings if settings is not None else Settings()
        self._input = input_fn
        self._out = out if out is not None else sys.stdout

    # ── Main menu ────────────────────────────────────────────────────────

    def run(self, game: GameState | None = None) -> None:
        """Show the banner, play *game* first if given, then loop the menu."""
        self._say(_BANNER)
        self._say("   Welcome to Mo-Lights Chess!  ")
        self._say(_BANNER)
        try:
            if game is not None:
                self.play(game)
            while self._menu_once():
                pass
        except EOFError:
            self._say("")
        self._say("Thanks for playing Mo-Lights Chess!")

    def _menu_once(self) -> bool:
        self._say("\n--- MAIN MENU ---")
        self._say("1. New Game")
        self._say("2. Load Game")
        self._say("3. Quit")
        choice = self._input("\nEnter your choice (1-3): ").strip()
        if choice == "1":
            self.play(self._new_game())
        elif choice == "2":
            filename = self._input("Enter filename to load: ").strip()
            try:
                game = read_record(filename)
            except RecordError as exc:
                self._say(f"Load error: {exc}")
                return True
            game.zero_castling = self._settings.zero_castling
            self._say("Game loaded successfully!")
            self._say(f"Moves loaded: {game.ply_count}")
            self.play(game)
        elif choice == "3":
            return False
        else:
            self._say("Invalid choice. Please enter 1, 2, or 3.")
        return True

    def _new_game(self) -> GameState:
        return GameState(zero_castling=self._settings.zero_castling)

    # ── Game loop ────────────────────────────────────────────────────────

    def play(self, game: GameState) -> None:
        """Run the command loop until the game ends or the user leaves."""
        self._say(f"\n{_BANNER}\n         GAME STARTED            \n{_BANNER}")
        self._say(_HELP)
        while True:
            self._show_board(game)
            if game.is_game_over:
                self._announce_result(game)
                return
            if game.is_in_check():
                self._say("\n*** CHECK! ***")
            line = self._input("\nEnter command: ").strip()
            if line and not self.handle_command(game, line):
                return

    def handle_command(self, game: GameState, line: str) -> bool:
        """Execute one command line; False means "back to the menu"."""
        tokens = line.split()
        command = tokens[0].lower()

        if command in ("menu", "quit", "exit"):
            self._say("Returning to main menu...")
            return False
        if command == "help":
            self._say(_HELP)
            return True

        try:
            if command == "undo":
                game.undo_move()
                self._say("Move undone!")
            elif command == "moves":
                self._list_moves(game)
            elif command == "resign":
                loser = game.side_to_move
                game.resign()
                self._say(f"{str(loser).capitalize()} resigns.")
            elif command == "draw":
                self._offer_draw(game)
            elif command == "accept":
                game.accept_draw(_responder(game))
                self._say("Draw accepted.")
            elif command == "decline":
                game.decline_draw()
                self._say("Draw declined.")
            elif command == "save":
                self._save(game, tokens)
            elif len(tokens) == 1:
                self._play_san(game, tokens[0])
            elif len(tokens) == 2:
                self._play_coordinates(game, tokens[0], tokens[1])
            else:
                self._say("Invalid command. Type 'help' for commands.")
        except ChessError as exc:
            _LOGGER.debug("Command %r failed: %s", line, exc)
            self._say(f"Error: {exc}")
        return True

    # ── Commands ─────────────────────────────────────────────────────────

    def _list_moves(self, game: GameState) -> None:
        legal = game.legal_moves()
        self._say(f"\nLegal moves for {game.side_to_move}:")
        self._say(" ".join(f"{m.from_sq}->{m.to_sq}" for m in legal))
        self._say(f"(Total: {len(legal)} moves)")

    def _offer_draw(self, game: GameState) -> None:
        offerer = game.side_to_move
        if game.offer_draw() == DrawOffer.ACCEPTED:
            self._say("Both sides agreed to a draw.")
            return
        self._say(
            f"{str(offerer).capitalize()} offers a draw. "
            f"{str(offerer.opposite).capitalize()} may 'accept' or 'decline'."
        )

    def _save(self, game: GameState, tokens: list[str]) -> None:
        if len(tokens) < 2:
            self._say("Usage: save <filename>")
            return
        try:
            target = write_record(tokens[1], game, self._settings.record_headers())
        except RecordError as exc:
            self._say(f"Error saving game: {exc}")
            return
        self._say(f"Game saved to {target}")

    def _play_san(self, game: GameState, token: str) -> None:
        move = game.parse_san(token)
        if move is None:
            self._illegal()
            return
        if move.is_promotion and "=" not in token:
            move = self._choose_promotion(game, move)
        self._apply(game, move, token)

    def _play_coordinates(self, game: GameState, from_name: str, to_name: str) -> None:
        try:
            from_sq = parse_square(from_name.lower())
            to_sq = parse_square(to_name.lower())
        except InvalidCoordinateError:
            self._say("Invalid square notation. Use format like: e2 e4")
            return
        piece = game.position[from_sq]
        if piece is None:
            self._say(f"No piece on {from_sq}")
            return
        if piece.color != game.side_to_move:
            self._say(f"It's {game.side_to_move}'s turn!")
            return
        candidates = [
            m for m in game.legal_moves() if m.from_sq == from_sq and m.to_sq == to_sq
        ]
        if not candidates:
            self._illegal()
            return
        move = candidates[0]
        if move.is_promotion:
            move = self._choose_promotion(game, move)
        self._apply(game, move, f"{from_sq} -> {to_sq}")

    def _choose_promotion(self, game: GameState, move: Move) -> Move:
        """Ask for the promotion piece; anything unrecognised means queen."""
        answer = self._input("Promote to (Q/R/B/N): ").strip().upper()
        try:
            kind = PieceKind.from_letter(answer)
        except ValueError:
            kind = PieceKind.QUEEN
        if kind not in PROMOTION_KINDS:
            kind = PieceKind.QUEEN
        for candidate in game.legal_moves():
            if (
                candidate.from_sq == move.from_sq
                and candidate.to_sq == move.to_sq
                and candidate.promotion == kind
            ):
                return candidate
        return move

    def _apply(self, game: GameState, move: Move, typed: str) -> None:
        record = game.apply_move(move)
        self._say(f"Move made: {typed} ({record.san})")
        if move.captured is not None:
            self._say(f"Captured {move.captured.kind.name.capitalize()}!")
        if move.is_castle_kingside:
            self._say("Kingside castling!")
        if move.is_castle_queenside:
            self._say("Queenside castling!")
        if move.is_en_passant:
            self._say("En passant!")
        if move.promotion is not None:
            self._say(f"Pawn promoted to {move.promotion.name.capitalize()}!")

    # ── Output helpers ───────────────────────────────────────────────────

    def _show_board(self, game: GameState) -> None:
        self._say(f"\n{str(game.side_to_move).upper()}'s turn:")
        self._say(game.position.render(unicode=self._settings.unicode_board))

    def _announce_result(self, game: GameState) -> None:
        self._say(f"\n{_BANNER}")
        self._say(f"  {game.result_message}")
        self._say(_BANNER)

    def _illegal(self) -> None:
        self._say("Illegal move! That move is not allowed.")
        self._say("Type 'moves' to see all legal moves.")

    def _say(self, text: str) -> None:
        print(text, file=self._out)


def _responder(game: GameState) -> Color:
    """The side answering the pending draw offer (side to move if none)."""
    if game.draw_offer_by is None:
        return game.side_to_move
    return game.draw_offer_by.opposite


# ── Entry point ──────────────────────────────────────────────────────────────


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="molights", description="Two-player console chess."
    )
    parser.add_argument("--fen", help="start the first game from this FEN position")
    parser.add_argument(
        "--log-level",
        help="override MOLIGHTS_LOG_LEVEL (DEBUG, INFO, WARNING, ...)",
    )
    parser.add_argument(
        "--unicode", action="store_true", help="draw pieces with chess glyphs"
    )
    parser.add_argument("--version", action="version", version=__version__)
    return parser


def main(argv: list[str] | None = None) -> int:
    """Launch the console game."""
    args = build_parser().parse_args(argv)
    try:
        settings = Settings.from_env()
        if args.log_level:
            settings = replace(settings, log_level=args.log_level)
    except ValueError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2
    if args.unicode:
        settings.unicode_board = True
    configure_logging(settings.log_level_value)

    game = None
    if args.fen:
        try:
            game = GameState.from_fen(args.fen, zero_castling=settings.zero_castling)
        except (ValueError, ChessError) as exc:
            print(f"Invalid FEN: {exc}", file=sys.stderr)
            return 2

    ConsoleApp(settings).run(game)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
