"""Shared notation-layer data models."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class RecordMove:
    """A single mainline move extracted from record movetext."""

    san: str
    comment: str = ""


@dataclass(slots=True)
class ParsedRecord:
    """Structured game record used by the import path."""

    headers: dict[str, str]
    moves: list[RecordMove]
    result_token: str

    @property
    def sans(self) -> list[str]:
        return [move.san for move in self.moves]
