"""User-tunable settings with ``MOLIGHTS_*`` environment overrides."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace

from dotenv import load_dotenv

_TRUE = frozenset({"1", "true", "yes", "on"})
_FALSE = frozenset({"0", "false", "no", "off"})
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


# ── Settings data class ──────────────────────────────────────────────────────


@dataclass
class Settings:
    """All user-configurable settings."""

    # Logging
    log_level: str = "WARNING"

    # Notation
    zero_castling: bool = False

    # Board
    unicode_board: bool = False

    # Record headers
    event: str = "Casual Game"
    site: str = "?"
    white: str = "White Player"
    black: str = "Black Player"

    def __post_init__(self) -> None:
        self.log_level = self.log_level.upper()
        if self.log_level not in _LOG_LEVELS:
            raise ValueError(
                f"Invalid log level {self.log_level!r}; "
                f"expected one of {', '.join(_LOG_LEVELS)}"
            )

    @property
    def log_level_value(self) -> int:
        return logging.getLevelName(self.log_level)

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> Settings:
        """Defaults overridden by ``MOLIGHTS_*`` variables.

        A ``.env`` file in the working directory is loaded first when reading
        the real process environment.
        """
        if environ is None:
            load_dotenv()
            environ = dict(os.environ)
        settings = cls()
        overrides: dict[str, object] = {}
        if "MOLIGHTS_LOG_LEVEL" in environ:
            overrides["log_level"] = environ["MOLIGHTS_LOG_LEVEL"]
        if "MOLIGHTS_ZERO_CASTLING" in environ:
            overrides["zero_castling"] = _parse_bool(
                "MOLIGHTS_ZERO_CASTLING", environ["MOLIGHTS_ZERO_CASTLING"]
            )
        if "MOLIGHTS_UNICODE_BOARD" in environ:
            overrides["unicode_board"] = _parse_bool(
                "MOLIGHTS_UNICODE_BOARD", environ["MOLIGHTS_UNICODE_BOARD"]
            )
        for name in ("event", "site", "white", "black"):
            value = environ.get(f"MOLIGHTS_{name.upper()}")
            if value:
                overrides[name] = value
        return replace(settings, **overrides)

    def record_headers(self) -> dict[str, str]:
        return {
            "Event": self.event,
            "Site": self.site,
            "White": self.white,
            "Black": self.black,
        }


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"{name} must be a boolean, got {raw!r}")
