"""Game management layer: state machine and record import/export.

Quick start::

    from molights.game import GameState

    game = GameState()
    game.apply_move(game.parse_san("e4"))
    print(game.sans)
"""

from molights.game.record import (
    export_record,
    import_record,
    read_record,
    replay,
    write_record,
)
from molights.game.state import GameState, MoveRecord

__all__ = [
    "GameState",
    "MoveRecord",
    "export_record",
    "import_record",
    "read_record",
    "replay",
    "write_record",
]
