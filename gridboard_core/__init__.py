"""
Grid board core Python package.

A board stores one piece per cell inside a one-cell ring of guard pieces,
converts between (x, y) locations and flat storage indexes, enumerates cells
and publishes a change event for every write.
Modules:
- location.py: Location
- pieces.py: Piece, Pieces, Color
- events.py: BoardChanged, ChangeNotifier
- board.py: Board
- view.py: BoardView (mirrors a board for display; not used by the board itself)
- demo.py, cli.py: click/fill/count actions and the terminal demo
- logs.py: loguru setup for the demos
"""
from loguru import logger as _logger

from .board import Board
from .events import BoardChanged, ChangeNotifier
from .location import Location
from .pieces import Color, Piece, Pieces, colored

# Diagnostics stay quiet until an application calls logs.configure_logging().
_logger.disable("gridboard_core")

__all__ = [
    "Board",
    "BoardChanged",
    "ChangeNotifier",
    "Color",
    "Location",
    "Piece",
    "Pieces",
    "colored",
]
