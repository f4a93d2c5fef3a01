from __future__ import annotations

import math
import time
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from loguru import logger

from .board import Board
from .events import BoardChanged
from .location import Location
from .pieces import BLACK_KIND, WHITE_KIND, Piece

GO_STYLE = 'go'
CHESS_STYLE = 'chess'

# Drawn pieces take this share of a cell.
PIECE_SCALE = 0.85

Line = Tuple[float, float, float, float]


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class DrawnPiece:
    """What the view currently shows at one location."""
    location: Location
    kind: str
    color: str  # "#rrggbb"
    left: float
    top: float
    width: float
    height: float


class BoardView:
    """Mirrors a Board for display.

    The view paints every playable location once when attached, then follows
    the board through its change events. It keeps its own record of what is
    drawn and never writes to the board; callers use to_location() to turn a
    pixel position into a Location and then call the board themselves.
    """

    def __init__(self, board: Board, width: float = 401, height: float = 401) -> None:
        if width <= 1 or height <= 1:
            raise ValueError(f"canvas must be larger than 1x1, got {width}x{height}")
        self.width = float(width)
        self.height = float(height)
        self.board = board
        self.update_interval = 0.0  # seconds to wait before applying each change
        self.style = CHESS_STYLE
        self._drawn: Dict[Location, DrawnPiece] = {}
        self._measure()
        for loc in board.get_valid_locations():
            self.update_piece(loc, board[loc])
        self.board.subscribe(self._on_changed)
        self._synchronize = True

    def _measure(self) -> None:
        self.cell_width = (self.width - 1) / self.board.xsize
        self.cell_height = (self.height - 1) / self.board.ysize

    @property
    def synchronize(self) -> bool:
        """Whether the view follows the board's change events (default True)."""
        return self._synchronize

    @synchronize.setter
    def synchronize(self, value: bool) -> None:
        if value and not self._synchronize:
            self.board.subscribe(self._on_changed)
            self._synchronize = True
        elif not value and self._synchronize:
            self.board.unsubscribe(self._on_changed)
            self._synchronize = False

    def change_board(self, board: Board) -> None:
        """Points the view at another board and repaints it."""
        if self._synchronize:
            self.board.unsubscribe(self._on_changed)
            board.subscribe(self._on_changed)
        self.board = board
        self._measure()
        self.invalidate()

    def invalidate(self) -> None:
        """Drops everything drawn and repaints from the board's current contents."""
        self._drawn.clear()
        for loc in self.board.get_valid_locations():
            self.update_piece(loc, self.board[loc])

    def _on_changed(self, event: BoardChanged) -> None:
        if self.update_interval > 0:
            time.sleep(self.update_interval)
        self.update_piece(event.location, event.piece)

    def update_piece(self, loc: Location, piece: Optional[Piece]) -> None:
        self.remove_piece(loc)
        if piece is None or piece.is_empty or piece.is_guard:
            return
        self.draw_piece(loc, piece)

    def draw_piece(self, loc: Location, piece: Piece) -> None:
        """Draws colorable pieces as a centred disc; other kinds are not drawn."""
        if not piece.has_color:
            logger.debug("view has no drawing for {} at {}", piece, loc)
            return
        w = self.cell_width * PIECE_SCALE
        h = self.cell_height * PIECE_SCALE
        pt = self.to_point(loc)
        self._drawn[loc] = DrawnPiece(
            location=loc,
            kind=piece.kind,
            color=piece.color.hex,
            left=pt.x + self.cell_width / 2 - w / 2,
            top=pt.y + self.cell_height / 2 - h / 2,
            width=w,
            height=h,
        )

    def remove_piece(self, loc: Location) -> None:
        self._drawn.pop(loc, None)

    def drawn(self, loc: Location) -> Optional[DrawnPiece]:
        return self._drawn.get(loc)

    @property
    def drawn_pieces(self) -> List[DrawnPiece]:
        return sorted(self._drawn.values(), key=lambda d: (d.location.y, d.location.x))

    # ---------- Geometry ----------

    def to_point(self, loc: Location) -> Point:
        """Top-left pixel of the cell at loc."""
        return Point(self.cell_width * (loc.x - 1), self.cell_height * (loc.y - 1))

    def to_location(self, x: float, y: float) -> Location:
        """Pixel position to board location, clamped to the playable area."""
        if not (math.isfinite(x) and math.isfinite(y)):
            raise ValueError(f"pixel position must be finite, got ({x}, {y})")
        a = min(max(0, int(x / self.cell_width)), self.board.xsize - 1)
        b = min(max(0, int(y / self.cell_height)), self.board.ysize - 1)
        return Location(a + 1, b + 1)

    def ruled_lines(self, style: str = CHESS_STYLE) -> List[Line]:
        """Grid lines as (x1, y1, x2, y2).

        Chess style draws cell borders; go style draws lines through the cell
        centres so pieces sit on the intersections.
        """
        if style not in (GO_STYLE, CHESS_STYLE):
            raise ValueError(f"Unknown board style: {style!r}")
        self.style = style
        start_x = 0 if style == CHESS_STYLE else int(self.cell_width / 2)
        start_y = 0 if style == CHESS_STYLE else int(self.cell_height / 2)
        lines: List[Line] = []
        x = float(start_x)
        while x <= self.width:
            lines.append((x, 0.0, x, self.height))
            x += self.cell_width
        y = float(start_y)
        while y <= self.height:
            lines.append((0.0, y, self.width, y))
            y += self.cell_height
        return lines

    # ---------- Output ----------

    def render_text(self) -> str:
        """Plain-text picture of what is drawn: X black, O white, ? other.

        Empty cells show as '.' in chess style and '+' (an intersection) in go style.
        """
        symbols = {BLACK_KIND: 'X', WHITE_KIND: 'O'}
        blank = '+' if self.style == GO_STYLE else '.'
        lines: List[str] = []
        for y in range(1, self.board.ysize + 1):
            row: List[str] = []
            for x in range(1, self.board.xsize + 1):
                d = self._drawn.get(Location(x, y))
                row.append(blank if d is None else symbols.get(d.kind, '?'))
            lines.append(" ".join(row))
        return "\n".join(lines)

    def to_json(self) -> Dict[str, Any]:
        return {
            "xsize": self.board.xsize,
            "ysize": self.board.ysize,
            "width": self.width,
            "height": self.height,
            "cellWidth": self.cell_width,
            "cellHeight": self.cell_height,
            "style": self.style,
            "lines": [list(line) for line in self.ruled_lines(self.style)],
            "pieces": [
                {
                    "x": d.location.x,
                    "y": d.location.y,
                    "kind": d.kind,
                    "color": d.color,
                    "left": d.left,
                    "top": d.top,
                    "width": d.width,
                    "height": d.height,
                }
                for d in self.drawn_pieces
            ],
        }
