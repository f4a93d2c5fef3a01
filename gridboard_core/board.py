from __future__ import annotations

from typing import Callable, Dict, Iterator, List, Optional, Tuple, Union

from loguru import logger

from .events import BoardChanged, ChangeHandler, ChangeNotifier
from .location import Location
from .pieces import Piece, Pieces

Cell = Union[int, Location, Tuple[int, int]]
WriteHook = Callable[['Board', int, Piece], Optional[Piece]]

DIRECTION_NAMES: Tuple[str, ...] = (
    'up', 'upper_right', 'right', 'lower_right',
    'down', 'lower_left', 'left', 'upper_left',
)


class Board:
    """A rectangular grid of pieces surrounded by a one-cell ring of guards.

    Cells are stored row-major in a flat list of (xsize + 2) * (ysize + 2)
    entries. Location (x, y) lives at index x + y * (xsize + 2); the playable
    area is 1 <= x <= xsize, 1 <= y <= ysize and everything else holds
    Pieces.GUARD. Walking from a playable cell by any of the eight direction
    strides therefore always hits a guard before leaving the storage.

    All mutation goes through write(). An optional write_hook(board, index,
    piece) runs before a piece is stored: it may raise to reject the write or
    return a replacement piece (None keeps the original).
    """

    def __init__(self, xsize: int, ysize: int, write_hook: Optional[WriteHook] = None) -> None:
        for name, value in (('xsize', xsize), ('ysize', ysize)):
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{name} must be an int, got {value!r}")
            if value <= 0:
                raise ValueError(f"{name} must be positive, got {value}")
        self._xsize = xsize
        self._ysize = ysize
        self.write_hook = write_hook
        self._changed = ChangeNotifier()

        size = (xsize + 2) * (ysize + 2)
        self._pieces: List[Piece] = [
            Pieces.EMPTY if self._inside(self.to_location(i)) else Pieces.GUARD
            for i in range(size)
        ]
        # Computed once; the ring layout never changes after construction.
        self._valid_indexes: Tuple[int, ...] = tuple(
            i for i, p in enumerate(self._pieces) if p.is_empty
        )
        logger.debug("created {}x{} board ({} cells, {} valid)", xsize, ysize, size, len(self._valid_indexes))

    def clone(self) -> 'Board':
        """Returns an independent copy with the same pieces and hook but no subscribers."""
        other = Board.__new__(Board)
        other._xsize = self._xsize
        other._ysize = self._ysize
        other.write_hook = self.write_hook
        other._changed = ChangeNotifier()
        other._pieces = list(self._pieces)
        other._valid_indexes = tuple(self._valid_indexes)
        return other

    def __copy__(self) -> 'Board':
        return self.clone()

    def __deepcopy__(self, memo) -> 'Board':
        return self.clone()

    @property
    def xsize(self) -> int:
        return self._xsize

    @property
    def ysize(self) -> int:
        return self._ysize

    def __len__(self) -> int:
        return len(self._pieces)

    def __repr__(self) -> str:
        return f"Board(xsize={self._xsize}, ysize={self._ysize}, occupied={sum(1 for _ in self.get_occupied_indexes())})"

    # ---------- Coordinates ----------

    def to_index(self, x: Union[int, Location], y: Optional[int] = None) -> int:
        """Maps (x, y) or a Location to its storage index."""
        if isinstance(x, Location):
            x, y = x.x, x.y
        if y is None:
            raise TypeError('to_index() needs a Location or both x and y')
        return x + y * (self._xsize + 2)

    def to_location(self, index: int) -> Location:
        width = self._xsize + 2
        return Location(index % width, index // width)

    def _inside(self, loc: Location) -> bool:
        return 1 <= loc.x <= self._xsize and 1 <= loc.y <= self._ysize

    def _resolve(self, cell: Cell) -> int:
        """Turns an index, Location or (x, y) pair into a checked storage index."""
        if isinstance(cell, tuple) and not isinstance(cell, Location):
            if len(cell) != 2:
                raise TypeError(f"expected an (x, y) pair, got {cell!r}")
            if not all(isinstance(v, int) and not isinstance(v, bool) for v in cell):
                raise TypeError(f"(x, y) coordinates must be ints, got {cell!r}")
            cell = Location(cell[0], cell[1])
        if isinstance(cell, Location):
            if not (0 <= cell.x <= self._xsize + 1 and 0 <= cell.y <= self._ysize + 1):
                raise IndexError(f"location {cell} is outside the board")
            return self.to_index(cell)
        if isinstance(cell, bool) or not isinstance(cell, int):
            raise TypeError(f"cell must be an index, Location or (x, y), got {cell!r}")
        if not 0 <= cell < len(self._pieces):
            raise IndexError(f"index {cell} is outside the board storage")
        return cell

    def is_on_board(self, cell: Cell) -> bool:
        """True for playable (non-guard) cells; False for guards and anything out of range."""
        try:
            index = self._resolve(cell)
        except IndexError:
            return False
        return not self._pieces[index].is_guard

    # ---------- Read / write ----------

    def read(self, cell: Cell) -> Piece:
        return self._pieces[self._resolve(cell)]

    def write(self, cell: Cell, piece: Piece) -> None:
        """Stores piece at cell and publishes one BoardChanged event.

        Raises IndexError for guard cells and anything outside the storage; the
        board is left untouched and nothing is published in that case.
        """
        if not isinstance(piece, Piece):
            raise TypeError(f"expected a Piece, got {piece!r}")
        index = self._resolve(cell)
        if self._pieces[index].is_guard:
            logger.debug("rejected write of {} to guard cell {}", piece, self.to_location(index))
            raise IndexError(f"cannot write to guard cell {self.to_location(index)}")
        if self.write_hook is not None:
            replacement = self.write_hook(self, index, piece)
            if replacement is not None:
                if not isinstance(replacement, Piece):
                    raise TypeError(f"write_hook must return a Piece or None, got {replacement!r}")
                piece = replacement
        if piece.is_guard:
            raise ValueError('guard pieces are reserved for the board border')
        self._pieces[index] = piece
        self._changed.publish(BoardChanged(self.to_location(index), piece))

    def __getitem__(self, cell: Cell) -> Piece:
        return self.read(cell)

    def __setitem__(self, cell: Cell, piece: Piece) -> None:
        self.write(cell, piece)

    def clear_piece(self, loc: Union[Location, Tuple[int, int]]) -> None:
        self.write(loc, Pieces.EMPTY)

    def clear_all(self) -> None:
        """Empties every occupied cell, publishing one event per cell."""
        for index in list(self.get_occupied_indexes()):
            self.clear_piece(self.to_location(index))

    def fill_vacant(self, piece: Piece) -> None:
        for index in list(self.get_vacant_indexes()):
            self.write(index, piece)

    # ---------- Change notification ----------

    def subscribe(self, handler: ChangeHandler) -> None:
        self._changed.subscribe(handler)

    def unsubscribe(self, handler: ChangeHandler) -> None:
        self._changed.unsubscribe(handler)

    def is_subscribed(self, handler: ChangeHandler) -> bool:
        return self._changed.is_subscribed(handler)

    # ---------- Enumeration ----------

    def get_all_pieces(self) -> Iterator[Piece]:
        """Yields every non-empty piece in index order."""
        for index in self._valid_indexes:
            piece = self._pieces[index]
            if not piece.is_empty:
                yield piece

    def get_indexes(self, piece: Piece) -> Iterator[int]:
        """Yields indexes whose piece has the same kind as piece."""
        for index in self._valid_indexes:
            if self._pieces[index].same_kind(piece):
                yield index

    def get_locations(self, piece: Piece) -> Iterator[Location]:
        for index in self.get_indexes(piece):
            yield self.to_location(index)

    def count(self, piece: Piece) -> int:
        return sum(1 for _ in self.get_indexes(piece))

    def get_valid_indexes(self) -> Iterator[int]:
        return iter(self._valid_indexes)

    def get_valid_locations(self) -> Iterator[Location]:
        for index in self._valid_indexes:
            yield self.to_location(index)

    def get_occupied_indexes(self) -> Iterator[int]:
        for index in self._valid_indexes:
            if not self._pieces[index].is_empty:
                yield index

    def get_occupied_locations(self) -> Iterator[Location]:
        for index in self.get_occupied_indexes():
            yield self.to_location(index)

    def get_vacant_indexes(self) -> Iterator[int]:
        return self.get_indexes(Pieces.EMPTY)

    def get_vacant_locations(self) -> Iterator[Location]:
        return self.get_locations(Pieces.EMPTY)

    def get_series_indexes(self, start: int, direction: int) -> Iterator[int]:
        """Yields start, start + direction, ... up to (not including) the first guard.

        Nothing is yielded when start itself is a guard. A direction of 0 would
        never reach a guard and is rejected.
        """
        if direction == 0:
            raise ValueError('direction must be non-zero')
        start = self._resolve(start)

        def walk() -> Iterator[int]:
            pos = start
            while 0 <= pos < len(self._pieces) and not self._pieces[pos].is_guard:
                yield pos
                pos += direction

        return walk()

    def get_series_locations(self, start: Union[Location, Tuple[int, int]], direction: int) -> Iterator[Location]:
        for index in self.get_series_indexes(self._resolve(start), direction):
            yield self.to_location(index)

    # ---------- Directions ----------

    @property
    def up_direction(self) -> int:
        return -(self._xsize + 2)

    @property
    def down_direction(self) -> int:
        return self._xsize + 2

    @property
    def left_direction(self) -> int:
        return -1

    @property
    def right_direction(self) -> int:
        return 1

    @property
    def upper_right_direction(self) -> int:
        return self.up_direction + self.right_direction

    @property
    def upper_left_direction(self) -> int:
        return self.up_direction + self.left_direction

    @property
    def lower_right_direction(self) -> int:
        return self.down_direction + self.right_direction

    @property
    def lower_left_direction(self) -> int:
        return self.down_direction + self.left_direction

    @property
    def directions(self) -> Dict[str, int]:
        """All eight strides keyed by name, clockwise from up."""
        return {name: getattr(self, f"{name}_direction") for name in DIRECTION_NAMES}

    def direction(self, name: str) -> int:
        key = name.strip().lower().replace('-', '_')
        if key not in DIRECTION_NAMES:
            raise ValueError(f"Unknown direction {name!r}; expected one of {', '.join(DIRECTION_NAMES)}")
        return getattr(self, f"{key}_direction")
