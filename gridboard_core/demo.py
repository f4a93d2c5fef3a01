from __future__ import annotations

from typing import Dict

from .board import Board
from .location import Location
from .pieces import Piece, Pieces


def next_piece(piece: Piece) -> Piece:
    """Click cycle used by the demos: empty -> black -> white -> empty."""
    if piece.is_empty:
        return Pieces.BLACK
    if piece.same_kind(Pieces.BLACK):
        return Pieces.WHITE
    return Pieces.EMPTY


def cycle_piece(board: Board, loc: Location) -> Piece:
    """Advances the piece at loc one step through the click cycle and returns it."""
    piece = next_piece(board[loc])
    board[loc] = piece
    return piece


def fill_with_white(board: Board) -> int:
    """Fills every vacant cell with a white piece; returns how many were filled."""
    vacant = sum(1 for _ in board.get_vacant_indexes())
    board.fill_vacant(Pieces.WHITE)
    return vacant


def piece_counts(board: Board) -> Dict[str, int]:
    return {
        "empty": board.count(Pieces.EMPTY),
        "black": board.count(Pieces.BLACK),
        "white": board.count(Pieces.WHITE),
    }
