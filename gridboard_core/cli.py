from __future__ import annotations

import argparse
from typing import List, Optional

from loguru import logger

from .board import DIRECTION_NAMES, Board
from .demo import cycle_piece, fill_with_white, piece_counts
from .location import Location
from .logs import configure_logging
from .pieces import Pieces
from .view import CHESS_STYLE, GO_STYLE, BoardView

HELP = """Commands:
  click X Y      cycle the piece at (X,Y): empty -> black -> white -> empty
  clear          remove every piece
  fill           fill every vacant cell with white
  count [KIND]   count pieces (empty, black, white); all kinds if omitted
  ray X Y DIR    list locations from (X,Y) towards DIR up to the border
  show           print the board
  help           print this text
  quit           leave"""


def _parse_xy(args: List[str]) -> Location:
    if len(args) < 2:
        raise ValueError('expected X and Y')
    return Location(int(args[0]), int(args[1]))


def run_command(board: Board, view: BoardView, line: str) -> bool:
    """Executes one command line. Returns False when the session should end."""
    parts = line.split()
    if not parts:
        return True
    cmd, args = parts[0].lower(), parts[1:]
    if cmd in ('quit', 'exit', 'q'):
        return False
    if cmd == 'help':
        print(HELP)
    elif cmd == 'show':
        print(view.render_text())
    elif cmd == 'click':
        loc = _parse_xy(args)
        piece = cycle_piece(board, loc)
        print(f"{loc} -> {piece}")
        print(view.render_text())
    elif cmd == 'clear':
        board.clear_all()
        print(view.render_text())
    elif cmd == 'fill':
        n = fill_with_white(board)
        print(f"Filled {n} cells with white")
        print(view.render_text())
    elif cmd == 'count':
        if args:
            piece = Pieces.by_kind(args[0])
            print(f"{piece.kind}={board.count(piece)}")
        else:
            print(" ".join(f"{k}={v}" for k, v in piece_counts(board).items()))
    elif cmd == 'ray':
        if len(args) < 3:
            raise ValueError('expected X Y DIR')
        start = _parse_xy(args)
        if not board.is_on_board(start):
            raise ValueError(f"{start} is not on the board")
        ray = board.get_series_locations(start, board.direction(args[2]))
        print(" ".join(str(loc) for loc in ray))
    else:
        print(f"Unknown command: {cmd} (try 'help')")
    return True


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description='Interactive grid board demo')
    parser.add_argument('--xsize', type=int, default=10, help='Number of columns')
    parser.add_argument('--ysize', type=int, default=10, help='Number of rows')
    parser.add_argument('--style', choices=[GO_STYLE, CHESS_STYLE], default=CHESS_STYLE, help='Ruled line style')
    parser.add_argument('--log-level', default=None, help='loguru level for diagnostics (default: GRIDBOARD_LOG_LEVEL or WARNING)')
    args = parser.parse_args(argv)

    configure_logging(args.log_level)
    try:
        board = Board(args.xsize, args.ysize)
    except ValueError as e:
        parser.error(str(e))
    view = BoardView(board)
    lines = view.ruled_lines(args.style)
    logger.info("demo board {}x{} ({} style)", board.xsize, board.ysize, args.style)

    print(f"{args.style} board {board.xsize}x{board.ysize}, {len(lines)} ruled lines")
    print(view.render_text())
    print(f"Directions: {', '.join(DIRECTION_NAMES)}. Type 'help' for commands.")
    while True:
        try:
            text = input('> ').strip()
        except EOFError:
            break
        try:
            if not run_command(board, view, text):
                break
        except (ValueError, IndexError) as e:
            print(f"error: {e}")


if __name__ == '__main__':
    main()
