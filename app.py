from __future__ import annotations

import os
import threading
from typing import Any, Dict, Tuple

from flask import Flask, jsonify, request, send_from_directory
from loguru import logger

from gridboard_core.board import Board
from gridboard_core.demo import cycle_piece, fill_with_white, piece_counts
from gridboard_core.location import Location
from gridboard_core.logs import configure_logging
from gridboard_core.pieces import Pieces
from gridboard_core.view import BoardView

DEFAULT_XSIZE = int(os.getenv("GRIDBOARD_XSIZE", "10"))
DEFAULT_YSIZE = int(os.getenv("GRIDBOARD_YSIZE", "10"))
DEFAULT_STYLE = os.getenv("GRIDBOARD_STYLE", "chess")
CANVAS_WIDTH = float(os.getenv("GRIDBOARD_CANVAS_WIDTH", "401"))
CANVAS_HEIGHT = float(os.getenv("GRIDBOARD_CANVAS_HEIGHT", "401"))

STATIC_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "static"))
app = Flask(__name__, static_url_path="/static", static_folder=STATIC_DIR)

# One shared board for the demo page; the view follows it through change events.
board = Board(DEFAULT_XSIZE, DEFAULT_YSIZE)
view = BoardView(board, CANVAS_WIDTH, CANVAS_HEIGHT)
view.ruled_lines(DEFAULT_STYLE)

# The board does no locking of its own; every route that touches board/view holds this.
board_lock = threading.Lock()

REQUEST_ERRORS = (ValueError, IndexError, KeyError, TypeError)


def _error(msg: str, status: int = 400) -> Tuple[Any, int]:
    logger.warning("rejected request {}: {}", request.path, msg)
    return jsonify({"ok": False, "error": msg}), status


def _json_body() -> Dict[str, Any]:
    """Request body as a dict; a missing body is {}. Anything else raises TypeError."""
    body = request.get_json(force=True, silent=True)
    if body is None:
        return {}
    if not isinstance(body, dict):
        raise TypeError("expected a JSON object")
    return body


def _board_json() -> Dict[str, Any]:
    return {
        "ok": True,
        "board": view.to_json(),
        "counts": piece_counts(board),
    }


def _location_from_body(body: Dict[str, Any]) -> Location:
    """Accepts either board coordinates {"x", "y"} or canvas pixels {"px", "py"}."""
    if "px" in body or "py" in body:
        return view.to_location(float(body["px"]), float(body["py"]))
    return Location(int(body["x"]), int(body["y"]))


# ---------- Static routes ----------

@app.get("/")
def index() -> Any:
    return send_from_directory(app.static_folder, "index.html")


@app.get("/main.js")
def main_js() -> Any:
    resp = send_from_directory(app.static_folder, "main.js")
    resp.headers["Content-Type"] = "application/javascript; charset=utf-8"
    return resp


# ---------- Board API ----------

@app.get("/api/board")
def api_board() -> Any:
    with board_lock:
        return jsonify(_board_json())


@app.post("/api/click")
def api_click() -> Any:
    with board_lock:
        try:
            loc = _location_from_body(_json_body())
            piece = cycle_piece(board, loc)
        except REQUEST_ERRORS as e:
            return _error(f"bad click: {e}")
        logger.info("click {} -> {}", loc, piece)
        out = _board_json()
    out["location"] = [loc.x, loc.y]
    out["piece"] = piece.kind
    return jsonify(out)


@app.post("/api/clear")
def api_clear() -> Any:
    with board_lock:
        board.clear_all()
        logger.info("cleared board")
        return jsonify(_board_json())


@app.post("/api/fill")
def api_fill() -> Any:
    with board_lock:
        n = fill_with_white(board)
        logger.info("filled {} vacant cells with white", n)
        out = _board_json()
    out["filled"] = n
    return jsonify(out)


@app.get("/api/count")
def api_count() -> Any:
    kind = request.args.get("kind", "white")
    try:
        piece = Pieces.by_kind(kind)
    except ValueError as e:
        return _error(str(e))
    with board_lock:
        count = board.count(piece)
    return jsonify({"ok": True, "kind": piece.kind, "count": count})


@app.post("/api/reset")
def api_reset() -> Any:
    global board
    try:
        body = _json_body()
        new_board = Board(int(body.get("xsize", DEFAULT_XSIZE)), int(body.get("ysize", DEFAULT_YSIZE)))
        style = str(body.get("style", view.style))
        with board_lock:
            view.ruled_lines(style)
            view.change_board(new_board)
            board = new_board
            out = _board_json()
    except REQUEST_ERRORS as e:
        return _error(f"bad reset: {e}")
    logger.info("reset to {}x{} {} board", new_board.xsize, new_board.ysize, style)
    return jsonify(out)


# Entrypoint for "python app.py"
if __name__ == "__main__":
    configure_logging()
    debug = os.getenv("FLASK_DEBUG", os.getenv("DEBUG", "0")).lower() in ("1", "true", "yes", "on")
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", "5000")), debug=debug)
