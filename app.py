from __future__ import annotations

import logging
import os
from typing import Any, Dict, List, Tuple

from flask import Flask, jsonify, request

from game import (
    Board,
    EventLog,
    GameContext,
    GameError,
    GameState,
    InvalidSize,
    Position,
    announce_outcome,
    play_turn,
)
from tictactoe_core.config import Settings, configure_logging

logger = logging.getLogger(__name__)

SETTINGS = Settings.from_env()
app = Flask(__name__)


# ---------- JSON <-> engine ----------

def state_to_json(board: Board, context: GameContext) -> Dict[str, Any]:
    return {
        "size": int(board.size),
        "rows": [[m.symbol for m in row] for row in board.rows()],
        "status": str(context.state),
    }


def _check_size(size: int) -> int:
    if size > SETTINGS.max_board_size:
        raise InvalidSize(f"size must be at most {SETTINGS.max_board_size}, got {size}")
    return size


def _json_to_state(obj: Any) -> Tuple[Board, GameContext]:
    if not isinstance(obj, dict):
        raise ValueError("state must be an object")
    rows = obj["rows"]
    if not isinstance(rows, list) or not all(isinstance(r, list) for r in rows):
        raise ValueError("rows must be a list of lists")
    _check_size(len(rows))
    board = Board.from_rows(rows)
    size = int(obj.get("size", board.size))
    if size != board.size:
        raise ValueError(f"size {size} does not match {board.size} rows")
    status = GameState(str(obj.get("status", GameState.X_TURN.value)))
    return board, GameContext(status)


def _legal_moves(board: Board, context: GameContext) -> List[List[int]]:
    if context.is_game_over():
        return []
    return [[p.row, p.col] for p in board.empty_cells()]


def _bad_request(message: str) -> Any:
    return jsonify({"ok": False, "error": message}), 400


# ---------- Core Game API ----------

@app.post("/api/new")
def api_new() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    try:
        board = Board(_check_size(int(body.get("size", SETTINGS.board_size))))
    except (GameError, TypeError, ValueError) as e:
        return _bad_request(f"bad size: {e}")
    context = GameContext()
    return jsonify({
        "ok": True,
        "state": state_to_json(board, context),
        "legalMoves": _legal_moves(board, context),
        "rendered": board.render(),
    })


@app.post("/api/legal")
def api_legal() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    try:
        board, context = _json_to_state(body.get("state"))
    except (GameError, KeyError, TypeError, ValueError) as e:
        return _bad_request(f"bad state: {e}")
    return jsonify({"ok": True, "legalMoves": _legal_moves(board, context)})


@app.post("/api/render")
def api_render() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    try:
        board, _ = _json_to_state(body.get("state"))
    except (GameError, KeyError, TypeError, ValueError) as e:
        return _bad_request(f"bad state: {e}")
    return jsonify({"ok": True, "rendered": board.render()})


@app.post("/api/move")
def api_move() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    try:
        board, context = _json_to_state(body.get("state"))
        r, c = body["move"]
        move = Position(int(r), int(c))
    except (GameError, KeyError, TypeError, ValueError) as e:
        return _bad_request(f"bad request: {e}")

    mark = context.state.mover
    if mark is None:
        return _bad_request(f"game is over ({context.state})")
    if not board.is_valid_move(move):
        return jsonify({
            "ok": False,
            "error": "Illegal move",
            "legalMoves": _legal_moves(board, context),
        }), 400

    log = EventLog()
    board.add_observer(log)
    try:
        result = play_turn(board, context, mark, move)
    except GameError as e:
        logger.warning("move %s rejected: %s", move, e)
        return _bad_request(str(e))

    outcome = None
    if result.state.is_game_over():
        outcome = {
            "state": str(result.state),
            "winner": result.state.winner.symbol if result.state.winner else None,
            "message": announce_outcome(result.state),
            "line": [[p.row, p.col] for p in result.terminal.cells],
        }
    return jsonify({
        "ok": True,
        "state": state_to_json(board, context),
        "legalMoves": _legal_moves(board, context),
        "events": log.to_json(),
        "rendered": board.render(),
        "outcome": outcome,
    })


# Entrypoint for "python app.py"
if __name__ == "__main__":
    debug = os.getenv("FLASK_DEBUG", os.getenv("DEBUG", "0")).lower() in ("1", "true", "yes", "on")
    configure_logging(SETTINGS.effective_log_level())
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", "5000")), debug=debug)
