from __future__ import annotations

import os
from typing import Any, Dict, List, Optional, Tuple

from flask import Flask, jsonify, request

from game import (
    Board,
    Move,
    SearchConfig,
    deal_strings,
    describe_move,
    legal_moves,
    load_board,
    replay_solution,
    simulate_games,
)
from pyrasol_core.config import default_max_depth, default_workers, env_int

# Upper bound on search horizon accepted over HTTP.
MAX_DEPTH_LIMIT = env_int("PYRASOL_MAX_DEPTH_LIMIT", 120)

app = Flask(__name__)


def move_to_json(board: Board, move: Move, index: int) -> Dict[str, Any]:
    out = move.to_json()
    out["index"] = index
    out["text"] = describe_move(board, move)
    return out


def state_to_json(board: Board) -> Dict[str, Any]:
    return {
        "cards": list(board.board_cards),
        "leaves": sorted(int(i) for i in board.leaf_idxs),
        "removed": sorted(int(i) for i in board.removed_idxs),
        "stack": list(board.stack),
        "stackIdx": int(board.stack_idx),
        "moves": int(board.moves),
        "clearAll": bool(board.clear_all),
        "completed": bool(board.completed),
    }


def _board_from_body(body: Dict[str, Any]) -> Board:
    board_str = body.get("board")
    stack_str = body.get("stack")
    if not isinstance(board_str, str) or not isinstance(stack_str, str):
        raise ValueError("board and stack strings required")
    return load_board(board_str, stack_str, clear_all=bool(body.get("clearAll", False)))


def _solution_from_body(body: Dict[str, Any]) -> List[int]:
    raw = body.get("solution", [])
    if not isinstance(raw, list):
        raise ValueError("solution must be a list of move numbers")
    try:
        return [int(x) for x in raw]
    except (TypeError, ValueError):
        raise ValueError("solution must be a list of move numbers") from None


def _config_from_body(body: Dict[str, Any]) -> SearchConfig:
    try:
        max_depth = int(body.get("maxDepth", default_max_depth()))
    except (TypeError, ValueError):
        raise ValueError("maxDepth must be an integer") from None
    if not 1 <= max_depth <= MAX_DEPTH_LIMIT:
        raise ValueError(f"maxDepth must be between 1 and {MAX_DEPTH_LIMIT}")
    workers = default_workers()
    if body.get("increasedOptions"):
        return SearchConfig.increased(max_depth=max_depth, workers=workers)
    return SearchConfig(max_depth=max_depth, workers=workers)


def _bad_request(e: Exception) -> Tuple[Any, int]:
    return jsonify({"ok": False, "error": str(e)}), 400


@app.get("/api/health")
def api_health() -> Any:
    return jsonify({"ok": True})


@app.post("/api/parse")
def api_parse() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    try:
        board = _board_from_body(body)
    except ValueError as e:
        return _bad_request(e)
    return jsonify({"ok": True, "state": state_to_json(board)})


@app.post("/api/new")
def api_new() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    seed: Optional[int] = body.get("seed", None)
    if seed is not None:
        try:
            seed = int(seed)
        except (TypeError, ValueError):
            return _bad_request(ValueError("seed must be an integer"))
    board_str, stack_str = deal_strings(seed)
    board = load_board(board_str, stack_str, clear_all=bool(body.get("clearAll", False)))
    return jsonify({
        "ok": True,
        "board": board_str,
        "stack": stack_str,
        "state": state_to_json(board),
    })


@app.post("/api/moves")
def api_moves() -> Any:
    """Legal moves after replaying an optional prefix of move numbers."""
    body = request.get_json(force=True, silent=True) or {}
    try:
        board = _board_from_body(body)
        solution = _solution_from_body(body)
    except ValueError as e:
        return _bad_request(e)
    try:
        board, _ = replay_solution(board, solution)
    except RuntimeError as e:
        return _bad_request(e)
    moves = legal_moves(board)
    return jsonify({
        "ok": True,
        "state": state_to_json(board),
        "legalMoves": [move_to_json(board, m, i) for i, m in enumerate(moves, start=1)],
    })


@app.post("/api/solve")
def api_solve() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    try:
        board = _board_from_body(body)
        config = _config_from_body(body)
    except ValueError as e:
        return _bad_request(e)

    res = simulate_games(board, config)
    steps: List[Dict[str, Any]] = []
    if res.solved:
        _, replayed = replay_solution(board, res.solution)
        steps = [move_to_json(before, move, n) for n, (before, move) in zip(res.solution, replayed)]
    return jsonify({
        "ok": True,
        "solved": res.solved,
        "solution": res.solution,
        "steps": steps,
        "plies": res.plies,
        "statesSeen": res.states_seen,
        "elapsedMs": round(res.elapsed_ms, 1),
    })


if __name__ == "__main__":
    debug = os.getenv("FLASK_DEBUG", os.getenv("DEBUG", "0")).lower() in ("1", "true", "yes", "on")
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", "5000")), debug=debug)
