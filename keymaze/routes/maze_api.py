"""
project: Keymaze
module: maze_api.py
License: MIT

Maze round and command API routes.

Each browser/agent gets an opaque id in the signed cookie session; the id maps
to a GameSession held in an in-process registry. Blocked moves and failed item
uses are normal outcomes and come back as 200 with ``success: false``; only a
missing round (404) or malformed start parameters (400) are HTTP errors.
"""

import threading
import uuid
from collections import OrderedDict

from flask import Blueprint, current_app, jsonify, request, session

from keymaze.game import GameSession
from keymaze.logging_utils import get_logger
from keymaze.maze.config import MazeConfig

_log = get_logger("maze_api")

SESSION_KEY = "maze_session_id"


class SessionRegistry:
    """Bounded id -> GameSession map. Oldest sessions are evicted first."""

    def __init__(self, max_sessions: int = 64):
        self.max_sessions = max(1, int(max_sessions))
        self._sessions: "OrderedDict[str, GameSession]" = OrderedDict()
        self._lock = threading.Lock()

    def get(self, sid):
        if not sid:
            return None
        with self._lock:
            game = self._sessions.get(sid)
            if game is not None:
                self._sessions.move_to_end(sid)
            return game

    def put(self, sid: str, game: GameSession) -> None:
        with self._lock:
            self._sessions[sid] = game
            self._sessions.move_to_end(sid)
            while len(self._sessions) > self.max_sessions:
                evicted, _ = self._sessions.popitem(last=False)
                _log.debug(event="session_evicted", sid=evicted)

    def __len__(self):
        with self._lock:
            return len(self._sessions)


bp_maze = Blueprint("maze", __name__)


def _registry() -> SessionRegistry:
    return current_app.extensions["keymaze_sessions"]


def _current_game():
    return _registry().get(session.get(SESSION_KEY))


def _no_game():
    return jsonify({"error": "No game in progress"}), 404


def _int_param(data: dict, key: str, default):
    val = data.get(key, default)
    if val is None:
        return None
    if isinstance(val, bool):
        raise ValueError(f"{key} must be an integer")
    try:
        return int(val)
    except (TypeError, ValueError):
        raise ValueError(f"{key} must be an integer") from None


@bp_maze.route("/api/maze/start", methods=["POST"])
def start_game():
    """Start a fresh round for this client.

    Body (JSON, all optional): {"rows": int, "cols": int, "seed": int}
    Response: {message, maze_size, start_position, exit_position, seed}
    """
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        return jsonify({"error": "Invalid JSON object"}), 400
    cfg = current_app.config
    try:
        config = MazeConfig(
            rows=_int_param(data, "rows", cfg["KEYMAZE_DEFAULT_ROWS"]),
            cols=_int_param(data, "cols", cfg["KEYMAZE_DEFAULT_COLS"]),
            seed=_int_param(data, "seed", None),
            max_placement_attempts=cfg["KEYMAZE_MAX_PLACEMENT_ATTEMPTS"],
        ).validate()
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    limit = cfg["KEYMAZE_MAX_SIZE"]
    if config.rows > limit or config.cols > limit:
        return jsonify({"error": f"maze dimensions must not exceed {limit}"}), 400

    sid = session.get(SESSION_KEY)
    game = _registry().get(sid)
    if game is None:
        sid = uuid.uuid4().hex
        session[SESSION_KEY] = sid
        game = GameSession(config)
        _registry().put(sid, game)
    summary = game.new_round(config)
    _log.info(event="start", sid=sid, rows=config.rows, cols=config.cols, seed=summary["seed"])
    return jsonify(summary)


@bp_maze.route("/api/maze/look")
def look():
    game = _current_game()
    if game is None or not game.in_progress:
        return _no_game()
    return jsonify(game.dispatch("look").to_dict())


@bp_maze.route("/api/maze/state")
def state():
    """Fogged board snapshot for a renderer: walls, visible items, player."""
    game = _current_game()
    if game is None or not game.in_progress:
        return _no_game()
    return jsonify(game.state())


def _directional(command: str):
    game = _current_game()
    if game is None or not game.in_progress:
        return _no_game()
    data = request.get_json(silent=True) or {}
    direction = data.get("direction") if isinstance(data, dict) else None
    return jsonify(game.dispatch(command, direction).to_dict())


@bp_maze.route("/api/maze/move", methods=["POST"])
def move():
    """Body: {"direction": "north"|"south"|"east"|"west"}"""
    return _directional("move")


@bp_maze.route("/api/maze/use", methods=["POST"])
def use():
    """Body: {"direction": ...}; spends the held item on the blocker in that direction."""
    return _directional("use")


@bp_maze.route("/api/maze/pickup", methods=["POST"])
def pickup():
    game = _current_game()
    if game is None or not game.in_progress:
        return _no_game()
    return jsonify(game.dispatch("pickup").to_dict())


@bp_maze.route("/api/maze/drop", methods=["POST"])
def drop():
    game = _current_game()
    if game is None or not game.in_progress:
        return _no_game()
    return jsonify(game.dispatch("drop").to_dict())
