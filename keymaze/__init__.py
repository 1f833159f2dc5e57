"""
project: Keymaze
module: __init__.py
License: MIT

Flask application factory.

Configuration is sourced from environment variables (optionally loaded from a
local .env file) with development defaults, then from the ``overrides`` mapping
passed to ``create_app``. Game sessions are kept in memory only; nothing is
persisted between server restarts.
"""

import logging
import os
import uuid

from dotenv import load_dotenv
from flask import Flask, jsonify

__version__ = "0.4.0"


def _env_int(key: str, default: int) -> int:
    try:
        return int(os.getenv(key, default))
    except (TypeError, ValueError):
        return default


def create_app(overrides: dict | None = None) -> Flask:
    """Build and configure a new Flask app with the maze API registered."""
    # Load .env if present so SECRET_KEY etc. can be supplied without exporting shell variables.
    load_dotenv()

    app = Flask(__name__, instance_relative_config=True)
    app.config.update(
        SECRET_KEY=os.getenv("SECRET_KEY", "dev-secret-change-me"),
        KEYMAZE_DEFAULT_ROWS=_env_int("KEYMAZE_ROWS", 10),
        KEYMAZE_DEFAULT_COLS=_env_int("KEYMAZE_COLS", 10),
        KEYMAZE_MAX_SIZE=_env_int("KEYMAZE_MAX_SIZE", 60),
        KEYMAZE_MAX_SESSIONS=_env_int("KEYMAZE_MAX_SESSIONS", 64),
        KEYMAZE_MAX_PLACEMENT_ATTEMPTS=_env_int("KEYMAZE_MAX_PLACEMENT_ATTEMPTS", 20),
    )
    if overrides:
        app.config.update(overrides)

    from keymaze.routes.maze_api import bp_maze, SessionRegistry

    app.extensions["keymaze_sessions"] = SessionRegistry(app.config["KEYMAZE_MAX_SESSIONS"])
    app.register_blueprint(bp_maze)

    @app.errorhandler(500)
    def internal_error(e):
        error_id = uuid.uuid4().hex[:8]
        logging.exception("Unhandled exception (id=%s)", error_id)
        return jsonify({"error": "internal server error", "error_id": error_id}), 500

    return app
