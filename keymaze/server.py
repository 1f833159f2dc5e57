"""
project: Keymaze
module: server.py
License: MIT

Server bootstrap: logging configuration and the development web server.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler

from keymaze import create_app

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def start_server(host="0.0.0.0", port=5000, debug: bool = False):  # pragma: no cover (runtime only)
    """Create the app, configure logging under its instance folder and serve it."""
    app = create_app()
    _configure_logging(app.instance_path)
    try:
        print(f"[INFO] Starting maze server on {host}:{port}")
        app.run(host=host, port=port, debug=debug)
    except KeyboardInterrupt:
        print("\n[INFO] Server stopped by user (Ctrl+C)")
        sys.exit(0)


def _configure_logging(log_dir: str, level: int = logging.INFO) -> str:
    """Configure logging to both console and a rotating file in ``log_dir``.

    Safe to call repeatedly: existing root handlers are replaced. Returns the log file path.
    """
    try:
        os.makedirs(log_dir, exist_ok=True)
    except OSError:
        pass
    log_path = os.path.join(log_dir, "keymaze.log")

    root = logging.getLogger()
    root.setLevel(level)

    file_handler = RotatingFileHandler(log_path, maxBytes=1_000_000, backupCount=3)
    file_handler.setLevel(level)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(logging.Formatter(LOG_FORMAT))

    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()

    root.addHandler(file_handler)
    root.addHandler(console)
    return log_path
