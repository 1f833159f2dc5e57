"""Event log lines for rounds and commands.

Each call prints one line: ``level=... ts=... logger=... key=value ...`` or,
with ``KEYMAZE_LOG_JSON`` set, one compact JSON object. Threshold and format
are read from the environment on every call so tests and the CLI can change
them at runtime.

Usage:
    from keymaze.logging_utils import get_logger
    _log = get_logger("game")
    _log.info(event="round_start", rows=10, cols=10, seed=42)

Reserved keys: level, ts. ``None`` values are dropped.
"""

from __future__ import annotations

import json
import os
import sys
import time
from functools import partialmethod
from typing import Any, Dict

LEVELS = {"debug": 10, "info": 20, "warn": 30, "error": 40}
_TRUTHY = ("1", "true", "yes", "on")


def current_level() -> int:
    return LEVELS.get(os.getenv("KEYMAZE_LOG_LEVEL", "info").strip().lower(), LEVELS["info"])


def json_mode() -> bool:
    return os.getenv("KEYMAZE_LOG_JSON", "0").strip().lower() in _TRUTHY


def _kv_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    return str(value).replace(" ", "_")


def render(level: str, fields: Dict[str, Any]) -> str:
    present = {k: v for k, v in fields.items() if v is not None}
    ts = int(time.time())
    if json_mode():
        return json.dumps({**present, "level": level, "ts": ts}, separators=(",", ":"), default=str)
    head = [f"level={level}", f"ts={ts}"]
    return " ".join(head + [f"{k}={_kv_value(v)}" for k, v in present.items()])


class EventLogger:
    def __init__(self, name: str):
        self.name = name

    def emit(self, level: str, **fields):
        if LEVELS[level] < current_level():
            return
        fields.setdefault("logger", self.name)
        stream = sys.stderr if level == "error" else sys.stdout
        print(render(level, fields), file=stream)

    debug = partialmethod(emit, "debug")
    info = partialmethod(emit, "info")
    warn = partialmethod(emit, "warn")
    error = partialmethod(emit, "error")


_loggers: Dict[str, EventLogger] = {}


def get_logger(name: str) -> EventLogger:
    return _loggers.setdefault(name, EventLogger(name))


log = get_logger("keymaze")
