"""Minimal structured logging helper.

Emits key=value pairs (or one JSON object per line) with a timestamp and
level, which keeps generation diagnostics easy to grep and to parse.

Usage:
    from dungeonsmith.logging_utils import get_logger
    log = get_logger("dungeon.pipeline")
    log.info(event="dungeon_generated", seed=42, rooms=7)
    log.bind(seed=42).warn(event="door_repaired", room=3)

Level comes from DUNGEONSMITH_LOG_LEVEL (debug/info/warn/error) and JSON
output is enabled by DUNGEONSMITH_LOG_JSON. Both are read at call time so
tests and the CLI's --env-file can change them after import. Reserved keys:
level, ts.
"""

from __future__ import annotations

import json
import os
import sys
import time

LEVELS = {"debug": 10, "info": 20, "warn": 30, "error": 40}
_TRUTHY = ("1", "true", "TRUE", "yes", "on")


def current_level() -> int:
    return LEVELS.get(os.getenv("DUNGEONSMITH_LOG_LEVEL", "info").lower(), 20)


def json_mode() -> bool:
    return os.getenv("DUNGEONSMITH_LOG_JSON", "0") in _TRUTHY


def _format(level: str, **fields):
    if json_mode():
        rec = {k: v for k, v in fields.items() if v is not None}
        rec["level"] = level
        rec["ts"] = int(time.time())
        try:
            return json.dumps(rec, separators=(",", ":"))
        except (TypeError, ValueError):
            return json.dumps({"level": level, "ts": int(time.time()), "error": "json_encode_failed"})
    parts = [f"level={level}", f"ts={int(time.time())}"]
    for k, v in fields.items():
        if v is None:
            continue
        if isinstance(v, (int, float)):
            parts.append(f"{k}={v}")
        else:
            s = str(v).replace(" ", "_")
            parts.append(f"{k}={s}")
    return " ".join(parts)


class _Logger:
    def __init__(self, name: str | None = None, context: dict | None = None):
        self.name = name or "dungeonsmith"
        self.context = dict(context or {})

    def bind(self, **fields) -> "_Logger":
        """Return a logger that adds ``fields`` to every line (call-site keys win)."""
        return _Logger(self.name, {**self.context, **fields})

    def _log(self, lvl: str, **fields):
        if LEVELS[lvl] < current_level():
            return
        fields = {**self.context, **fields}
        if "logger" not in fields:
            fields["logger"] = self.name
        # stderr keeps stdout clean for CLI output
        print(_format(lvl, **fields), file=sys.stderr)

    def debug(self, **fields):
        self._log("debug", **fields)

    def info(self, **fields):
        self._log("info", **fields)

    def warn(self, **fields):
        self._log("warn", **fields)

    def error(self, **fields):
        self._log("error", **fields)


_LOGGER_CACHE = {}


def get_logger(name: str):
    if name not in _LOGGER_CACHE:
        _LOGGER_CACHE[name] = _Logger(name)
    return _LOGGER_CACHE[name]


log = get_logger("dungeonsmith")
