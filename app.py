from __future__ import annotations

import logging
import os
import threading
import uuid
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from flask import Flask, jsonify, request

from game import (
    COLOR_MAP,
    LEVELS,
    GameSnapshot,
    HintMove,
    LevelCompleteData,
    LevelDefinition,
    PuzzleEngine,
    get_level,
    get_total_levels,
)
from gridlock_core.logging_config import configure_logging

DEFAULT_HINT_DEPTH = int(os.getenv("GRIDLOCK_HINT_DEPTH", "2"))
MAX_HINT_DEPTH = int(os.getenv("GRIDLOCK_MAX_HINT_DEPTH", "4"))
MAX_SESSIONS = int(os.getenv("GRIDLOCK_MAX_SESSIONS", "1000"))
LOG_LEVEL = os.getenv("GRIDLOCK_LOG_LEVEL", "INFO")

logger = logging.getLogger(__name__)

app = Flask(__name__)


@dataclass
class Session:
    """One engine per player. The lock serializes requests against the same engine."""
    engine: PuzzleEngine
    lock: threading.Lock = field(default_factory=threading.Lock)
    completed: List[LevelCompleteData] = field(default_factory=list)

    def take_completion(self) -> Optional[LevelCompleteData]:
        return self.completed.pop() if self.completed else None


# Least recently used first; the oldest session is dropped once MAX_SESSIONS is exceeded.
_sessions: "OrderedDict[str, Session]" = OrderedDict()
_sessions_lock = threading.Lock()


def _new_session() -> Tuple[str, Session]:
    session = Session(engine=PuzzleEngine())
    session.engine.on_level_complete(session.completed.append)
    session_id = uuid.uuid4().hex
    with _sessions_lock:
        _sessions[session_id] = session
        while len(_sessions) > max(1, MAX_SESSIONS):
            evicted, _ = _sessions.popitem(last=False)
            logger.info("Evicted session %s", evicted)
    return session_id, session


def _get_session(body: Dict[str, Any]) -> Optional[Session]:
    session_id = body.get("sessionId")
    if not isinstance(session_id, str):
        return None
    with _sessions_lock:
        session = _sessions.get(session_id)
        if session is not None:
            _sessions.move_to_end(session_id)
        return session


def _level_to_json(level: LevelDefinition) -> Dict[str, Any]:
    return {
        "id": int(level.id),
        "name": level.name,
        "conduits": [list(c) for c in level.conduits],
        "maxCores": int(level.max_cores),
        "difficulty": level.difficulty,
    }


def state_to_json(s: GameSnapshot) -> Dict[str, Any]:
    return {
        "levelId": int(s.level_id),
        "level": _level_to_json(s.level),
        "conduits": [list(c) for c in s.conduits],
        "moves": int(s.moves),
        "canUndo": bool(s.can_undo),
        "isComplete": bool(s.is_complete),
        "progress": float(s.progress),
        "poweredConduits": [bool(p) for p in s.powered_conduits],
    }


def hint_to_json(h: Optional[HintMove]) -> Optional[Dict[str, Any]]:
    if h is None:
        return None
    return {"from": int(h.source), "to": int(h.target), "score": float(h.score)}


def completion_to_json(d: Optional[LevelCompleteData]) -> Optional[Dict[str, Any]]:
    if d is None:
        return None
    return {"levelId": int(d.level_id), "moves": int(d.moves), "isLastLevel": bool(d.is_last_level)}


def _read_move(body: Dict[str, Any]) -> Optional[Tuple[int, int]]:
    try:
        return int(body["from"]), int(body["to"])
    except (KeyError, TypeError, ValueError):
        return None


def _session_missing() -> Any:
    return jsonify({"ok": False, "error": "unknown session"}), 404


# ---------- Catalog ----------

@app.get("/api/levels")
def api_levels() -> Any:
    return jsonify({
        "ok": True,
        "total": get_total_levels(),
        "levels": [
            {"id": lv.id, "name": lv.name, "difficulty": lv.difficulty, "maxCores": lv.max_cores}
            for lv in LEVELS
        ],
        "colors": dict(COLOR_MAP),
    })


# ---------- Session API ----------

@app.post("/api/new")
def api_new() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    try:
        level_id = int(body.get("levelId", 1))
    except (TypeError, ValueError):
        return jsonify({"ok": False, "error": "levelId must be an integer"}), 400
    if get_level(level_id) is None:
        return jsonify({"ok": False, "error": f"level {level_id} not found"}), 404
    session_id, session = _new_session()
    with session.lock:
        session.engine.init(level_id)
        state = session.engine.get_state()
        done = session.take_completion()
    logger.info("New session %s on level %d", session_id, level_id)
    return jsonify({
        "ok": True,
        "sessionId": session_id,
        "state": state_to_json(state),
        "levelComplete": completion_to_json(done),
    })


@app.post("/api/end")
def api_end() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    session_id = body.get("sessionId")
    with _sessions_lock:
        session = _sessions.pop(session_id, None) if isinstance(session_id, str) else None
    if session is None:
        return _session_missing()
    return jsonify({"ok": True})


@app.post("/api/state")
def api_state() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    session = _get_session(body)
    if session is None:
        return _session_missing()
    with session.lock:
        state = session.engine.get_state()
    return jsonify({"ok": True, "state": state_to_json(state)})


@app.post("/api/load")
def api_load() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    session = _get_session(body)
    if session is None:
        return _session_missing()
    try:
        level_id = int(body["levelId"])
    except (KeyError, TypeError, ValueError):
        return jsonify({"ok": False, "error": "levelId required"}), 400
    with session.lock:
        loaded = session.engine.load_level(level_id)
        state = session.engine.get_state()
        done = session.take_completion()
    if not loaded:
        return jsonify({"ok": False, "error": f"level {level_id} not found", "state": state_to_json(state)}), 404
    return jsonify({"ok": True, "state": state_to_json(state), "levelComplete": completion_to_json(done)})


@app.post("/api/move")
def api_move() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    session = _get_session(body)
    if session is None:
        return _session_missing()
    move = _read_move(body)
    if move is None:
        return jsonify({"ok": False, "error": "from and to required"}), 400
    with session.lock:
        moved = session.engine.move(*move)
        state = session.engine.get_state()
        done = session.take_completion()
    if not moved:
        return jsonify({"ok": False, "error": "Illegal move", "state": state_to_json(state)}), 400
    return jsonify({"ok": True, "state": state_to_json(state), "levelComplete": completion_to_json(done)})


@app.post("/api/valid")
def api_valid() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    session = _get_session(body)
    if session is None:
        return _session_missing()
    move = _read_move(body)
    if move is None:
        return jsonify({"ok": False, "error": "from and to required"}), 400
    with session.lock:
        valid = session.engine.is_valid_move(*move)
    return jsonify({"ok": True, "valid": bool(valid)})


@app.post("/api/undo")
def api_undo() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    session = _get_session(body)
    if session is None:
        return _session_missing()
    with session.lock:
        undone = session.engine.undo()
        state = session.engine.get_state()
    return jsonify({"ok": bool(undone), "state": state_to_json(state)})


@app.post("/api/restart")
def api_restart() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    session = _get_session(body)
    if session is None:
        return _session_missing()
    with session.lock:
        session.engine.restart()
        state = session.engine.get_state()
    return jsonify({"ok": True, "state": state_to_json(state)})


@app.post("/api/next")
def api_next() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    session = _get_session(body)
    if session is None:
        return _session_missing()
    with session.lock:
        advanced = session.engine.next_level()
        state = session.engine.get_state()
        done = session.take_completion()
    return jsonify({"ok": bool(advanced), "state": state_to_json(state), "levelComplete": completion_to_json(done)})


@app.post("/api/hint")
def api_hint() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    session = _get_session(body)
    if session is None:
        return _session_missing()
    try:
        depth = int(body.get("depth", DEFAULT_HINT_DEPTH))
    except (TypeError, ValueError):
        return jsonify({"ok": False, "error": "depth must be an integer"}), 400
    depth = max(0, min(depth, MAX_HINT_DEPTH))
    with session.lock:
        hint = session.engine.find_best_hint_move(depth)
    return jsonify({"ok": True, "hint": hint_to_json(hint), "depth": depth})


# Entrypoint for "python app.py"
if __name__ == "__main__":
    configure_logging(LOG_LEVEL)
    debug = os.getenv("FLASK_DEBUG", os.getenv("DEBUG", "0")).lower() in ("1", "true", "yes", "on")
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", "5000")), debug=debug)
