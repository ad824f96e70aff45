import os
import logging
from dataclasses import asdict

from flask import Flask, jsonify, request
from flask_cors import CORS
from dotenv import load_dotenv

from domain.constants import VALID_MOVES
from services.session_registry import SessionNotFound, SessionRegistry
from settings import configure_logging, load_world_config

load_dotenv()

app = Flask(__name__)
configure_logging()
logger = logging.getLogger(__name__)

# Enable CORS for API routes so a browser frontend on another origin can drive sessions
# Allowed origins can be configured via CORS_ALLOWED_ORIGINS env var (comma-separated)
allowed_origins_env = os.getenv("CORS_ALLOWED_ORIGINS")
if allowed_origins_env:
    allowed_origins = [o.strip() for o in allowed_origins_env.split(",") if o.strip()]
else:
    # sensible defaults for local dev
    allowed_origins = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

CORS(app, resources={r"/api/*": {"origins": allowed_origins}})

world_config = load_world_config()
registry = SessionRegistry(world_config)


def _not_found(game_id):
    return jsonify({"error": f"Session '{game_id}' not found"}), 404


def _read_now(payload, default=None):
    """Pull the client's timestamp (ms) out of a JSON payload."""
    now = payload.get("now", default)
    if now is None:
        raise ValueError("Missing 'now' timestamp")
    try:
        return float(now)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid 'now' timestamp: {now!r}")


@app.route("/api/health", methods=["GET"])
def health():
    return jsonify({"status": "ok", "sessions": len(registry)})


@app.route("/api/config", methods=["GET"])
def get_config():
    """
    Return the world configuration new sessions are created with.
    """
    config = asdict(world_config)
    config["thoughts"] = list(world_config.thoughts)
    config["initial_snake"] = [list(cell) for cell in world_config.initial_snake]
    return jsonify(config)


@app.route("/api/sessions", methods=["POST"])
def create_session():
    """
    Start a new session.

    Body (optional):
    - seed: integer seed for the session's random source
    - now: client timestamp in ms (default 0)
    """
    payload = request.get_json(silent=True) or {}
    try:
        now = _read_now(payload, default=0)
        seed = payload.get("seed")
        if seed is not None:
            seed = int(seed)
        entry = registry.create(now=now, seed=seed)
    except (TypeError, ValueError) as error:
        return jsonify({"error": str(error)}), 400
    except RuntimeError as error:
        logger.warning(f"Refusing new session: {error}")
        return jsonify({"error": str(error)}), 503

    return jsonify({
        "game_id": entry.game_id,
        "seed": entry.seed,
        "state": entry.session.snapshot().to_dict()
    }), 201


@app.route("/api/sessions/<game_id>", methods=["GET"])
def get_session(game_id):
    try:
        entry = registry.get(game_id)
    except SessionNotFound:
        return _not_found(game_id)

    with entry.lock:
        state = entry.session.snapshot()
    return jsonify({"game_id": game_id, "state": state.to_dict(), "board": state.print_board()})


@app.route("/api/sessions/<game_id>/direction", methods=["POST"])
def submit_direction(game_id):
    """
    Buffer a turn. Body: {"direction": "UP" | "DOWN" | "LEFT" | "RIGHT"}

    A turn the session drops (reverse turn, session not active) still
    returns 200 with accepted=false.
    """
    payload = request.get_json(silent=True) or {}
    direction = str(payload.get("direction", "")).upper()
    if direction not in VALID_MOVES:
        return jsonify({"error": f"Invalid direction '{payload.get('direction')}'"}), 400

    try:
        entry = registry.get(game_id)
    except SessionNotFound:
        return _not_found(game_id)

    with entry.lock:
        accepted = entry.session.submit_direction(direction)
        state = entry.session.snapshot()
    return jsonify({"accepted": accepted, "state": state.to_dict()})


@app.route("/api/sessions/<game_id>/tick", methods=["POST"])
def tick_session(game_id):
    """
    Advance the session to the client's timestamp. Body: {"now": <ms>}
    """
    payload = request.get_json(silent=True) or {}
    try:
        now = _read_now(payload)
    except ValueError as error:
        return jsonify({"error": str(error)}), 400

    try:
        entry = registry.get(game_id)
    except SessionNotFound:
        return _not_found(game_id)

    with entry.lock:
        state = entry.session.tick(now)
    return jsonify({"state": state.to_dict()})


@app.route("/api/sessions/<game_id>/restart", methods=["POST"])
def restart_session(game_id):
    payload = request.get_json(silent=True) or {}
    try:
        now = _read_now(payload, default=0)
    except ValueError as error:
        return jsonify({"error": str(error)}), 400

    try:
        entry = registry.get(game_id)
    except SessionNotFound:
        return _not_found(game_id)

    with entry.lock:
        state = entry.session.start_session(now=now)
    return jsonify({"state": state.to_dict()})


@app.route("/api/sessions/<game_id>", methods=["DELETE"])
def delete_session(game_id):
    try:
        registry.remove(game_id)
    except SessionNotFound:
        return _not_found(game_id)
    return jsonify({"deleted": game_id})


if __name__ == "__main__":
    port = int(os.getenv("PORT", "5000"))
    app.run(host="0.0.0.0", port=port)
