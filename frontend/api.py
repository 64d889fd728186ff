# frontend/api.py

import logging
import threading

from flask import Blueprint, current_app, jsonify, request, abort

from backend.config import BoardConfig, DEFAULT_DIFFICULTY
from backend.errors import MinesweeperError
from backend.session import GameSession

logger = logging.getLogger(__name__)

api_blueprint = Blueprint("api", __name__)

# Guards creating or replacing the session across request threads.
_new_game_lock = threading.Lock()


def _session():
    session = current_app.config.get("GAME_SESSION")
    if session is None:
        abort(409, description="No game in progress, POST /api/new_game first")
    return session


def _default_config(presets):
    return presets.get(DEFAULT_DIFFICULTY) or next(iter(presets.values()))


def _int_field(data, name):
    value = data.get(name)
    if isinstance(value, bool) or not isinstance(value, int):
        abort(400, description=f"'{name}' must be an integer")
    return value


@api_blueprint.errorhandler(MinesweeperError)
def handle_engine_error(exc):
    return jsonify({"error": str(exc)}), 400


@api_blueprint.errorhandler(400)
@api_blueprint.errorhandler(404)
@api_blueprint.errorhandler(409)
def handle_http_error(exc):
    return jsonify({"error": exc.description}), exc.code


@api_blueprint.route("/difficulties", methods=["GET"])
def difficulties():
    return jsonify({
        label: {"rows": config.rows, "cols": config.cols, "mines": config.mines}
        for label, config in current_app.config["DIFFICULTIES"].items()
    })


@api_blueprint.route("/new_game", methods=["POST"])
def new_game():
    data = request.get_json(silent=True) or {}
    presets = current_app.config["DIFFICULTIES"]

    if "difficulty" in data:
        config = presets.get(data["difficulty"])
        if config is None:
            abort(400, description=f"Unknown difficulty {data['difficulty']!r}")
    elif any(key in data for key in ("rows", "cols", "mines")):
        config = BoardConfig.custom(_int_field(data, "rows"), _int_field(data, "cols"), _int_field(data, "mines"))
    else:
        config = _default_config(presets)

    with _new_game_lock:
        session = current_app.config.get("GAME_SESSION")
        if session is None:
            session = GameSession(config, leaderboard=current_app.config.get("LEADERBOARD"),
                                  seed=current_app.config.get("SEED"))
            current_app.config["GAME_SESSION"] = session
        else:
            session.reset(config)
    logger.info("New %s game requested", config.label)
    return jsonify(session.get_state())


@api_blueprint.route("/step", methods=["POST"])
def step():
    data = request.get_json(silent=True) or {}
    action = data.get("action")
    if action not in {"reveal", "flag"}:
        abort(400, description="'action' must be 'reveal' or 'flag'")
    row = _int_field(data, "row")
    col = _int_field(data, "col")

    session = _session()
    if action == "reveal":
        effect = session.reveal(row, col)
    else:
        effect = session.toggle_flag(row, col)
    return jsonify({"effect": effect.to_dict(), "state": session.get_state()})


@api_blueprint.route("/tick", methods=["POST"])
def tick():
    session = _session()
    session.tick()
    return jsonify(session.get_state())


@api_blueprint.route("/reset", methods=["POST"])
def reset():
    session = _session()
    session.reset()
    return jsonify(session.get_state())


@api_blueprint.route("/force_win", methods=["POST"])
def force_win():
    if not current_app.debug:
        abort(404, description="Only available in debug mode")
    session = _session()
    effect = session.force_win()
    return jsonify({"effect": effect.to_dict(), "state": session.get_state()})


@api_blueprint.route("/state", methods=["GET"])
def get_state():
    return jsonify(_session().get_state())


@api_blueprint.route("/score", methods=["POST"])
def record_score():
    data = request.get_json(silent=True) or {}
    name = data.get("name")
    if not isinstance(name, str):
        abort(400, description="'name' must be a string")
    return jsonify({"recorded": _session().record_score(name)})


@api_blueprint.route("/leaderboard", methods=["GET"])
def leaderboard():
    presets = current_app.config["DIFFICULTIES"]
    label = request.args.get("difficulty")
    if label is not None:
        config = presets.get(label)
        if config is None:
            abort(400, description=f"Unknown difficulty {label!r}")
    else:
        session = current_app.config.get("GAME_SESSION")
        config = session.config if session else _default_config(presets)

    records = current_app.config["LEADERBOARD"].get_records(config)
    return jsonify({
        "difficulty": config.label,
        "records": [
            {"rank": rank, "player": record.player_name, "time": record.time}
            for rank, record in enumerate(records, start=1)
        ],
    })
