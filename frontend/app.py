# frontend/app.py

import logging

from flask import Flask, jsonify

from backend.config import load_difficulties
from frontend.api import api_blueprint
from scores.leaderboard import LEADERBOARD_DIR, Leaderboard


def create_app(config_path=None, scores_dir=LEADERBOARD_DIR, seed=None):
    app = Flask(__name__)
    app.config["DIFFICULTIES"] = load_difficulties(config_path)
    app.config["LEADERBOARD"] = Leaderboard(scores_dir)
    app.config["SEED"] = seed
    app.config["GAME_SESSION"] = None
    app.register_blueprint(api_blueprint, url_prefix="/api")

    @app.route("/")
    def index():
        return jsonify({"difficulties": sorted(app.config["DIFFICULTIES"]), "api": "/api"})

    return app


def main():
    import argparse

    parser = argparse.ArgumentParser()
    parser.add_argument("--port", type=int, default=5000, help="Port to run the server on")
    parser.add_argument("--host", type=str, default="0.0.0.0", help="Host IP")
    parser.add_argument("--debug", action="store_true", help="Enable debug mode")
    parser.add_argument("--config", type=str, default=None, help="Path to difficulties yaml")
    parser.add_argument("--scores-dir", type=str, default=LEADERBOARD_DIR, help="Directory for score files")
    parser.add_argument("--log-level", type=str, default="INFO", help="Logging level")
    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = create_app(config_path=args.config, scores_dir=args.scores_dir)
    print(f"Running on http://{args.host}:{args.port}/")
    app.run(debug=args.debug, host=args.host, port=args.port)


if __name__ == "__main__":
    main()
