import logging
import os

from flask import Flask, jsonify, request
from flask_cors import CORS

from config import GameConfig
from services.game_host import GameHost

logger = logging.getLogger(__name__)


def create_app(host: GameHost, config: GameConfig = None) -> Flask:
    """
    Build the HTTP surface for a hosted session.

    Every route goes through the host, which holds the session lock.
    """
    config = config or GameConfig()
    app = Flask(__name__)
    app.config["GAME_HOST"] = host

    # Allowed origins can be configured via CORS_ALLOWED_ORIGINS env var (comma-separated)
    CORS(app, resources={r"/api/*": {"origins": config.cors_origins}})

    @app.route("/api/state", methods=["GET"])
    def get_state():
        """Read-only snapshot: snake, food, obstacles, power-ups, score, level, status, scoreboard."""
        try:
            return jsonify(host.state())
        except Exception as error:
            logger.error(f"Error building state snapshot: {error}")
            return jsonify({"error": "Failed to load game state"}), 500

    @app.route("/api/scoreboard", methods=["GET"])
    def get_scoreboard():
        state = host.state()
        return jsonify({
            "high_score": state["high_score"],
            "scoreboard": state["scoreboard"],
        })

    @app.route("/api/intent", methods=["POST"])
    def post_intent():
        """
        Set the latest direction.

        Body: {"direction": "UP" | "DOWN" | "LEFT" | "RIGHT"}
        """
        payload = request.get_json(silent=True) or {}
        direction = payload.get("direction")
        if direction is None:
            return jsonify({"error": "Missing 'direction'"}), 400
        if not host.set_intent(direction):
            return jsonify({"error": f"Invalid direction: {direction!r}"}), 400
        return jsonify({"accepted": True})

    @app.route("/api/identifier", methods=["POST"])
    def post_identifier():
        """Name recorded on the scoreboard at the next game over only. Body: {"name": "ABC"}"""
        payload = request.get_json(silent=True) or {}
        name = payload.get("name")
        if name is not None and not isinstance(name, str):
            return jsonify({"error": "'name' must be a string"}), 400
        host.set_identifier(name)
        return jsonify({"name": name})

    @app.route("/api/start", methods=["POST"])
    def post_start():
        changed = host.start()
        return jsonify({"changed": changed, "state": host.state()})

    @app.route("/api/pause", methods=["POST"])
    def post_pause():
        changed = host.pause()
        return jsonify({"changed": changed, "state": host.state()})

    @app.route("/api/resume", methods=["POST"])
    def post_resume():
        changed = host.resume()
        return jsonify({"changed": changed, "state": host.state()})

    @app.route("/api/reset", methods=["POST"])
    def post_reset():
        host.reset()
        return jsonify({"changed": True, "state": host.state()})

    return app


if __name__ == '__main__':
    config = GameConfig.from_env()
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )
    host = GameHost.from_config(config)
    host.start_clock()
    app = create_app(host, config)
    port = int(os.getenv("PORT", 5000))
    app.run(host='0.0.0.0', port=port, debug=False)
