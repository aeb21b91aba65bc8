"""
project: Dungeon Smith
module: __init__.py
License: MIT

Flask application factory.

Configuration is sourced from environment variables (a local .env is loaded
when present) with defaults suitable for development. The generator itself
lives in ``dungeonsmith.dungeon`` and does not need an application; the app
only hosts the JSON API.
"""

import logging
import os
import uuid

from dotenv import load_dotenv
from flask import Flask, jsonify

__version__ = "1.0.0"

# Load .env if present so DUNGEONSMITH_* settings can be supplied without
# exporting shell variables during development.
load_dotenv()

_TRUTHY = ("1", "true", "yes", "on")


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in _TRUTHY


def create_app(config: dict | None = None) -> Flask:
    """Build a configured Flask app with the dungeon blueprint registered.

    ``config`` entries override values read from the environment, which is how
    tests inject custom themes or toggle metrics.
    """
    from dungeonsmith.dungeon.themes import load_themes
    from dungeonsmith.routes import bp_dungeon

    app = Flask(__name__, instance_relative_config=True)
    app.config.update(
        DUNGEONSMITH_DEFAULT_TYPE=os.getenv("DUNGEONSMITH_DEFAULT_TYPE", "Cave"),
        DUNGEONSMITH_DEFAULT_SIZE=os.getenv("DUNGEONSMITH_DEFAULT_SIZE", "Medium"),
        DUNGEONSMITH_THEMES_FILE=os.getenv("DUNGEONSMITH_THEMES_FILE"),
        DUNGEONSMITH_ENABLE_METRICS=_env_flag("DUNGEONSMITH_ENABLE_METRICS", "1"),
    )
    if config:
        app.config.update(config)
    if "DUNGEONSMITH_THEMES" not in app.config:
        app.config["DUNGEONSMITH_THEMES"] = load_themes(app.config.get("DUNGEONSMITH_THEMES_FILE"))

    app.register_blueprint(bp_dungeon)

    @app.route("/healthz")
    def healthz():
        return jsonify({"status": "ok", "version": __version__})

    # Error handling: JSON 500 with a short id to correlate with the log
    @app.errorhandler(500)
    def internal_error(e):
        error_id = uuid.uuid4().hex[:8]
        logging.exception("Unhandled exception (id=%s)", error_id)
        return jsonify({"error": "internal server error", "id": error_id}), 500

    return app
