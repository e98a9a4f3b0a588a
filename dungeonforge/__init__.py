"""
project: DungeonForge
module: __init__.py
License: MIT

Flask application factory.

The service exposes procedural dungeon layouts over HTTP. Configuration is
read from environment variables (optionally via a ``.env`` file) with
development defaults; a local ``instance/`` directory holds runtime files such
as the rotating log.
"""

import logging
import os
import uuid

from dotenv import load_dotenv
from flask import Flask, jsonify

from dungeonforge.layout import LayoutConfig

# Load .env if present so LAYOUT_* defaults can be supplied without exporting shell variables.
load_dotenv()

__version__ = "0.2.0"


def create_app(overrides=None):
    """Build a Flask app with the layout blueprint registered.

    ``overrides`` is applied last so tests can adjust config without touching
    the environment.
    """
    app = Flask(__name__, instance_relative_config=True)
    try:
        os.makedirs(app.instance_path, exist_ok=True)
    except OSError:
        # Read-only installs still serve layouts; only file logging needs the directory.
        pass

    app.config.update(
        SECRET_KEY=os.getenv("SECRET_KEY", "dev-secret-change-me"),
        LAYOUT_DEFAULTS=LayoutConfig.from_env().to_dict(),
        LAYOUT_CACHE_MAX=int(os.getenv("LAYOUT_CACHE_MAX", "8")),
        LAYOUT_DISABLE_CACHE=os.getenv("LAYOUT_DISABLE_CACHE", "0") in ("1", "true", "yes"),
    )
    if overrides:
        app.config.update(overrides)

    from dungeonforge.routes.layout_api import bp_layout

    app.register_blueprint(bp_layout)

    @app.errorhandler(500)
    def internal_error(e):
        error_id = uuid.uuid4().hex[:8]
        logging.exception("Unhandled exception (id=%s)", error_id)
        return jsonify({"error": "internal error", "error_id": error_id}), 500

    return app
