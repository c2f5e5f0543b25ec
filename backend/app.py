from __future__ import annotations

import logging
from typing import Optional

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from drawfeed.pipeline import ResultPipeline

from .config import load_settings
from .routes.results import bp as results_bp


def create_app(pipeline: Optional[ResultPipeline] = None) -> Flask:
    settings = load_settings()
    app = Flask(__name__)
    app.config["SECRET_KEY"] = settings.flask.secret_key
    app.config["DEBUG"] = settings.flask.debug

    # Built before the first request so parsing and adapter setup never happen lazily.
    if pipeline is None:
        pipeline = ResultPipeline.from_settings(settings.feed, logger=logging.getLogger("drawfeed"))
    app.extensions["drawfeed.pipeline"] = pipeline
    app.logger.info(
        "Serving results for: %s", ", ".join(game.value for game in pipeline.game_types) or "(none)"
    )

    app.register_blueprint(results_bp, url_prefix="/api")

    @app.get("/health")
    def health():
        return jsonify({"status": "ok"})

    @app.errorhandler(Exception)
    def handle_error(exc: Exception):
        if isinstance(exc, HTTPException):
            return jsonify({"error": exc.description, "kind": "http"}), exc.code
        app.logger.exception("Unhandled error: %s", exc)
        return jsonify({"error": str(exc), "kind": "internal"}), 500

    return app
