# app.py
# Provides a minimal Flask-based REST API around the section scheduler.

import logging
from typing import Optional

from flask import Flask, current_app, jsonify, request

import config
from catalog import Catalog, load_catalog
from schedule_finder import schedule_courses

logging.basicConfig(level=config.LOG_LEVEL, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)


def create_app(catalog: Optional[Catalog] = None) -> Flask:
    # The catalog is loaded once here and only read by the handlers afterwards.
    app = Flask(__name__)
    if catalog is None:
        catalog = load_catalog(config.CATALOG_FILE)
    app.config["CATALOG"] = catalog
    logger.info("Serving %d courses (from %s)", len(catalog.course_codes()), catalog.source)

    @app.get("/api/health")
    def api_health():
        return jsonify({"status": "ok", **_catalog().stats()})

    @app.get("/api/courses")
    def api_courses():
        cat = _catalog()
        return jsonify({"status": "ok", "courses": cat.course_codes(), "source": cat.source})

    @app.post("/api/schedule")
    def api_schedule():
        # Schedules the requested courses from a JSON payload of {requests, preferences}.
        body = request.get_json(silent=True)
        if not isinstance(body, dict):
            return jsonify({"status": "error", "message": "Invalid request payload."}), 400

        requests = body.get("requests")
        result = schedule_courses(
            _catalog(),
            requests if isinstance(requests, list) else [],
            body.get("preferences") or {},
        )
        return jsonify(result), 200 if result["status"] == "ok" else 400

    return app


def _catalog() -> Catalog:
    return current_app.config["CATALOG"]


if __name__ == "__main__":
    # Load the catalog into memory and start the development server.
    create_app().run(port=config.PORT, debug=True)
