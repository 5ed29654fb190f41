"""Flask application exposing the engines as JSON endpoints.

Routes:

- ``GET|POST /api/fuzz``: mutate a payload.
- ``GET|POST /api/generate``: generate random payloads.
- ``POST /api/scan``: DOM sink/source scan with risk score.
- ``POST /api/csp``: parse, score and optionally test a policy.
- ``GET /api/search``: query the payload reference database.

POST bodies are JSON objects; GET requests read the query string. Errors are
returned as ``{"error": ..., "message": ...}``.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable

from flask import Flask, Response, current_app, jsonify, request
from werkzeug.exceptions import HTTPException

from xsspage.api.handlers import (
    handle_csp,
    handle_fuzz,
    handle_generate,
    handle_scan,
    handle_search,
)
from xsspage.config import AppConfig, load_config
from xsspage.exceptions import PayloadValidationError

logger = logging.getLogger(__name__)

CONFIG_KEY = "XSSPAGE_CONFIG"

_CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
    "X-Content-Type-Options": "nosniff",
}


def _request_params() -> dict[str, Any]:
    """Decode the request into a parameter mapping.

    Raises:
        PayloadValidationError: If a POST body is not a JSON object.
    """
    if request.method == "GET":
        return request.args.to_dict()

    raw = request.get_data(as_text=True)
    if not raw.strip():
        return {}
    try:
        body = json.loads(raw)
    except ValueError as exc:
        raise PayloadValidationError(f"Invalid JSON body: {exc}") from exc
    if not isinstance(body, dict):
        raise PayloadValidationError("Request body must be a JSON object")
    return body


def _endpoint(
    handler: Callable[[dict[str, Any], AppConfig], dict[str, Any]],
) -> Callable[[], Response]:
    def view() -> Response:
        config: AppConfig = current_app.config[CONFIG_KEY]
        return jsonify(handler(_request_params(), config))

    view.__name__ = handler.__name__.replace("handle_", "")
    return view


def create_app(config: AppConfig | None = None) -> Flask:
    """Application factory.

    Args:
        config: Limits and defaults; ``load_config()`` when omitted.
    """
    app = Flask(__name__)
    app.config[CONFIG_KEY] = config or load_config()
    app.json.sort_keys = False  # type: ignore[attr-defined]

    app.add_url_rule("/api/fuzz", view_func=_endpoint(handle_fuzz), methods=["GET", "POST"])
    app.add_url_rule(
        "/api/generate", view_func=_endpoint(handle_generate), methods=["GET", "POST"]
    )
    app.add_url_rule("/api/scan", view_func=_endpoint(handle_scan), methods=["POST"])
    app.add_url_rule("/api/csp", view_func=_endpoint(handle_csp), methods=["POST"])
    app.add_url_rule("/api/search", view_func=_endpoint(handle_search), methods=["GET"])

    @app.errorhandler(PayloadValidationError)
    def bad_request(exc: PayloadValidationError) -> tuple[Response, int]:
        logger.info("Rejected %s %s: %s", request.method, request.path, exc.message)
        return jsonify(error="Bad Request", message=exc.message), exc.status

    @app.errorhandler(HTTPException)
    def http_error(exc: HTTPException) -> tuple[Response, int]:
        return jsonify(error=exc.name, message=exc.description), exc.code or 500

    @app.errorhandler(Exception)
    def internal_error(exc: Exception) -> tuple[Response, int]:
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        return jsonify(error="Internal Server Error", message=str(exc)), 500

    @app.after_request
    def add_cors_headers(response: Response) -> Response:
        response.headers.update(_CORS_HEADERS)
        return response

    return app
