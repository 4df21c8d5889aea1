"""Flask blueprint for Telemetron."""

from __future__ import annotations

import json
import logging

from flask import Blueprint, Response, jsonify

from ..caching import StateCache
from ..errors import SourceError
from ..services.system import SystemService

LOGGER = logging.getLogger("telemetron.api")

INDEX_TEXT = "Telemetron API - visit /system/state"


def create_blueprint(
    service: SystemService,
    cache: StateCache | None = None,
    logger: logging.Logger | None = None,
) -> Blueprint:
    bp = Blueprint("telemetron_api", __name__)
    cache = cache or StateCache()
    log = logger or LOGGER

    def _render_state() -> str:
        return json.dumps(service.get_system_state().to_dict(), ensure_ascii=False)

    @bp.route("/", methods=["GET"])
    def index():
        return Response(INDEX_TEXT, mimetype="text/plain")

    @bp.route("/health", methods=["GET"])
    def health():
        return jsonify({"status": "ok"})

    @bp.route("/system/state", methods=["GET"])
    def system_state():
        try:
            body = cache.get_or_render(_render_state)
        except SourceError as exc:
            log.exception("Failed to get system state: %s", exc)
            return Response("Internal server error", status=500, mimetype="text/plain")
        return Response(body, status=200, mimetype="application/json")

    return bp
