"""Flask application entry point for Telemetron."""

from __future__ import annotations

import atexit

from flask import Flask

from .api.routes import create_blueprint
from .bootstrap import TelemetronContext, build_context
from .config import AppConfig


def create_app(config: AppConfig | None = None, context: TelemetronContext | None = None) -> Flask:
    ctx = context or build_context(config)
    app = Flask(__name__)
    app.config["TELEMETRON_CONFIG"] = ctx.config
    app.extensions["telemetron"] = ctx
    app.register_blueprint(create_blueprint(ctx.service, ctx.cache, logger=ctx.loggers["api"]))
    atexit.register(ctx.shutdown)
    return app


if __name__ == "__main__":
    app = create_app()
    cfg = app.config["TELEMETRON_CONFIG"]
    app.run(host=cfg.server.host, port=cfg.server.port)
