"""
TCG Movers Proxy
Flask API that proxies third-party card pricing APIs and returns the biggest
price movers in one common card shape.

Endpoints:
    GET  /api/movers                  - Default revision (MOVERS_DEFAULT_REVISION)
    GET  /api/movers/<revision>       - A specific revision (see /api/movers/revisions)
    GET  /api/movers/revisions        - List revisions
    GET  /health                      - Health check

Query params: limit, orderBy (or window), page, top
"""

import logging

from flask import Flask
from flask_cors import CORS

from .cli import register_cli
from .config import Config
from .blueprints.movers import bp as movers_bp


def create_app(overrides: dict = None):
    app = Flask(__name__)
    app.config.from_object(Config)
    if overrides:
        app.config.update(overrides)
    CORS(app, origins="*", send_wildcard=True)

    logging.basicConfig(
        level=app.config.get("LOG_LEVEL", "INFO"),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    if not app.config.get("JUSTTCG_API_KEY"):
        app.logger.warning("JUSTTCG_API_KEY not set, JustTCG revisions will return 500")
    if not app.config.get("PPT_API_KEY"):
        app.logger.warning("PPT_API_KEY not set, ppt revision will serve demo data")

    app.register_blueprint(movers_bp)
    register_cli(app)
    return app
