from __future__ import annotations

import logging
from flask import Flask, g, jsonify, render_template, request, session
from werkzeug.exceptions import HTTPException

from gstradelink.app import content
from gstradelink.app.config import Config
from gstradelink.app.extensions import db, migrate, cors, storage
from gstradelink.app.common.auth import admin_gate, admin_headers
from gstradelink.app.common.errors import ApiError
from gstradelink.app.common.request_context import add_request_id_header, init_request_id
from gstradelink.app.api.register import register_admin_blueprints, register_api_blueprints
from gstradelink.app.cli import cli_bp
from gstradelink.app.ui import ui_bp


def _wants_json() -> bool:
    return request.path == "/api" or request.path.startswith("/api/")


def create_app(config_object: type[Config] = Config) -> Flask:
    config_object.validate()

    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(config_object)

    # Basic logging
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s %(message)s")

    # Extensions
    db.init_app(app)
    migrate.init_app(app, db)
    cors.init_app(app, resources={r"/api/*": {"origins": app.config.get("CORS_ORIGINS") or "*"}})
    storage.init_app(app)

    @app.before_request
    def _before_request():
        init_request_id()
        return admin_gate()

    @app.after_request
    def _after_request(response):
        add_request_id_header(response)
        return admin_headers(response)

    @app.context_processor
    def inject_site():
        """Navbar/footer data for every template."""
        return {
            "business": content.BUSINESS,
            "nav_items": content.NAV_ITEMS,
            "whatsapp_link": content.whatsapp_link,
            "category_label": content.category_label,
            "business_schema": content.local_business_schema(),
            "is_admin_page": request.path.startswith("/admin"),
            "admin_logged_in": bool(session.get("admin_id")),
        }

    # Health endpoint
    @app.get("/health")
    def health():
        return {"status": "ok"}, 200

    app.register_blueprint(ui_bp)
    register_admin_blueprints(app)
    register_api_blueprints(app)

    # CLI (flask seed, flask create-admin)
    app.register_blueprint(cli_bp)

    # Error handlers
    @app.errorhandler(ApiError)
    def handle_api_error(err: ApiError):
        return jsonify(err.to_dict(getattr(g, "request_id", None))), err.status_code

    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        status = err.code or 500
        if not _wants_json():
            return render_template("errors/error.html", status=status, error=err), status

        # Normalize Werkzeug errors into our JSON shape
        payload = {
            "error": {
                "code": "http_error",
                "message": err.description,
                "details": {"name": err.name},
                "request_id": getattr(g, "request_id", None),
            }
        }
        return jsonify(payload), status

    @app.errorhandler(Exception)
    def handle_unexpected(err: Exception):
        app.logger.exception("Unhandled exception")
        if not _wants_json():
            return render_template("errors/error.html", status=500, error=None), 500

        payload = {
            "error": {
                "code": "internal_error",
                "message": "Internal server error",
                "details": {},
                "request_id": getattr(g, "request_id", None),
            }
        }
        return jsonify(payload), 500

    return app
