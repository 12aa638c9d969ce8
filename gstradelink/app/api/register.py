from flask import Flask

from gstradelink.modules.auth.routes import bp as auth_bp
from gstradelink.modules.admin.routes import bp as admin_bp
from gstradelink.modules.catalog.routes import bp as catalog_bp


def register_api_blueprints(app: Flask) -> None:
    app.register_blueprint(catalog_bp, url_prefix="/api")

    # Root API document
    @app.get("/api")
    def api_index():
        return {
            "name": "GSTradeLink Catalogue API",
            "version": "0.1.0",
            "endpoints": {
                "catalog": ["/products", "/products/<id>"],
            },
        }, 200


def register_admin_blueprints(app: Flask) -> None:
    app.register_blueprint(auth_bp)
    app.register_blueprint(admin_bp)
