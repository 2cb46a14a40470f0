import logging

from flask import Flask, jsonify
from .extensions import db, migrate, jwt, ma
from .config import Config
from storefront.utils.error_handlers import register_error_handlers
from storefront.routes import register_blueprints


def configure_logging(app):
    logging.basicConfig(
        level=app.config.get("LOG_LEVEL", "INFO"),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))


def create_app(config_class=Config):

    app = Flask(__name__)
    app.config.from_object(config_class)
    app.url_map.strict_slashes = False

    configure_logging(app)

    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)
    ma.init_app(app)

    register_blueprints(app)
    register_error_handlers(app)

    @jwt.expired_token_loader
    def expired_token_callback(jwt_header, jwt_payload):
        return jsonify({"error": "Token has expired"}), 401

    @jwt.invalid_token_loader
    def invalid_token_callback(error):
        return jsonify({"error": "Invalid token"}), 401

    @jwt.unauthorized_loader
    def missing_token_callback(error):
        return jsonify({"error": "Missing authorization header"}), 401

    @app.route("/health")
    def health():
        return {"status": "healthy"}, 200

    app.logger.info("Storefront app created (%s)", config_class.__name__)
    return app
