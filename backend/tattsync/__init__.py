# backend/tattsync/__init__.py
from flask import Flask, request

from .config import Config
from .extensions import db, migrate
from .stores import init_store


def create_app(config_overrides: dict | None = None) -> Flask:
    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(Config)
    if config_overrides:
        app.config.update(config_overrides)

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)

    # Import models so Alembic and the stores can discover metadata reliably
    from . import models  # noqa: F401

    init_store(app)

    # Register blueprints
    from .routes.system import system_bp
    from .routes.registration import registration_bp

    app.register_blueprint(system_bp)
    app.register_blueprint(registration_bp)

    @app.after_request
    def add_cors_headers(response):
        origin = request.headers.get("Origin")
        if origin in app.config.get("CORS_ALLOWED_ORIGINS", []):
            response.headers["Access-Control-Allow-Origin"] = origin
            response.headers["Vary"] = "Origin"
            response.headers["Access-Control-Allow-Headers"] = "Content-Type"
            response.headers["Access-Control-Allow-Methods"] = "GET,POST,OPTIONS"
        return response

    # Register CLI commands
    from .cli import register_commands
    register_commands(app)

    return app
