"""Application factory and app-wide configuration."""

from typing import Optional

from flask import Flask
from flask_cors import CORS
from loguru import logger

from retirement_estimator.app.api.routes import api_bp
from retirement_estimator.config import Settings, load_settings
from retirement_estimator.log import configure_logging


def create_app(settings: Optional[Settings] = None) -> Flask:
    """Build the Flask app instance."""
    settings = settings or load_settings()
    configure_logging(settings.api.log_level)

    app = Flask(__name__)
    app.config["SETTINGS"] = settings

    CORS(
        app,
        resources={r"/api/*": {"origins": settings.api.allowed_origins}},
        supports_credentials=True,
    )

    app.register_blueprint(api_bp, url_prefix="/api")
    logger.info(f"API ready; CORS origins: {', '.join(settings.api.allowed_origins)}")
    return app
