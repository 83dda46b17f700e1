"""Application factory and app-wide configuration."""

#setup: python -m venv .venv
#setup: source .venv/bin/activate   # (windows: .venv\Scripts\activate)
#setup: pip install -e ".[test]"
#setup: flask --app million_planner.app run --port 5000 --debug

from typing import Optional

from flask import Flask
from flask_cors import CORS
from loguru import logger

from million_planner.app.api.routes import api_bp
from million_planner.config import Settings, load_settings
from million_planner.log import configure_logging


def create_app(settings: Optional[Settings] = None) -> Flask:
    """Build the Flask app instance."""
    settings = settings or load_settings()
    configure_logging(settings)

    app = Flask(__name__)
    app.config["SETTINGS"] = settings

    CORS(
        app,
        resources={r"/api/*": {"origins": settings.cors_origins}},
        supports_credentials=True,
    )

    app.register_blueprint(api_bp, url_prefix="/api")
    logger.info(f"Million planner API ready (origins: {', '.join(settings.cors_origins)})")
    return app
