import os
import importlib
from datetime import datetime

from dotenv import load_dotenv

# Load environment variables from the project root before Config is read
load_dotenv(os.path.join(os.path.dirname(__file__), '..', '.env'))

from flask import Flask, jsonify
from flask_cors import CORS

from .config import Config
from .db import db
from .insights.client import build_text_client
from .simple_logger import get_logger


def create_app(config_object=None):
    app = Flask(__name__)
    app.config.from_object(config_object or Config)
    app.debug = app.config.get('DEBUG', False)

    app.logger = get_logger('app')
    app.logger.info("Career insights backend starting up")

    CORS(app,
         supports_credentials=True,
         origins=app.config['CORS_ORIGINS'],
         methods=['GET', 'POST', 'PUT', 'OPTIONS'],
         allow_headers=['Content-Type', 'Authorization', 'X-Requested-With'],
         max_age=3600
    )

    db.init_app(app)

    # One text client per app so SDK connections are reused across requests
    app.extensions['insight_text_client'] = build_text_client(app.config)

    def register_module(module_name, module_path, blueprint_name, url_prefix=""):
        """Import a blueprint module and register it, logging failures."""
        try:
            module = importlib.import_module(module_path, __name__)
            blueprint = getattr(module, blueprint_name)
        except (ImportError, AttributeError) as e:
            app.logger.error(f"{module_name} module failed to load: {e}")
            raise
        app.register_blueprint(blueprint, url_prefix=url_prefix)
        app.logger.info(f"{module_name} module registered at '{url_prefix or '/'}'")
        return blueprint

    module_registrations = [
        {"module_name": "insights", "module_path": ".insights.routes", "blueprint_name": "insights_bp", "url_prefix": "/api/insights"},
        {"module_name": "user", "module_path": ".user.routes", "blueprint_name": "user_bp", "url_prefix": "/api/user"},
    ]

    for module_config in module_registrations:
        register_module(**module_config)

    with app.app_context():
        db.create_all()

    @app.route("/")
    def index():
        return "Career insights backend is running!", 200

    @app.route("/health")
    def health_check():
        return jsonify({
            "status": "healthy",
            "timestamp": datetime.utcnow().isoformat(),
            "version": "1.0.0"
        }), 200

    app.logger.info("Career insights backend started successfully")

    return app
