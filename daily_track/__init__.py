import logging
from datetime import datetime, timezone

from flask import Flask, jsonify, request
from flask_cors import CORS
from flask_migrate import Migrate

from .config import Config
from .errors import register_error_handlers
from .models import db

logger = logging.getLogger(__name__)

db_migrate = Migrate()


def create_app(config_object=Config):
    app = Flask(__name__)
    app.config.from_object(config_object)

    # Configure logging
    logging.basicConfig(level=app.config["LOG_LEVEL"])
    logging.getLogger("daily_track").setLevel(app.config["LOG_LEVEL"])

    CORS(app, resources={r"/*": {
        "origins": app.config["FRONTEND_URL"].split(","),
        "methods": ["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        "allow_headers": ["Content-Type", "Authorization"]
    }})
    db.init_app(app)
    db_migrate.init_app(app, db)

    from . import analysis, authentication, routines, tasks
    app.register_blueprint(authentication.bp)
    app.register_blueprint(routines.bp)
    app.register_blueprint(tasks.bp)
    app.register_blueprint(analysis.bp)
    register_error_handlers(app)

    @app.before_request
    def log_request():
        logger.debug(f"{request.method} {request.path}")

    # Health check endpoint
    @app.route("/", methods=["GET"])
    def health():
        return jsonify({
            "success": True,
            "message": "Daily Track API is running",
            "version": app.config["API_VERSION"],
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }), 200

    # Create database tables
    if app.config.get("AUTO_CREATE_TABLES"):
        with app.app_context():
            db.create_all()

    return app
