"""Flask application factory."""
import os
import re
import logging
from logging.handlers import RotatingFileHandler
from flask import Flask, jsonify, render_template, request
from markupsafe import Markup, escape
from werkzeug.exceptions import HTTPException
from inkwell.config import config
from inkwell.extensions import db, migrate, login_manager, csrf, cors


def create_app(config_name: str | None = None) -> Flask:
    """Create and configure Flask application.

    Args:
        config_name: Configuration name (development, production, testing)

    Returns:
        Configured Flask application instance
    """
    # Create Flask app instance
    app = Flask(__name__)

    # Load configuration
    config_name = config_name or os.getenv("FLASK_ENV", "default")
    app.config.from_object(config[config_name])

    # Initialize extensions
    from inkwell.models import AnonymousUser

    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    login_manager.anonymous_user = AnonymousUser
    csrf.init_app(app)
    cors.init_app(app, resources={r"/api/*": {"origins": app.config["CORS_ORIGINS"]}})

    # Configure logging
    if not app.debug and not app.testing:
        log_dir = os.path.dirname(app.config["LOG_FILE"])
        if log_dir and not os.path.exists(log_dir):
            os.makedirs(log_dir)

        file_handler = RotatingFileHandler(
            app.config["LOG_FILE"],
            maxBytes=10240000,  # 10MB
            backupCount=10
        )
        file_handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]"
        ))
        file_handler.setLevel(getattr(logging, app.config["LOG_LEVEL"]))
        app.logger.addHandler(file_handler)
        app.logger.setLevel(getattr(logging, app.config["LOG_LEVEL"]))
        logging.getLogger("inkwell").addHandler(file_handler)
        logging.getLogger("inkwell").setLevel(getattr(logging, app.config["LOG_LEVEL"]))
        app.logger.info("Inkwell application startup")

    # Register blueprints
    from inkwell.routes.main import main_bp
    from inkwell.routes.auth import auth_bp
    from inkwell.routes.blog import blog_bp
    from inkwell.routes.dashboard import dashboard_bp
    from inkwell.routes.api import api_bp

    app.register_blueprint(main_bp)
    app.register_blueprint(auth_bp, url_prefix="/auth")
    app.register_blueprint(blog_bp)
    app.register_blueprint(dashboard_bp, url_prefix="/dashboard")
    app.register_blueprint(api_bp, url_prefix="/api")

    # The JSON API authenticates with the session cookie only
    csrf.exempt(api_bp)

    # Register CLI commands
    from inkwell.cli import db as db_cli
    app.register_blueprint(db_cli.bp)

    register_error_handlers(app)

    # Context processors for templates
    @app.context_processor
    def inject_config():
        """Inject configuration variables into templates."""
        return {
            "APP_NAME": app.config["APP_NAME"],
            "APP_VERSION": app.config["APP_VERSION"],
            "APP_DESCRIPTION": app.config["APP_DESCRIPTION"],
        }

    @app.context_processor
    def inject_template_utils():
        """Inject utility functions into templates."""
        from inkwell.models.base import utcnow

        def time_ago(dt):
            """Get human-readable time from datetime."""
            if not dt:
                return "Unknown"

            diff = utcnow() - dt

            if diff.days > 0:
                if diff.days == 1:
                    return "1 day ago"
                elif diff.days < 7:
                    return f"{diff.days} days ago"
                elif diff.days < 30:
                    weeks = diff.days // 7
                    return f"{weeks} week{'s' if weeks > 1 else ''} ago"
                elif diff.days < 365:
                    months = diff.days // 30
                    return f"{months} month{'s' if months > 1 else ''} ago"
                else:
                    years = diff.days // 365
                    return f"{years} year{'s' if years > 1 else ''} ago"

            seconds = diff.seconds
            if seconds < 60:
                return "Just now"
            elif seconds < 3600:
                minutes = seconds // 60
                return f"{minutes} minute{'s' if minutes > 1 else ''} ago"
            else:
                hours = seconds // 3600
                return f"{hours} hour{'s' if hours > 1 else ''} ago"

        def format_date(dt, fmt=None):
            """Format a datetime for display, ``Mar 5, 2025`` by default."""
            if not dt:
                return "Unknown"
            if fmt:
                return dt.strftime(fmt)
            return f"{dt.strftime('%b')} {dt.day}, {dt.year}"

        def nl2br(value):
            """Convert newlines to HTML breaks."""
            if not value:
                return value
            return Markup(re.sub(r'\n', '<br>', str(escape(value))))

        return {
            "time_ago": time_ago,
            "format_date": format_date,
            "nl2br": nl2br,
        }

    return app


def register_error_handlers(app: Flask) -> None:
    """JSON errors under ``/api``, themed pages elsewhere."""

    def wants_json() -> bool:
        return request.path.startswith("/api/")

    @app.errorhandler(HTTPException)
    def handle_http_error(error: HTTPException):
        if wants_json():
            return jsonify({"error": error.description}), error.code
        if error.code == 404:
            return render_template("errors/404.html", title="Page not found"), 404
        return render_template("errors/error.html", title=error.name, error=error), error.code

    @app.errorhandler(500)
    def handle_server_error(error):
        db.session.rollback()
        app.logger.error(f"Server error on {request.path}: {error}")
        if wants_json():
            return jsonify({"error": "Internal server error"}), 500
        return render_template("errors/500.html", title="Server error"), 500
