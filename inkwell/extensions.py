"""Flask extensions initialization."""
from flask import jsonify, request
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_login import LoginManager
from flask_wtf.csrf import CSRFProtect
from flask_cors import CORS

# Initialize extensions
db = SQLAlchemy()
migrate = Migrate()
login_manager = LoginManager()
csrf = CSRFProtect()
cors = CORS()

# Configure login manager
login_manager.login_view = "auth.login"
login_manager.login_message = "Please sign in to access this page."
login_manager.login_message_category = "info"


@login_manager.user_loader
def load_user(user_id: str):
    """Load user by ID for Flask-Login."""
    from inkwell.models.user import User
    return db.session.get(User, int(user_id))


@login_manager.unauthorized_handler
def unauthorized():
    """Answer API calls with JSON 401 instead of the sign-in redirect."""
    if request.blueprint and request.blueprint.startswith("api"):
        return jsonify({"error": "Authentication required"}), 401

    from flask import flash, redirect, url_for
    flash(login_manager.login_message, login_manager.login_message_category)
    return redirect(url_for(login_manager.login_view, next=request.full_path))
