"""Authentication routes for the OAuth sign-in flow."""
from urllib.parse import urljoin, urlparse

from flask import Blueprint, render_template, redirect, url_for, flash, request, current_app, session
from flask_login import login_required, logout_user, current_user, login_user

from inkwell.extensions import db
from inkwell.models.user import User
from inkwell.services.oauth import OAuthService

auth_bp = Blueprint("auth", __name__)


def _safe_next(target: str | None) -> str | None:
    """Only allow same-site relative redirects."""
    if not target:
        return None
    # Browsers read "/\host" and "//host" as another host
    if "\\" in target or target.startswith("//"):
        return None
    parsed = urlparse(target)
    if parsed.scheme or parsed.netloc or not target.startswith("/"):
        return None
    if urlparse(urljoin(request.host_url, target)).netloc != request.host:
        return None
    return target


@auth_bp.route("/login")
def login():
    """Login page; ``?start_oauth=1`` sends the user to the provider."""
    if current_user.is_authenticated:
        return redirect(url_for("main.index"))

    next_page = _safe_next(request.args.get('next'))
    if next_page:
        session['login_next'] = next_page

    if request.args.get('start_oauth'):
        oauth_service = OAuthService()
        redirect_uri = url_for('auth.oauth_callback', _external=True)
        authorization_url = oauth_service.get_authorization_url(redirect_uri)
        return redirect(authorization_url)

    return render_template("auth/login.html", title="Sign In")


@auth_bp.route("/logout")
@login_required
def logout():
    """Logout user and redirect to homepage."""
    logout_user()
    session.clear()
    flash("You have been signed out.", "info")
    return redirect(url_for("main.index"))


@auth_bp.route("/profile")
@login_required
def profile():
    """User profile page."""
    return render_template(
        "auth/profile.html",
        title="Profile",
        post_count=current_user.posts.count(),
        comment_count=current_user.comments.count(),
    )


@auth_bp.route("/callback")
def oauth_callback():
    """OAuth callback handler."""
    # Check for errors from OAuth provider
    error = request.args.get('error')
    if error:
        current_app.logger.warning(f"OAuth error: {error}")
        flash("Authentication failed. Please try again.", "error")
        return redirect(url_for("auth.login"))

    code = request.args.get('code')
    state = request.args.get('state')

    if not code:
        flash("Authorization code not received. Please try again.", "error")
        return redirect(url_for("auth.login"))

    oauth_service = OAuthService()
    redirect_uri = url_for('auth.oauth_callback', _external=True)
    token_data = oauth_service.exchange_code_for_token(code, redirect_uri, state)

    if not token_data or not token_data.get('access_token'):
        flash("Failed to authenticate with the identity provider. Please try again.", "error")
        return redirect(url_for("auth.login"))

    user_info = oauth_service.get_user_info(token_data['access_token'])

    if not user_info:
        flash("Failed to retrieve user information. Please try again.", "error")
        return redirect(url_for("auth.login"))

    try:
        is_new = User.find_by_subject(str(user_info['sub'])) is None
        user = User.sync_from_provider(user_info)
        login_user(user, remember=True)
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Error creating/updating user: {e}")
        flash("An error occurred during sign-in. Please try again.", "error")
        return redirect(url_for("auth.login"))

    if is_new:
        flash(f"Welcome to {current_app.config['APP_NAME']}, {user.full_name}!", "success")
    else:
        flash(f"Welcome back, {user.full_name}!", "success")

    next_page = _safe_next(session.pop('login_next', None))
    return redirect(next_page or url_for('main.index'))
