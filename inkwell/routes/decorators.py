"""Route guards shared by the HTML views and the JSON API."""
from functools import wraps

from flask import abort, jsonify, request
from flask_login import current_user

from inkwell.extensions import login_manager


def roles_required(*roles):
    """Require a signed-in user holding one of ``roles``.

    Anonymous users get the login manager's response (redirect, or JSON
    401 on the API). Signed-in users without the role get a 403.
    """
    def decorator(view):
        @wraps(view)
        def wrapped(*args, **kwargs):
            if not current_user.is_authenticated:
                return login_manager.unauthorized()
            if not current_user.has_role(*roles):
                if request.blueprint and request.blueprint.startswith("api"):
                    return jsonify({"error": "Forbidden"}), 403
                abort(403)
            return view(*args, **kwargs)
        return wrapped
    return decorator
