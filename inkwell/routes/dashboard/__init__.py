"""Admin dashboard package."""
from flask import Blueprint

from inkwell.models.user import UserRole
from inkwell.routes.decorators import roles_required

dashboard_bp = Blueprint("dashboard", __name__)

# Every dashboard screen is for admins and editors
moderators_only = roles_required(UserRole.ADMIN, UserRole.EDITOR)


def apply_service_errors(form, error) -> None:
    """Attach field errors from a service exception to the matching form fields."""
    for field_name, messages in getattr(error, "errors", {}).items():
        field = getattr(form, field_name, None)
        if field is not None:
            field.errors = list(field.errors) + list(messages)


# Import dashboard views
from . import overview, posts, taxonomy, comments  # noqa: E402,F401
