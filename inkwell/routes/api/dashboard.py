"""Dashboard statistics API endpoint."""
from flask import jsonify

from inkwell.models.user import UserRole
from inkwell.routes.decorators import roles_required
from inkwell.services.dashboard_service import get_dashboard_service
from . import api_bp


@api_bp.route("/dashboard/stats", methods=["GET"])
@roles_required(UserRole.ADMIN, UserRole.EDITOR)
def dashboard_stats():
    stats = get_dashboard_service().get_stats()
    stats["recent_posts"] = [post.to_dict(include_content=False) for post in stats["recent_posts"]]
    stats["recent_comments"] = [comment.to_dict() for comment in stats["recent_comments"]]
    return jsonify(stats)
