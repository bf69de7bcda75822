"""Dashboard comment moderation queue."""
import logging
from flask import render_template, redirect, url_for, request, flash, current_app
from flask_login import current_user

from inkwell.forms import ActionForm
from inkwell.forms.comments import ModerationForm, MODERATION_CHOICES
from inkwell.models.comment import CommentStatus
from inkwell.services.comment_service import get_comment_service, parse_status
from inkwell.services.errors import BlogError
from . import dashboard_bp, moderators_only

logger = logging.getLogger(__name__)


def _back_to_queue():
    target = request.form.get("next", "")
    if not target.startswith(url_for("dashboard.comments")):
        target = url_for("dashboard.comments")
    return redirect(target)


@dashboard_bp.route("/comments")
@moderators_only
def comments():
    """Every comment, newest first, optionally narrowed to one status."""
    try:
        status = parse_status(request.args.get("status"))
    except BlogError as e:
        flash(e.message, "error")
        status = None

    page = get_comment_service().list_comments(
        viewer=current_user,
        status=status,
        page=max(request.args.get("page", 1, type=int), 1),
        limit=current_app.config["COMMENTS_PER_PAGE"],
        top_level_only=False,
    )

    return render_template(
        "dashboard/comments.html",
        title="Comments",
        page=page,
        current_status=status.value if status else "",
        status_choices=MODERATION_CHOICES,
        action_form=ActionForm(),
    )


@dashboard_bp.route("/comments/<int:comment_id>/status", methods=["POST"])
@moderators_only
def set_comment_status(comment_id):
    """Approve, reject or re-queue a comment."""
    form = ModerationForm()
    if not form.validate_on_submit():
        flash("Invalid moderation request.", "error")
        return _back_to_queue()

    try:
        get_comment_service().set_status(comment_id, CommentStatus(form.status.data), current_user)
        flash(f"Comment marked as {form.status.data}.", "success")
    except (BlogError, PermissionError) as e:
        flash(getattr(e, "message", str(e)), "error")

    return _back_to_queue()


@dashboard_bp.route("/comments/<int:comment_id>/delete", methods=["POST"])
@moderators_only
def delete_comment(comment_id):
    """Delete a comment that has no replies."""
    form = ActionForm()
    if not form.validate_on_submit():
        flash("Your session expired. Please try again.", "error")
        return _back_to_queue()

    try:
        get_comment_service().delete_comment(comment_id, current_user)
        flash("Comment deleted.", "success")
    except (BlogError, PermissionError) as e:
        flash(getattr(e, "message", str(e)), "error")

    return _back_to_queue()
