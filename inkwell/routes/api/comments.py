"""Comment API endpoints."""
from flask import jsonify, request
from flask_login import login_required, current_user

from inkwell.forms.comments import CommentForm
from inkwell.services.comment_service import get_comment_service, parse_status
from . import api_bp, json_payload, bind_form, page_args


@api_bp.route("/comments", methods=["GET"])
def list_comments():
    """Top-level comments with their replies, newest first.

    Query parameters: ``post_id``, ``status``, ``page``, ``limit``.
    """
    page, limit = page_args()
    result = get_comment_service().list_comments(
        viewer=current_user,
        post_id=request.args.get("post_id", type=int),
        status=parse_status(request.args.get("status")),
        page=page,
        limit=limit,
    )
    return jsonify({
        "comments": [comment.to_dict(replies=comment.visible_replies) for comment in result.items],
        "pagination": result.pagination(),
    })


@api_bp.route("/comments", methods=["POST"])
@login_required
def create_comment():
    """New comments always start out pending."""
    form = bind_form(CommentForm, json_payload())
    comment = get_comment_service().create_comment(form.to_data(), current_user)
    return jsonify(comment.to_dict()), 201


@api_bp.route("/comments/<int:comment_id>", methods=["GET"])
def get_comment(comment_id):
    comment = get_comment_service().get_comment(comment_id, current_user)
    return jsonify(comment.to_dict(replies=comment.visible_replies))


@api_bp.route("/comments/<int:comment_id>", methods=["PUT"])
@login_required
def update_comment(comment_id):
    """Change ``status`` (moderators) and/or ``content`` (author or moderators)."""
    payload = json_payload()
    comment = get_comment_service().update_comment(
        comment_id,
        current_user,
        status=payload.get("status"),
        content=payload.get("content"),
    )
    return jsonify(comment.to_dict())


@api_bp.route("/comments/<int:comment_id>", methods=["DELETE"])
@login_required
def delete_comment(comment_id):
    get_comment_service().delete_comment(comment_id, current_user)
    return jsonify({"message": "Comment deleted"})
