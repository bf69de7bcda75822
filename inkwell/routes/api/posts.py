"""Post API endpoints."""
from typing import Any, Dict

from flask import jsonify, request, current_app
from flask_login import login_required, current_user

from inkwell.forms.posts import PostForm, SearchForm
from inkwell.models.post import Post
from inkwell.services.errors import InvalidDataError, NotFoundError
from inkwell.services.post_service import get_post_service
from inkwell.extensions import db
from . import api_bp, json_payload, bind_form


def _post_detail(post: Post) -> Dict[str, Any]:
    """Post with its approved comment thread."""
    result = post.to_dict()
    result["comments"] = [
        comment.to_dict(replies=comment.visible_replies) for comment in post.approved_thread()
    ]
    return result


def _current_values(post: Post) -> Dict[str, Any]:
    """The stored post in request form, so updates may send only changed keys."""
    return {
        "title": post.title,
        "slug": post.slug,
        "excerpt": post.excerpt,
        "content": post.content,
        "cover_image": post.cover_image,
        "category_id": post.category_id,
        "tag_ids": [tag.id for tag in post.tags],
        "status": post.status.value,
        "featured": post.featured,
        "published_at": post.published_at.strftime("%Y-%m-%dT%H:%M:%S") if post.published_at else None,
    }


@api_bp.route("/posts", methods=["GET"])
def list_posts():
    """Search posts; anonymous callers only see published ones."""
    form = SearchForm(request.args)
    if not form.validate():
        raise InvalidDataError("Invalid search parameters", form.errors)

    page = get_post_service().search_posts(form.to_filters(), current_user)
    return jsonify({
        "posts": [post.to_dict(include_content=False) for post in page.items],
        "pagination": page.pagination(),
    })


@api_bp.route("/posts", methods=["POST"])
@login_required
def create_post():
    form = bind_form(PostForm, json_payload())
    post = get_post_service().create_post(form.to_data(), current_user)
    return jsonify(post.to_dict()), 201


@api_bp.route("/posts/<int:post_id>", methods=["GET"])
def get_post(post_id):
    post = get_post_service().get_post_by_id(post_id, current_user)
    return jsonify(_post_detail(post))


@api_bp.route("/posts/slug/<slug>", methods=["GET"])
def get_post_by_slug(slug):
    post = get_post_service().get_post_by_slug(slug, current_user)
    return jsonify(_post_detail(post))


@api_bp.route("/posts/<int:post_id>", methods=["PUT"])
@login_required
def update_post(post_id):
    """Update a post; keys left out of the body keep their stored value."""
    post = db.session.get(Post, post_id)
    if not post:
        raise NotFoundError("Post not found")
    service = get_post_service()
    service.check_owner_or_admin(post, current_user, "edit")

    values = _current_values(post)
    values.update(json_payload())
    form = bind_form(PostForm, values)

    post = service.update_post(post_id, form.to_data(), current_user)
    return jsonify(post.to_dict())


@api_bp.route("/posts/<int:post_id>", methods=["DELETE"])
@login_required
def delete_post(post_id):
    get_post_service().delete_post(post_id, current_user)
    return jsonify({"message": "Post deleted"})


@api_bp.route("/posts/<int:post_id>/related", methods=["GET"])
def related_posts(post_id):
    """Published posts sharing the category or a tag."""
    limit = request.args.get("limit", current_app.config["RELATED_POSTS_LIMIT"], type=int)
    if not 1 <= limit <= current_app.config["MAX_PAGE_SIZE"]:
        raise InvalidDataError("Invalid limit", {"limit": ["Limit must be between 1 and 100"]})

    posts = get_post_service().get_related_posts(post_id, limit=limit)
    return jsonify({"posts": [post.to_dict(include_content=False) for post in posts]})
