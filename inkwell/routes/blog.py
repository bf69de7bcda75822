"""Public blog routes: listings, post pages, taxonomy pages and comments."""
import logging
from flask import Blueprint, render_template, redirect, url_for, request, flash, abort, current_app
from flask_login import login_required, current_user

from inkwell.forms.comments import CommentForm
from inkwell.forms.posts import SearchForm
from inkwell.models.category import Category
from inkwell.models.post import PostStatus
from inkwell.models.tag import Tag
from inkwell.services.comment_service import get_comment_service
from inkwell.services.errors import BlogError, NotFoundError
from inkwell.services.post_service import get_post_service

logger = logging.getLogger(__name__)

blog_bp = Blueprint("blog", __name__)


def _published_page(form: SearchForm, **overrides):
    """Run a public listing: published posts only, site page size."""
    filters = form.to_filters(
        status=PostStatus.PUBLISHED,
        limit=current_app.config["POSTS_PER_PAGE"],
        **overrides
    )
    return get_post_service().search_posts(filters, current_user)


def _sidebar() -> dict:
    return {
        "sidebar_categories": Category.with_published_counts(),
        "sidebar_tags": Tag.get_all_ordered(),
    }


@blog_bp.route("/blog")
def list_posts():
    """Published posts with search, category filter and pagination."""
    form = SearchForm(request.args)
    if not form.validate():
        return render_template(
            "blog/list.html", title="Blog", form=form, page=None, **_sidebar()
        ), 400

    page = _published_page(form)
    return render_template("blog/list.html", title="Blog", form=form, page=page, **_sidebar())


@blog_bp.route("/blog/<slug>")
def view_post(slug):
    """Post page with threaded approved comments and related posts."""
    try:
        post = get_post_service().get_post_by_slug(slug, current_user)
    except NotFoundError:
        abort(404)

    comment_form = CommentForm(post_id=post.id)
    related_posts = get_post_service().get_related_posts(
        post.id, limit=current_app.config["RELATED_POSTS_LIMIT"]
    )

    return render_template(
        "blog/detail.html",
        title=post.title,
        post=post,
        comments=post.approved_thread(),
        comment_form=comment_form,
        related_posts=related_posts,
    )


@blog_bp.route("/blog/<slug>/comments", methods=["POST"])
@login_required
def add_comment(slug):
    """Submit a comment or reply; it waits for moderation."""
    try:
        post = get_post_service().get_post_by_slug(slug, current_user)
    except NotFoundError:
        abort(404)

    form = CommentForm()
    if not form.validate_on_submit():
        for errors in form.errors.values():
            for error in errors:
                flash(error, "error")
        return redirect(url_for("blog.view_post", slug=post.slug, _anchor="comments"))

    data = form.to_data()
    data['post_id'] = post.id

    try:
        get_comment_service().create_comment(data, current_user)
        flash("Thanks! Your comment will appear once it has been approved.", "success")
    except BlogError as e:
        flash(e.message, "error")
    except PermissionError as e:
        flash(str(e), "error")

    return redirect(url_for("blog.view_post", slug=post.slug, _anchor="comments"))


@blog_bp.route("/category/<slug>")
def category(slug):
    """Published posts in a category."""
    record = Category.get_by_slug(slug)
    if not record:
        abort(404)

    form = SearchForm(request.args)
    if not form.validate():
        abort(400)

    page = _published_page(form, category_id=record.id)
    return render_template(
        "blog/taxonomy.html",
        title=record.name,
        kind="Category",
        record=record,
        form=form,
        page=page,
        **_sidebar()
    )


@blog_bp.route("/tag/<slug>")
def tag(slug):
    """Published posts carrying a tag."""
    record = Tag.get_by_slug(slug)
    if not record:
        abort(404)

    form = SearchForm(request.args)
    if not form.validate():
        abort(400)

    page = _published_page(form, tag_ids=[record.id])
    return render_template(
        "blog/taxonomy.html",
        title=f"#{record.name}",
        kind="Tag",
        record=record,
        form=form,
        page=page,
        **_sidebar()
    )
