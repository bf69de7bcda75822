"""Dashboard post management: list, create, edit and delete."""
import logging
from flask import render_template, redirect, url_for, request, flash, abort, current_app
from flask_login import current_user

from inkwell.forms import ActionForm
from inkwell.forms.posts import PostForm, SearchForm
from inkwell.services.errors import BlogError, NotFoundError
from inkwell.services.post_service import get_post_service
from . import dashboard_bp, moderators_only, apply_service_errors

logger = logging.getLogger(__name__)


@dashboard_bp.route("/posts")
@moderators_only
def list_posts():
    """All posts with the search filters, any status."""
    form = SearchForm(request.args)
    if not form.validate():
        return render_template(
            "dashboard/posts.html", title="Posts", form=form, page=None, action_form=ActionForm()
        ), 400

    filters = form.to_filters(limit=current_app.config["ADMIN_POSTS_PER_PAGE"])
    page = get_post_service().search_posts(filters, current_user)
    return render_template(
        "dashboard/posts.html", title="Posts", form=form, page=page, action_form=ActionForm()
    )


@dashboard_bp.route("/posts/new", methods=["GET", "POST"])
@moderators_only
def new_post():
    """Show and handle the post creation form."""
    form = PostForm()

    if form.validate_on_submit():
        try:
            post = get_post_service().create_post(form.to_data(), current_user)
            flash(f"Post \"{post.title}\" created.", "success")
            return redirect(url_for("dashboard.list_posts"))
        except BlogError as e:
            apply_service_errors(form, e)
            flash(e.message, "error")
        except Exception as e:
            logger.error(f"Unexpected error creating post: {str(e)}")
            flash("An unexpected error occurred. Please try again.", "error")

    return render_template("dashboard/post_form.html", title="New Post", form=form, post=None)


@dashboard_bp.route("/posts/<int:post_id>/edit", methods=["GET", "POST"])
@moderators_only
def edit_post(post_id):
    """Show and handle the post edit form."""
    post_service = get_post_service()
    try:
        post = post_service.get_post_by_id(post_id, current_user)
    except NotFoundError:
        abort(404)

    form = PostForm()
    if request.method == "GET":
        form.fill_from_post(post)

    if form.validate_on_submit():
        try:
            post_service.update_post(post_id, form.to_data(), current_user)
            flash("Post updated.", "success")
            return redirect(url_for("dashboard.list_posts"))
        except PermissionError as e:
            logger.warning(f"Post update permission denied: {str(e)}")
            flash("You can only edit your own posts.", "error")
            return redirect(url_for("dashboard.list_posts"))
        except BlogError as e:
            apply_service_errors(form, e)
            flash(e.message, "error")
        except Exception as e:
            logger.error(f"Unexpected error updating post {post_id}: {str(e)}")
            flash("An unexpected error occurred. Please try again.", "error")

    return render_template("dashboard/post_form.html", title="Edit Post", form=form, post=post)


@dashboard_bp.route("/posts/<int:post_id>/delete", methods=["POST"])
@moderators_only
def delete_post(post_id):
    """Delete a post and its comments."""
    form = ActionForm()
    if not form.validate_on_submit():
        flash("Your session expired. Please try again.", "error")
        return redirect(url_for("dashboard.list_posts"))

    try:
        get_post_service().delete_post(post_id, current_user)
        flash("Post deleted.", "success")
    except NotFoundError:
        flash("Post not found.", "error")
    except PermissionError as e:
        logger.warning(f"Post deletion permission denied: {str(e)}")
        flash("You can only delete your own posts.", "error")
    except Exception as e:
        logger.error(f"Error deleting post {post_id}: {str(e)}")
        flash("An error occurred while deleting the post.", "error")

    return redirect(url_for("dashboard.list_posts"))
