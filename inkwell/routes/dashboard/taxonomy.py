"""Dashboard category and tag management."""
import logging
from flask import render_template, redirect, url_for, flash, abort
from flask_login import current_user

from inkwell.forms import ActionForm
from inkwell.forms.taxonomy import CategoryForm, TagForm
from inkwell.services.errors import BlogError, NotFoundError
from inkwell.services.taxonomy_service import get_category_service, get_tag_service
from . import dashboard_bp, moderators_only, apply_service_errors

logger = logging.getLogger(__name__)

# kind -> (service accessor, form class, plural label, singular endpoint suffix)
KINDS = {
    "categories": (get_category_service, CategoryForm, "Categories", "category"),
    "tags": (get_tag_service, TagForm, "Tags", "tag"),
}


def _list_and_create(kind: str):
    get_service, form_class, label, singular = KINDS[kind]
    service = get_service()
    form = form_class()

    if form.validate_on_submit():
        try:
            record = service.create(form.to_data(), current_user)
            flash(f"{service.label} \"{record.name}\" created.", "success")
            return redirect(url_for(f"dashboard.{kind}"))
        except BlogError as e:
            apply_service_errors(form, e)
            flash(e.message, "error")

    return render_template(
        "dashboard/taxonomy.html",
        title=label,
        kind=kind,
        label=service.label,
        singular=singular,
        records=service.list_all(),
        form=form,
        action_form=ActionForm(),
    )


def _edit(kind: str, record_id: int):
    get_service, form_class, _, singular = KINDS[kind]
    service = get_service()
    try:
        record = service.get_by_id(record_id)
    except NotFoundError:
        abort(404)

    form = form_class(obj=record)
    if form.validate_on_submit():
        try:
            service.update(record_id, form.to_data(), current_user)
            flash(f"{service.label} updated.", "success")
            return redirect(url_for(f"dashboard.{kind}"))
        except BlogError as e:
            apply_service_errors(form, e)
            flash(e.message, "error")

    return render_template(
        "dashboard/taxonomy_edit.html",
        title=f"Edit {service.label}",
        kind=kind,
        label=service.label,
        singular=singular,
        record=record,
        form=form,
    )


def _delete(kind: str, record_id: int):
    service = KINDS[kind][0]()
    form = ActionForm()
    if not form.validate_on_submit():
        flash("Your session expired. Please try again.", "error")
        return redirect(url_for(f"dashboard.{kind}"))

    try:
        service.delete(record_id, current_user)
        flash(f"{service.label} deleted.", "success")
    except BlogError as e:
        flash(e.message, "error")

    return redirect(url_for(f"dashboard.{kind}"))


@dashboard_bp.route("/categories", methods=["GET", "POST"])
@moderators_only
def categories():
    """List categories and create new ones."""
    return _list_and_create("categories")


@dashboard_bp.route("/categories/<int:record_id>/edit", methods=["GET", "POST"])
@moderators_only
def edit_category(record_id):
    return _edit("categories", record_id)


@dashboard_bp.route("/categories/<int:record_id>/delete", methods=["POST"])
@moderators_only
def delete_category(record_id):
    return _delete("categories", record_id)


@dashboard_bp.route("/tags", methods=["GET", "POST"])
@moderators_only
def tags():
    """List tags and create new ones."""
    return _list_and_create("tags")


@dashboard_bp.route("/tags/<int:record_id>/edit", methods=["GET", "POST"])
@moderators_only
def edit_tag(record_id):
    return _edit("tags", record_id)


@dashboard_bp.route("/tags/<int:record_id>/delete", methods=["POST"])
@moderators_only
def delete_tag(record_id):
    return _delete("tags", record_id)
