"""Category and tag API endpoints."""
from flask import jsonify
from flask_login import login_required, current_user

from inkwell.forms.taxonomy import CategoryForm, TagForm
from inkwell.services.taxonomy_service import get_category_service, get_tag_service
from . import api_bp, json_payload, bind_form, arg_flag


def _list(service, key: str):
    include_count = arg_flag("include_count")
    return jsonify({key: [record.to_dict(include_count=include_count) for record in service.list_all()]})


def _create(service, form_class):
    form = bind_form(form_class, json_payload())
    record = service.create(form.to_data(), current_user)
    return jsonify(record.to_dict(include_count=True)), 201


def _update(service, form_class, record_id: int):
    service.check_can_manage(current_user, "edit")
    record = service.get_by_id(record_id)
    values = {name: getattr(record, name) for name in service.fields}
    values.update(json_payload())
    form = bind_form(form_class, values)
    record = service.update(record_id, form.to_data(), current_user)
    return jsonify(record.to_dict(include_count=True))


# Categories

@api_bp.route("/categories", methods=["GET"])
def list_categories():
    """All categories by name; ``?include_count=true`` adds published post counts."""
    return _list(get_category_service(), "categories")


@api_bp.route("/categories", methods=["POST"])
@login_required
def create_category():
    return _create(get_category_service(), CategoryForm)


@api_bp.route("/categories/<int:category_id>", methods=["GET"])
def get_category(category_id):
    return jsonify(get_category_service().get_by_id(category_id).to_dict(include_count=True))


@api_bp.route("/categories/<int:category_id>", methods=["PUT"])
@login_required
def update_category(category_id):
    return _update(get_category_service(), CategoryForm, category_id)


@api_bp.route("/categories/<int:category_id>", methods=["DELETE"])
@login_required
def delete_category(category_id):
    get_category_service().delete(category_id, current_user)
    return jsonify({"message": "Category deleted"})


# Tags

@api_bp.route("/tags", methods=["GET"])
def list_tags():
    """All tags by name; ``?include_count=true`` adds published post counts."""
    return _list(get_tag_service(), "tags")


@api_bp.route("/tags", methods=["POST"])
@login_required
def create_tag():
    return _create(get_tag_service(), TagForm)


@api_bp.route("/tags/<int:tag_id>", methods=["GET"])
def get_tag(tag_id):
    return jsonify(get_tag_service().get_by_id(tag_id).to_dict(include_count=True))


@api_bp.route("/tags/<int:tag_id>", methods=["PUT"])
@login_required
def update_tag(tag_id):
    return _update(get_tag_service(), TagForm, tag_id)


@api_bp.route("/tags/<int:tag_id>", methods=["DELETE"])
@login_required
def delete_tag(tag_id):
    get_tag_service().delete(tag_id, current_user)
    return jsonify({"message": "Tag deleted"})
