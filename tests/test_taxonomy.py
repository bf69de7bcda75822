"""
tests/test_taxonomy.py
"""
from __future__ import annotations

import pytest

from inkwell.models import Category, PostStatus, Tag
from inkwell.services.errors import DuplicateError, InUseError, NotFoundError
from inkwell.services.taxonomy_service import get_category_service, get_tag_service


def _category(**overrides) -> dict:
    data = {"name": "Technology", "slug": "technology", "description": "Gadgets", "color": None}
    data.update(overrides)
    return data


def _tag(**overrides) -> dict:
    data = {"name": "Python", "slug": "python", "color": None}
    data.update(overrides)
    return data


# ───────────────────────── permissions ────────────────────────────────
def test_only_admins_and_editors_manage_taxonomy(ctx, make):
    reader, editor, admin = make.user(), make.editor(), make.admin()
    categories = get_category_service()

    for user in (None, reader):
        with pytest.raises(PermissionError):
            categories.create(_category(), user)

    assert categories.create(_category(), editor).id is not None
    assert get_tag_service().create(_tag(), admin).id is not None


# ───────────────────────── create ─────────────────────────────────────
def test_default_colors_come_from_config(ctx, make):
    editor = make.editor()

    category = get_category_service().create(_category(), editor)
    tag = get_tag_service().create(_tag(), editor)
    custom = get_tag_service().create(_tag(name="Rust", slug="rust", color="#ff0000"), editor)

    assert category.color == "#6366f1"
    assert category.description == "Gadgets"
    assert tag.color == "#10b981"
    assert custom.color == "#ff0000"


@pytest.mark.parametrize(
    "overrides, field",
    [
        ({"slug": "something-else"}, "name"),
        ({"name": "Something else"}, "slug"),
    ],
)
def test_duplicate_name_or_slug_is_rejected(ctx, make, overrides, field):
    editor = make.editor()
    service = get_category_service()
    service.create(_category(), editor)

    with pytest.raises(DuplicateError) as excinfo:
        service.create(_category(**overrides), editor)

    assert field in excinfo.value.errors
    assert excinfo.value.to_dict()["errors"] == excinfo.value.errors
    assert Category.query.count() == 1


# ───────────────────────── update ─────────────────────────────────────
def test_update_may_keep_its_own_name(ctx, make):
    editor = make.editor()
    tag = make.tag("Python")

    updated = get_tag_service().update(tag.id, _tag(color="#123456"), editor)

    assert updated.name == "Python"
    assert updated.color == "#123456"


def test_update_to_another_records_name_is_rejected(ctx, make):
    editor = make.editor()
    make.tag("Flask")
    tag = make.tag("Python")

    with pytest.raises(DuplicateError):
        get_tag_service().update(tag.id, _tag(name="Flask"), editor)

    assert Tag.query.filter_by(name="Python").count() == 1


def test_update_missing_record(ctx, make):
    with pytest.raises(NotFoundError):
        get_category_service().update(404, _category(), make.admin())


# ───────────────────────── delete ─────────────────────────────────────
def test_delete_refuses_records_with_any_posts(ctx, make):
    editor, author = make.editor(), make.user()
    category = make.category("Design")
    tag = make.tag("CSS")
    make.post(author, "Draft only", status=PostStatus.DRAFT, category_id=category.id, tags=[tag])

    with pytest.raises(InUseError):
        get_category_service().delete(category.id, editor)
    with pytest.raises(InUseError):
        get_tag_service().delete(tag.id, editor)

    assert Category.query.count() == 1
    assert Tag.query.count() == 1


def test_delete_unused_record(ctx, make):
    editor = make.editor()
    category = make.category("Empty")
    category_id = category.id

    assert get_category_service().delete(category_id, editor) is True

    with pytest.raises(NotFoundError):
        get_category_service().get_by_id(category_id)


# ───────────────────────── reads ──────────────────────────────────────
def test_list_all_is_ordered_by_name(ctx, make):
    for name in ("Zebra", "Alpha", "Mango"):
        make.tag(name)

    assert [tag.name for tag in get_tag_service().list_all()] == ["Alpha", "Mango", "Zebra"]


def test_get_by_slug(ctx, make):
    make.category("Design")

    assert get_category_service().get_by_slug("design").name == "Design"
    with pytest.raises(NotFoundError):
        get_category_service().get_by_slug("missing")


def test_counts_include_only_published_posts(ctx, make):
    author = make.user()
    category = make.category("Design")
    tag = make.tag("CSS")
    make.post(author, "Live", category_id=category.id, tags=[tag])
    make.post(author, "Draft", status=PostStatus.DRAFT, category_id=category.id, tags=[tag])

    assert category.to_dict(include_count=True)["post_count"] == 1
    assert tag.to_dict(include_count=True)["post_count"] == 1
    assert "post_count" not in tag.to_dict()
    assert category.post_count == 2


def test_categories_with_published_counts(ctx, make):
    author = make.user()
    busy, quiet, empty = make.category("Busy"), make.category("Quiet"), make.category("Empty")
    for _ in range(3):
        make.post(author, category_id=busy.id)
    make.post(author, category_id=quiet.id)
    make.post(author, category_id=empty.id, status=PostStatus.DRAFT)

    ranked = [(category.name, count) for category, count in Category.with_published_counts()]
    assert ranked == [("Busy", 3), ("Quiet", 1), ("Empty", 0)]
    assert len(Category.with_published_counts(limit=2)) == 2
