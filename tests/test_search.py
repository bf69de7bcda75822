"""
tests/test_search.py
"""
from __future__ import annotations

import pytest

from inkwell.models import PostStatus
from inkwell.services.post_service import get_post_service
from inkwell.services.search import Page, SearchFilters, build_post_query


# ───────────────────────── filters & pages ────────────────────────────
@pytest.mark.parametrize(
    "kwargs",
    [
        {"sort_by": "views"},
        {"sort_order": "sideways"},
        {"page": 0},
        {"limit": 0},
        {"limit": 101},
    ],
)
def test_invalid_filters_are_rejected(kwargs):
    with pytest.raises(ValueError):
        SearchFilters(**kwargs)


def test_offset_is_page_window():
    assert SearchFilters(page=3, limit=10).offset == 20


def test_page_numbers():
    first = Page(items=[], page=1, limit=10, total=25)
    assert first.total_pages == 3
    assert first.has_next and not first.has_prev

    last = Page(items=[], page=3, limit=10, total=25)
    assert not last.has_next and last.has_prev

    empty = Page(items=[], page=1, limit=10, total=0)
    assert empty.total_pages == 0
    assert not empty.has_next


def test_iter_pages_marks_gaps():
    page = Page(items=[], page=5, limit=10, total=100)
    assert list(page.iter_pages()) == [1, None, 3, 4, 5, 6, 7, None, 10]


def test_pagination_dict():
    page = Page(items=[], page=2, limit=5, total=11)
    assert page.pagination() == {
        "page": 2,
        "limit": 5,
        "total": 11,
        "total_pages": 3,
        "has_next": True,
        "has_prev": True,
    }


# ───────────────────────── queries ────────────────────────────────────
def _titles(query) -> list[str]:
    return [post.title for post in query.all()]


def test_anonymous_viewers_only_get_published(ctx, make):
    author = make.user()
    make.post(author, "Live post")
    make.post(author, "Hidden draft", status=PostStatus.DRAFT)
    make.post(author, "Old archive", status=PostStatus.ARCHIVED)

    assert _titles(build_post_query(SearchFilters(), None)) == ["Live post"]
    assert sorted(_titles(build_post_query(SearchFilters(), author))) == [
        "Hidden draft", "Live post", "Old archive",
    ]
    assert _titles(build_post_query(SearchFilters(status=PostStatus.DRAFT), author)) == ["Hidden draft"]


def test_text_query_is_case_insensitive_over_title_excerpt_and_content(ctx, make):
    author = make.user()
    make.post(author, "Flask tips")
    make.post(author, "Other one", excerpt="All about FLASK")
    make.post(author, "Third", content="<p>we use flask daily</p>")
    make.post(author, "Unrelated")

    titles = _titles(build_post_query(SearchFilters(query="flask"), None))
    assert sorted(titles) == ["Flask tips", "Other one", "Third"]


def test_query_wildcards_are_literal(ctx, make):
    author = make.user()
    make.post(author, "Save 100% today")
    make.post(author, "Save 100 euros")

    assert _titles(build_post_query(SearchFilters(query="100%"), None)) == ["Save 100% today"]


def test_tag_filter_matches_any_tag_once(ctx, make):
    author = make.user()
    python, flask, css = make.tag("Python"), make.tag("Flask"), make.tag("CSS")
    make.post(author, "Both tags", tags=[python, flask])
    make.post(author, "Only css", tags=[css])
    make.post(author, "Only python", tags=[python])

    query = build_post_query(SearchFilters(tag_ids=[python.id, flask.id]), None)
    assert sorted(_titles(query)) == ["Both tags", "Only python"]
    assert query.count() == 2


def test_category_featured_and_author_filters(ctx, make):
    alice, bob = make.user(), make.user()
    design = make.category("Design")
    make.post(alice, "Alice design", category_id=design.id, featured=True)
    make.post(alice, "Alice plain")
    make.post(bob, "Bob design", category_id=design.id)

    assert sorted(_titles(build_post_query(SearchFilters(category_id=design.id), None))) == [
        "Alice design", "Bob design",
    ]
    assert _titles(build_post_query(SearchFilters(featured=True), None)) == ["Alice design"]
    assert sorted(_titles(build_post_query(SearchFilters(author_id=alice.id), None))) == [
        "Alice design", "Alice plain",
    ]


def test_sorting(ctx, make):
    author = make.user()
    make.post(author, "Banana")
    make.post(author, "Apple")
    make.post(author, "Cherry")

    # Newest first by default
    assert _titles(build_post_query(SearchFilters(), None)) == ["Cherry", "Apple", "Banana"]
    assert _titles(build_post_query(SearchFilters(sort_by="title", sort_order="asc"), None)) == [
        "Apple", "Banana", "Cherry",
    ]


def test_search_posts_paginates(ctx, make):
    author = make.user()
    for _ in range(7):
        make.post(author)

    page = get_post_service().search_posts(SearchFilters(page=2, limit=3), None)
    assert page.total == 7
    assert page.total_pages == 3
    assert len(page.items) == 3
    assert page.has_next and page.has_prev

    last = get_post_service().search_posts(SearchFilters(page=3, limit=3), None)
    assert len(last.items) == 1
    assert not last.has_next
