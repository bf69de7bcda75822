"""
tests/test_site.py
"""
from __future__ import annotations

import pytest

from inkwell.extensions import db
from inkwell.models import Category, Comment, CommentStatus, Post, PostStatus, Tag


@pytest.fixture
def site(app, make):
    with app.app_context():
        author, reader, editor = make.user(), make.user(), make.editor()
        design = make.category("Design", description="Layouts and type")
        css = make.tag("CSS")
        live = make.post(author, "Grid layouts explained", category_id=design.id, tags=[css])
        make.post(author, "Featured story", featured=True)
        make.post(author, "Unfinished thoughts", status=PostStatus.DRAFT)
        make.comment(live, reader, "Very helpful")
        make.comment(live, reader, "Awaiting review", status=CommentStatus.PENDING)
        return {
            "author": author.id,
            "reader": reader.id,
            "editor": editor.id,
            "design": design.id,
            "css": css.id,
            "live": live.id,
        }


# ───────────────────────── public pages ───────────────────────────────
def test_homepage_lists_featured_and_recent(client, site):
    response = client.get("/")

    assert response.status_code == 200
    html = response.get_data(as_text=True)
    assert "Featured story" in html
    assert "Grid layouts explained" in html
    assert "Unfinished thoughts" not in html


@pytest.mark.parametrize("path", ["/about", "/privacy", "/terms", "/contact", "/auth/login"])
def test_static_pages_render(client, path):
    assert client.get(path).status_code == 200


def test_blog_listing_and_search(client, site):
    html = client.get("/blog").get_data(as_text=True)
    assert "Grid layouts explained" in html
    assert "Unfinished thoughts" not in html

    searched = client.get("/blog?query=grid").get_data(as_text=True)
    assert "Grid layouts explained" in searched
    assert "Featured story" not in searched


def test_blog_listing_rejects_bad_page(client, site):
    assert client.get("/blog?page=0").status_code == 400


def test_drafts_never_appear_on_public_listing_even_for_author(client, login, site):
    login(site["author"])
    html = client.get("/blog?status=draft").get_data(as_text=True)
    assert "Unfinished thoughts" not in html


def test_post_page_shows_only_approved_comments(client, site):
    response = client.get("/blog/grid-layouts-explained")

    assert response.status_code == 200
    html = response.get_data(as_text=True)
    assert "Very helpful" in html
    assert "Awaiting review" not in html


def test_draft_and_missing_posts_are_404(client, login, site):
    assert client.get("/blog/unfinished-thoughts").status_code == 404
    assert client.get("/blog/no-such-post").status_code == 404

    login(site["author"])
    assert client.get("/blog/unfinished-thoughts").status_code == 200


def test_category_and_tag_pages(client, site):
    category = client.get("/category/design")
    assert category.status_code == 200
    assert "Grid layouts explained" in category.get_data(as_text=True)
    assert "Layouts and type" in category.get_data(as_text=True)

    tag = client.get("/tag/css")
    assert tag.status_code == 200
    assert "Grid layouts explained" in tag.get_data(as_text=True)
    assert "Featured story" not in tag.get_data(as_text=True)

    assert client.get("/category/nothing").status_code == 404
    assert client.get("/tag/nothing").status_code == 404


# ───────────────────────── comments ───────────────────────────────────
def test_commenting_requires_sign_in(client, site):
    response = client.post(
        "/blog/grid-layouts-explained/comments",
        data={"post_id": site["live"], "content": "Hello"},
    )

    assert response.status_code == 302
    assert "/auth/login" in response.headers["Location"]


def test_posting_a_comment_queues_it(client, login, app, site):
    login(site["reader"])

    response = client.post(
        "/blog/grid-layouts-explained/comments",
        data={"post_id": site["live"], "content": "Bookmarked!"},
        follow_redirects=True,
    )

    assert response.status_code == 200
    html = response.get_data(as_text=True)
    assert "once it has been approved" in html
    assert "Bookmarked!" not in html
    with app.app_context():
        comment = Comment.query.filter_by(content="Bookmarked!").one()
        assert comment.status == CommentStatus.PENDING


def test_empty_comment_is_flashed_back(client, login, app, site):
    login(site["reader"])

    response = client.post(
        "/blog/grid-layouts-explained/comments",
        data={"post_id": site["live"], "content": ""},
        follow_redirects=True,
    )

    assert "Comment is required" in response.get_data(as_text=True)
    with app.app_context():
        assert Comment.query.count() == 2


# ───────────────────────── contact & crawler files ────────────────────
def test_contact_form(client):
    ok = client.post(
        "/contact",
        data={
            "name": "Ada",
            "email": "ada@example.com",
            "type": "feedback",
            "message": "Loving the new layout so far.",
        },
        follow_redirects=True,
    )
    assert ok.status_code == 200
    assert "Thanks for your message" in ok.get_data(as_text=True)

    bad = client.post("/contact", data={"name": "A", "email": "nope", "message": "short"})
    assert bad.status_code == 200
    html = bad.get_data(as_text=True)
    assert "Invalid email address" in html
    assert "Name must be at least 2 characters" in html


def test_health(client):
    body = client.get("/health").get_json()
    assert body["status"] == "healthy"
    assert body["app"] == "Inkwell"


def test_sitemap_lists_published_content(client, site):
    response = client.get("/sitemap.xml")

    assert response.status_code == 200
    assert response.headers["Content-Type"].startswith("application/xml")
    xml = response.get_data(as_text=True)
    assert "/blog/grid-layouts-explained" in xml
    assert "/blog/unfinished-thoughts" not in xml
    assert "/category/design" in xml
    assert "/tag/css" in xml


def test_robots(client):
    text = client.get("/robots.txt").get_data(as_text=True)
    assert "Disallow: /dashboard/" in text
    assert "Sitemap:" in text


def test_unknown_page_renders_404_template(client):
    response = client.get("/nothing-here")
    assert response.status_code == 404
    assert "does not exist" in response.get_data(as_text=True)


# ───────────────────────── dashboard ──────────────────────────────────
@pytest.mark.parametrize(
    "path",
    ["/dashboard/", "/dashboard/analytics", "/dashboard/posts", "/dashboard/posts/new",
     "/dashboard/categories", "/dashboard/tags", "/dashboard/comments"],
)
def test_dashboard_access(client, login, site, path):
    anonymous = client.get(path)
    assert anonymous.status_code == 302
    assert "/auth/login" in anonymous.headers["Location"]

    login(site["reader"])
    assert client.get(path).status_code == 403

    login(site["editor"])
    assert client.get(path).status_code == 200


def test_dashboard_overview_shows_counts(client, login, site):
    login(site["editor"])

    html = client.get("/dashboard/").get_data(as_text=True)

    assert "Grid layouts explained" in html
    assert "Awaiting review" in html


def test_dashboard_creates_category(client, login, app, site):
    login(site["editor"])

    response = client.post(
        "/dashboard/categories",
        data={"name": "Research", "slug": "research", "color": ""},
        follow_redirects=True,
    )

    assert response.status_code == 200
    assert "Research" in response.get_data(as_text=True)
    with app.app_context():
        assert Category.query.filter_by(slug="research").one().color == "#6366f1"


def test_dashboard_duplicate_tag_shows_field_error(client, login, app, site):
    login(site["editor"])

    response = client.post("/dashboard/tags", data={"name": "CSS", "slug": "css-again"})

    assert response.status_code == 200
    assert "Tag name already exists" in response.get_data(as_text=True)
    with app.app_context():
        assert Tag.query.count() == 1


def test_dashboard_refuses_to_delete_used_category(client, login, app, site):
    login(site["editor"])

    response = client.post(f"/dashboard/categories/{site['design']}/delete", follow_redirects=True)

    assert "Cannot delete a category that has posts" in response.get_data(as_text=True)
    with app.app_context():
        assert db.session.get(Category, site["design"]) is not None


def test_dashboard_creates_post(client, login, app, site):
    login(site["editor"])

    response = client.post(
        "/dashboard/posts/new",
        data={
            "title": "Editor note",
            "slug": "editor-note",
            "content": "<p>Behind the scenes</p>",
            "status": "published",
            "category_id": str(site["design"]),
            "tag_ids": [str(site["css"])],
        },
    )

    assert response.status_code == 302
    with app.app_context():
        post = Post.query.filter_by(slug="editor-note").one()
        assert post.author_id == site["editor"]
        assert [tag.name for tag in post.tags] == ["CSS"]
        assert post.published_at is not None


def test_dashboard_editor_cannot_edit_someone_elses_post(client, login, app, site):
    login(site["editor"])

    response = client.post(
        f"/dashboard/posts/{site['live']}/edit",
        data={"title": "Taken over", "slug": "grid-layouts-explained",
              "content": "<p>x</p>", "status": "published"},
        follow_redirects=True,
    )

    assert "You can only edit your own posts." in response.get_data(as_text=True)
    with app.app_context():
        assert db.session.get(Post, site["live"]).title == "Grid layouts explained"


def test_dashboard_moderates_comments(client, login, app, site):
    with app.app_context():
        pending_id = Comment.query.filter_by(content="Awaiting review").one().id

    login(site["editor"])
    queue = client.get("/dashboard/comments?status=pending").get_data(as_text=True)
    assert "Awaiting review" in queue
    assert "Very helpful" not in queue

    response = client.post(
        f"/dashboard/comments/{pending_id}/status",
        data={"status": "approved", "next": "https://evil.example/"},
    )
    assert response.status_code == 302
    assert response.headers["Location"].endswith("/dashboard/comments")

    with app.app_context():
        assert db.session.get(Comment, pending_id).status == CommentStatus.APPROVED
