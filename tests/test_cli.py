"""
tests/test_cli.py
"""
from __future__ import annotations

from inkwell.cli.db import SAMPLE_ADMIN, SAMPLE_CATEGORIES, SAMPLE_POSTS, SAMPLE_TAGS
from inkwell.models import Category, Post, Tag, User, UserRole


def test_seed_is_idempotent(app):
    runner = app.test_cli_runner()

    first = runner.invoke(args=["blog", "seed"])
    assert first.exit_code == 0, first.output
    assert f"Created {len(SAMPLE_POSTS)} posts" in first.output

    second = runner.invoke(args=["blog", "seed"])
    assert second.exit_code == 0, second.output
    assert "Created 0 categories and 0 tags" in second.output
    assert "Created 0 posts" in second.output

    with app.app_context():
        assert Category.query.count() == len(SAMPLE_CATEGORIES)
        assert Tag.query.count() == len(SAMPLE_TAGS)
        assert Post.query.count() == len(SAMPLE_POSTS)
        admin = User.find_by_email(SAMPLE_ADMIN["email"])
        assert admin.role == UserRole.ADMIN
        assert {post.author_id for post in Post.query} == {admin.id}


def test_promote(app, make):
    with app.app_context():
        email = make.user().email

    result = app.test_cli_runner().invoke(args=["blog", "promote", email, "editor"])

    assert result.exit_code == 0, result.output
    with app.app_context():
        assert User.find_by_email(email).role == UserRole.EDITOR


def test_promote_unknown_user_or_role(app):
    runner = app.test_cli_runner()

    missing = runner.invoke(args=["blog", "promote", "ghost@example.com", "admin"])
    assert missing.exit_code != 0
    assert "No user with email ghost@example.com" in missing.output

    assert runner.invoke(args=["blog", "promote", "ghost@example.com", "overlord"]).exit_code != 0


def test_reset_drops_data(app, make):
    with app.app_context():
        make.category("Temporary")

    result = app.test_cli_runner().invoke(args=["blog", "reset", "--yes"])

    assert result.exit_code == 0, result.output
    with app.app_context():
        assert Category.query.count() == 0
