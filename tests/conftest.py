"""
tests/conftest.py
"""
from __future__ import annotations

import itertools
from datetime import timedelta
from typing import Generator

import pytest
from flask import Flask
from flask.testing import FlaskClient

from inkwell import create_app
from inkwell.extensions import db
from inkwell.models import (
    Category, Comment, CommentStatus, Post, PostStatus, Tag, User, UserRole, utcnow,
)


@pytest.fixture
def app() -> Generator[Flask, None, None]:
    """
    A fresh app with an empty in-memory database for every test.

    No application context stays pushed while the test runs, so each
    client request gets its own ``g`` (Flask-Login caches the user there).
    """
    app = create_app("testing")
    with app.app_context():
        db.create_all()

    yield app

    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app: Flask) -> FlaskClient:
    return app.test_client()


@pytest.fixture
def ctx(app: Flask):
    """Application context for service-level tests (no requests inside)."""
    with app.app_context():
        yield


class Factory:
    """Creates rows with strictly increasing ``created_at`` so ordering is deterministic.

    Call it inside an application context.
    """

    def __init__(self):
        self._seq = itertools.count(1)
        self._start = utcnow() - timedelta(minutes=10)

    def _next(self) -> int:
        return next(self._seq)

    def _stamp(self):
        return self._start + timedelta(seconds=self._next())

    def user(self, role: UserRole = UserRole.USER, **kwargs) -> User:
        n = self._next()
        values = {
            "oauth_subject": f"subject-{n}",
            "email": f"user{n}@example.com",
            "first_name": f"User{n}",
            "last_name": "Tester",
            "role": role,
        }
        values.update(kwargs)
        return User.create(**values)

    def admin(self, **kwargs) -> User:
        return self.user(UserRole.ADMIN, **kwargs)

    def editor(self, **kwargs) -> User:
        return self.user(UserRole.EDITOR, **kwargs)

    def category(self, name: str | None = None, **kwargs) -> Category:
        n = self._next()
        name = name or f"Category {n}"
        values = {"name": name, "slug": name.lower().replace(" ", "-")}
        values.update(kwargs)
        return Category.create(**values)

    def tag(self, name: str | None = None, **kwargs) -> Tag:
        n = self._next()
        name = name or f"Tag {n}"
        values = {"name": name, "slug": name.lower().replace(" ", "-")}
        values.update(kwargs)
        return Tag.create(**values)

    def post(self, author: User, title: str | None = None,
             status: PostStatus = PostStatus.PUBLISHED, **kwargs) -> Post:
        n = self._next()
        title = title or f"Post number {n}"
        created_at = kwargs.pop("created_at", None) or self._stamp()
        values = {
            "title": title,
            "slug": title.lower().replace(" ", "-"),
            "content": f"<p>Body of {title}</p>",
            "status": status,
            "author_id": author.id,
            "created_at": created_at,
            "published_at": created_at if status == PostStatus.PUBLISHED else None,
        }
        values.update(kwargs)
        return Post.create(**values)

    def comment(self, post: Post, author: User, content: str = "Nice article!",
                status: CommentStatus = CommentStatus.APPROVED, parent: Comment | None = None,
                **kwargs) -> Comment:
        values = {
            "post_id": post.id,
            "author_id": author.id,
            "content": content,
            "status": status,
            "parent_id": parent.id if parent else None,
            "created_at": self._stamp(),
        }
        values.update(kwargs)
        return Comment.create(**values)


@pytest.fixture
def make() -> Factory:
    return Factory()


@pytest.fixture
def login(client: FlaskClient):
    """``login(user_id)`` signs the test client in by writing the Flask-Login session."""

    def _login(user_id: int) -> None:
        with client.session_transaction() as sess:
            sess["_user_id"] = str(user_id)
            sess["_fresh"] = True

    return _login
