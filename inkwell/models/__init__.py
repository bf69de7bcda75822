"""Database models package."""

# Import all models to ensure they're registered with SQLAlchemy
from inkwell.models.base import BaseModel, utcnow
from inkwell.models.user import AnonymousUser, User, UserRole
from inkwell.models.category import Category
from inkwell.models.tag import Tag, post_tags
from inkwell.models.post import Post, PostStatus
from inkwell.models.comment import Comment, CommentStatus

__all__ = [
    'BaseModel',
    'utcnow',
    'AnonymousUser',
    'User',
    'UserRole',
    'Category',
    'Tag',
    'post_tags',
    'Post',
    'PostStatus',
    'Comment',
    'CommentStatus',
]
