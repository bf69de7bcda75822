"""Post model for blog articles."""
import enum
from typing import Any, Optional
from flask import current_app
from sqlalchemy import (
    Column, String, Text, Integer, Boolean, DateTime,
    ForeignKey, Index, Enum
)
from sqlalchemy.orm import relationship, backref
from inkwell.models.base import BaseModel
from inkwell.models.tag import post_tags
from inkwell.utils.reading_time import ReadingTime, calculate_reading_time


class PostStatus(enum.Enum):
    """Enumeration for post publication status."""
    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"


class Post(BaseModel):
    """Model for blog articles."""

    __tablename__ = "posts"

    # Relationships
    author_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=True)

    # Post content
    title = Column(String(200), nullable=False)
    slug = Column(String(220), unique=True, nullable=False, index=True)
    excerpt = Column(String(500), nullable=True)
    content = Column(Text, nullable=False)
    cover_image = Column(String(500), nullable=True)

    # Publication metadata
    status = Column(Enum(PostStatus), default=PostStatus.DRAFT, nullable=False)
    featured = Column(Boolean, default=False, nullable=False)
    published_at = Column(DateTime, nullable=True)

    # Relationships
    author = relationship("User", backref=backref("posts", lazy="dynamic"))
    category = relationship("Category", back_populates="posts")
    tags = relationship(
        "Tag",
        secondary=post_tags,
        backref=backref("posts", lazy="dynamic"),
        order_by="Tag.name",
    )
    comments = relationship(
        "Comment",
        back_populates="post",
        cascade="all, delete-orphan",
        order_by="Comment.created_at",
    )

    # Indexes for performance
    __table_args__ = (
        Index("idx_posts_status_published", "status", "published_at"),
        Index("idx_posts_category_created", "category_id", "created_at"),
        Index("idx_posts_author_created", "author_id", "created_at"),
    )

    def __repr__(self) -> str:
        """String representation of post."""
        return f"<Post '{self.slug}' ({self.status.value if self.status else 'new'})>"

    @property
    def is_published(self) -> bool:
        return self.status == PostStatus.PUBLISHED

    @property
    def approved_comment_count(self) -> int:
        """Number of approved comments, replies included."""
        from inkwell.models.comment import Comment, CommentStatus
        return Comment.query.filter_by(post_id=self.id, status=CommentStatus.APPROVED).count()

    @property
    def reading_time(self) -> ReadingTime:
        words_per_minute = current_app.config.get("READING_WORDS_PER_MINUTE", 225)
        return calculate_reading_time(self.content or "", words_per_minute)

    def is_visible_to(self, user) -> bool:
        """Published posts are public; others only reach their author and moderators."""
        if self.is_published:
            return True
        if user is None or not getattr(user, "is_authenticated", False):
            return False
        return self.author_id == user.id or user.can_moderate

    def approved_thread(self) -> list:
        """Top-level approved comments, newest first, with approved replies attached."""
        from inkwell.models.comment import Comment, CommentStatus

        comments = Comment.query.filter(
            Comment.post_id == self.id,
            Comment.parent_id.is_(None),
            Comment.status == CommentStatus.APPROVED,
        ).order_by(Comment.created_at.desc()).all()

        for comment in comments:
            comment.visible_replies = comment.replies_with_status(CommentStatus.APPROVED)
        return comments

    def to_dict(self, include_content: bool = True) -> dict[str, Any]:
        """Serialise the post with its author, category and tags."""
        result = super().to_dict()
        if not include_content:
            result.pop("content", None)
        result["author"] = self.author.to_public_dict() if self.author else None
        result["category"] = self.category.to_dict() if self.category else None
        result["tags"] = [tag.to_dict() for tag in self.tags]
        result["comment_count"] = self.approved_comment_count
        result["reading_time"] = self.reading_time.minutes
        return result

    @classmethod
    def get_by_slug(cls, slug: str) -> Optional["Post"]:
        """Get post by slug regardless of status."""
        return cls.query.filter_by(slug=slug).first()

    @classmethod
    def published(cls):
        """Query of published posts, newest publication first."""
        return cls.query.filter(cls.status == PostStatus.PUBLISHED).order_by(
            cls.published_at.desc(), cls.created_at.desc()
        )

    @classmethod
    def find_featured(cls, limit: int = 3) -> list["Post"]:
        """Find featured published posts."""
        return cls.published().filter(cls.featured.is_(True)).limit(limit).all()

    @classmethod
    def find_recent(cls, limit: int = 6) -> list["Post"]:
        """Find recent published posts."""
        return cls.published().limit(limit).all()
