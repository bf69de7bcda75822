"""Category model for grouping posts."""
from typing import Any, Optional
from sqlalchemy import Column, String, Text, func
from sqlalchemy.orm import relationship
from inkwell.extensions import db
from inkwell.models.base import BaseModel


class Category(BaseModel):
    """Model for post categories (Technology, Design, Tutorial, etc.)."""

    __tablename__ = "categories"

    name = Column(String(100), unique=True, nullable=False)
    slug = Column(String(120), unique=True, nullable=False, index=True)
    description = Column(Text, nullable=True)
    color = Column(String(7), nullable=False, default="#6366f1")  # Hex color code

    posts = relationship("Post", back_populates="category", lazy="dynamic")

    def __repr__(self) -> str:
        """String representation of category."""
        return f"<Category {self.name}>"

    @property
    def published_post_count(self) -> int:
        from inkwell.models.post import Post, PostStatus
        return self.posts.filter(Post.status == PostStatus.PUBLISHED).count()

    @property
    def post_count(self) -> int:
        """Number of posts of any status."""
        return self.posts.count()

    def to_dict(self, include_count: bool = False) -> dict[str, Any]:
        result = super().to_dict()
        if include_count:
            result["post_count"] = self.published_post_count
        return result

    @classmethod
    def get_by_slug(cls, slug: str) -> Optional["Category"]:
        """Get category by slug."""
        return cls.query.filter_by(slug=slug).first()

    @classmethod
    def get_all_ordered(cls) -> list["Category"]:
        """Get all categories ordered by name."""
        return cls.query.order_by(cls.name.asc()).all()

    @classmethod
    def with_published_counts(cls, limit: Optional[int] = None) -> list[tuple["Category", int]]:
        """Categories paired with their published post count, busiest first."""
        from inkwell.models.post import Post, PostStatus

        count = func.count(Post.id)
        query = db.session.query(cls, count).outerjoin(
            Post, (Post.category_id == cls.id) & (Post.status == PostStatus.PUBLISHED)
        ).group_by(cls.id).order_by(count.desc(), cls.name.asc())

        if limit:
            query = query.limit(limit)
        return query.all()
