"""Tag model and the post/tag association table."""
from typing import Any, Optional
from sqlalchemy import Column, String, Integer, ForeignKey, Table
from inkwell.extensions import db
from inkwell.models.base import BaseModel


post_tags = Table(
    "post_tags",
    db.metadata,
    Column("post_id", Integer, ForeignKey("posts.id", ondelete="CASCADE"), primary_key=True),
    Column("tag_id", Integer, ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True),
)


class Tag(BaseModel):
    """Free-form label attached to posts."""

    __tablename__ = "tags"

    name = Column(String(50), unique=True, nullable=False)
    slug = Column(String(60), unique=True, nullable=False, index=True)
    color = Column(String(7), nullable=False, default="#10b981")

    def __repr__(self) -> str:
        return f"<Tag {self.name}>"

    @property
    def published_post_count(self) -> int:
        from inkwell.models.post import Post, PostStatus
        return Post.query.filter(
            Post.tags.any(Tag.id == self.id),
            Post.status == PostStatus.PUBLISHED
        ).count()

    @property
    def post_count(self) -> int:
        """Number of posts of any status."""
        return db.session.query(post_tags).filter(post_tags.c.tag_id == self.id).count()

    def to_dict(self, include_count: bool = False) -> dict[str, Any]:
        result = super().to_dict()
        if include_count:
            result["post_count"] = self.published_post_count
        return result

    @classmethod
    def get_by_slug(cls, slug: str) -> Optional["Tag"]:
        return cls.query.filter_by(slug=slug).first()

    @classmethod
    def get_all_ordered(cls) -> list["Tag"]:
        return cls.query.order_by(cls.name.asc()).all()
