"""Comment model with one level of replies and moderation status."""
import enum
from typing import Any
from sqlalchemy import Column, Text, Integer, Boolean, ForeignKey, Index, Enum
from sqlalchemy.orm import relationship, backref
from inkwell.models.base import BaseModel


class CommentStatus(enum.Enum):
    """Enumeration for comment moderation status."""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class Comment(BaseModel):
    """Reader comment on a post, awaiting or past moderation."""

    __tablename__ = "comments"

    post_id = Column(Integer, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False)
    author_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    parent_id = Column(Integer, ForeignKey("comments.id"), nullable=True)

    content = Column(Text, nullable=False)
    status = Column(Enum(CommentStatus), default=CommentStatus.PENDING, nullable=False)
    flagged = Column(Boolean, default=False, nullable=False)  # Set by text moderation

    post = relationship("Post", back_populates="comments")
    author = relationship("User", backref=backref("comments", lazy="dynamic"))
    replies = relationship(
        "Comment",
        backref=backref("parent", remote_side="Comment.id"),
        order_by="Comment.created_at",
    )

    __table_args__ = (
        Index("idx_comments_post_status", "post_id", "status"),
        Index("idx_comments_status_created", "status", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Comment {self.id} on Post {self.post_id} ({self.status.value if self.status else 'new'})>"

    @property
    def is_approved(self) -> bool:
        return self.status == CommentStatus.APPROVED

    @property
    def reply_count(self) -> int:
        return Comment.query.filter_by(parent_id=self.id).count()

    def replies_with_status(self, status: CommentStatus) -> list["Comment"]:
        """Replies in the given status, oldest first."""
        return Comment.query.filter_by(parent_id=self.id, status=status).order_by(
            Comment.created_at.asc()
        ).all()

    def to_dict(self, replies: list["Comment"] | None = None) -> dict[str, Any]:
        """Serialise the comment with its author, post summary and optional replies."""
        result = super().to_dict()
        result["author"] = self.author.to_public_dict() if self.author else None
        if self.post is not None:
            result["post"] = {"id": self.post.id, "title": self.post.title, "slug": self.post.slug}
        if replies is not None:
            result["replies"] = [reply.to_dict() for reply in replies]
        return result
