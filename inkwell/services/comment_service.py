"""Comment service for threads and moderation."""
import logging
from typing import Any, Dict, Optional

from inkwell.extensions import db
from inkwell.models.comment import Comment, CommentStatus
from inkwell.models.post import Post
from inkwell.models.user import User
from inkwell.services.errors import BlogError, InUseError, InvalidDataError, NotFoundError
from inkwell.services.moderation import get_moderation_service
from inkwell.services.search import Page, paginate

logger = logging.getLogger(__name__)


def _signed_in(user) -> bool:
    return user is not None and getattr(user, "is_authenticated", False)


def parse_status(value: Optional[str]) -> Optional[CommentStatus]:
    """Map a status string onto ``CommentStatus``; blank means no status."""
    if value in (None, ""):
        return None
    try:
        return CommentStatus(str(value).lower())
    except ValueError:
        raise InvalidDataError("Invalid status", {"status": ["Invalid status"]})


class CommentService:
    """Service for comment threads and moderation."""

    def list_comments(self, viewer: Optional[User] = None, post_id: Optional[int] = None,
                      status: Optional[CommentStatus] = None, page: int = 1, limit: int = 10,
                      top_level_only: bool = True) -> Page[Comment]:
        """
        List comments newest first.

        Top-level listings attach ``visible_replies`` to each comment: replies
        in the requested status, or approved ones when no status is given.
        Anonymous viewers without a status filter only see approved comments.
        """
        if page < 1 or not 1 <= limit <= 100:
            raise InvalidDataError("Invalid pagination parameters")

        if status is None and not _signed_in(viewer):
            status = CommentStatus.APPROVED

        query = Comment.query
        if post_id:
            query = query.filter(Comment.post_id == post_id)
        if status:
            query = query.filter(Comment.status == status)
        if top_level_only:
            query = query.filter(Comment.parent_id.is_(None))

        result = paginate(query.order_by(Comment.created_at.desc(), Comment.id.desc()), page, limit)

        if top_level_only:
            reply_status = status or CommentStatus.APPROVED
            for comment in result.items:
                comment.visible_replies = comment.replies_with_status(reply_status)

        return result

    def get_comment(self, comment_id: int, viewer: Optional[User] = None) -> Comment:
        """Get a comment; unapproved ones are only visible to their author and moderators."""
        comment = db.session.get(Comment, comment_id)
        if not comment:
            raise NotFoundError("Comment not found")

        if not comment.is_approved:
            allowed = _signed_in(viewer) and (comment.author_id == viewer.id or viewer.can_moderate)
            if not allowed:
                raise NotFoundError("Comment not found")

        comment.visible_replies = comment.replies_with_status(CommentStatus.APPROVED)
        return comment

    def create_comment(self, data: Dict[str, Any], author: User) -> Comment:
        """
        Create a pending comment or reply.

        Args:
            data: Validated comment data (see ``CommentForm.to_data``)
            author: Signed-in user writing the comment

        Raises:
            PermissionError: If nobody is signed in
            NotFoundError: If the post or parent comment does not exist
            InvalidDataError: If the parent belongs to another post or is itself a reply
        """
        if not _signed_in(author):
            raise PermissionError("Sign in to comment")

        try:
            post = db.session.get(Post, data['post_id'])
            if not post or not post.is_visible_to(author):
                raise NotFoundError("Post not found")

            parent_id = data.get('parent_id')
            if parent_id:
                parent = db.session.get(Comment, parent_id)
                if not parent:
                    raise NotFoundError("Parent comment not found")
                if parent.post_id != post.id:
                    raise InvalidDataError("Parent comment belongs to another post")
                if parent.parent_id is not None:
                    raise InvalidDataError("Replies cannot be nested")

            content = data['content'].strip()
            moderation = get_moderation_service().moderate_text(content)

            comment = Comment(
                content=content,
                post_id=post.id,
                author_id=author.id,
                parent_id=parent_id or None,
                status=CommentStatus.PENDING,
                flagged=moderation['is_flagged'],
            )
            db.session.add(comment)
            db.session.commit()

            logger.info(f"Comment created - ID: {comment.id}, Post: {post.id}, Author: {author.id}")
            return comment

        except BlogError as e:
            db.session.rollback()
            logger.warning(f"Comment rejected: {e.message}")
            raise
        except Exception as e:
            db.session.rollback()
            logger.error(f"Unexpected error creating comment: {str(e)}")
            raise

    def update_comment(self, comment_id: int, user: User, status: Optional[str] = None,
                       content: Optional[str] = None) -> Comment:
        """
        Moderate and/or edit a comment.

        Changing the status needs an admin or editor; editing the content
        needs the author or a moderator.
        """
        if not _signed_in(user):
            raise PermissionError("Sign in to update comments")

        comment = db.session.get(Comment, comment_id)
        if not comment:
            raise NotFoundError("Comment not found")

        is_author = comment.author_id == user.id
        if status is not None and not user.can_moderate:
            raise PermissionError("Not authorized to moderate comments")
        if content is not None and not (is_author or user.can_moderate):
            raise PermissionError("Not authorized to edit this comment")

        new_status = parse_status(status)
        if content is not None:
            content = str(content).strip()
            if not content:
                raise InvalidDataError("Invalid content", {"content": ["Comment is required"]})
            if len(content) > 1000:
                raise InvalidDataError("Invalid content", {"content": ["Comment must be at most 1000 characters"]})

        if new_status is None and content is None:
            raise InvalidDataError("Nothing to update")

        try:
            if new_status is not None:
                comment.status = new_status
            if content is not None:
                comment.content = content
                comment.flagged = get_moderation_service().moderate_text(content)['is_flagged']
            db.session.commit()

            logger.info(f"Comment updated - ID: {comment.id}, Status: {comment.status.value}, User: {user.id}")
            return comment

        except Exception as e:
            db.session.rollback()
            logger.error(f"Error updating comment {comment_id}: {str(e)}")
            raise

    def set_status(self, comment_id: int, status: CommentStatus, user: User) -> Comment:
        """Moderation queue shortcut for a status change."""
        return self.update_comment(comment_id, user, status=status.value)

    def delete_comment(self, comment_id: int, user: User) -> bool:
        """
        Delete a comment without replies.

        Raises:
            PermissionError: If the user is not the author, an admin or an editor
            InUseError: If the comment has replies
        """
        if not _signed_in(user):
            raise PermissionError("Sign in to delete comments")

        comment = db.session.get(Comment, comment_id)
        if not comment:
            raise NotFoundError("Comment not found")

        if comment.author_id != user.id and not user.can_moderate:
            raise PermissionError("Not authorized to delete this comment")

        if comment.reply_count > 0:
            raise InUseError("Cannot delete a comment that has replies")

        try:
            db.session.delete(comment)
            db.session.commit()
            logger.info(f"Comment deleted - ID: {comment_id}, User: {user.id}")
            return True
        except Exception as e:
            db.session.rollback()
            logger.error(f"Error deleting comment {comment_id}: {str(e)}")
            raise


# Global service instance
_comment_service = None


def get_comment_service() -> CommentService:
    """Get comment service instance."""
    global _comment_service
    if _comment_service is None:
        _comment_service = CommentService()
    return _comment_service
