"""Dashboard statistics for the admin area."""
import logging
from datetime import timedelta
from typing import Any, Dict, List, Tuple

from sqlalchemy import func

from inkwell.extensions import db
from inkwell.models.base import utcnow
from inkwell.models.category import Category
from inkwell.models.comment import Comment, CommentStatus
from inkwell.models.post import Post, PostStatus
from inkwell.models.tag import Tag
from inkwell.models.user import User

logger = logging.getLogger(__name__)

RECENT_LIMIT = 5
MONTHS_OF_HISTORY = 6


def month_keys(months: int = MONTHS_OF_HISTORY, today=None) -> List[str]:
    """``YYYY-MM`` keys for the last ``months`` months, oldest first, current month last."""
    today = today or utcnow()
    keys = []
    year, month = today.year, today.month
    for _ in range(months):
        keys.append(f"{year:04d}-{month:02d}")
        month -= 1
        if month == 0:
            year, month = year - 1, 12
    return list(reversed(keys))


class DashboardService:
    """Aggregate counts for the dashboard overview and analytics pages."""

    def get_stats(self) -> Dict[str, Any]:
        """
        Collect the overview numbers.

        Returns:
            Dict with totals, the five most recent posts and comments and
            ``monthly_data``: post counts for the last six months
        """
        stats = {
            'total_posts': Post.query.count(),
            'total_published_posts': Post.query.filter_by(status=PostStatus.PUBLISHED).count(),
            'total_draft_posts': Post.query.filter_by(status=PostStatus.DRAFT).count(),
            'total_categories': Category.query.count(),
            'total_tags': Tag.query.count(),
            'total_comments': Comment.query.count(),
            'total_users': User.query.count(),
            'pending_comments': Comment.query.filter_by(status=CommentStatus.PENDING).count(),
            'recent_posts': Post.query.order_by(Post.created_at.desc(), Post.id.desc()).limit(RECENT_LIMIT).all(),
            'recent_comments': Comment.query.order_by(
                Comment.created_at.desc(), Comment.id.desc()
            ).limit(RECENT_LIMIT).all(),
            'monthly_data': self.monthly_post_counts(),
        }
        logger.debug(f"Dashboard stats computed: {stats['total_posts']} posts, {stats['total_comments']} comments")
        return stats

    def monthly_post_counts(self, months: int = MONTHS_OF_HISTORY) -> List[Dict[str, Any]]:
        """Posts created per calendar month, oldest month first."""
        keys = month_keys(months)
        year, month = (int(part) for part in keys[0].split("-"))
        start = utcnow().replace(year=year, month=month, day=1, hour=0, minute=0, second=0, microsecond=0)

        counts = dict.fromkeys(keys, 0)
        # Grouped in Python so the same code runs on SQLite and PostgreSQL
        for (created_at,) in db.session.query(Post.created_at).filter(Post.created_at >= start):
            key = created_at.strftime("%Y-%m")
            if key in counts:
                counts[key] += 1

        return [{'month': key, 'posts': counts[key]} for key in keys]

    def posts_by_status(self, days: int = 30) -> Dict[str, int]:
        """Post count per status for posts created in the last ``days`` days."""
        return self._count_by_status(Post, PostStatus, days)

    def comments_by_status(self, days: int = 30) -> Dict[str, int]:
        """Comment count per status for comments created in the last ``days`` days."""
        return self._count_by_status(Comment, CommentStatus, days)

    def popular_posts(self, limit: int = 10) -> List[Tuple[Post, int]]:
        """Published posts paired with their approved comment count, most discussed first."""
        count = func.count(Comment.id)
        return db.session.query(Post, count).outerjoin(
            Comment, (Comment.post_id == Post.id) & (Comment.status == CommentStatus.APPROVED)
        ).filter(
            Post.status == PostStatus.PUBLISHED
        ).group_by(Post.id).order_by(count.desc(), Post.published_at.desc()).limit(limit).all()

    def popular_categories(self, limit: int = 10) -> List[Tuple[Category, int]]:
        """Categories paired with their published post count."""
        return Category.with_published_counts(limit)

    def _count_by_status(self, model, status_enum, days: int) -> Dict[str, int]:
        since = utcnow() - timedelta(days=days)
        rows = db.session.query(model.status, func.count(model.id)).filter(
            model.created_at >= since
        ).group_by(model.status).all()

        counts = {status.value: 0 for status in status_enum}
        for status, total in rows:
            counts[status.value] = total
        return counts


# Global service instance
_dashboard_service = None


def get_dashboard_service() -> DashboardService:
    """Get dashboard service instance."""
    global _dashboard_service
    if _dashboard_service is None:
        _dashboard_service = DashboardService()
    return _dashboard_service
