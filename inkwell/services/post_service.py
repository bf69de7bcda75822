"""Post service for managing post CRUD operations and business logic."""
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import or_

from inkwell.extensions import db
from inkwell.models.base import utcnow
from inkwell.models.category import Category
from inkwell.models.post import Post, PostStatus
from inkwell.models.tag import Tag
from inkwell.models.user import User
from inkwell.services.errors import BlogError, DuplicateError, InvalidDataError, NotFoundError
from inkwell.services.search import Page, SearchFilters, build_post_query, paginate

logger = logging.getLogger(__name__)


def _signed_in(user) -> bool:
    return user is not None and getattr(user, "is_authenticated", False)


class PostService:
    """Service for post CRUD operations and business logic."""

    def search_posts(self, filters: SearchFilters, viewer: Optional[User] = None) -> Page[Post]:
        """
        Search posts with filters, ordering and pagination.

        Args:
            filters: Parsed search filters
            viewer: Current user; anonymous viewers only see published posts

        Returns:
            Page of matching posts
        """
        query = build_post_query(filters, viewer)
        page = paginate(query, filters.page, filters.limit)
        logger.debug(f"Post search matched {page.total} posts (page {page.page}/{page.total_pages})")
        return page

    def get_post_by_id(self, post_id: int, viewer: Optional[User] = None) -> Post:
        """Get a post visible to the viewer or raise ``NotFoundError``."""
        post = db.session.get(Post, post_id)
        return self._visible_or_404(post, viewer)

    def get_post_by_slug(self, slug: str, viewer: Optional[User] = None) -> Post:
        """Get a post by slug visible to the viewer or raise ``NotFoundError``."""
        post = Post.get_by_slug(slug)
        return self._visible_or_404(post, viewer)

    def get_related_posts(self, post_id: int, limit: int = 4) -> List[Post]:
        """
        Published posts sharing the category or any tag of the given post.

        Featured posts come first, then the most recent.
        """
        post = db.session.get(Post, post_id)
        if not post:
            raise NotFoundError("Post not found")

        tag_ids = [tag.id for tag in post.tags]
        conditions = []
        if post.category_id:
            conditions.append(Post.category_id == post.category_id)
        if tag_ids:
            conditions.append(Post.tags.any(Tag.id.in_(tag_ids)))

        if not conditions:
            return []

        return Post.query.filter(
            Post.id != post.id,
            Post.status == PostStatus.PUBLISHED,
            or_(*conditions)
        ).order_by(
            Post.featured.desc(), Post.created_at.desc()
        ).limit(limit).all()

    def create_post(self, data: Dict[str, Any], author: User) -> Post:
        """
        Create a new post.

        Args:
            data: Validated post data (see ``PostForm.to_data``)
            author: User creating the post

        Returns:
            The created post

        Raises:
            PermissionError: If nobody is signed in
            DuplicateError: If the slug is taken
            InvalidDataError: If the category or a tag does not exist
        """
        if not _signed_in(author):
            raise PermissionError("Sign in to create posts")

        try:
            self._ensure_unique_slug(data['slug'])

            status = data.get('status') or PostStatus.DRAFT
            post = Post(
                title=data['title'],
                slug=data['slug'],
                excerpt=data.get('excerpt'),
                content=data['content'],
                cover_image=data.get('cover_image'),
                status=status,
                featured=bool(data.get('featured')),
                published_at=utcnow() if status == PostStatus.PUBLISHED else data.get('published_at'),
                author_id=author.id,
                category=self._resolve_category(data.get('category_id')),
                tags=self._resolve_tags(data.get('tag_ids')),
            )

            db.session.add(post)
            db.session.commit()

            logger.info(f"Post created - ID: {post.id}, Slug: {post.slug}, Author: {author.id}")
            return post

        except BlogError as e:
            db.session.rollback()
            logger.warning(f"Post creation rejected: {e.message}")
            raise
        except Exception as e:
            db.session.rollback()
            logger.error(f"Unexpected error creating post: {str(e)}")
            raise

    def update_post(self, post_id: int, data: Dict[str, Any], user: User) -> Post:
        """
        Update an existing post, replacing its tag set.

        Raises:
            NotFoundError: If the post does not exist
            PermissionError: If the user is neither the author nor an admin
            DuplicateError: If the new slug is taken
        """
        post = db.session.get(Post, post_id)
        if not post:
            raise NotFoundError("Post not found")

        self.check_owner_or_admin(post, user, "edit")

        try:
            if data['slug'] != post.slug:
                self._ensure_unique_slug(data['slug'])

            status = data.get('status') or post.status
            if status == PostStatus.PUBLISHED and post.status != PostStatus.PUBLISHED:
                post.published_at = utcnow()

            post.title = data['title']
            post.slug = data['slug']
            post.excerpt = data.get('excerpt')
            post.content = data['content']
            post.cover_image = data.get('cover_image')
            post.status = status
            post.featured = bool(data.get('featured'))
            post.category = self._resolve_category(data.get('category_id'))
            post.tags = self._resolve_tags(data.get('tag_ids'))

            db.session.commit()

            logger.info(f"Post updated - ID: {post.id}, User: {user.id}")
            return post

        except BlogError as e:
            db.session.rollback()
            logger.warning(f"Post update rejected for post {post_id}: {e.message}")
            raise
        except Exception as e:
            db.session.rollback()
            logger.error(f"Error updating post {post_id}: {str(e)}")
            raise

    def delete_post(self, post_id: int, user: User) -> bool:
        """
        Delete a post together with its comments.

        Raises:
            NotFoundError: If the post does not exist
            PermissionError: If the user is neither the author nor an admin
        """
        post = db.session.get(Post, post_id)
        if not post:
            raise NotFoundError("Post not found")

        self.check_owner_or_admin(post, user, "delete")

        try:
            db.session.delete(post)
            db.session.commit()
            logger.info(f"Post deleted - ID: {post_id}, User: {user.id}")
            return True
        except Exception as e:
            db.session.rollback()
            logger.error(f"Error deleting post {post_id}: {str(e)}")
            raise

    def _visible_or_404(self, post: Optional[Post], viewer) -> Post:
        if not post or not post.is_visible_to(viewer):
            raise NotFoundError("Post not found")
        return post

    def check_owner_or_admin(self, post: Post, user: User, action: str) -> None:
        """Raise ``PermissionError`` unless ``user`` wrote the post or is an admin."""
        if not _signed_in(user):
            raise PermissionError(f"Sign in to {action} posts")
        if post.author_id != user.id and not user.is_admin:
            raise PermissionError(f"Not authorized to {action} this post")

    def _ensure_unique_slug(self, slug: str) -> None:
        if Post.get_by_slug(slug):
            raise DuplicateError("Slug already exists", {"slug": ["Slug already exists"]})

    def _resolve_category(self, category_id: Optional[int]) -> Optional[Category]:
        if not category_id:
            return None
        category = db.session.get(Category, category_id)
        if not category:
            raise InvalidDataError("Category not found", {"category_id": ["Category not found"]})
        return category

    def _resolve_tags(self, tag_ids: Optional[List[int]]) -> List[Tag]:
        wanted = set(tag_ids or [])
        if not wanted:
            return []
        tags = Tag.query.filter(Tag.id.in_(wanted)).all()
        missing = wanted - {tag.id for tag in tags}
        if missing:
            listed = ", ".join(str(tag_id) for tag_id in sorted(missing))
            raise InvalidDataError(f"Unknown tags: {listed}", {"tag_ids": [f"Unknown tags: {listed}"]})
        return tags


# Global service instance
_post_service = None


def get_post_service() -> PostService:
    """Get post service instance."""
    global _post_service
    if _post_service is None:
        _post_service = PostService()
    return _post_service
