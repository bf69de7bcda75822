"""Post search filters and pagination."""
import math
from dataclasses import dataclass, field
from typing import Any, Generic, Iterator, Optional, TypeVar

from sqlalchemy import or_

from inkwell.models.post import Post, PostStatus
from inkwell.models.tag import Tag

T = TypeVar("T")

SORT_COLUMNS = {
    "created_at": Post.created_at,
    "updated_at": Post.updated_at,
    "published_at": Post.published_at,
    "title": Post.title,
}


@dataclass
class SearchFilters:
    """Filters, ordering and page window for a post listing."""
    query: Optional[str] = None
    category_id: Optional[int] = None
    tag_ids: list[int] = field(default_factory=list)
    status: Optional[PostStatus] = None
    featured: Optional[bool] = None
    author_id: Optional[int] = None
    sort_by: str = "created_at"
    sort_order: str = "desc"
    page: int = 1
    limit: int = 10

    def __post_init__(self):
        if self.sort_by not in SORT_COLUMNS:
            raise ValueError(f"Unsupported sort field: {self.sort_by}")
        if self.sort_order not in ("asc", "desc"):
            raise ValueError(f"Unsupported sort order: {self.sort_order}")
        if self.page < 1:
            raise ValueError("Page must be at least 1")
        if not 1 <= self.limit <= 100:
            raise ValueError("Limit must be between 1 and 100")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass
class Page(Generic[T]):
    """One page of results plus the numbers needed to render pagination."""
    items: list[T]
    page: int
    limit: int
    total: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_prev(self) -> bool:
        return self.page > 1

    def iter_pages(self, window: int = 2) -> Iterator[Optional[int]]:
        """Page numbers around the current page, ``None`` marking a gap."""
        last = None
        for number in range(1, self.total_pages + 1):
            if number in (1, self.total_pages) or abs(number - self.page) <= window:
                if last is not None and number - last > 1:
                    yield None
                yield number
                last = number

    def pagination(self) -> dict[str, Any]:
        return {
            "page": self.page,
            "limit": self.limit,
            "total": self.total,
            "total_pages": self.total_pages,
            "has_next": self.has_next,
            "has_prev": self.has_prev,
        }


def paginate(query, page: int, limit: int) -> Page:
    """Count the query, then fetch the requested window."""
    total = query.order_by(None).count()
    items = query.offset((page - 1) * limit).limit(limit).all()
    return Page(items=items, page=page, limit=limit, total=total)


def build_post_query(filters: SearchFilters, viewer=None):
    """Translate search filters into a SQLAlchemy query over posts.

    Anonymous viewers only ever see published posts unless an explicit
    status filter is given.
    """
    query = Post.query

    if filters.query:
        query = query.filter(or_(
            Post.title.icontains(filters.query, autoescape=True),
            Post.excerpt.icontains(filters.query, autoescape=True),
            Post.content.icontains(filters.query, autoescape=True),
        ))

    if filters.category_id:
        query = query.filter(Post.category_id == filters.category_id)

    if filters.tag_ids:
        query = query.filter(Post.tags.any(Tag.id.in_(filters.tag_ids)))

    if filters.status:
        query = query.filter(Post.status == filters.status)
    elif viewer is None or not viewer.is_authenticated:
        query = query.filter(Post.status == PostStatus.PUBLISHED)

    if filters.featured is not None:
        query = query.filter(Post.featured.is_(filters.featured))

    if filters.author_id:
        query = query.filter(Post.author_id == filters.author_id)

    column = SORT_COLUMNS[filters.sort_by]
    if filters.sort_order == "asc":
        query = query.order_by(column.asc(), Post.id.asc())
    else:
        query = query.order_by(column.desc(), Post.id.desc())

    return query
