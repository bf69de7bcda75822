"""Post editing and search forms."""
from typing import Any, Optional
from flask import current_app
from flask_wtf import FlaskForm
from wtforms import (
    Field, StringField, TextAreaField, SelectField, SelectMultipleField,
    BooleanField, DateTimeField, IntegerField
)
from wtforms.validators import (
    DataRequired, Length, Optional as OptionalValidator,
    NumberRange, Regexp, URL
)
from wtforms.widgets import TextInput

from inkwell.models.category import Category
from inkwell.models.post import PostStatus
from inkwell.models.tag import Tag

SLUG_PATTERN = r"^[a-z0-9]+(?:-[a-z0-9]+)*$"
SLUG_MESSAGE = "Slug may only contain lowercase letters, numbers and hyphens"
DATETIME_FORMATS = ["%Y-%m-%dT%H:%M", "%Y-%m-%dT%H:%M:%S", "%Y-%m-%d %H:%M", "%Y-%m-%d %H:%M:%S"]

STATUS_CHOICES = [
    (PostStatus.DRAFT.value, "Draft"),
    (PostStatus.PUBLISHED.value, "Published"),
    (PostStatus.ARCHIVED.value, "Archived"),
]

SORT_CHOICES = [
    ("created_at", "Created"),
    ("updated_at", "Updated"),
    ("published_at", "Published"),
    ("title", "Title"),
]


def optional_int(value) -> Optional[int]:
    """Coerce select values to int, treating blanks as no selection."""
    if value in (None, ""):
        return None
    return int(value)


class IntegerListField(Field):
    """Comma separated (or repeated) integer ids, e.g. ``?tag_ids=1,4``."""

    widget = TextInput()

    def _value(self):
        return ",".join(str(value) for value in self.data) if self.data else ""

    def process_formdata(self, valuelist):
        self.data = []
        for raw in valuelist:
            for part in str(raw).split(","):
                part = part.strip()
                if not part:
                    continue
                try:
                    self.data.append(int(part))
                except ValueError:
                    self.data = []
                    raise ValueError("Ids must be whole numbers")


class PostForm(FlaskForm):
    """Create/edit form for posts."""

    title = StringField(
        'Title',
        validators=[
            DataRequired(message="Title is required"),
            Length(max=200, message="Title must be at most 200 characters")
        ],
        render_kw={"placeholder": "Post title"}
    )

    slug = StringField(
        'Slug',
        validators=[
            DataRequired(message="Slug is required"),
            Length(max=220),
            Regexp(SLUG_PATTERN, message=SLUG_MESSAGE)
        ],
        render_kw={"placeholder": "post-title"}
    )

    excerpt = TextAreaField(
        'Excerpt',
        validators=[OptionalValidator(), Length(max=500, message="Excerpt must be at most 500 characters")],
        render_kw={"rows": 3}
    )

    content = TextAreaField(
        'Content',
        validators=[DataRequired(message="Content is required")],
        render_kw={"rows": 16}
    )

    cover_image = StringField(
        'Cover image URL',
        validators=[OptionalValidator(), URL(message="Cover image must be a valid URL")]
    )

    category_id = SelectField('Category', coerce=optional_int, validate_choice=False)

    tag_ids = SelectMultipleField('Tags', coerce=int, validate_choice=False)

    status = SelectField('Status', choices=STATUS_CHOICES, default=PostStatus.DRAFT.value)

    featured = BooleanField('Featured', default=False)

    published_at = DateTimeField(
        'Publish date',
        validators=[OptionalValidator()],
        format=DATETIME_FORMATS
    )

    def __init__(self, *args, **kwargs):
        """Initialize form with category and tag choices."""
        super().__init__(*args, **kwargs)
        self.category_id.choices = [("", "No category")] + [
            (category.id, category.name) for category in Category.get_all_ordered()
        ]
        self.tag_ids.choices = [(tag.id, tag.name) for tag in Tag.get_all_ordered()]

    def to_data(self) -> dict[str, Any]:
        """Cleaned values for the post service."""
        return {
            'title': self.title.data.strip(),
            'slug': self.slug.data.strip(),
            'excerpt': (self.excerpt.data or "").strip() or None,
            'content': self.content.data,
            'cover_image': (self.cover_image.data or "").strip() or None,
            'category_id': self.category_id.data,
            'tag_ids': list(self.tag_ids.data or []),
            'status': PostStatus(self.status.data),
            'featured': bool(self.featured.data),
            'published_at': self.published_at.data,
        }

    def fill_from_post(self, post) -> None:
        """Pre-populate the form for editing."""
        self.title.data = post.title
        self.slug.data = post.slug
        self.excerpt.data = post.excerpt
        self.content.data = post.content
        self.cover_image.data = post.cover_image
        self.category_id.data = post.category_id
        self.tag_ids.data = [tag.id for tag in post.tags]
        self.status.data = post.status.value
        self.featured.data = post.featured
        self.published_at.data = post.published_at


class SearchForm(FlaskForm):
    """Query string filters for post listings."""

    class Meta:
        csrf = False

    query = StringField('Search', validators=[OptionalValidator(), Length(max=200)])
    category_id = IntegerField('Category', validators=[OptionalValidator()])
    tag_ids = IntegerListField('Tags', default=list)
    status = SelectField(
        'Status',
        choices=[("", "Any status")] + STATUS_CHOICES,
        default=""
    )
    featured = BooleanField('Featured only', default=False)
    author_id = IntegerField('Author', validators=[OptionalValidator()])
    sort_by = SelectField('Sort by', choices=SORT_CHOICES, default="created_at")
    sort_order = SelectField('Order', choices=[("desc", "Newest"), ("asc", "Oldest")], default="desc")
    page = IntegerField(
        'Page',
        default=1,
        validators=[OptionalValidator(), NumberRange(min=1, message="Page must be at least 1")]
    )
    limit = IntegerField(
        'Per page',
        default=10,
        validators=[OptionalValidator(), NumberRange(min=1, max=100, message="Limit must be between 1 and 100")]
    )

    def to_filters(self, **overrides):
        """Build ``SearchFilters`` from the validated form."""
        from inkwell.services.search import SearchFilters

        values = {
            'query': (self.query.data or "").strip() or None,
            'category_id': self.category_id.data,
            'tag_ids': list(self.tag_ids.data or []),
            'status': PostStatus(self.status.data) if self.status.data else None,
            'featured': True if self.featured.data else None,
            'author_id': self.author_id.data,
            'sort_by': self.sort_by.data,
            'sort_order': self.sort_order.data,
            'page': self.page.data or 1,
            'limit': min(self.limit.data or 10, current_app.config.get("MAX_PAGE_SIZE", 100)),
        }
        values.update(overrides)
        return SearchFilters(**values)
