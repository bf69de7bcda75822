"""Category and tag forms."""
from typing import Any
from flask_wtf import FlaskForm
from wtforms import StringField, TextAreaField
from wtforms.validators import DataRequired, Length, Optional as OptionalValidator, Regexp

from inkwell.forms.posts import SLUG_PATTERN, SLUG_MESSAGE

COLOR_PATTERN = r"^#[0-9A-Fa-f]{6}$"
COLOR_MESSAGE = "Color must be a hex value such as #6366f1"


class CategoryForm(FlaskForm):
    """Create/edit form for categories."""

    name = StringField(
        'Name',
        validators=[
            DataRequired(message="Name is required"),
            Length(max=100, message="Name must be at most 100 characters")
        ]
    )
    slug = StringField(
        'Slug',
        validators=[
            DataRequired(message="Slug is required"),
            Length(max=120),
            Regexp(SLUG_PATTERN, message=SLUG_MESSAGE)
        ]
    )
    description = TextAreaField(
        'Description',
        validators=[OptionalValidator(), Length(max=500, message="Description must be at most 500 characters")],
        render_kw={"rows": 3}
    )
    color = StringField(
        'Color',
        validators=[OptionalValidator(), Regexp(COLOR_PATTERN, message=COLOR_MESSAGE)],
        render_kw={"placeholder": "#6366f1"}
    )

    def to_data(self) -> dict[str, Any]:
        return {
            'name': self.name.data.strip(),
            'slug': self.slug.data.strip(),
            'description': (self.description.data or "").strip() or None,
            'color': (self.color.data or "").strip() or None,
        }


class TagForm(FlaskForm):
    """Create/edit form for tags."""

    name = StringField(
        'Name',
        validators=[
            DataRequired(message="Name is required"),
            Length(max=50, message="Name must be at most 50 characters")
        ]
    )
    slug = StringField(
        'Slug',
        validators=[
            DataRequired(message="Slug is required"),
            Length(max=60),
            Regexp(SLUG_PATTERN, message=SLUG_MESSAGE)
        ]
    )
    color = StringField(
        'Color',
        validators=[OptionalValidator(), Regexp(COLOR_PATTERN, message=COLOR_MESSAGE)],
        render_kw={"placeholder": "#10b981"}
    )

    def to_data(self) -> dict[str, Any]:
        return {
            'name': self.name.data.strip(),
            'slug': self.slug.data.strip(),
            'color': (self.color.data or "").strip() or None,
        }
