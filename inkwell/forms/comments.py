"""Comment submission and moderation forms."""
from typing import Any
from flask_wtf import FlaskForm
from wtforms import TextAreaField, IntegerField, SelectField
from wtforms.validators import DataRequired, InputRequired, Length, Optional as OptionalValidator

from inkwell.models.comment import CommentStatus

MODERATION_CHOICES = [
    (CommentStatus.PENDING.value, "Pending"),
    (CommentStatus.APPROVED.value, "Approved"),
    (CommentStatus.REJECTED.value, "Rejected"),
]


class CommentForm(FlaskForm):
    """Reader comment or reply."""

    content = TextAreaField(
        'Comment',
        validators=[
            DataRequired(message="Comment is required"),
            Length(max=1000, message="Comment must be at most 1000 characters")
        ],
        render_kw={"rows": 4, "placeholder": "Share your thoughts..."}
    )
    post_id = IntegerField('Post', validators=[InputRequired(message="Post id is required")])
    parent_id = IntegerField('Reply to', validators=[OptionalValidator()])

    def to_data(self) -> dict[str, Any]:
        return {
            'content': self.content.data.strip(),
            'post_id': self.post_id.data,
            'parent_id': self.parent_id.data,
        }


class ModerationForm(FlaskForm):
    """Status change from the moderation queue."""

    status = SelectField('Status', choices=MODERATION_CHOICES)
