"""Contact page form."""
from typing import Any
from flask_wtf import FlaskForm
from wtforms import StringField, TextAreaField, SelectField
from wtforms.validators import DataRequired, Email, Length, Optional as OptionalValidator


class ContactForm(FlaskForm):
    """Visitor message to the site owners."""

    name = StringField(
        'Name',
        validators=[
            DataRequired(message="Name is required"),
            Length(min=2, message="Name must be at least 2 characters")
        ]
    )
    email = StringField(
        'Email',
        validators=[DataRequired(message="Email is required"), Email(message="Invalid email address")]
    )
    subject = StringField('Subject', validators=[OptionalValidator(), Length(max=200)])
    type = SelectField(
        'Type',
        choices=[
            ("general", "General question"),
            ("feedback", "Feedback"),
            ("collaboration", "Collaboration"),
            ("bug", "Report a problem"),
        ],
        default="general"
    )
    message = TextAreaField(
        'Message',
        validators=[
            DataRequired(message="Message is required"),
            Length(min=10, message="Message must be at least 10 characters")
        ],
        render_kw={"rows": 6}
    )

    def to_data(self) -> dict[str, Any]:
        return {
            'name': self.name.data.strip(),
            'email': self.email.data.strip(),
            'subject': (self.subject.data or "").strip() or None,
            'type': self.type.data,
            'message': self.message.data.strip(),
        }
