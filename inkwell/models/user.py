"""User model synchronised from the OAuth identity provider."""
import enum
import logging
from typing import Any, Optional
from flask_login import AnonymousUserMixin, UserMixin
from sqlalchemy import Column, String, DateTime, Enum
from inkwell.extensions import db
from inkwell.models.base import BaseModel, utcnow

logger = logging.getLogger(__name__)


class UserRole(enum.Enum):
    """Enumeration for user roles."""
    ADMIN = "admin"
    EDITOR = "editor"
    USER = "user"


class User(BaseModel, UserMixin):
    """Local copy of an identity-provider account."""

    __tablename__ = "users"

    # Identity provider fields
    oauth_subject = Column(String(255), unique=True, nullable=False)
    email = Column(String(255), unique=True, nullable=False)

    # Profile fields
    first_name = Column(String(100), nullable=True)
    last_name = Column(String(100), nullable=True)
    image_url = Column(String(500), nullable=True)

    role = Column(Enum(UserRole), default=UserRole.USER, nullable=False)
    last_login_at = Column(DateTime, nullable=True)

    def __repr__(self) -> str:
        """String representation of user."""
        return f"<User {self.full_name} ({self.email})>"

    @property
    def full_name(self) -> str:
        """First and last name, or the email when neither is known."""
        parts = [part for part in (self.first_name, self.last_name) if part]
        return " ".join(parts) if parts else self.email

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @property
    def can_moderate(self) -> bool:
        """Admins and editors moderate comments and manage the taxonomy."""
        return self.role in (UserRole.ADMIN, UserRole.EDITOR)

    def has_role(self, *roles: UserRole) -> bool:
        return self.role in roles

    def to_public_dict(self) -> dict[str, Any]:
        """Author fields safe to embed in public responses."""
        return {
            "id": self.id,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "full_name": self.full_name,
            "image_url": self.image_url,
        }

    @classmethod
    def find_by_subject(cls, subject: str) -> Optional["User"]:
        """Find user by identity provider subject."""
        return cls.query.filter_by(oauth_subject=subject).first()

    @classmethod
    def find_by_email(cls, email: str) -> Optional["User"]:
        """Find user by email address."""
        return cls.query.filter_by(email=email).first()

    @classmethod
    def sync_from_provider(cls, profile: dict[str, Any]) -> "User":
        """Create or refresh the local user for an identity provider profile.

        The profile uses OpenID Connect claim names (``sub``, ``email``,
        ``given_name``, ``family_name``, ``picture``). Existing values are
        only overwritten by non-empty claims.
        """
        subject = str(profile["sub"])
        email = profile.get("email") or ""

        user = cls.find_by_subject(subject)
        if not user and email:
            # Link provider account to a user created with the same email
            user = cls.find_by_email(email)
            if user:
                logger.info(f"Linking identity {subject} to existing user {user.id}")
                user.oauth_subject = subject

        if user:
            user.email = email or user.email
            user.first_name = profile.get("given_name") or user.first_name
            user.last_name = profile.get("family_name") or user.last_name
            user.image_url = profile.get("picture") or user.image_url
        else:
            user = cls(
                oauth_subject=subject,
                email=email,
                first_name=profile.get("given_name"),
                last_name=profile.get("family_name"),
                image_url=profile.get("picture"),
            )
            db.session.add(user)
            logger.info(f"Created user for identity {subject}")

        user.last_login_at = utcnow()
        db.session.commit()
        return user


class AnonymousUser(AnonymousUserMixin):
    """Signed-out visitor; never holds a role."""

    is_admin = False
    can_moderate = False

    def has_role(self, *roles: UserRole) -> bool:
        return False
