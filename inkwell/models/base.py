"""Base model with common fields and functionality."""
import enum
from datetime import datetime, timezone
from typing import Any
from sqlalchemy import Column, Integer, DateTime
from inkwell.extensions import db


def utcnow() -> datetime:
    """Naive UTC timestamp, the form every DateTime column stores."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class BaseModel(db.Model):
    """Base model class with common fields."""

    __abstract__ = True

    id = Column(Integer, primary_key=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    def to_dict(self) -> dict[str, Any]:
        """Convert model instance to dictionary."""
        result = {}
        for column in self.__table__.columns:
            value = getattr(self, column.name)
            if isinstance(value, datetime):
                value = value.isoformat()
            elif isinstance(value, enum.Enum):
                value = value.value
            result[column.name] = value
        return result

    def save(self) -> "BaseModel":
        """Save model instance to database."""
        db.session.add(self)
        db.session.commit()
        return self

    def delete(self) -> bool:
        """Delete model instance from database."""
        db.session.delete(self)
        db.session.commit()
        return True

    @classmethod
    def create(cls, **kwargs) -> "BaseModel":
        """Create new model instance."""
        instance = cls(**kwargs)
        return instance.save()
