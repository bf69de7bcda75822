"""Category and tag management."""
import logging
from typing import Any, Dict, List, Optional, Type

from flask import current_app

from inkwell.extensions import db
from inkwell.models.category import Category
from inkwell.models.tag import Tag
from inkwell.models.user import User
from inkwell.services.errors import BlogError, DuplicateError, InUseError, NotFoundError

logger = logging.getLogger(__name__)


class TaxonomyService:
    """CRUD for a name/slug classification model.

    Subclasses set the model, a human label and the config key holding the
    default color.
    """

    model: Type[Any]
    label: str
    color_setting: str
    fields: tuple[str, ...] = ("name", "slug", "color")

    def list_all(self) -> List[Any]:
        """All records ordered by name."""
        return self.model.get_all_ordered()

    def get_by_id(self, record_id: int) -> Any:
        record = db.session.get(self.model, record_id)
        if not record:
            raise NotFoundError(f"{self.label} not found")
        return record

    def get_by_slug(self, slug: str) -> Any:
        record = self.model.get_by_slug(slug)
        if not record:
            raise NotFoundError(f"{self.label} not found")
        return record

    def create(self, data: Dict[str, Any], user: User) -> Any:
        """
        Create a record after permission and uniqueness checks.

        Raises:
            PermissionError: If the user is not an admin or editor
            DuplicateError: If the name or slug is already used
        """
        self.check_can_manage(user, "create")

        try:
            self._ensure_unique("name", data['name'])
            self._ensure_unique("slug", data['slug'])

            record = self.model(**self._values(data))
            db.session.add(record)
            db.session.commit()

            logger.info(f"{self.label} created - ID: {record.id}, Slug: {record.slug}, User: {user.id}")
            return record

        except BlogError as e:
            db.session.rollback()
            logger.warning(f"{self.label} creation rejected: {e.message}")
            raise
        except Exception as e:
            db.session.rollback()
            logger.error(f"Unexpected error creating {self.label.lower()}: {str(e)}")
            raise

    def update(self, record_id: int, data: Dict[str, Any], user: User) -> Any:
        """Update a record, re-checking uniqueness only for changed values."""
        self.check_can_manage(user, "edit")
        record = self.get_by_id(record_id)

        try:
            if data['name'] != record.name:
                self._ensure_unique("name", data['name'])
            if data['slug'] != record.slug:
                self._ensure_unique("slug", data['slug'])

            for key, value in self._values(data).items():
                setattr(record, key, value)
            db.session.commit()

            logger.info(f"{self.label} updated - ID: {record.id}, User: {user.id}")
            return record

        except BlogError as e:
            db.session.rollback()
            logger.warning(f"{self.label} update rejected for {record_id}: {e.message}")
            raise
        except Exception as e:
            db.session.rollback()
            logger.error(f"Error updating {self.label.lower()} {record_id}: {str(e)}")
            raise

    def delete(self, record_id: int, user: User) -> bool:
        """
        Delete a record that no post references.

        Raises:
            InUseError: If posts are still attached
        """
        self.check_can_manage(user, "delete")
        record = self.get_by_id(record_id)

        if record.post_count > 0:
            raise InUseError(f"Cannot delete a {self.label.lower()} that has posts")

        try:
            db.session.delete(record)
            db.session.commit()
            logger.info(f"{self.label} deleted - ID: {record_id}, User: {user.id}")
            return True
        except Exception as e:
            db.session.rollback()
            logger.error(f"Error deleting {self.label.lower()} {record_id}: {str(e)}")
            raise

    def _values(self, data: Dict[str, Any]) -> Dict[str, Any]:
        values = {key: data.get(key) for key in self.fields}
        values['color'] = values.get('color') or current_app.config[self.color_setting]
        return values

    def check_can_manage(self, user: Optional[User], action: str) -> None:
        """Raise ``PermissionError`` unless ``user`` is an admin or editor."""
        if user is None or not getattr(user, "is_authenticated", False) or not user.can_moderate:
            raise PermissionError(f"Not authorized to {action} {self.label.lower()} records")

    def _ensure_unique(self, field: str, value: str) -> None:
        column = getattr(self.model, field)
        if self.model.query.filter(column == value).first():
            message = f"{self.label} {field} already exists"
            raise DuplicateError(message, {field: [message]})


class CategoryService(TaxonomyService):
    """Service for category CRUD."""

    model = Category
    label = "Category"
    color_setting = "DEFAULT_CATEGORY_COLOR"
    fields = ("name", "slug", "description", "color")


class TagService(TaxonomyService):
    """Service for tag CRUD."""

    model = Tag
    label = "Tag"
    color_setting = "DEFAULT_TAG_COLOR"


# Global service instances
_category_service = None
_tag_service = None


def get_category_service() -> CategoryService:
    """Get category service instance."""
    global _category_service
    if _category_service is None:
        _category_service = CategoryService()
    return _category_service


def get_tag_service() -> TagService:
    """Get tag service instance."""
    global _tag_service
    if _tag_service is None:
        _tag_service = TagService()
    return _tag_service
