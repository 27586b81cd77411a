import logging
from typing import Iterable, List

from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from myblog.core.exceptions import NotFoundError, StorageError, ValidationError
from myblog.models.category import Category
from myblog.models.post import Post
from myblog.models.tag import MAX_NAME_LENGTH

logger = logging.getLogger(__name__)


class CategoryValidator:
    """Read-only check that a category exists."""

    def __init__(self, session: Session):
        self.session = session

    def validate(self, name: str) -> Category:
        """Return the category named exactly ``name`` or raise NotFoundError."""
        try:
            category = self.session.execute(
                select(Category).where(Category.name == name)
            ).scalar_one_or_none()
        except SQLAlchemyError as e:
            raise StorageError(f"unable to look up category: {name}", e) from e
        if category is None:
            raise NotFoundError(f"given category does not exist: {name}")
        return category


class CategoryRegistry:
    """Category maintenance used at bootstrap; posts never create categories."""

    def __init__(self, session: Session):
        self.session = session

    def ensure(self, names: Iterable[str]) -> List[Category]:
        """Create any missing categories and commit. Safe to call repeatedly."""
        categories = []
        try:
            for name in dict.fromkeys(names):
                if not name or len(name) > MAX_NAME_LENGTH:
                    raise ValidationError(f"category name must be 1-{MAX_NAME_LENGTH} characters: {name!r}")
                category = self.session.execute(
                    select(Category).where(Category.name == name)
                ).scalar_one_or_none()
                if category is None:
                    category = Category(name=name)
                    self.session.add(category)
                    logger.info("seeding category %r", name)
                categories.append(category)
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StorageError("unable to seed categories", e) from e
        return categories

    def remove(self, name: str) -> None:
        """
        Delete a category and clear it from every post that references it.

        The posts themselves are kept; only their category reference goes.
        """
        category = CategoryValidator(self.session).validate(name)
        try:
            cleared = self.session.execute(
                update(Post)
                .where(Post.category_name == category.name)
                .values(category_name=None)
                .execution_options(synchronize_session=False)
            ).rowcount
            self.session.execute(delete(Category).where(Category.id == category.id))
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StorageError(f"unable to remove category: {name}", e) from e
        # loaded posts still hold the old reference
        self.session.expire_all()
        logger.info("removed category %r, cleared from %d posts", name, cleared)
