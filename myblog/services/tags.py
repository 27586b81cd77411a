"""
Tag resolution for post writes.

Tags are created lazily: the first post that uses a name creates the row,
every later post reuses it.
"""
import logging
from typing import Dict, Iterable, List

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from myblog.core.exceptions import StorageError, ValidationError
from myblog.models.tag import Tag, MAX_NAME_LENGTH

logger = logging.getLogger(__name__)


class TagResolver:
    """Turns tag names into persisted Tag rows."""

    def __init__(self, session: Session):
        self.session = session

    def resolve(self, names: Iterable[str]) -> List[Tag]:
        """
        Return the Tag rows for ``names``, creating the missing ones.

        Duplicate names collapse to one tag, and the result is deduplicated
        by tag id in first-seen order. New tags are only flushed; the caller
        owns the commit.

        Raises:
            ValidationError: a name is empty or longer than 50 characters
            StorageError: the lookup or insert failed
        """
        resolved: Dict[int, Tag] = {}
        for name in dict.fromkeys(names):
            if not name or len(name) > MAX_NAME_LENGTH:
                raise ValidationError(f"tag name must be 1-{MAX_NAME_LENGTH} characters: {name!r}")
            tag = self._get_or_create(name)
            resolved.setdefault(tag.id, tag)
        return list(resolved.values())

    def _get_or_create(self, name: str) -> Tag:
        try:
            tag = self.session.execute(
                select(Tag).where(Tag.name == name)
            ).scalar_one_or_none()
            if tag is None:
                tag = Tag(name=name)
                self.session.add(tag)
                self.session.flush()
                logger.info("created tag %r (id=%s)", name, tag.id)
            return tag
        except SQLAlchemyError as e:
            raise StorageError(f"unable to create tag: {name}", e) from e
