"""
Post persistence.

PostRepository is the only writer of posts. It enforces the length limits,
resolves tags and categories, and assigns timestamps itself instead of
relying on column defaults, so the rules hold on any database engine.

Tag resolution, category validation and the post write share the session
transaction and a single commit: if the post write fails, tags created for
it are rolled back with it.
"""
import logging
from datetime import datetime, timedelta, UTC
from typing import Iterable, List, Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from myblog.core.exceptions import NotFoundError, StorageError, ValidationError
from myblog.models.post import Post, MAX_CONTENT_LENGTH, MAX_TITLE_LENGTH
from myblog.models.post_tag import PostTag
from myblog.services.categories import CategoryValidator
from myblog.services.tags import TagResolver

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    """Current time as naive UTC, the form the DateTime columns store"""
    return datetime.now(UTC).replace(tzinfo=None)


def _check_length(field: str, value: str, limit: int) -> None:
    if not value:
        raise ValidationError(f"{field} is required.")
    if len(value) > limit:
        raise ValidationError(f"{field} exceeds {limit} characters.")


class PostRepository:
    """CRUD operations for posts and their tag associations."""

    def __init__(self, session: Session):
        self.session = session
        self.tags = TagResolver(session)
        self.categories = CategoryValidator(session)

    def create(
        self,
        title: str,
        content: str,
        category: Optional[str] = None,
        tags: Iterable[str] = ()
    ) -> Post:
        """
        Persist a new post with its tags.

        Raises:
            ValidationError: title/content empty or too long, unknown category
            StorageError: the insert failed or affected no rows
        """
        _check_length("title", title, MAX_TITLE_LENGTH)
        _check_length("content", content, MAX_CONTENT_LENGTH)

        try:
            post = Post(title=title, content=content)
            if category:
                post.category = self._category(category)
            post.tags = self.tags.resolve(tags)
            post.created_at = post.updated_at = utcnow()
            self.session.add(post)
            self.session.flush()
            if post.id is None:
                raise StorageError("there was an error trying to save the post.")
            self.session.commit()
        except (ValidationError, StorageError):
            self.session.rollback()
            raise
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StorageError("there was an error trying to save the post.", e) from e

        logger.info("created post %s with tags %s", post.id, [t.name for t in post.tags])
        return self.get(post.id)

    def get(self, post_id: int) -> Post:
        """Fetch one post with its tags, or raise NotFoundError."""
        try:
            post = self.session.execute(
                select(Post).where(Post.id == post_id)
            ).unique().scalar_one_or_none()
        except SQLAlchemyError as e:
            raise StorageError(f"unable to fetch post with id: {post_id}", e) from e
        if post is None:
            raise NotFoundError(f"could not find post with id: {post_id}")
        return post

    def get_all(self) -> List[Post]:
        """All posts in primary key order."""
        try:
            return list(self.session.execute(
                select(Post).order_by(Post.id)
            ).unique().scalars())
        except SQLAlchemyError as e:
            raise StorageError("unable to fetch all posts", e) from e

    def update(
        self,
        post_id: int,
        title: Optional[str] = None,
        content: Optional[str] = None,
        category: Optional[str] = None,
        tags: Optional[Iterable[str]] = None
    ) -> Post:
        """
        Partially update a post.

        Only non-empty arguments overwrite the stored values; there is no
        way to clear a field. Tags are added to the existing set, never
        removed. The row is locked (SELECT ... FOR UPDATE) between the read
        and the write so concurrent updates of one post serialize.

        Raises:
            NotFoundError: no post with that id
            ValidationError: a limit is exceeded or the category is unknown
            StorageError: the database failed
        """
        try:
            post = self.session.execute(
                select(Post).where(Post.id == post_id).with_for_update(of=Post)
            ).unique().scalar_one_or_none()
            if post is None:
                raise NotFoundError(f"no post found for id: {post_id}")

            if title:
                _check_length("title", title, MAX_TITLE_LENGTH)
                post.title = title
            if content:
                _check_length("content", content, MAX_CONTENT_LENGTH)
                post.content = content
            if category:
                post.category = self._category(category)
            if tags:
                current = {tag.id for tag in post.tags}
                for tag in self.tags.resolve(tags):
                    if tag.id not in current:
                        post.tags.append(tag)
                        current.add(tag.id)

            now = utcnow()
            if now <= post.updated_at:
                now = post.updated_at + timedelta(microseconds=1)
            post.updated_at = now
            self.session.commit()
        except (NotFoundError, ValidationError, StorageError):
            self.session.rollback()
            raise
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StorageError("unable to complete update request", e) from e

        logger.info("updated post %s", post_id)
        return self.get(post_id)

    def delete(self, post_id: int) -> None:
        """
        Delete a post and its tag associations. The tags themselves stay.

        Raises:
            NotFoundError: no post with that id
            StorageError: the delete failed or removed nothing
        """
        post = self.get(post_id)
        try:
            self.session.execute(
                delete(PostTag).where(PostTag.post_id == post_id)
            )
            result = self.session.execute(
                delete(Post).where(Post.id == post_id).execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                raise StorageError("unable to remove post")
            self.session.commit()
        except StorageError:
            self.session.rollback()
            raise
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StorageError("unable to remove post", e) from e
        self.session.expunge(post)
        logger.info("removed post %s", post_id)

    def _category(self, name: str):
        try:
            return self.categories.validate(name)
        except NotFoundError as e:
            raise ValidationError(e.message) from e
