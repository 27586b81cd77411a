import logging
from typing import List

from sqlalchemy import or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from myblog.core.exceptions import NotFoundError, StorageError
from myblog.models.category import Category
from myblog.models.post import Post
from myblog.models.post_tag import PostTag
from myblog.models.tag import Tag

logger = logging.getLogger(__name__)


class SearchEngine:
    """Case-insensitive substring search over posts."""

    def __init__(self, session: Session):
        self.session = session

    def search(self, term: str) -> List[Post]:
        """
        Return every post whose title, content, category name or any tag
        name contains ``term``, ignoring case.

        The four predicates are OR-ed in one query, so a post matching
        several of them is returned once. ``%`` and ``_`` in the term match
        literally. An empty term matches every post.

        Raises:
            NotFoundError: nothing matched
            StorageError: the query failed
        """
        tagged = (
            select(PostTag.post_id)
            .join(Tag, Tag.id == PostTag.tag_id)
            .where(Tag.name.icontains(term, autoescape=True))
        )
        categories = (
            select(Category.name)
            .where(Category.name.icontains(term, autoescape=True))
        )
        query = (
            select(Post)
            .where(or_(
                Post.title.icontains(term, autoescape=True),
                Post.content.icontains(term, autoescape=True),
                Post.id.in_(tagged),
                Post.category_name.in_(categories),
            ))
            .order_by(Post.id)
        )

        logger.info("searching posts with term: %r", term)
        try:
            posts = list(self.session.execute(query).unique().scalars())
        except SQLAlchemyError as e:
            raise StorageError(f"unable to search posts with term: {term}", e) from e
        if not posts:
            raise NotFoundError("unable to find any posts with search term")
        return posts
