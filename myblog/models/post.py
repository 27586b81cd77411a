from datetime import datetime
from typing import List, Optional
from sqlalchemy import DateTime, ForeignKey, Integer, String
from sqlalchemy.dialects import mysql
from sqlalchemy.orm import Mapped, mapped_column, relationship
from myblog.db.database import Base
from myblog.models.category import Category
from myblog.models.post_tag import PostTag
from myblog.models.tag import Tag, MAX_NAME_LENGTH

MAX_TITLE_LENGTH = 150
MAX_CONTENT_LENGTH = 2000

# microsecond precision on MySQL, so consecutive updates stay ordered
Timestamp = DateTime().with_variant(mysql.DATETIME(fsp=6), "mysql")

class Post(Base):
    """Post model

    Timestamps are naive UTC and are always assigned by PostRepository,
    never by column defaults.
    """
    __tablename__ = "posts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(MAX_TITLE_LENGTH), nullable=False)
    content: Mapped[str] = mapped_column(String(MAX_CONTENT_LENGTH), nullable=False)
    category_name: Mapped[Optional[str]] = mapped_column(
        String(MAX_NAME_LENGTH),
        ForeignKey("categories.name", ondelete="SET NULL", onupdate="CASCADE"),
        nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(Timestamp, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(Timestamp, nullable=False)

    category: Mapped[Optional[Category]] = relationship(Category, lazy="joined")
    tags: Mapped[List[Tag]] = relationship(
        Tag,
        secondary=PostTag.__table__,
        order_by=Tag.id,
        lazy="selectin"
    )

    def __repr__(self):
        return f"<Post(id={self.id}, title={self.title!r})>"
