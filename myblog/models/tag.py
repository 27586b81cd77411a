from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column
from myblog.db.database import Base

MAX_NAME_LENGTH = 50

class Tag(Base):
    """Tag model"""
    __tablename__ = "tags"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(MAX_NAME_LENGTH), unique=True, nullable=False)  # tag name must be unique

    def __repr__(self):
        return f"<Tag(id={self.id}, name={self.name!r})>"
