from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column
from myblog.db.database import Base
from myblog.models.tag import MAX_NAME_LENGTH

class Category(Base):
    """Category model, referenced by posts through its name"""
    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(MAX_NAME_LENGTH), unique=True, nullable=False)

    def __repr__(self):
        return f"<Category(id={self.id}, name={self.name!r})>"
