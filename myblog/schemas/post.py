from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from datetime import datetime, UTC
from typing import Annotated, Optional, List
from myblog.models.post import Post, MAX_CONTENT_LENGTH, MAX_TITLE_LENGTH
from myblog.models.tag import MAX_NAME_LENGTH

TagName = Annotated[str, Field(min_length=1, max_length=MAX_NAME_LENGTH)]

class PostCreate(BaseModel):
    """创建文章请求模型"""
    model_config = ConfigDict(extra="forbid")

    title: str = Field(..., min_length=1, max_length=MAX_TITLE_LENGTH)
    content: str = Field(..., min_length=1, max_length=MAX_CONTENT_LENGTH)
    category: Optional[str] = Field(default=None, max_length=MAX_NAME_LENGTH, description="分类名称")
    tags: List[TagName] = Field(default_factory=list, description="标签名称列表")

class PostUpdate(BaseModel):
    """更新文章请求模型

    Omitted or empty fields keep their stored value.
    """
    model_config = ConfigDict(extra="forbid")

    title: Optional[str] = Field(default=None, max_length=MAX_TITLE_LENGTH)
    content: Optional[str] = Field(default=None, max_length=MAX_CONTENT_LENGTH)
    category: Optional[str] = Field(default=None, max_length=MAX_NAME_LENGTH)
    tags: Optional[List[TagName]] = Field(default=None, description="追加的标签名称")

class PostResponse(BaseModel):
    """文章响应模型"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int
    title: str
    content: str
    category: str = ""
    tags: List[str] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_post(cls, post: Post) -> "PostResponse":
        # stored naive, always UTC
        return cls(
            id=post.id,
            title=post.title,
            content=post.content,
            category=post.category_name or "",
            tags=[tag.name for tag in post.tags],
            created_at=post.created_at.replace(tzinfo=UTC),
            updated_at=post.updated_at.replace(tzinfo=UTC),
        )
