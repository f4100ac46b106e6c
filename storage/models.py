"""
Data models for the quote catalog.
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


class QuoteCreate(BaseModel):
    """新增名言数据"""
    text: str = Field(..., min_length=1, description="名言内容")
    author: str = Field(..., min_length=1, description="作者")
    category: Optional[str] = Field(None, description="分类")

    @field_validator('text', 'author')
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value


class Quote(QuoteCreate):
    """名言，id 由目录分配"""
    model_config = ConfigDict(frozen=True)

    id: int = Field(..., gt=0, description="名言ID")


class UserCreate(BaseModel):
    """新增用户数据"""
    username: str = Field(..., min_length=1)
    password: str


class User(UserCreate):
    """用户"""
    model_config = ConfigDict(frozen=True)

    id: int = Field(..., gt=0)
