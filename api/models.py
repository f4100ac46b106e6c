"""
API data models for the quote service.
Pydantic models for response validation.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class QuoteResponse(BaseModel):
    """名言响应模型"""
    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="名言ID", gt=0)
    text: str = Field(..., description="名言内容")
    author: str = Field(..., description="作者")
    category: Optional[str] = Field(None, description="分类")


class ErrorResponse(BaseModel):
    """错误响应模型"""
    detail: str = Field(..., description="错误信息")


class ServiceInfoResponse(BaseModel):
    """服务信息响应模型"""
    message: str
    version: str
    docs: str
    status: str


class HealthResponse(BaseModel):
    """健康检查响应模型"""
    status: str = Field(..., description="服务状态")
    timestamp: datetime = Field(..., description="检查时间")
    version: str = Field(..., description="版本")
    quotes_count: int = Field(..., description="名言数量", ge=0)
