"""
Base storage interface for the quote catalog.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from .models import Quote, QuoteCreate, User, UserCreate


class BaseStorage(ABC):
    """名言目录存储接口"""

    @abstractmethod
    async def get_user(self, user_id: int) -> Optional[User]:
        """根据ID获取用户"""

    @abstractmethod
    async def get_user_by_username(self, username: str) -> Optional[User]:
        """根据用户名获取用户"""

    @abstractmethod
    async def create_user(self, data: UserCreate) -> User:
        """创建用户"""

    @abstractmethod
    async def list_quotes(self) -> List[Quote]:
        """按插入顺序返回全部名言"""

    @abstractmethod
    async def get_quote_by_id(self, quote_id: int) -> Optional[Quote]:
        """根据ID获取名言，不存在时返回 None"""

    @abstractmethod
    async def create_quote(self, data: QuoteCreate) -> Quote:
        """分配新ID并保存名言"""

    async def count_quotes(self) -> int:
        """名言数量"""
        return len(await self.list_quotes())
