"""
In-memory quote catalog.
Quotes and users live in insertion-ordered dicts keyed by auto-incrementing ids.
"""

from typing import Dict, List, Optional, Union

from utils import catalog_logger, log_execution

from .base import BaseStorage
from .models import Quote, QuoteCreate, User, UserCreate
from .seed import SAMPLE_QUOTES


class MemStorage(BaseStorage):
    """内存名言目录"""

    def __init__(self, seed: bool = False):
        self._users: Dict[int, User] = {}
        self._quotes: Dict[int, Quote] = {}
        self._next_user_id = 1
        self._next_quote_id = 1

        if seed:
            self.seed(SAMPLE_QUOTES)

    @log_execution("Catalog", "seed")
    def seed(self, quotes) -> List[Quote]:
        """同步写入初始名言，用于启动阶段"""
        created = [self._insert_quote(QuoteCreate.model_validate(q)) for q in quotes]
        catalog_logger.info(f"[Catalog] Seeded {len(created)} quotes")
        return created

    def _insert_quote(self, data: QuoteCreate) -> Quote:
        quote_id = self._next_quote_id
        self._next_quote_id += 1
        quote = Quote(id=quote_id, **data.model_dump())
        self._quotes[quote_id] = quote
        return quote

    # === User Operations ===

    async def get_user(self, user_id: int) -> Optional[User]:
        return self._users.get(user_id)

    async def get_user_by_username(self, username: str) -> Optional[User]:
        return next((u for u in self._users.values() if u.username == username), None)

    async def create_user(self, data: Union[UserCreate, dict]) -> User:
        if isinstance(data, dict):
            data = UserCreate.model_validate(data)
        user_id = self._next_user_id
        self._next_user_id += 1
        user = User(id=user_id, **data.model_dump())
        self._users[user_id] = user
        catalog_logger.debug(f"[Catalog] Created user {user_id}")
        return user

    # === Quote Operations ===

    async def list_quotes(self) -> List[Quote]:
        return list(self._quotes.values())

    async def get_quote_by_id(self, quote_id: int) -> Optional[Quote]:
        return self._quotes.get(quote_id)

    async def create_quote(self, data: Union[QuoteCreate, dict]) -> Quote:
        if isinstance(data, dict):
            data = QuoteCreate.model_validate(data)
        quote = self._insert_quote(data)
        catalog_logger.debug(f"[Catalog] Created quote {quote.id}")
        return quote

    async def count_quotes(self) -> int:
        return len(self._quotes)
