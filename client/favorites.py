"""
Favorites store: the persisted favorite ids joined against the catalog.
"""

from typing import Iterable, List

from storage.models import Quote
from utils import client_logger

from .persistence import FavoritesPersistence


class FavoritesStore:
    """收藏集合及派生的收藏名言视图"""

    def __init__(self, persistence: FavoritesPersistence):
        self._persistence = persistence
        self._ids: List[int] = persistence.load()
        self._catalog: List[Quote] = []
        self._favorite_quotes: List[Quote] = []
        # 持久化失败后只在本次会话内保留
        self.session_only = False

    @property
    def ids(self) -> List[int]:
        return list(self._ids)

    @property
    def favorite_quotes(self) -> List[Quote]:
        return list(self._favorite_quotes)

    def __contains__(self, quote_id: int) -> bool:
        return quote_id in self._ids

    def __len__(self) -> int:
        return len(self._ids)

    def set_catalog(self, quotes: Iterable[Quote]):
        """目录变化时重新计算收藏视图"""
        self._catalog = list(quotes)
        self._refresh()

    def add(self, quote_id: int) -> bool:
        """加入收藏，已存在返回 False"""
        if quote_id in self._ids:
            return False
        self._ids.append(quote_id)
        self._commit()
        return True

    def remove(self, quote_id: int) -> bool:
        """移除收藏，不存在返回 False"""
        if quote_id not in self._ids:
            return False
        self._ids.remove(quote_id)
        self._commit()
        return True

    def toggle(self, quote_id: int) -> bool:
        """切换收藏状态，返回切换后是否已收藏"""
        if quote_id in self._ids:
            self.remove(quote_id)
            return False
        self.add(quote_id)
        return True

    def _commit(self):
        if not self._persistence.save(self._ids):
            self.session_only = True
        self._refresh()

    def _refresh(self):
        # 目录中已不存在的ID只从视图中消失，仍保留在持久化集合里
        self._favorite_quotes = [q for q in self._catalog if q.id in self._ids]
        client_logger.debug(
            f"[Favorites] {len(self._favorite_quotes)} of {len(self._ids)} favorites present in catalog"
        )
