"""
Quote presentation state for one client session.

Holds the catalog snapshot, the current quote and the view mode, and drives
favorite toggling, sharing and image export from the current quote.
"""

import random
from enum import Enum
from pathlib import Path
from typing import Iterable, List, Optional, Union

from storage.models import Quote
from utils import client_logger

from .favorites import FavoritesStore
from .image_export import QuoteImageRenderer
from .share import ShareResult, ShareService, ShareTarget

MAX_REDRAWS = 10


class SessionState(str, Enum):
    """会话状态"""
    NO_QUOTE_LOADED = "no_quote_loaded"
    QUOTE_DISPLAYED = "quote_displayed"


class ViewMode(str, Enum):
    """视图"""
    HOME = "home"
    FAVORITES = "favorites"


class QuotePresenter:
    """名言展示控制器"""

    def __init__(self, favorites: FavoritesStore,
                 sharer: Optional[ShareService] = None,
                 renderer: Optional[QuoteImageRenderer] = None,
                 rng: Optional[random.Random] = None):
        self.favorites = favorites
        self.sharer = sharer or ShareService()
        self._renderer = renderer
        self._rng = rng or random.Random()
        self._quotes: List[Quote] = []
        self._current: Optional[Quote] = None
        self._view = ViewMode.HOME

    @property
    def quotes(self) -> List[Quote]:
        return list(self._quotes)

    @property
    def current_quote(self) -> Optional[Quote]:
        return self._current

    @property
    def state(self) -> SessionState:
        if self._current is None:
            return SessionState.NO_QUOTE_LOADED
        return SessionState.QUOTE_DISPLAYED

    @property
    def view(self) -> ViewMode:
        return self._view

    @property
    def favorite_quotes(self) -> List[Quote]:
        return self.favorites.favorite_quotes

    @property
    def is_current_favorite(self) -> bool:
        return self._current is not None and self._current.id in self.favorites

    # === Catalog ===

    def load_catalog(self, quotes: Iterable[Quote]):
        """载入目录快照；首次载入时当前名言为第一条"""
        self._quotes = list(quotes)
        self.favorites.set_catalog(self._quotes)
        if self._current is None and self._quotes:
            self._current = self._quotes[0]
        client_logger.debug(f"[Presenter] Catalog loaded with {len(self._quotes)} quotes, state={self.state.value}")

    # === Navigation ===

    def show_home(self):
        self._view = ViewMode.HOME

    def show_favorites(self):
        self._view = ViewMode.FAVORITES

    # === Actions ===

    def generate_new_quote(self) -> Optional[Quote]:
        """随机切换到另一条名言；只有一条时保持不变，目录为空时不做任何事"""
        if not self._quotes:
            return None

        current_id = self._current.id if self._current is not None else None
        candidate = self._rng.choice(self._quotes)

        if len(self._quotes) > 1 and current_id is not None:
            redraws = 0
            while candidate.id == current_id and redraws < MAX_REDRAWS:
                candidate = self._rng.choice(self._quotes)
                redraws += 1
            if candidate.id == current_id:
                candidate = self._rng.choice([q for q in self._quotes if q.id != current_id])

        self._current = candidate
        return candidate

    def toggle_favorite(self) -> Optional[bool]:
        """切换当前名言的收藏状态，返回切换后是否已收藏"""
        if self._current is None:
            return None
        return self.favorites.toggle(self._current.id)

    def remove_favorite(self, quote_id: int) -> bool:
        """从收藏视图中移除指定名言"""
        return self.favorites.remove(quote_id)

    def share(self, target: Union[ShareTarget, str] = ShareTarget.NATIVE,
              quote: Optional[Quote] = None) -> Optional[ShareResult]:
        """分享指定名言，默认分享当前名言"""
        if quote is None:
            quote = self._current
        if quote is None:
            return None
        return self.sharer.share(quote, ShareTarget(target))

    def export_image(self, output_dir: Union[str, Path]) -> Optional[Path]:
        """导出当前名言图片"""
        if self._current is None:
            return None
        if self._renderer is None:
            self._renderer = QuoteImageRenderer()
        return self._renderer.export(self._current, output_dir)
