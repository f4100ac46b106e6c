"""
Client-side components of the quote app: API client, favorites, presentation,
sharing and image export.
"""

from .api_client import QuoteApiClient
from .favorites import FavoritesStore
from .image_export import QuoteImageRenderer, wrap_words
from .persistence import (
    FAVORITES_KEY,
    FavoritesPersistence,
    KeyValueStore,
    LocalStoragePersistence,
    MemoryPersistence
)
from .presentation import QuotePresenter, SessionState, ViewMode
from .share import ShareResult, ShareService, ShareTarget, format_share_text

__all__ = [
    'QuoteApiClient',
    'FavoritesStore',
    'QuoteImageRenderer',
    'wrap_words',
    'FAVORITES_KEY',
    'FavoritesPersistence',
    'KeyValueStore',
    'LocalStoragePersistence',
    'MemoryPersistence',
    'QuotePresenter',
    'SessionState',
    'ViewMode',
    'ShareResult',
    'ShareService',
    'ShareTarget',
    'format_share_text',
]
