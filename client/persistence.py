"""
Client-side persistence for favorite quote ids.

``KeyValueStore`` plays the role of browser local storage: a JSON file holding
string values under string keys. ``FavoritesPersistence`` is the port the
favorites store depends on, with a local-storage backed implementation and a
session-only one.
"""

import json
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

from utils import ErrorCodes, PersistenceError, client_logger

FAVORITES_KEY = "quote-favorites"


class KeyValueStore:
    """文件型键值存储，语义同浏览器 localStorage"""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def _read_all(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise PersistenceError(
                f"Failed to read storage file {self.path}: {e}",
                ErrorCodes.FAVORITES_LOAD_FAILED
            ) from e
        if not isinstance(data, dict):
            raise PersistenceError(
                f"Storage file {self.path} does not hold an object",
                ErrorCodes.FAVORITES_LOAD_FAILED
            )
        return data

    def get_item(self, key: str) -> Optional[str]:
        """读取键值，不存在时返回 None"""
        value = self._read_all().get(key)
        return value if isinstance(value, str) else None

    def set_item(self, key: str, value: str) -> None:
        """写入键值"""
        try:
            data = self._read_all()
        except PersistenceError:
            # 文件损坏时整体覆盖
            data = {}
        data[key] = value
        self._write_all(data)

    def remove_item(self, key: str) -> None:
        """删除键值"""
        data = self._read_all()
        if key in data:
            del data[key]
            self._write_all(data)

    def _write_all(self, data: Dict[str, str]) -> None:
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, 'w', encoding='utf-8') as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, self.path)
        except OSError as e:
            raise PersistenceError(
                f"Failed to write storage file {self.path}: {e}",
                ErrorCodes.FAVORITES_SAVE_FAILED
            ) from e


def _unique_ids(ids: Iterable) -> List[int]:
    """保持顺序去重，丢弃非整数"""
    result = []
    for value in ids:
        if isinstance(value, bool) or not isinstance(value, int):
            continue
        if value not in result:
            result.append(value)
    return result


class FavoritesPersistence(ABC):
    """收藏ID持久化接口"""

    @abstractmethod
    def load(self) -> List[int]:
        """读取收藏ID（有序、无重复）"""

    @abstractmethod
    def save(self, ids: Iterable[int]) -> bool:
        """保存收藏ID，失败返回 False"""


class LocalStoragePersistence(FavoritesPersistence):
    """以 JSON 整数数组保存在固定键下"""

    def __init__(self, store: KeyValueStore, key: str = FAVORITES_KEY):
        self.store = store
        self.key = key

    def load(self) -> List[int]:
        try:
            raw = self.store.get_item(self.key)
            if raw is None:
                return []
            ids = json.loads(raw)
        except (PersistenceError, ValueError) as e:
            client_logger.warning(f"[Favorites] Failed to load favorites, starting empty: {e}")
            return []

        if not isinstance(ids, list):
            client_logger.warning(f"[Favorites] Stored favorites under '{self.key}' is not a list")
            return []
        return _unique_ids(ids)

    def save(self, ids: Iterable[int]) -> bool:
        try:
            self.store.set_item(self.key, json.dumps(_unique_ids(ids)))
            return True
        except PersistenceError as e:
            client_logger.warning(f"[Favorites] Failed to persist favorites, keeping them for this session only: {e}")
            return False


class MemoryPersistence(FavoritesPersistence):
    """仅在会话内保存"""

    def __init__(self, ids: Iterable[int] = ()):
        self._ids = _unique_ids(ids)

    def load(self) -> List[int]:
        return list(self._ids)

    def save(self, ids: Iterable[int]) -> bool:
        self._ids = _unique_ids(ids)
        return True
