"""
统一的配置管理模块
合并 config/ 下全部 JSON 文件，并提供按配置节缓存的类型化访问
"""

import json
import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, TypeVar, Union

from .exceptions import ConfigurationError, ErrorCodes
from .path_utils import CONFIG_DIR

config_logger = logging.getLogger("Config")

T = TypeVar('T')

MERGED_CONFIG_NAME = "config.merged.json"


# ============================================================================
# 配置节
# ============================================================================

class SectionMixin:
    """从配置字典构建数据类，缺失的键使用默认值，未知键忽略"""

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]):
        if not isinstance(data, dict):
            return cls()
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})


@dataclass
class LoggingModuleConfig(SectionMixin):
    level: str = "INFO"
    enabled: bool = True


@dataclass
class FileLoggingConfig(SectionMixin):
    enabled: bool = True
    directory: str = "log"
    filename: str = "quotes.log"
    rotation: Optional[Dict[str, Any]] = None


@dataclass
class ConsoleLoggingConfig(SectionMixin):
    enabled: bool = True


@dataclass
class LoggingConfig:
    """logging_config 节"""
    level: str = "INFO"
    format: str = "[%(levelname)s][%(asctime)s][%(filename)s:%(lineno)d] - %(message)s"
    date_format: str = "%Y-%m-%d %H:%M:%S"
    file_config: FileLoggingConfig = field(default_factory=FileLoggingConfig)
    console_config: ConsoleLoggingConfig = field(default_factory=ConsoleLoggingConfig)
    modules: Dict[str, LoggingModuleConfig] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "LoggingConfig":
        data = data if isinstance(data, dict) else {}
        defaults = cls()
        return cls(
            level=data.get('level', defaults.level),
            format=data.get('format', defaults.format),
            date_format=data.get('date_format', defaults.date_format),
            file_config=FileLoggingConfig.from_dict(data.get('file_config')),
            console_config=ConsoleLoggingConfig.from_dict(data.get('console_config')),
            modules={name: LoggingModuleConfig.from_dict(module)
                     for name, module in (data.get('modules') or {}).items()}
        )


@dataclass
class ApiConfig(SectionMixin):
    """api_config 节"""
    host: str = "0.0.0.0"
    port: int = 8000
    workers: int = 1
    reload: bool = False
    cors_origins: List[str] = field(default_factory=lambda: ["http://localhost:3000"])

    def __post_init__(self):
        self.port = int(self.port)
        self.workers = int(self.workers)


@dataclass
class CatalogConfig(SectionMixin):
    """catalog_config 节"""
    seed_on_startup: bool = True


@dataclass
class ClientConfig(SectionMixin):
    """client_config 节"""
    api_base_url: str = "http://127.0.0.1:8000"
    request_timeout: float = 10.0
    favorites_file: str = "data/local_storage.json"
    favorites_key: str = "quote-favorites"
    export_dir: str = "exports"
    share_page_url: str = "http://localhost:3000/"

    def __post_init__(self):
        self.request_timeout = float(self.request_timeout)


# ============================================================================
# 配置管理器
# ============================================================================

class UnifiedConfigManager:
    """
    统一配置管理器

    按文件名顺序合并配置目录中的 ``*.json``（后加载的顶层键覆盖先加载的），
    ``config.merged.json`` 为 ``save_config`` 的输出，不参与合并。
    配置目录不存在时全部使用默认值。
    """

    def __init__(self, config_dir: Union[str, Path] = CONFIG_DIR):
        self._config_dir = Path(config_dir)
        self._config_data: Dict[str, Any] = {}
        self._typed_cache: Dict[str, Any] = {}
        self._load_config()

    @property
    def config_dir(self) -> Path:
        return self._config_dir

    def _load_config(self) -> None:
        self._typed_cache.clear()

        if not self._config_dir.is_dir():
            config_logger.warning(f"Configuration directory not found, using defaults: {self._config_dir}")
            self._config_data = {}
            return

        merged: Dict[str, Any] = {}
        config_files = [p for p in sorted(self._config_dir.glob('*.json')) if p.name != MERGED_CONFIG_NAME]
        for config_file in config_files:
            merged.update(self._read_file(config_file))
            config_logger.debug(f"Loaded and merged: {config_file.name}")

        self._config_data = merged
        config_logger.info(f"Configuration loaded from {len(config_files)} files in {self._config_dir}")

    @staticmethod
    def _read_file(config_file: Path) -> Dict[str, Any]:
        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(
                f"Invalid JSON in configuration file {config_file.name}: {e}",
                ErrorCodes.CONFIG_INVALID_FORMAT
            ) from e
        except OSError as e:
            raise ConfigurationError(
                f"Failed to read configuration file {config_file.name}: {e}",
                ErrorCodes.CONFIG_LOAD_ERROR
            ) from e

        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Configuration file {config_file.name} must contain a JSON object",
                ErrorCodes.CONFIG_INVALID_FORMAT
            )
        return data

    # === 原始访问 ===

    def get(self, key: str, default: Optional[T] = None) -> Optional[T]:
        return self._config_data.get(key, default)

    def get_nested(self, path: str, default: Optional[T] = None) -> Optional[T]:
        """点分隔路径访问，如 ``api_config.port``"""
        node: Any = self._config_data
        for key in path.split('.'):
            if not isinstance(node, dict) or key not in node:
                return default
            node = node[key]
        return node

    def __contains__(self, key: str) -> bool:
        return key in self._config_data

    def __getitem__(self, key: str) -> Any:
        return self._config_data[key]

    # === 类型化访问 ===

    def _section(self, name: str, parser: Callable[[Optional[Dict[str, Any]]], T], fallback: Callable[[], T]) -> T:
        if name not in self._typed_cache:
            try:
                self._typed_cache[name] = parser(self._config_data.get(name))
            except (AttributeError, TypeError, ValueError) as e:
                config_logger.error(f"Failed to parse {name}, using defaults: {e}")
                self._typed_cache[name] = fallback()
        return self._typed_cache[name]

    def get_logging_config(self) -> LoggingConfig:
        return self._section('logging_config', LoggingConfig.from_dict, LoggingConfig)

    def get_api_config(self) -> ApiConfig:
        return self._section('api_config', ApiConfig.from_dict, ApiConfig)

    def get_catalog_config(self) -> CatalogConfig:
        return self._section('catalog_config', CatalogConfig.from_dict, CatalogConfig)

    def get_client_config(self) -> ClientConfig:
        return self._section('client_config', ClientConfig.from_dict, ClientConfig)

    # === 其他 ===

    def save_config(self, file_path: Optional[str] = None) -> None:
        """写出合并后的配置，默认写到配置目录下的 config.merged.json"""
        save_path = Path(file_path) if file_path else self._config_dir / MERGED_CONFIG_NAME
        try:
            save_path.parent.mkdir(parents=True, exist_ok=True)
            with open(save_path, 'w', encoding='utf-8') as f:
                json.dump(self.to_dict(), f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise ConfigurationError(
                f"Failed to save configuration to {save_path}: {e}",
                ErrorCodes.CONFIG_SAVE_ERROR
            ) from e
        config_logger.info(f"Merged configuration saved to: {save_path}")

    def to_dict(self) -> Dict[str, Any]:
        return self._config_data.copy()

    def clear_cache(self) -> None:
        self._typed_cache.clear()


# 全局实例
config_manager = UnifiedConfigManager()
