"""
统一的日志管理模块
根日志器的控制台/文件输出、模块级别、计时上下文与装饰器
"""

import asyncio
import functools
import logging
import sys
import threading
import time
import traceback
from collections import Counter
from dataclasses import dataclass
from logging.handlers import RotatingFileHandler, TimedRotatingFileHandler
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from .config_manager import config_manager, LoggingModuleConfig
from .exceptions import QuoteAppError, ErrorCodes
from .path_utils import LOG_DIR, resolve_path

logger = logging.getLogger("LoggingManager")

MB = 1024 * 1024


@dataclass
class LogConfig:
    """日志配置"""
    level: str = "INFO"
    format: str = "[%(levelname)s][%(asctime)s][%(filename)s:%(lineno)d] - %(message)s"
    date_format: str = "%Y-%m-%d %H:%M:%S"
    file_max_bytes: int = 10 * MB
    file_backup_count: int = 5
    enable_console: bool = True
    enable_file: bool = True
    log_directory: Optional[str] = None
    log_filename: str = "quotes.log"
    rotation_type: str = "size"  # "size" 或 "time"

    @property
    def log_path(self) -> Path:
        return Path(self.log_directory or LOG_DIR) / self.log_filename


def _level(name: str) -> int:
    return getattr(logging, name.upper(), logging.INFO)


class LoggingManager:
    """进程内唯一的日志管理器"""

    _instance = None
    _lock = threading.Lock()

    def __new__(cls):
        with cls._lock:
            if cls._instance is None:
                cls._instance = super().__new__(cls)
                cls._instance._setup()
        return cls._instance

    def _setup(self):
        self._config = LogConfig()
        self._loggers: Dict[str, logging.Logger] = {}
        self._metrics: Counter = Counter()

    @property
    def config(self) -> LogConfig:
        return self._config

    def configure(self, config: Optional[LogConfig] = None):
        """按配置重建根日志器的处理器"""
        if config is not None:
            self._config = config

        root_logger = logging.getLogger()
        root_logger.setLevel(_level(self._config.level))
        for handler in list(root_logger.handlers):
            root_logger.removeHandler(handler)
            handler.close()

        for handler in self._build_handlers():
            root_logger.addHandler(handler)

    def _build_handlers(self) -> List[logging.Handler]:
        formatter = logging.Formatter(self._config.format, datefmt=self._config.date_format)
        handlers: List[logging.Handler] = []

        if self._config.enable_console:
            handlers.append(logging.StreamHandler(sys.stdout))

        if self._config.enable_file:
            log_path = self._config.log_path
            log_path.parent.mkdir(parents=True, exist_ok=True)
            if self._config.rotation_type == "time":
                handlers.append(TimedRotatingFileHandler(
                    log_path, when="midnight", backupCount=self._config.file_backup_count, encoding="utf-8"
                ))
            else:
                handlers.append(RotatingFileHandler(
                    log_path, maxBytes=self._config.file_max_bytes,
                    backupCount=self._config.file_backup_count, encoding="utf-8"
                ))

        for handler in handlers:
            handler.setFormatter(formatter)
        return handlers

    def configure_from_config_file(self):
        """从 logging_config 配置节加载"""
        try:
            logging_config = config_manager.get_logging_config()
            file_config = logging_config.file_config
            rotation = file_config.rotation or {}

            self.configure(LogConfig(
                level=logging_config.level,
                format=logging_config.format,
                date_format=logging_config.date_format,
                file_max_bytes=int(rotation.get('max_bytes_mb', 10) * MB),
                file_backup_count=rotation.get('backup_count', 5),
                enable_console=logging_config.console_config.enabled,
                enable_file=file_config.enabled,
                log_directory=str(resolve_path(file_config.directory)),
                log_filename=file_config.filename,
                rotation_type=rotation.get('type', 'size')
            ))
            self._apply_module_levels(logging_config.modules)
            return logging_config

        except Exception as e:
            raise QuoteAppError(
                f"Failed to configure logging from config file: {e}",
                ErrorCodes.CONFIG_INVALID_FORMAT
            ) from e

    def _apply_module_levels(self, modules: Dict[str, LoggingModuleConfig]):
        for module_name, module_config in modules.items():
            # 禁用的模块只保留严重错误
            level = _level(module_config.level) if module_config.enabled else logging.CRITICAL
            self.get_logger(module_name).setLevel(level)

    def get_logger(self, name: Optional[str] = None) -> logging.Logger:
        """获取（并缓存）命名日志器"""
        name = name or "quoteapp"
        if name not in self._loggers:
            self._loggers[name] = logging.getLogger(name)
        return self._loggers[name]

    def set_level(self, level: str, logger_name: Optional[str] = None):
        target = self.get_logger(logger_name) if logger_name else logging.getLogger()
        target.setLevel(_level(level))

    def count(self, key: str):
        self._metrics[key] += 1

    def get_metrics(self) -> Dict[str, int]:
        """操作计数：<上下文>_started / _completed / _failed"""
        return dict(self._metrics)

    def reset_metrics(self):
        self._metrics.clear()


class LogContext:
    """
    计时日志上下文

    进入时记录 debug，正常退出记录耗时，异常退出记录错误及堆栈（异常继续抛出）。
    上下文字符串形如 ``Export.export_image.ID:3``。
    """

    def __init__(self, module: str, operation: Optional[str] = None,
                 quote_id: Optional[int] = None,
                 extra_context: Optional[Dict[str, Any]] = None):
        parts = [module]
        if operation:
            parts.append(operation)
        if quote_id is not None:
            parts.append(f"ID:{quote_id}")
        parts.extend(f"{k}:{v}" for k, v in (extra_context or {}).items() if not k.startswith('_'))

        self.context = ".".join(parts)
        self.logger = logging_manager.get_logger(module)
        self.start_time = 0.0

    def __enter__(self):
        self.start_time = time.perf_counter()
        self.logger.debug(f"[{self.context}] Starting operation")
        logging_manager.count(f"{self.context}_started")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        duration = time.perf_counter() - self.start_time
        if exc_type is None:
            self.logger.info(f"[{self.context}] Operation completed in {duration:.3f}s")
            logging_manager.count(f"{self.context}_completed")
        else:
            self.logger.error(f"[{self.context}] Operation failed in {duration:.3f}s: {exc_val}")
            self.logger.debug(f"[{self.context}] Traceback: {''.join(traceback.format_tb(exc_tb))}")
            logging_manager.count(f"{self.context}_failed")
        return False


def log_execution(module: str, operation: Optional[str] = None):
    """以 LogContext 包裹函数调用，支持同步与异步函数"""
    def decorator(func: Callable) -> Callable:
        name = operation or func.__name__

        if asyncio.iscoroutinefunction(func):
            @functools.wraps(func)
            async def async_wrapper(*args, **kwargs):
                with LogContext(module, name):
                    return await func(*args, **kwargs)
            return async_wrapper

        @functools.wraps(func)
        def sync_wrapper(*args, **kwargs):
            with LogContext(module, name):
                return func(*args, **kwargs)
        return sync_wrapper

    return decorator


# 全局日志管理器实例
logging_manager = LoggingManager()


class ModuleLoggers:
    """模块专用日志器"""

    API = logging_manager.get_logger("API")
    Catalog = logging_manager.get_logger("Catalog")
    Client = logging_manager.get_logger("Client")
    Export = logging_manager.get_logger("Export")
    Config = logging_manager.get_logger("Config")
    Main = logging_manager.get_logger("Main")

    @classmethod
    def get_logger(cls, module_name: str) -> logging.Logger:
        return logging_manager.get_logger(module_name)


api_logger = ModuleLoggers.API
catalog_logger = ModuleLoggers.Catalog
client_logger = ModuleLoggers.Client
export_logger = ModuleLoggers.Export
config_logger = ModuleLoggers.Config
main_logger = ModuleLoggers.Main


def initialize_logging(use_config_file: bool = True) -> bool:
    """初始化日志系统，配置文件不可用时退回仅控制台输出"""
    try:
        if use_config_file:
            logging_manager.configure_from_config_file()
        else:
            logging_manager.configure()
        logger.debug("Logging system initialized")
        return True

    except QuoteAppError as e:
        print(f"Failed to initialize logging from config file: {e}", file=sys.stderr)
        logging_manager.configure(LogConfig(enable_file=False))
        logger.warning("Logging system initialized with fallback config")
        return False


# 导入时按配置文件初始化
initialize_logging(use_config_file=True)
