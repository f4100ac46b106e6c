"""
工具模块包
提供项目所需的通用工具和功能
"""

# 导出核心工具
from .config_manager import (
    config_manager,
    UnifiedConfigManager,
    LoggingConfig,
    ApiConfig,
    CatalogConfig,
    ClientConfig
)
from .exceptions import (
    QuoteAppError,
    ConfigurationError,
    NotFoundError,
    PersistenceError,
    ExportError,
    APIError,
    ErrorCodes
)
from .logging_manager import (
    LogConfig,
    LogContext,
    log_execution,
    logging_manager,
    initialize_logging,
    ModuleLoggers,
    api_logger,
    catalog_logger,
    client_logger,
    export_logger,
    config_logger,
    main_logger
)
from .path_utils import BASE_DIR, CONFIG_DIR, LOG_DIR, DATA_DIR, EXPORT_DIR, resolve_path

# 版本信息
__version__ = "1.0.0"

__all__ = [
    # 配置管理
    "config_manager",
    "UnifiedConfigManager",
    "LoggingConfig",
    "ApiConfig",
    "CatalogConfig",
    "ClientConfig",

    # 异常处理
    "QuoteAppError",
    "ConfigurationError",
    "NotFoundError",
    "PersistenceError",
    "ExportError",
    "APIError",
    "ErrorCodes",

    # 日志工具
    "LogConfig",
    "LogContext",
    "log_execution",
    "logging_manager",
    "initialize_logging",
    "ModuleLoggers",
    "api_logger",
    "catalog_logger",
    "client_logger",
    "export_logger",
    "config_logger",
    "main_logger",

    # 路径工具
    "BASE_DIR",
    "CONFIG_DIR",
    "LOG_DIR",
    "DATA_DIR",
    "EXPORT_DIR",
    "resolve_path",
]
