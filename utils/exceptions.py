"""
统一异常定义模块
提供项目特定的异常类和错误处理机制
"""

from typing import Optional, Dict, Any


class QuoteAppError(Exception):
    """名言应用基础异常类"""

    def __init__(self, message: str, error_code: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.context = context or {}

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"


class ConfigurationError(QuoteAppError):
    """配置相关错误"""
    pass


class NotFoundError(QuoteAppError):
    """名言不存在"""
    pass


class PersistenceError(QuoteAppError):
    """本地收藏存储错误"""
    pass


class ExportError(QuoteAppError):
    """图片导出错误"""
    pass


class APIError(QuoteAppError):
    """API相关错误"""

    def __init__(self, message: str, error_code: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None,
                 status_code: Optional[int] = None):
        super().__init__(message, error_code, context)
        self.status_code = status_code


# 错误代码常量
class ErrorCodes:
    """错误代码常量"""

    # 配置错误
    CONFIG_INVALID_FORMAT = "CONFIG_002"
    CONFIG_LOAD_ERROR = "CONFIG_003"
    CONFIG_SAVE_ERROR = "CONFIG_004"

    # 名言目录错误
    QUOTE_NOT_FOUND = "QUOTE_001"
    QUOTE_STORAGE_FAILED = "QUOTE_004"

    # 收藏存储错误
    FAVORITES_LOAD_FAILED = "FAV_001"
    FAVORITES_SAVE_FAILED = "FAV_002"

    # 导出错误
    EXPORT_RENDER_FAILED = "EXPORT_002"

    # 网络错误
    NETWORK_TIMEOUT = "NET_001"
    NETWORK_CONNECTION_ERROR = "NET_002"
    NETWORK_BAD_RESPONSE = "NET_003"

