"""
Middleware for the quote service API.
Provides CORS, request logging and error handling.
"""

import time
from typing import Callable, List
from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.middleware.cors import CORSMiddleware

from utils import api_logger, ErrorCodes


class LoggingMiddleware(BaseHTTPMiddleware):
    """日志中间件"""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.time()
        api_logger.debug(f"[API] {request.method} {request.url.path}")

        try:
            response = await call_next(request)
        except Exception as e:
            process_time = time.time() - start_time
            api_logger.error(f"[API] {request.method} {request.url.path} - ERROR - {process_time:.3f}s - {str(e)}")
            raise

        process_time = time.time() - start_time
        api_logger.info(f"[API] {request.method} {request.url.path} - {response.status_code} - {process_time:.3f}s")

        # 添加处理时间到响应头
        response.headers["X-Process-Time"] = f"{process_time:.6f}"
        return response


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """错误处理中间件，未捕获异常统一返回 500，不暴露内部细节"""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)
        except Exception as e:
            api_logger.error(f"[API] Unexpected error: {str(e)}", exc_info=True)
            return JSONResponse(
                status_code=500,
                content={
                    "detail": "Internal server error",
                    "error_code": ErrorCodes.QUOTE_STORAGE_FAILED,
                }
            )


def setup_cors(app, cors_origins: List[str]):
    """设置CORS"""
    if "*" in cors_origins:
        api_logger.warning("[CORS] Using wildcard origin is not recommended for production")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials="*" not in cors_origins,
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["*"],
    )


def setup_middleware(app, cors_origins: List[str]):
    """设置所有中间件"""
    setup_cors(app, cors_origins)

    # 后添加的中间件在外层
    app.add_middleware(ErrorHandlingMiddleware)
    app.add_middleware(LoggingMiddleware)

    api_logger.debug("[API] Middleware setup completed")
