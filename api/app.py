"""
FastAPI application for the quote service.
Builds the app around an explicitly constructed quote catalog.
"""

from contextlib import asynccontextmanager
from datetime import datetime
from typing import Optional

import uvicorn
from fastapi import FastAPI

from storage import BaseStorage, MemStorage
from utils import api_logger, config_manager, __version__

from .models import ServiceInfoResponse, HealthResponse
from .routes import router
from .middleware import setup_middleware


@asynccontextmanager
async def lifespan(app: FastAPI):
    """应用生命周期管理"""
    count = await app.state.storage.count_quotes()
    api_logger.info(f"[API] Starting Quote API with {count} quotes in catalog")

    yield

    api_logger.info("[API] Shutting down Quote API...")


def create_app(storage: Optional[BaseStorage] = None) -> FastAPI:
    """创建FastAPI应用，未传入目录时创建新的内存目录"""
    if storage is None:
        storage = MemStorage(seed=config_manager.get_catalog_config().seed_on_startup)

    app = FastAPI(
        title="Quote API",
        description="Read-only catalog of inspirational quotes",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan
    )
    app.state.storage = storage

    setup_middleware(app, config_manager.get_api_config().cors_origins)
    app.include_router(router, prefix="/api")

    @app.get("/", response_model=ServiceInfoResponse, tags=["System"])
    async def root():
        """根路径"""
        return {
            "message": "Quote API",
            "version": __version__,
            "docs": "/docs",
            "status": "running"
        }

    @app.get("/health", response_model=HealthResponse, tags=["System"])
    async def health_check():
        """健康检查端点"""
        return {
            "status": "healthy",
            "timestamp": datetime.now(),
            "version": __version__,
            "quotes_count": await app.state.storage.count_quotes()
        }

    return app


app = create_app()


if __name__ == "__main__":
    api_config = config_manager.get_api_config()
    api_logger.info(f"[API] Starting server on {api_config.host}:{api_config.port}")

    if api_config.reload:
        uvicorn.run("api.app:app", host=api_config.host, port=api_config.port,
                    reload=True, log_level="info")
    else:
        uvicorn.run(app, host=api_config.host, port=api_config.port,
                    workers=api_config.workers, log_level="info")
