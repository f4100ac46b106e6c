"""
API routes for the quote service.
Read-only endpoints over the injected quote catalog.
"""

import random
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Request

from storage import BaseStorage
from utils import api_logger
from .models import QuoteResponse, ErrorResponse

router = APIRouter()

NOT_FOUND_RESPONSES = {404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}


def get_storage(request: Request) -> BaseStorage:
    """从应用状态获取名言目录"""
    return request.app.state.storage


def parse_quote_id(raw: str) -> Optional[int]:
    """解析路径中的名言ID，非十进制整数返回 None"""
    if not raw.isascii() or not raw.isdigit():
        return None
    return int(raw)


@router.get("/quotes", response_model=List[QuoteResponse], tags=["Quotes"],
            responses={500: {"model": ErrorResponse}})
async def get_quotes(storage: BaseStorage = Depends(get_storage)):
    """获取全部名言"""
    try:
        return await storage.list_quotes()
    except Exception:
        api_logger.exception("[API] Failed to fetch quotes")
        raise HTTPException(status_code=500, detail="Failed to fetch quotes")


# 必须在 /quotes/{quote_id} 之前注册
@router.get("/quotes/random", response_model=QuoteResponse, tags=["Quotes"],
            responses=NOT_FOUND_RESPONSES)
async def get_random_quote(storage: BaseStorage = Depends(get_storage)):
    """随机获取一条名言"""
    try:
        quotes = await storage.list_quotes()
    except Exception:
        api_logger.exception("[API] Failed to fetch random quote")
        raise HTTPException(status_code=500, detail="Failed to fetch random quote")

    if not quotes:
        raise HTTPException(status_code=404, detail="No quotes available")

    return random.choice(quotes)


@router.get("/quotes/{quote_id}", response_model=QuoteResponse, tags=["Quotes"],
            responses=NOT_FOUND_RESPONSES)
async def get_quote_by_id(quote_id: str, storage: BaseStorage = Depends(get_storage)):
    """根据ID获取名言"""
    parsed_id = parse_quote_id(quote_id)
    if parsed_id is None:
        api_logger.debug(f"[API] Invalid quote id: {quote_id!r}")
        raise HTTPException(status_code=404, detail="Quote not found")

    try:
        quote = await storage.get_quote_by_id(parsed_id)
    except Exception:
        api_logger.exception(f"[API] Failed to fetch quote {parsed_id}")
        raise HTTPException(status_code=500, detail="Failed to fetch quote")

    if quote is None:
        raise HTTPException(status_code=404, detail="Quote not found")

    return quote
