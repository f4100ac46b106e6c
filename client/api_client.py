"""
HTTP client for the quote service API.
"""

from typing import Any, List, Optional

import requests
from pydantic import ValidationError as PydanticValidationError

from storage.models import Quote
from utils import APIError, ErrorCodes, client_logger, config_manager


class QuoteApiClient:
    """名言服务客户端"""

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None,
                 session: Optional[requests.Session] = None):
        client_config = config_manager.get_client_config()
        self.base_url = (base_url or client_config.api_base_url).rstrip("/")
        self.timeout = timeout or client_config.request_timeout
        self.session = session or requests.Session()
        self.session.headers.update({'Accept': 'application/json'})

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self):
        self.session.close()

    def _get(self, path: str) -> Optional[Any]:
        """GET 请求，404 返回 None"""
        url = f"{self.base_url}{path}"
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.Timeout as e:
            raise APIError(f"Request to {url} timed out", ErrorCodes.NETWORK_TIMEOUT) from e
        except requests.RequestException as e:
            raise APIError(f"Request to {url} failed: {e}", ErrorCodes.NETWORK_CONNECTION_ERROR) from e

        if response.status_code == 404:
            client_logger.debug(f"[Client] GET {path} -> 404")
            return None
        if not response.ok:
            raise APIError(
                f"GET {path} returned {response.status_code}",
                ErrorCodes.NETWORK_BAD_RESPONSE,
                context={"url": url},
                status_code=response.status_code
            )

        try:
            return response.json()
        except ValueError as e:
            raise APIError(f"GET {path} returned invalid JSON", ErrorCodes.NETWORK_BAD_RESPONSE) from e

    def _parse_quote(self, data: Any) -> Quote:
        try:
            return Quote.model_validate(data)
        except PydanticValidationError as e:
            raise APIError(f"Malformed quote payload: {e}", ErrorCodes.NETWORK_BAD_RESPONSE) from e

    def list_quotes(self) -> List[Quote]:
        """获取全部名言"""
        data = self._get("/api/quotes")
        if not isinstance(data, list):
            raise APIError("Quote list endpoint did not return a list", ErrorCodes.NETWORK_BAD_RESPONSE)
        quotes = [self._parse_quote(item) for item in data]
        client_logger.info(f"[Client] Loaded {len(quotes)} quotes from {self.base_url}")
        return quotes

    def random_quote(self) -> Optional[Quote]:
        """随机获取名言，目录为空时返回 None"""
        data = self._get("/api/quotes/random")
        return None if data is None else self._parse_quote(data)

    def get_quote(self, quote_id: int) -> Optional[Quote]:
        """根据ID获取名言，不存在时返回 None"""
        data = self._get(f"/api/quotes/{quote_id}")
        return None if data is None else self._parse_quote(data)
