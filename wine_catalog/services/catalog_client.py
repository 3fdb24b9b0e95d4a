"""
Wine Catalog API Client

Async HTTP client for the wine catalog backend. Uses httpx for requests and
tenacity to retry connection failures with exponential backoff.

Endpoints:
    GET  /wines?page={n}
    GET  /wines/search?keyword={q}&page={n}
    GET  /wines/filter-options
    POST /wines/filter
    POST /wines/compare
"""

from typing import Any, Dict, Optional, Sequence, Type, TypeVar

import httpx
import structlog
from pydantic import BaseModel, ValidationError
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from wine_catalog.config import settings
from wine_catalog.errors import (
    CatalogClientError,
    CatalogHTTPError,
    CatalogResponseError,
    CatalogTransportError,
)
from wine_catalog.models import FilterOptionsCatalog, PageResult, SparseFilterRequest

logger = structlog.get_logger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

_RETRYABLE = (httpx.ConnectError, httpx.ConnectTimeout)


class CatalogClient:
    """
    Async HTTP client for the wine catalog API.

    Features:
    - Page, search, filter-options, filter and compare endpoints
    - Response payloads validated into pydantic models
    - Exponential backoff on connection errors

    Usage:
        async with CatalogClient() as client:
            page = await client.get_wines_page(1)
            options = await client.get_filter_options()
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        max_retries: Optional[int] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize catalog client.

        Args:
            base_url: Catalog API URL (defaults to config)
            timeout: Read timeout in seconds (defaults to config)
            max_retries: Attempts on connection errors (defaults to config)
            transport: Custom httpx transport, mainly for tests
        """
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self.timeout = httpx.Timeout(
            connect=5.0,
            read=timeout or settings.request_timeout,
            write=5.0,
            pool=5.0,
        )
        self.max_retries = max_retries or settings.max_retries
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None
        self._log = logger.bind(service="wine-catalog", base_url=self.base_url)

    async def __aenter__(self) -> "CatalogClient":
        """Context manager entry - create async client."""
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=self._transport,
            headers={
                "Content-Type": "application/json",
                "User-Agent": "wine-catalog/0.1",
            },
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit - close async client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    @property
    def client(self) -> httpx.AsyncClient:
        """Get the HTTP client, raising if not initialized."""
        if self._client is None:
            raise CatalogClientError(
                "CatalogClient not initialized. Use 'async with CatalogClient() as client:'"
            )
        return self._client

    async def _send(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.max_retries),
            wait=wait_exponential(multiplier=1, min=1, max=10),
            retry=retry_if_exception_type(_RETRYABLE),
            reraise=True,
        )
        try:
            async for attempt in retrying:
                with attempt:
                    return await self.client.request(method, path, **kwargs)
        except httpx.TimeoutException as e:
            self._log.error("request_timeout", method=method, path=path, error=str(e))
            raise CatalogTransportError(f"Catalog API timeout: {e}") from e
        except httpx.TransportError as e:
            self._log.error("request_transport_error", method=method, path=path, error=str(e))
            raise CatalogTransportError(f"Failed to reach catalog API: {e}") from e

    async def _request(
        self,
        method: str,
        path: str,
        model: Type[ModelT],
        **kwargs: Any,
    ) -> ModelT:
        """Send a request and parse the JSON body into ``model``.

        Raises:
            CatalogTransportError: If the API is unreachable or times out
            CatalogHTTPError: On non-2xx responses
            CatalogResponseError: If the body does not match ``model``
        """
        response = await self._send(method, path, **kwargs)

        if not response.is_success:
            self._log.warning(
                "request_failed",
                method=method,
                path=path,
                status_code=response.status_code,
                body=response.text[:200],
            )
            raise CatalogHTTPError(
                f"Unexpected response: HTTP {response.status_code} - {response.text[:200]}",
                status_code=response.status_code,
            )

        try:
            return model.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            self._log.error("response_invalid", method=method, path=path, error=str(e))
            raise CatalogResponseError(f"Malformed response from {path}: {e}") from e

    async def get_wines_page(self, page: int = 1) -> PageResult:
        """Fetch one page of the full catalog."""
        self._log.debug("get_wines_page", page=page)
        return await self._request(
            "GET",
            "/wines",
            PageResult,
            params={"page": page, "per_page": settings.per_page},
        )

    async def search(self, keyword: str, page: int = 1) -> PageResult:
        """
        Server-side keyword search.

        A blank keyword returns an empty page without touching the network.
        """
        keyword = keyword.strip()
        if not keyword:
            return PageResult.empty()
        self._log.debug("search", keyword=keyword, page=page)
        return await self._request(
            "GET",
            "/wines/search",
            PageResult,
            params={"keyword": keyword, "page": page},
        )

    async def get_filter_options(self) -> FilterOptionsCatalog:
        """Fetch the distinct categorical values present in the dataset."""
        return await self._request("GET", "/wines/filter-options", FilterOptionsCatalog)

    async def filter_wines(self, request: SparseFilterRequest) -> PageResult:
        """Fetch one page of server-filtered records."""
        payload: Dict[str, Any] = request.to_payload()
        self._log.debug("filter_wines", payload=payload)
        return await self._request("POST", "/wines/filter", PageResult, json=payload)

    async def compare(self, ids: Sequence[str]) -> PageResult:
        """Fetch the records with the given ids."""
        return await self._request(
            "POST",
            "/wines/compare",
            PageResult,
            json={"ids": list(ids)},
        )
