from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, Generic, TypeVar

import httpx
from pydantic import BaseModel

from app.client.common import CONNECTION_ERROR, drop_empty, resolve_error_message
from app.config import Settings

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}

TokenProvider = Callable[[], str | None]


class ApiResponse(BaseModel, Generic[T]):
    """Uniform envelope returned by every client call. Callers branch on `success`."""

    success: bool
    data: T | None = None
    error: str | None = None
    status_code: int | None = None


def parse_response(response: httpx.Response, url: str | None = None) -> ApiResponse[Any]:
    content_type = response.headers.get("content-type", "")
    try:
        if not response.content:
            data: Any = None
        elif "application/json" in content_type:
            data = response.json()
        else:
            data = {"message": response.text}
    except ValueError:
        logger.warning(
            "Unparseable backend response",
            extra={"status_code": response.status_code, "url": url},
        )
        return ApiResponse(
            success=False,
            error=f"{CONNECTION_ERROR} (Status: {response.status_code})",
            status_code=response.status_code,
        )

    if response.is_success:
        return ApiResponse(success=True, data=data, status_code=response.status_code)

    error = resolve_error_message(data)
    logger.info(
        "Backend returned error response",
        extra={"status_code": response.status_code, "url": url, "error": error},
    )
    return ApiResponse(success=False, error=error, data=data, status_code=response.status_code)


class ApiClient:
    """Thin JSON client over the backend; never raises transport errors to callers."""

    def __init__(
        self,
        *,
        base_url: str,
        timeout_seconds: float = 10.0,
        token_provider: TokenProvider | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self._token_provider = token_provider
        self._transport = transport

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        *,
        token_provider: TokenProvider | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "ApiClient":
        return cls(
            base_url=settings.api_base_url,
            timeout_seconds=settings.api_timeout_seconds,
            token_provider=token_provider,
            transport=transport,
        )

    def build_url(self, endpoint: str) -> str:
        return f"{self.base_url}{endpoint}"

    def auth_headers(self) -> dict[str, str]:
        token = self._token_provider() if self._token_provider else None
        if not token:
            return {}
        return {"Authorization": f"Bearer {token}"}

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout_seconds, transport=self._transport)

    async def request(
        self,
        endpoint: str,
        *,
        method: str = "GET",
        params: dict[str, Any] | None = None,
        json_body: Any = None,
        headers: dict[str, str] | None = None,
        authenticated: bool = True,
    ) -> ApiResponse[Any]:
        merged_headers = {**DEFAULT_HEADERS}
        if authenticated:
            merged_headers.update(self.auth_headers())
        merged_headers.update(headers or {})

        url = self.build_url(endpoint)
        logger.debug("API request", extra={"method": method, "url": url})
        try:
            async with self._client() as client:
                response = await client.request(
                    method,
                    url,
                    params=drop_empty(params),
                    json=json_body,
                    headers=merged_headers,
                )
        except httpx.HTTPError as exc:
            logger.warning(
                "API request failed",
                extra={"method": method, "url": url, "error": str(exc)},
            )
            return ApiResponse(success=False, error=CONNECTION_ERROR)

        logger.debug("API response", extra={"method": method, "url": url, "status_code": response.status_code})
        return parse_response(response, url)

    async def fetch_raw(
        self,
        endpoint: str,
        *,
        params: dict[str, Any] | None = None,
    ) -> httpx.Response:
        """GET returning the raw response (binary downloads). Raises httpx.HTTPError."""
        async with self._client() as client:
            return await client.get(
                self.build_url(endpoint),
                params=drop_empty(params),
                headers=self.auth_headers(),
            )

    async def get(self, endpoint: str, **kwargs: Any) -> ApiResponse[Any]:
        return await self.request(endpoint, method="GET", **kwargs)

    async def post(self, endpoint: str, data: Any = None, **kwargs: Any) -> ApiResponse[Any]:
        return await self.request(endpoint, method="POST", json_body=data, **kwargs)

    async def put(self, endpoint: str, data: Any = None, **kwargs: Any) -> ApiResponse[Any]:
        return await self.request(endpoint, method="PUT", json_body=data, **kwargs)

    async def patch(self, endpoint: str, data: Any = None, **kwargs: Any) -> ApiResponse[Any]:
        return await self.request(endpoint, method="PATCH", json_body=data, **kwargs)

    async def delete(self, endpoint: str, **kwargs: Any) -> ApiResponse[Any]:
        return await self.request(endpoint, method="DELETE", **kwargs)
