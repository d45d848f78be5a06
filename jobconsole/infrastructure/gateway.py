"""HTTP access to the remote job-import API."""
from __future__ import annotations

import logging
from typing import Any, Mapping
from urllib.parse import urlparse

import httpx

from jobconsole.core.errors import NetworkError, NotFound

logger = logging.getLogger(__name__)

NO_CACHE_HEADERS = {"Cache-Control": "no-cache, no-store", "Pragma": "no-cache"}


class RemoteGatewayClient:
    """Thin JSON client: typed verbs, query encoding and error translation.

    Holds no state besides the underlying connection pool, so concurrent
    calls from different views are safe.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 30.0,
        cookies: Mapping[str, str] | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        parsed = urlparse(base_url)
        if not parsed.scheme or not parsed.netloc:
            raise ValueError("base_url must include scheme and host")

        self._base_url = base_url.rstrip("/")
        self._client = http_client or httpx.AsyncClient(timeout=timeout, cookies=cookies)
        self._owns_client = http_client is None

    @property
    def base_url(self) -> str:
        return self._base_url

    # ------------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _clean_params(params: Mapping[str, Any] | None) -> dict[str, str]:
        if not params:
            return {}
        return {key: str(value) for key, value in params.items() if value is not None and value != ""}

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        body = response.text.strip()
        return body or response.reason_phrase or f"HTTP {response.status_code}"

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        body: Any = None,
    ) -> Any:
        headers = {"Content-Type": "application/json"}
        if method == "GET":
            headers.update(NO_CACHE_HEADERS)
        url = f"{self._base_url}{path}"

        try:
            response = await self._client.request(
                method,
                url,
                params=self._clean_params(params),
                json=body if method in {"POST", "PUT"} else None,
                headers=headers,
            )
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise NetworkError(f"Network request failed: {exc}") from exc

        if response.is_error:
            message = self._error_message(response)
            logger.warning("%s %s returned %s: %s", method, path, response.status_code, message)
            if response.status_code == 404:
                raise NotFound(message, status_code=404)
            raise NetworkError(message, status_code=response.status_code)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise NetworkError(f"{method} {path} returned invalid JSON") from exc

    # ------------------------------------------------------------------
    # public API
    # ------------------------------------------------------------------
    async def get(self, path: str, params: Mapping[str, Any] | None = None) -> Any:
        return await self._request("GET", path, params=params)

    async def post(self, path: str, body: Any = None) -> Any:
        return await self._request("POST", path, body=body)

    async def put(self, path: str, body: Any = None) -> Any:
        return await self._request("PUT", path, body=body)

    async def delete(self, path: str) -> Any:
        return await self._request("DELETE", path)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()


__all__ = ["RemoteGatewayClient"]
