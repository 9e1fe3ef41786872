"""Shared async HTTP client for the storefront REST API."""
from typing import Any, Optional

import httpx

from storefront import config
from storefront.errors import ERROR_API_UNREACHABLE, ERROR_UNAUTHORIZED, StorefrontAPIError
from storefront.logging import get_logger, sanitize_string_for_logging

logger = get_logger(__name__)


class APIClient:
    """
    Thin JSON client. Responses shaped ``{"data": ...}`` are unwrapped;
    non-2xx responses and transport failures raise ``StorefrontAPIError``.
    """

    def __init__(self, base_url: str = config.STOREFRONT_API_URL, http_client: httpx.AsyncClient | None = None):
        self.base_url = base_url.rstrip("/")
        self._http_client = http_client

    async def _get_http_client(self) -> httpx.AsyncClient:
        """Lazy creation of shared httpx client with timeouts."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                timeout=httpx.Timeout(config.HTTP_TIMEOUT_SECONDS, connect=5.0),
                limits=httpx.Limits(max_connections=10, max_keepalive_connections=5),
            )
        return self._http_client

    async def close(self) -> None:
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None

    async def request(
        self,
        method: str,
        path: str,
        token: Optional[str] = None,
        params: Optional[dict] = None,
        json: Any = None,
    ) -> Any:
        headers = {"Content-Type": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"

        client = await self._get_http_client()
        url = f"{self.base_url}{path}"
        try:
            response = await client.request(method, url, headers=headers, params=params, json=json)
        except httpx.RequestError as e:
            logger.exception("Storefront API network error on %s %s", method, path)
            raise StorefrontAPIError(f"{ERROR_API_UNREACHABLE}: {e!s}")

        try:
            payload = response.json()
        except ValueError:
            payload = {}

        if response.is_error:
            if response.status_code == 401:
                raise StorefrontAPIError(ERROR_UNAUTHORIZED, status_code=401)
            message = payload.get("message") if isinstance(payload, dict) else None
            logger.warning(
                "Storefront API %s %s -> %s: %s",
                method,
                path,
                response.status_code,
                sanitize_string_for_logging(message),
            )
            raise StorefrontAPIError(message or response.reason_phrase, status_code=response.status_code)

        if isinstance(payload, dict) and payload.get("data"):
            return payload["data"]
        return payload

    async def get(self, path: str, token: Optional[str] = None, params: Optional[dict] = None) -> Any:
        return await self.request("GET", path, token=token, params=params)

    async def post(self, path: str, body: Any = None, token: Optional[str] = None) -> Any:
        return await self.request("POST", path, token=token, json=body)
