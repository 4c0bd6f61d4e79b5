"""Async HTTP client for the SK Win backend.

Wraps httpx.AsyncClient and maps every outcome onto the error taxonomy:
  - 2xx JSON body            → returned as parsed JSON
  - non-2xx JSON body        → RemoteRejectionError(body.message or body.error)
  - network error / timeout  → TransportError (generic retry message)
  - non-JSON body            → TransportError

Single attempt per call; retries are the caller's decision.

Log format:
    INFO [POST] /wallet/topup → 200 (23ms)
"""

import logging
import time
from collections.abc import Callable
from typing import Any

import httpx

from src.sk_common.errors import RemoteRejectionError, TransportError

logger = logging.getLogger("sk.request")

TokenProvider = Callable[[], str | None]


class ApiClient:
    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        token_provider: TokenProvider | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._token_provider = token_provider
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            transport=transport,
            headers={"Content-Type": "application/json"},
        )

    def set_token_provider(self, provider: TokenProvider | None) -> None:
        self._token_provider = provider

    async def get(self, path: str) -> Any:
        return await self.request("GET", path)

    async def post(self, path: str, body: dict[str, Any] | None = None) -> Any:
        return await self.request("POST", path, body)

    async def put(self, path: str, body: dict[str, Any] | None = None) -> Any:
        return await self.request("PUT", path, body)

    async def request(self, method: str, path: str, body: dict[str, Any] | None = None) -> Any:
        headers: dict[str, str] = {}
        token = self._token_provider() if self._token_provider else None
        if token:
            headers["Authorization"] = f"Bearer {token}"

        start = time.perf_counter()
        try:
            response = await self._client.request(method, path, json=body, headers=headers)
        except httpx.HTTPError as exc:
            logger.warning("[%s] %s failed: %s: %s", method, path, type(exc).__name__, exc)
            raise TransportError(f"{type(exc).__name__}: {exc}") from exc
        elapsed_ms = (time.perf_counter() - start) * 1000

        logger.info(
            "[%s] %s → %d (%.0fms)",
            method,
            path,
            response.status_code,
            elapsed_ms,
        )

        content_type = response.headers.get("content-type", "")
        if "application/json" not in content_type:
            raise TransportError(
                f"Server returned {content_type or 'non-JSON'} response for {method} {path}"
            )
        try:
            data = response.json()
        except ValueError as exc:
            raise TransportError(f"Malformed JSON from {method} {path}: {exc}") from exc

        if not response.is_success:
            raise RemoteRejectionError(_error_message(data), response.status_code)
        return data

    async def aclose(self) -> None:
        await self._client.aclose()


def _error_message(data: Any) -> str:
    """Pick the server-supplied message the way the app always has."""
    if isinstance(data, dict):
        message = data.get("message") or data.get("error")
        if isinstance(message, str) and message:
            return message
    return "API Error"
