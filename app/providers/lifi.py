"""Async client for the LI.FI public swap API."""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

import httpx
import structlog

from ..config import settings
from ..core.swap.errors import UpstreamError, UpstreamTimeout

logger = structlog.stdlib.get_logger("providers.lifi")


class LifiProvider:
    """Thin wrapper around the LI.FI ``/quote`` and ``/status`` endpoints.

    A quote that comes back non-2xx raises ``UpstreamError`` carrying the
    upstream status and raw body. Status replies are relayed as parsed JSON
    whatever their HTTP status. A request that exceeds the timeout raises
    ``UpstreamTimeout``.
    """

    def __init__(
        self,
        *,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout_s: Optional[float] = None,
    ) -> None:
        self.base_url = (base_url or settings.lifi_base_url).rstrip("/")
        self.api_key = api_key if api_key is not None else settings.lifi_api_key
        self.timeout_s = timeout_s if timeout_s is not None else settings.lifi_timeout_seconds

    def _headers(self) -> Dict[str, str]:
        headers = {"accept": "application/json"}
        if self.api_key and self.api_key.strip():
            headers["x-lifi-api-key"] = self.api_key.strip()
        return headers

    async def _get(self, operation: str, path: str, params: Mapping[str, Any]) -> httpx.Response:
        cleaned = {k: v for k, v in params.items() if v is not None}
        logger.info("lifi_request", operation=operation, params=cleaned)

        try:
            async with httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout_s) as client:
                response = await client.get(path, params=cleaned, headers=self._headers())
        except httpx.TimeoutException as exc:
            logger.warning("lifi_timeout", operation=operation, timeout_s=self.timeout_s, error=str(exc))
            raise UpstreamTimeout(operation, self.timeout_s) from exc

        logger.info("lifi_response", operation=operation, status=response.status_code)
        logger.debug("lifi_response_body", operation=operation, body=response.text[:2000])
        return response

    async def quote(self, params: Mapping[str, Any]) -> Dict[str, Any]:
        """Fetch a single-step quote (``GET /quote``)."""

        response = await self._get("quote", "/quote", params)
        if response.is_error:
            logger.warning("lifi_error", operation="quote", status=response.status_code, body=response.text[:500])
            raise UpstreamError(response.status_code, response.text, operation="quote")
        return response.json()

    async def status(self, tx_hash: str, from_chain: str, to_chain: str) -> Any:
        """Fetch the status of a submitted transfer (``GET /status``).

        LI.FI answers unknown or not-yet-indexed hashes with a 4xx JSON body;
        that body is returned as-is. Only a reply that is not JSON raises
        ``UpstreamError``.
        """

        params = {"txHash": tx_hash, "fromChain": from_chain, "toChain": to_chain}
        response = await self._get("status", "/status", params)
        try:
            body = response.json()
        except ValueError:
            logger.warning("lifi_error", operation="status", status=response.status_code, body=response.text[:500])
            status_code = response.status_code if response.is_error else 502
            raise UpstreamError(status_code, response.text, operation="status") from None

        if response.is_error:
            logger.warning("lifi_status_relayed", status=response.status_code, body=body)
        return body
