"""
DexScreener API client for token market data.

Endpoint used (public, no auth):
  GET /latest/dex/tokens/{mint}   -- every trading pair that includes the token
"""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx
import pydantic

from ..errors import MarketFetchError
from ..models import TokenPairsResponse, TradingPair

logger = logging.getLogger(__name__)

DEXSCREENER_BASE = "https://api.dexscreener.com"


class DexScreenerClient:
    """Async client for the DexScreener public API."""

    def __init__(
        self,
        base_url: str = DEXSCREENER_BASE,
        *,
        client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def __aenter__(self) -> "DexScreenerClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _get(self, path: str) -> Any:
        """Issue a GET and return parsed JSON, mapping failures to MarketFetchError."""
        url = f"{self.base_url}{path}"
        logger.debug("GET %s", url)
        try:
            resp = await self._client.get(url)
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise MarketFetchError(
                f"Failed to fetch: {e.response.status_code}",
                status_code=e.response.status_code,
            ) from e
        except httpx.DecodingError as e:
            raise MarketFetchError(f"Malformed response body: {e}") from e
        except httpx.RequestError as e:
            raise MarketFetchError(f"Failed to fetch: {e}") from e

        try:
            return resp.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise MarketFetchError("Malformed response body", status_code=resp.status_code) from e

    async def get_token_pairs(self, mint: str) -> list[TradingPair]:
        """
        Return every pair DexScreener tracks for ``mint``.

        An unknown token comes back as ``{"pairs": null}``, which is
        returned here as an empty list.
        """
        data = await self._get(f"/latest/dex/tokens/{mint}")
        try:
            parsed = TokenPairsResponse.model_validate(data)
        except pydantic.ValidationError as e:
            raise MarketFetchError(f"Malformed response body: {e}") from e
        return parsed.pairs or []
