"""
Solana JSON-RPC client.

Read-only, single attempt per call, no retries.

Methods used:
  getBalance(address)                                  -- lamports
  getTokenAccountsByOwner(address, {programId}, {...}) -- SPL token accounts
  getSignaturesForAddress(address, {limit})            -- recent signatures
"""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx
import pydantic

from ..errors import ProtocolError, RpcError, TransportError
from ..models import (
    BalanceResult,
    KeyedTokenAccount,
    SignatureInfo,
    TokenAccountsResult,
)

logger = logging.getLogger(__name__)

RPC_URL = "https://api.mainnet-beta.solana.com"
REQUEST_ID = 1


class RpcClient:
    """Thin async JSON-RPC 2.0 client over httpx."""

    def __init__(
        self,
        url: str = RPC_URL,
        *,
        client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
    ):
        self.url = url
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def __aenter__(self) -> "RpcClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def call(self, method: str, params: list[Any]) -> Any:
        """
        Send one JSON-RPC request and return its ``result``.

        The body is parsed as JSON whatever the HTTP status; a server
        ``error`` object becomes ``RpcError`` with the server's message.
        """
        payload = {"jsonrpc": "2.0", "id": REQUEST_ID, "method": method, "params": params}
        logger.debug("POST %s method=%s", self.url, method)
        try:
            resp = await self._client.post(
                self.url,
                json=payload,
                headers={"Content-Type": "application/json"},
            )
        except httpx.DecodingError as e:
            raise ProtocolError(f"{method}: undecodable response body: {e}") from e
        except httpx.RequestError as e:
            raise TransportError(f"{method}: {e}") from e

        try:
            body = resp.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ProtocolError(
                f"{method}: response is not JSON (HTTP {resp.status_code})"
            ) from e

        if not isinstance(body, dict):
            raise ProtocolError(f"{method}: expected a JSON object, got {type(body).__name__}")

        error = body.get("error")
        if error is not None:
            if isinstance(error, dict):
                message = str(error.get("message", error))
                code = error.get("code")
            else:
                message, code = str(error), None
            logger.warning("RPC %s failed: %s", method, message)
            raise RpcError(message, code=code)

        return body.get("result")

    # ── Typed helpers ────────────────────────────────────────────────

    async def get_balance(self, address: str) -> int:
        """Return the balance of ``address`` in lamports."""
        result = await self.call("getBalance", [address])
        return _decode(BalanceResult, result, "getBalance").value

    async def get_token_accounts_by_owner(
        self, address: str, program_id: str
    ) -> list[KeyedTokenAccount]:
        """Return the jsonParsed token accounts of ``address`` under ``program_id``."""
        result = await self.call(
            "getTokenAccountsByOwner",
            [address, {"programId": program_id}, {"encoding": "jsonParsed"}],
        )
        return _decode(TokenAccountsResult, result, "getTokenAccountsByOwner").value

    async def get_signatures_for_address(
        self, address: str, limit: int = 10
    ) -> list[SignatureInfo]:
        """Return up to ``limit`` most recent signatures, newest first."""
        result = await self.call("getSignaturesForAddress", [address, {"limit": limit}])
        if not isinstance(result, list):
            raise ProtocolError(f"getSignaturesForAddress: expected a list, got {result!r}")
        return [_decode(SignatureInfo, item, "getSignaturesForAddress") for item in result]


def _decode(model: type[pydantic.BaseModel], data: Any, method: str) -> Any:
    try:
        return model.model_validate(data)
    except pydantic.ValidationError as e:
        raise ProtocolError(f"{method}: unexpected result shape: {e}") from e
