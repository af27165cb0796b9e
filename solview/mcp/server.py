"""
MCP server exposing SolView lookups as tools.

Tools:
  - get_wallet   SOL balance, token holdings, recent transactions
  - get_token    market data for a mint (most liquid DexScreener pair)

Entry point:
    python -m solview.mcp.server [--config config.yaml]
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
from typing import Any

import mcp.server.stdio
import mcp.types as types
from mcp.server import Server

from ..clients.dexscreener import DexScreenerClient
from ..clients.rpc import RpcClient
from ..config import load_config
from ..services.token_market import fetch_token_market
from ..services.wallet import fetch_wallet
from ..views import token_view, wallet_view

logger = logging.getLogger(__name__)


class SolViewMCPServer:

    def __init__(
        self,
        rpc: RpcClient,
        market: DexScreenerClient,
        name: str = "solview",
    ):
        self.rpc = rpc
        self.market = market
        self.server = Server(name)
        self._register_handlers()

    @classmethod
    def from_config(cls, config: dict) -> "SolViewMCPServer":
        timeout = config.get("http", {}).get("timeout")
        rpc = RpcClient(config["rpc"]["url"], timeout=timeout)
        market = DexScreenerClient(config["market"]["base_url"], timeout=timeout)
        return cls(rpc, market)

    def _register_handlers(self) -> None:
        @self.server.list_tools()
        async def list_tools() -> list[types.Tool]:
            return self._tools()

        @self.server.call_tool()
        async def call_tool(
            name: str, arguments: dict[str, Any]
        ) -> list[types.TextContent]:
            return [types.TextContent(type="text", text=await self.handle(name, arguments))]

    async def handle(self, name: str, arguments: dict[str, Any]) -> str:
        """Run a tool and render its result (or its single error) as JSON text."""
        try:
            result = await self._dispatch(name, arguments)
            return json.dumps(result, indent=2, default=str)
        except Exception as e:
            logger.error("Tool %s failed: %s", name, e)
            return json.dumps({"error": str(e), "tool": name}, indent=2)

    @staticmethod
    def _tools() -> list[types.Tool]:
        return [
            types.Tool(
                name="get_wallet",
                description=(
                    "Inspect a Solana wallet. Returns SOL balance, non-zero SPL token "
                    "holdings and the 10 most recent transactions with status and age."
                ),
                inputSchema={
                    "type": "object",
                    "properties": {
                        "address": {
                            "type": "string",
                            "description": "Base58 wallet address.",
                        },
                    },
                    "required": ["address"],
                },
            ),
            types.Tool(
                name="get_token",
                description=(
                    "Get live market data for a token mint from DexScreener: price, "
                    "24h change, market cap, FDV, volume and liquidity of its most "
                    "liquid trading pair. Pass amount to value a holding."
                ),
                inputSchema={
                    "type": "object",
                    "properties": {
                        "mint": {
                            "type": "string",
                            "description": "Token mint address.",
                        },
                        "amount": {
                            "type": "number",
                            "description": "Optional UI-scaled token amount held.",
                        },
                    },
                    "required": ["mint"],
                },
            ),
        ]

    async def _dispatch(self, name: str, args: dict[str, Any]) -> Any:
        if name == "get_wallet":
            snapshot = await fetch_wallet(args.get("address", ""), self.rpc)
            return wallet_view(snapshot)

        if name == "get_token":
            snapshot = await fetch_token_market(args.get("mint", ""), self.market)
            amount = args.get("amount")
            return token_view(snapshot, float(amount) if amount is not None else None)

        return {"error": f"Unknown tool: {name}", "tool": name}

    async def run(self) -> None:
        logger.info("Starting MCP server '%s' ...", self.server.name)
        try:
            async with mcp.server.stdio.stdio_server() as (read_stream, write_stream):
                await self.server.run(
                    read_stream,
                    write_stream,
                    self.server.create_initialization_options(),
                )
        finally:
            await self.rpc.aclose()
            await self.market.aclose()


# ── Entry point ──────────────────────────────────────────────────────

def main() -> None:
    parser = argparse.ArgumentParser(description="SolView MCP server")
    parser.add_argument(
        "--config", default="config.yaml", help="Config file path"
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    server = SolViewMCPServer.from_config(load_config(args.config))
    asyncio.run(server.run())


if __name__ == "__main__":
    main()
