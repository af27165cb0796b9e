"""
SolView — Solana wallet explorer + DexScreener token lookup.

Layers:
  clients/     — Pure API clients (Solana JSON-RPC, DexScreener)
  services/    — Wallet aggregation and token market resolution
  formatting   — Display formatters (no I/O)
  views        — Snapshot -> display dicts for the presentation layer
  mcp/         — MCP server exposing wallet/token lookups to agents
"""

__version__ = "0.1.0"
