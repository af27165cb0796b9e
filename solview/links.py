"""Outbound deep links to Solscan and DexScreener. String templates only."""

from __future__ import annotations

SOLSCAN_BASE = "https://solscan.io"
DEXSCREENER_WEB_BASE = "https://dexscreener.com"


def solscan_tx_url(signature: str) -> str:
    return f"{SOLSCAN_BASE}/tx/{signature}"


def solscan_token_url(mint: str) -> str:
    return f"{SOLSCAN_BASE}/token/{mint}"


def solscan_account_url(address: str) -> str:
    return f"{SOLSCAN_BASE}/account/{address}"


def dexscreener_token_url(mint: str, chain: str = "solana") -> str:
    return f"{DEXSCREENER_WEB_BASE}/{chain}/{mint}"
