"""
Snapshot -> display dict derivations.

Everything a screen shows about a wallet or token, already formatted.
Pure functions over the snapshots; no I/O.
"""

from __future__ import annotations

import math
from typing import Any, Optional

from .formatting import (
    abbreviate_usd,
    format_percent_change,
    format_sol,
    format_token_amount,
    format_usd_price,
    parse_price,
    relative_time,
    shorten_address,
)
from .links import (
    dexscreener_token_url,
    solscan_account_url,
    solscan_token_url,
    solscan_tx_url,
)
from .models import TokenMarketSnapshot, WalletSnapshot


def wallet_view(snapshot: WalletSnapshot, now: Optional[float] = None) -> dict[str, Any]:
    """Balance card, token list and recent transaction list for a wallet."""
    return {
        "address": snapshot.address,
        "address_short": shorten_address(snapshot.address, 6),
        "balance": format_sol(snapshot.sol_balance),
        "balance_sol": snapshot.sol_balance,
        "explorer_url": solscan_account_url(snapshot.address),
        "tokens": [
            {
                "mint": t.mint,
                "mint_short": shorten_address(t.mint, 6),
                "amount": t.ui_amount,
                "explorer_url": solscan_token_url(t.mint),
            }
            for t in snapshot.tokens
        ],
        "transactions": [
            {
                "signature": tx.signature,
                "signature_short": shorten_address(tx.signature, 8),
                "time": (
                    relative_time(tx.block_time, now)
                    if tx.block_time is not None
                    else "pending"
                ),
                "status": "+" if tx.succeeded else "-",
                "succeeded": tx.succeeded,
                "explorer_url": solscan_tx_url(tx.signature),
            }
            for tx in snapshot.transactions
        ],
    }


def _positive(value: Optional[float]) -> bool:
    return value is not None and value > 0


def token_view(snapshot: TokenMarketSnapshot, amount: Optional[float] = None) -> dict[str, Any]:
    """
    Token detail: header, price card, holdings, market data and links.

    ``amount`` is the caller's UI-scaled holding of the token, if any.
    Market data rows appear only for values that are present and > 0.
    """
    mint = snapshot.base_token_address
    price = parse_price(snapshot.price_usd) if snapshot.price_usd else 0.0
    if not math.isfinite(price):
        price = 0.0
    change, is_positive = format_percent_change(snapshot.price_change_h24)
    symbol = snapshot.base_token_symbol

    view: dict[str, Any] = {
        "name": snapshot.base_token_name,
        "symbol": symbol,
        "image_url": snapshot.image_url,
        "logo_letter": symbol[:1].upper() or "?",
        "price": format_usd_price(snapshot.price_usd or "0"),
        "price_change_h24": change,
        "is_positive": is_positive,
        "market_data": {},
        "info": {
            "contract": shorten_address(mint, 6),
            "network": snapshot.chain_id.capitalize(),
            "dex": snapshot.dex_id,
            "pair_address": snapshot.pair_address,
        },
        "links": {
            "dexscreener": dexscreener_token_url(mint, snapshot.chain_id),
            "solscan": solscan_token_url(mint),
        },
    }

    rows = {
        "market_cap": snapshot.market_cap,
        "fdv": snapshot.fully_diluted_valuation,
        "volume_h24": snapshot.volume_h24,
        "liquidity": snapshot.liquidity_usd,
    }
    for key, value in rows.items():
        if _positive(value):
            view["market_data"][key] = abbreviate_usd(value)

    if amount is not None:
        usd_value = price * amount if price else None
        view["holdings"] = {
            "amount": f"{format_token_amount(amount)} {symbol}",
            "usd_value": abbreviate_usd(usd_value) if usd_value else None,
        }

    return view
