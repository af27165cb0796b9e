"""
Token market resolution.

DexScreener lists one entry per pool a token trades in. The canonical
market for a mint is the pair with the deepest USD liquidity.
"""

from __future__ import annotations

import logging
from typing import Sequence

from ..clients.dexscreener import DexScreenerClient
from ..errors import TokenNotFoundError, ValidationError
from ..models import TokenMarketSnapshot, TradingPair

logger = logging.getLogger(__name__)


def select_best_pair(pairs: Sequence[TradingPair]) -> TradingPair:
    """
    Return the pair with the highest ``liquidity.usd``.

    Missing liquidity counts as 0 for the comparison only. A later pair
    wins only on strictly greater liquidity, so ties keep the earliest.
    """
    if not pairs:
        raise TokenNotFoundError("Token not found on DexScreener")

    best = pairs[0]
    best_liq = best.liquidity_usd or 0
    for pair in pairs[1:]:
        liq = pair.liquidity_usd or 0
        if liq > best_liq:
            best, best_liq = pair, liq
    return best


async def fetch_token_market(mint: str, client: DexScreenerClient) -> TokenMarketSnapshot:
    """
    Fetch every pair for ``mint`` and return the most liquid one.

    Raises:
        ValidationError: ``mint`` is empty or whitespace.
        MarketFetchError: the HTTP call failed or the body was malformed.
        TokenNotFoundError: DexScreener has no pair for the mint.
    """
    mint = mint.strip()
    if not mint:
        raise ValidationError("Enter a token mint")

    pairs = await client.get_token_pairs(mint)
    best = select_best_pair(pairs)
    logger.info(
        "Token %s: %d pairs, selected %s on %s (liquidity=%s)",
        mint, len(pairs), best.pair_address, best.dex_id, best.liquidity_usd,
    )
    return TokenMarketSnapshot.from_pair(best)
