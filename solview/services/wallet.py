"""
Wallet aggregation.

Fans out the three read-only RPC queries a wallet view needs and joins
them into one ``WalletSnapshot``. The join is all-or-nothing: the first
failing query cancels the other two and its error is what the caller
sees.
"""

from __future__ import annotations

import asyncio
import logging

from ..clients.rpc import RpcClient
from ..errors import WalletFetchError
from ..models import (
    KeyedTokenAccount,
    SignatureInfo,
    TokenHolding,
    TransactionSummary,
    WalletSnapshot,
)

logger = logging.getLogger(__name__)

LAMPORTS_PER_SOL = 1_000_000_000
TOKEN_PROGRAM_ID = "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA"
SIGNATURE_LIMIT = 10


def lamports_to_sol(lamports: int) -> float:
    return lamports / LAMPORTS_PER_SOL


def to_holdings(accounts: list[KeyedTokenAccount]) -> list[TokenHolding]:
    """Keep accounts with a positive UI amount, in RPC order."""
    return [
        TokenHolding(mint=a.mint, ui_amount=a.ui_amount)
        for a in accounts
        if a.ui_amount is not None and a.ui_amount > 0
    ]


def to_transactions(signatures: list[SignatureInfo]) -> list[TransactionSummary]:
    return [
        TransactionSummary(
            signature=s.signature,
            block_time=s.block_time,
            succeeded=s.err is None,
        )
        for s in signatures
    ]


async def fetch_wallet(address: str, rpc: RpcClient) -> WalletSnapshot:
    """
    Fetch balance, token holdings and recent transactions for ``address``.

    Raises:
        WalletFetchError: ``address`` is empty or whitespace (no I/O done).
        TransportError / ProtocolError / RpcError: whichever sub-query
            failed first; no partial snapshot is produced.
    """
    addr = address.strip()
    if not addr:
        raise WalletFetchError("Enter a wallet address")

    try:
        async with asyncio.TaskGroup() as tg:
            balance_task = tg.create_task(rpc.get_balance(addr))
            accounts_task = tg.create_task(
                rpc.get_token_accounts_by_owner(addr, TOKEN_PROGRAM_ID)
            )
            signatures_task = tg.create_task(
                rpc.get_signatures_for_address(addr, limit=SIGNATURE_LIMIT)
            )
    except ExceptionGroup as eg:
        # Siblings are already cancelled; surface the first real failure.
        raise eg.exceptions[0]

    snapshot = WalletSnapshot(
        address=addr,
        sol_balance=lamports_to_sol(balance_task.result()),
        tokens=tuple(to_holdings(accounts_task.result())),
        transactions=tuple(to_transactions(signatures_task.result())),
    )
    logger.info(
        "Wallet %s: %.4f SOL, %d tokens, %d transactions",
        addr, snapshot.sol_balance, len(snapshot.tokens), len(snapshot.transactions),
    )
    return snapshot
