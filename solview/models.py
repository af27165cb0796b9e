"""
Pydantic models for Solana RPC results, DexScreener pairs and the
snapshots handed to the presentation layer.

Wire models mirror the JSON exactly (camelCase aliases) so a shape
mismatch fails at decode time instead of leaking ``None`` further in.
Snapshots are frozen: built once per query and never mutated.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class WireModel(BaseModel):
    """Base for models decoded straight from an API response."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


# ── Solana JSON-RPC ──────────────────────────────────────────────────

class BalanceResult(WireModel):
    """``getBalance`` result: ``{"context": {...}, "value": lamports}``."""
    value: int


class TokenAmount(WireModel):
    amount: Optional[str] = None
    decimals: Optional[int] = None
    ui_amount: Optional[float] = Field(default=None, alias="uiAmount")


class ParsedTokenInfo(WireModel):
    mint: str
    owner: Optional[str] = None
    token_amount: TokenAmount = Field(alias="tokenAmount")


class ParsedAccount(WireModel):
    info: ParsedTokenInfo
    type: Optional[str] = None


class ParsedAccountData(WireModel):
    parsed: ParsedAccount
    program: Optional[str] = None


class TokenAccount(WireModel):
    data: ParsedAccountData
    lamports: Optional[int] = None


class KeyedTokenAccount(WireModel):
    """One entry of ``getTokenAccountsByOwner`` with jsonParsed encoding."""
    pubkey: Optional[str] = None
    account: TokenAccount

    @property
    def mint(self) -> str:
        return self.account.data.parsed.info.mint

    @property
    def ui_amount(self) -> Optional[float]:
        return self.account.data.parsed.info.token_amount.ui_amount


class TokenAccountsResult(WireModel):
    value: list[KeyedTokenAccount] = Field(default_factory=list)


class SignatureInfo(WireModel):
    """One entry of ``getSignaturesForAddress``."""
    signature: str
    slot: Optional[int] = None
    block_time: Optional[int] = Field(default=None, alias="blockTime")
    err: Optional[Any] = None
    memo: Optional[str] = None


# ── DexScreener ──────────────────────────────────────────────────────

class PairToken(WireModel):
    address: str
    name: str = ""
    symbol: str = ""


class PriceChange(WireModel):
    h24: Optional[float] = None


class Volume(WireModel):
    h24: Optional[float] = None


class Liquidity(WireModel):
    usd: Optional[float] = None


class PairInfo(WireModel):
    image_url: Optional[str] = Field(default=None, alias="imageUrl")


class TradingPair(WireModel):
    """A DexScreener pair as returned by ``/latest/dex/tokens/{mint}``."""
    chain_id: str = Field(alias="chainId")
    dex_id: str = Field(alias="dexId")
    pair_address: str = Field(alias="pairAddress")
    url: Optional[str] = None
    base_token: PairToken = Field(alias="baseToken")
    quote_token: Optional[PairToken] = Field(default=None, alias="quoteToken")
    price_usd: Optional[str] = Field(default=None, alias="priceUsd")
    price_change: Optional[PriceChange] = Field(default=None, alias="priceChange")
    volume: Optional[Volume] = None
    liquidity: Optional[Liquidity] = None
    fdv: Optional[float] = None
    market_cap: Optional[float] = Field(default=None, alias="marketCap")
    info: Optional[PairInfo] = None

    @property
    def liquidity_usd(self) -> Optional[float]:
        return self.liquidity.usd if self.liquidity else None


class TokenPairsResponse(WireModel):
    """Body of the token endpoint: ``{"schemaVersion": ..., "pairs": [...] | null}``."""
    schema_version: Optional[str] = Field(default=None, alias="schemaVersion")
    pairs: Optional[list[TradingPair]] = None


# ── Snapshots ────────────────────────────────────────────────────────

class TokenHolding(BaseModel):
    """A non-zero SPL token balance, already scaled by the mint's decimals."""
    model_config = ConfigDict(frozen=True)

    mint: str
    ui_amount: float = Field(gt=0)


class TransactionSummary(BaseModel):
    """A recent signature; ``block_time`` is ``None`` while still pending."""
    model_config = ConfigDict(frozen=True)

    signature: str
    block_time: Optional[int] = None
    succeeded: bool


class WalletSnapshot(BaseModel):
    """Balance, token holdings and recent transactions for one address."""
    model_config = ConfigDict(frozen=True)

    address: str
    sol_balance: float
    tokens: tuple[TokenHolding, ...] = ()
    transactions: tuple[TransactionSummary, ...] = ()


class TokenMarketSnapshot(BaseModel):
    """
    The canonical (most liquid) DexScreener pair for a mint, flattened.

    Fields absent from the source pair stay ``None``; no display
    defaults are substituted here.
    """
    model_config = ConfigDict(frozen=True)

    chain_id: str
    dex_id: str
    pair_address: str
    base_token_address: str
    base_token_name: str
    base_token_symbol: str
    price_usd: Optional[str] = None
    price_change_h24: Optional[float] = None
    volume_h24: Optional[float] = None
    liquidity_usd: Optional[float] = None
    fully_diluted_valuation: Optional[float] = None
    market_cap: Optional[float] = None
    image_url: Optional[str] = None

    @classmethod
    def from_pair(cls, pair: TradingPair) -> "TokenMarketSnapshot":
        return cls(
            chain_id=pair.chain_id,
            dex_id=pair.dex_id,
            pair_address=pair.pair_address,
            base_token_address=pair.base_token.address,
            base_token_name=pair.base_token.name,
            base_token_symbol=pair.base_token.symbol,
            price_usd=pair.price_usd,
            price_change_h24=pair.price_change.h24 if pair.price_change else None,
            volume_h24=pair.volume.h24 if pair.volume else None,
            liquidity_usd=pair.liquidity_usd,
            fully_diluted_valuation=pair.fdv,
            market_cap=pair.market_cap,
            image_url=pair.info.image_url if pair.info else None,
        )
