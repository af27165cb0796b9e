"""
Exception taxonomy.

Every layer raises immediately; nothing here is retried or swallowed.
Callers get either a complete snapshot or exactly one of these.
"""

from __future__ import annotations


class SolViewError(Exception):
    """Base class for every error raised by solview."""


class TransportError(SolViewError):
    """The endpoint could not be reached (connection, DNS, TLS, timeout)."""


class ProtocolError(SolViewError):
    """The endpoint answered with something that is not the expected JSON."""


class RpcError(SolViewError):
    """The JSON-RPC server reported an error object."""

    def __init__(self, message: str, code: int | None = None):
        super().__init__(message)
        self.message = message
        self.code = code


class ValidationError(SolViewError, ValueError):
    """Caller input rejected before any network call."""


class WalletFetchError(ValidationError):
    """Wallet lookup refused (empty address)."""


class MarketFetchError(SolViewError):
    """The DexScreener request failed or returned a malformed body."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class TokenNotFoundError(SolViewError, LookupError):
    """DexScreener knows no trading pair for the mint."""
