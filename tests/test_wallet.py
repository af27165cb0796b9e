import asyncio
import json

import httpx
import pytest

from solview.clients.rpc import RpcClient
from solview.errors import RpcError, TransportError, WalletFetchError
from solview.services.wallet import TOKEN_PROGRAM_ID, fetch_wallet

ADDRESS = "86xCnPeV69n6t3DnyGvkKobf9FdN2H9oiVDdaMpo2MMY"


def _token_account(mint: str, ui_amount):
    return {
        "pubkey": f"acct-{mint}",
        "account": {
            "lamports": 2039280,
            "data": {
                "program": "spl-token",
                "parsed": {
                    "type": "account",
                    "info": {
                        "mint": mint,
                        "owner": ADDRESS,
                        "tokenAmount": {"amount": "0", "decimals": 6, "uiAmount": ui_amount},
                    },
                },
            },
        },
    }


DEFAULT_RESULTS = {
    "getBalance": {"context": {"slot": 1}, "value": 1_500_000_000},
    "getTokenAccountsByOwner": {
        "context": {"slot": 1},
        "value": [
            _token_account("MintA", 12.5),
            _token_account("MintZero", 0),
            _token_account("MintB", 0.001),
            _token_account("MintNull", None),
        ],
    },
    "getSignaturesForAddress": [
        {"signature": "sig1", "slot": 10, "blockTime": 1_700_000_000, "err": None},
        {"signature": "sig2", "slot": 9, "blockTime": None, "err": None},
        {"signature": "sig3", "slot": 8, "blockTime": 1_699_999_000, "err": {"InstructionError": [0, "Custom"]}},
    ],
}


def _handler(results=None, errors=None, calls=None):
    results = {**DEFAULT_RESULTS, **(results or {})}
    errors = errors or {}

    def handler(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        method = body["method"]
        if calls is not None:
            calls.append(body)
        if method in errors:
            return httpx.Response(200, json={"jsonrpc": "2.0", "id": 1, "error": errors[method]})
        return httpx.Response(200, json={"jsonrpc": "2.0", "id": 1, "result": results[method]})

    return handler


def _fetch(address, handler):
    async def main():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http:
            return await fetch_wallet(address, RpcClient("https://rpc.test", client=http))

    return asyncio.run(main())


def test_fetch_wallet_assembles_snapshot() -> None:
    calls: list = []
    snapshot = _fetch(f"  {ADDRESS}  ", _handler(calls=calls))

    assert snapshot.address == ADDRESS
    assert snapshot.sol_balance == 1.5
    assert [(t.mint, t.ui_amount) for t in snapshot.tokens] == [("MintA", 12.5), ("MintB", 0.001)]
    assert [(t.signature, t.block_time, t.succeeded) for t in snapshot.transactions] == [
        ("sig1", 1_700_000_000, True),
        ("sig2", None, True),
        ("sig3", 1_699_999_000, False),
    ]

    params = {c["method"]: c["params"] for c in calls}
    assert params["getBalance"] == [ADDRESS]
    assert params["getTokenAccountsByOwner"] == [
        ADDRESS,
        {"programId": TOKEN_PROGRAM_ID},
        {"encoding": "jsonParsed"},
    ]
    assert params["getSignaturesForAddress"] == [ADDRESS, {"limit": 10}]


def test_no_token_accounts_gives_empty_tokens() -> None:
    snapshot = _fetch(ADDRESS, _handler(results={"getTokenAccountsByOwner": {"value": []}}))

    assert snapshot.tokens == ()


def test_lamports_keep_float_precision() -> None:
    snapshot = _fetch(ADDRESS, _handler(results={"getBalance": {"value": 1}}))

    assert snapshot.sol_balance == 1e-9


@pytest.mark.parametrize("address", ["", "   ", "\t\n"])
def test_empty_address_rejected_before_any_request(address: str) -> None:
    calls: list = []
    with pytest.raises(WalletFetchError):
        _fetch(address, _handler(calls=calls))
    assert calls == []


@pytest.mark.parametrize(
    "failing",
    ["getBalance", "getTokenAccountsByOwner", "getSignaturesForAddress"],
)
def test_any_failing_query_fails_whole_fetch(failing: str) -> None:
    handler = _handler(errors={failing: {"code": -32000, "message": f"{failing} exploded"}})

    with pytest.raises(RpcError, match=f"{failing} exploded"):
        _fetch(ADDRESS, handler)


class _FakeRpc:
    """Balance fails immediately; the other two hang until cancelled."""

    def __init__(self) -> None:
        self.cancelled: list[str] = []

    async def _hang(self, name: str):
        try:
            await asyncio.sleep(3600)
        except asyncio.CancelledError:
            self.cancelled.append(name)
            raise

    async def get_balance(self, address):
        await asyncio.sleep(0)
        raise TransportError("connection reset")

    async def get_token_accounts_by_owner(self, address, program_id):
        return await self._hang("tokens")

    async def get_signatures_for_address(self, address, limit=10):
        return await self._hang("signatures")


def test_first_failure_cancels_in_flight_siblings() -> None:
    rpc = _FakeRpc()

    with pytest.raises(TransportError, match="connection reset"):
        asyncio.run(fetch_wallet(ADDRESS, rpc))

    assert sorted(rpc.cancelled) == ["signatures", "tokens"]
