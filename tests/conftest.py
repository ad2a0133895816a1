"""
Shared fixtures: a sample jsonParsed getTransaction result, its raw bytes,
and an in-memory stand-in for the solana-py AsyncClient.
"""

from __future__ import annotations

import base64
import copy
import logging
from types import SimpleNamespace

import pytest

RPC_URL = "https://rpc.test.local"

SIGNATURE = "5VERv8NMvzbJMEkV8xnrLkEaWRtSz9CosKDYjCJjBRnbJLgp8uirBgmQpjKhoR4tjF3ZpRzrFmBV6UjKdiSZkQUW"
OTHER_SIGNATURE = "2nBhEBYYvfaAe16UMNqRHre4YNSskvuYgx3M6E4JP1oDYvZEJHvoPzyUidNgNX5r9sTyN1J9UxtbCXy2rqYcuyuv"
ADDRESS = "So11111111111111111111111111111111111111112"

RAW_TX = bytes([1]) + bytes(range(64)) + bytes([0x80, 1, 0, 1, 3]) + b"\xff\x00\x10" * 20
RAW_TX_B64 = base64.b64encode(RAW_TX).decode()

PARSED_RESULT = {
    "slot": 250000000,
    "blockTime": 1700000000,
    "version": 0,
    "meta": {
        "err": None,
        "fee": 5000,
        "logMessages": [
            "Program 11111111111111111111111111111111 invoke [1]",
            "Program log: Error: insufficient funds for rent",
            "Program 11111111111111111111111111111111 success",
        ],
    },
    "transaction": {
        "signatures": [SIGNATURE, OTHER_SIGNATURE],
        "message": {
            "instructions": [
                {
                    "program": "system",
                    "programId": "11111111111111111111111111111111",
                    "parsed": {
                        "type": "transfer",
                        "info": {"source": ADDRESS, "destination": ADDRESS, "lamports": 1000},
                    },
                    "stackHeight": None,
                },
                {
                    "programId": "ComputeBudget111111111111111111111111111111",
                    "accounts": [],
                    "data": "3DdGGhkhJbjm",
                    "stackHeight": None,
                },
            ]
        },
    },
}


def rpc_ok(result, id_=1):
    return {"jsonrpc": "2.0", "result": result, "id": id_}


def raw_result(payload=RAW_TX_B64, shape="list"):
    tx = [payload, "base64"] if shape == "list" else payload
    return {"slot": 250000000, "blockTime": 1700000000, "version": 0, "meta": {"err": None}, "transaction": tx}


class FakeSolanaClient:
    """Answers getSlot / getSignaturesForAddress like solana-py typed responses."""

    def __init__(self, slot=0, signatures=(), error=None):
        self.slot = slot
        self.signatures = list(signatures)
        self.error = error
        self.calls = []
        self.closed = False

    async def get_slot(self, commitment=None):
        self.calls.append("getSlot")
        if self.error:
            raise self.error
        return SimpleNamespace(value=self.slot)

    async def get_signatures_for_address(self, account, before=None, until=None, limit=None, commitment=None):
        self.calls.append("getSignaturesForAddress")
        if self.error:
            raise self.error
        return SimpleNamespace(value=[SimpleNamespace(signature=s) for s in self.signatures][:limit])

    async def close(self):
        self.closed = True


@pytest.fixture(autouse=True)
def _reset_cli_logging():
    """main() installs a stderr handler on the root logger; drop it after each test."""
    root = logging.getLogger()
    level = root.level
    yield
    for h in root.handlers[:]:
        if type(h) is logging.StreamHandler:
            root.removeHandler(h)
    root.setLevel(level)


@pytest.fixture
def parsed_result():
    return copy.deepcopy(PARSED_RESULT)


@pytest.fixture
def fake_client(monkeypatch):
    """FakeSolanaClient wired into the CLI instead of a real AsyncClient."""
    client = FakeSolanaClient()
    import solana_rawtx.main as cli_main

    monkeypatch.setattr(cli_main, "get_client", lambda rpc_url: client)
    return client
