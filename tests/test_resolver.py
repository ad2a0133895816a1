from __future__ import annotations

import asyncio
import json

import pytest
from solana.rpc.core import RPCException

from solana_rawtx.errors import InvalidAddress, InvalidSignatureFormat, NetworkError, NotFound, UsageError
from solana_rawtx.models import BySignature, LatestForAddress, LatestInBlock
from solana_rawtx.resolver import (
    check_signature,
    latest_for_address,
    latest_in_block,
    resolve_signature,
    selection_from_args,
)
from solana_rawtx.rpc import RawRpc
from tests.conftest import ADDRESS, OTHER_SIGNATURE, RPC_URL, SIGNATURE, FakeSolanaClient, rpc_ok


class TestSelection:
    def test_latest_beats_address_and_signature(self):
        assert selection_from_args(SIGNATURE, latest=True, address=ADDRESS) == LatestInBlock()

    def test_address_beats_signature(self):
        assert selection_from_args(SIGNATURE, address=ADDRESS) == LatestForAddress(ADDRESS)

    def test_signature_alone(self):
        assert selection_from_args(SIGNATURE) == BySignature(SIGNATURE)

    def test_nothing_given_is_a_usage_error(self):
        with pytest.raises(UsageError):
            selection_from_args(None, latest=False, address=None)


def test_short_signature_rejected():
    with pytest.raises(InvalidSignatureFormat):
        check_signature("x" * 63)
    assert check_signature("x" * 64) == "x" * 64


def test_direct_mode_makes_no_calls(httpx_mock):
    client = FakeSolanaClient()
    res = asyncio.run(resolve_signature(BySignature(SIGNATURE), client, RawRpc(RPC_URL)))
    assert res.signature == SIGNATURE
    assert res.slot is None
    assert client.calls == []
    assert httpx_mock.get_requests() == []


def test_direct_mode_short_signature_makes_no_calls(httpx_mock):
    client = FakeSolanaClient()
    with pytest.raises(InvalidSignatureFormat):
        asyncio.run(resolve_signature(BySignature("5Nnh"), client, RawRpc(RPC_URL)))
    assert client.calls == []
    assert httpx_mock.get_requests() == []


class TestLatestForAddress:
    def test_returns_newest_signature(self):
        client = FakeSolanaClient(signatures=[SIGNATURE, OTHER_SIGNATURE])
        assert asyncio.run(latest_for_address(client, ADDRESS)) == SIGNATURE
        assert client.calls == ["getSignaturesForAddress"]

    @pytest.mark.parametrize("bad", ["not-a-key", "0OIl", "", "abc" * 30])
    def test_malformed_address_fails_before_any_call(self, bad):
        client = FakeSolanaClient(signatures=[SIGNATURE])
        with pytest.raises(InvalidAddress):
            asyncio.run(latest_for_address(client, bad))
        assert client.calls == []

    def test_no_history_is_not_found(self):
        client = FakeSolanaClient(signatures=[])
        with pytest.raises(NotFound, match="No transactions found for address"):
            asyncio.run(latest_for_address(client, ADDRESS))

    def test_rpc_failure_is_network_error(self):
        client = FakeSolanaClient(error=RPCException("node is behind"))
        with pytest.raises(NetworkError):
            asyncio.run(latest_for_address(client, ADDRESS))


class TestLatestInBlock:
    def test_first_signature_of_confirmed_slot(self, httpx_mock):
        httpx_mock.add_response(url=RPC_URL, json=rpc_ok({"signatures": [OTHER_SIGNATURE, SIGNATURE]}))
        client = FakeSolanaClient(slot=321)

        sig, slot = asyncio.run(latest_in_block(client, RawRpc(RPC_URL)))

        assert (sig, slot) == (OTHER_SIGNATURE, 321)
        body = json.loads(httpx_mock.get_requests()[0].content)
        assert body["method"] == "getBlock"
        assert body["params"][0] == 321
        assert body["params"][1]["transactionDetails"] == "signatures"
        assert body["params"][1]["commitment"] == "confirmed"

    def test_empty_block_is_not_found(self, httpx_mock):
        httpx_mock.add_response(url=RPC_URL, json=rpc_ok({"signatures": []}))
        with pytest.raises(NotFound, match="latest block"):
            asyncio.run(latest_in_block(FakeSolanaClient(slot=5), RawRpc(RPC_URL)))

    def test_resolution_carries_slot(self, httpx_mock):
        httpx_mock.add_response(url=RPC_URL, json=rpc_ok({"signatures": [SIGNATURE]}))
        res = asyncio.run(resolve_signature(LatestInBlock(), FakeSolanaClient(slot=9), RawRpc(RPC_URL)))
        assert res.signature == SIGNATURE
        assert res.slot == 9
