from __future__ import annotations
import logging
from typing import List

from solana.exceptions import SolanaRpcException
from solana.rpc.async_api import AsyncClient
from solana.rpc.commitment import Confirmed
from solana.rpc.core import RPCException
from solders.errors import SerdeJSONError
from solders.pubkey import Pubkey

from . import config
from .errors import InvalidAddress, NetworkError

logger = logging.getLogger(__name__)


def get_client(rpc_url: str) -> AsyncClient:
    return AsyncClient(rpc_url, commitment=Confirmed, timeout=config.RPC_TIMEOUT_SEC)


def parse_pubkey(address: str) -> Pubkey:
    """
    Account key check done locally, so a malformed address never reaches the node.
    """
    s = (address or "").strip()
    if not s:
        raise InvalidAddress(address)
    try:
        return Pubkey.from_string(s)
    except Exception as e:
        raise InvalidAddress(address) from e


async def get_confirmed_slot(client: AsyncClient) -> int:
    logger.debug("getSlot commitment=%s", config.COMMITMENT)
    try:
        resp = await client.get_slot(commitment=Confirmed)
    except (SolanaRpcException, RPCException, SerdeJSONError) as e:
        raise NetworkError(f"getSlot failed: {e}") from e
    return int(resp.value)


async def get_recent_signatures(client: AsyncClient, pubkey: Pubkey, limit: int = 1) -> List[str]:
    """Newest-first signatures for an account."""
    logger.debug("getSignaturesForAddress %s limit=%d", pubkey, limit)
    try:
        resp = await client.get_signatures_for_address(pubkey, limit=limit, commitment=Confirmed)
    except (SolanaRpcException, RPCException, SerdeJSONError) as e:
        raise NetworkError(f"getSignaturesForAddress failed: {e}") from e
    return [str(x.signature) for x in (resp.value or [])]
