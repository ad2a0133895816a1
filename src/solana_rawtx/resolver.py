# src/solana_rawtx/resolver.py - which signature to fetch
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from solana.rpc.async_api import AsyncClient

from . import config
from .errors import InvalidSignatureFormat, NotFound, UsageError
from .models import BySignature, LatestForAddress, LatestInBlock, SelectionMode
from .rpc import RawRpc
from .solana_utils import get_confirmed_slot, get_recent_signatures, parse_pubkey

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Resolution:
    signature: str
    slot: Optional[int] = None


def selection_from_args(signature: Optional[str], latest: bool = False, address: Optional[str] = None) -> SelectionMode:
    """
    Precedence: --latest, then --address, then the positional signature.
    """
    if latest:
        return LatestInBlock()
    if address:
        return LatestForAddress(address)
    if signature:
        return BySignature(signature)
    raise UsageError(
        "Please provide a transaction signature, use --latest to get the latest transaction, "
        "or --address to get the latest transaction for an address"
    )


def check_signature(signature: str) -> str:
    # length only, no base58/checksum validation
    if len(signature) < config.MIN_SIGNATURE_LENGTH:
        raise InvalidSignatureFormat(signature)
    return signature


async def latest_for_address(client: AsyncClient, address: str) -> str:
    pubkey = parse_pubkey(address)
    sigs = await get_recent_signatures(client, pubkey, limit=1)
    if not sigs:
        raise NotFound(f"No transactions found for address: {address}")
    return sigs[0]


async def latest_in_block(client: AsyncClient, rpc: RawRpc) -> Tuple[str, int]:
    slot = await get_confirmed_slot(client)
    sigs = await rpc.get_block_signatures(slot)
    if not sigs:
        raise NotFound("No transactions found in the latest block")
    logger.debug("slot %d has %d signatures", slot, len(sigs))
    return sigs[0], slot


async def resolve_signature(mode: SelectionMode, client: AsyncClient, rpc: RawRpc) -> Resolution:
    if isinstance(mode, LatestInBlock):
        sig, slot = await latest_in_block(client, rpc)
        return Resolution(signature=sig, slot=slot)
    if isinstance(mode, LatestForAddress):
        return Resolution(signature=await latest_for_address(client, mode.address))
    if isinstance(mode, BySignature):
        return Resolution(signature=check_signature(mode.signature))
    raise UsageError(f"Unknown selection mode: {mode!r}")
