# src/solana_rawtx/fetcher.py - parsed transaction first, raw bytes second (best effort)
from __future__ import annotations
import logging
from typing import Any, Dict, Optional, Tuple

from . import config
from .errors import NetworkError, RpcError, TransactionNotFound, is_not_found_err
from .models import RawBytes, ResolvedTransaction
from .rpc import RawRpc
from .utils import base58_to_bytes, base64_to_bytes

logger = logging.getLogger(__name__)


def wire_encoding_for(encoding: str) -> str:
    """
    Encoding asked to the node for the raw bytes call. jsonParsed carries no
    bytes, so everything but base58 goes through base64.
    """
    return "base58" if encoding == "base58" else "base64"


def extract_wire_payload(result: Optional[Dict[str, Any]]) -> Tuple[str, Optional[str]]:
    """
    getTransaction with a binary encoding answers either
      "transaction": "<data>"  or  "transaction": ["<data>", "base64"]
    Returns (data, encoding tag or None).
    """
    if not result:
        raise ValueError("empty result from raw getTransaction")
    if not isinstance(result, dict):
        raise ValueError(f"unexpected raw getTransaction result: {type(result).__name__}")
    tx = result.get("transaction")
    if isinstance(tx, str):
        payload, tag = tx, None
    elif isinstance(tx, (list, tuple)) and tx:
        payload = tx[0]
        tag = tx[1] if len(tx) > 1 and isinstance(tx[1], str) else None
    else:
        raise ValueError(f"unexpected transaction format from RPC: {type(tx).__name__}")
    if not isinstance(payload, str) or not payload:
        raise ValueError("transaction payload missing from raw getTransaction")
    return payload, tag


def decode_wire_payload(payload: str, encoding: str) -> RawBytes:
    if encoding == "base58":
        data = base58_to_bytes(payload)
    else:
        data = base64_to_bytes(payload)
    if not data:
        raise ValueError("decoded transaction is empty")
    return RawBytes.from_bytes(data)


async def fetch_parsed(rpc: RawRpc, signature: str) -> ResolvedTransaction:
    try:
        result = await rpc.get_transaction(signature, "jsonParsed")
    except RpcError as e:
        if is_not_found_err(e):
            raise TransactionNotFound(signature) from e
        raise
    if not result:
        raise TransactionNotFound(signature)
    if not isinstance(result, dict):
        raise NetworkError(f"getTransaction failed: unexpected result {type(result).__name__}")
    return ResolvedTransaction.from_rpc(signature, result)


async def fetch_raw_bytes(rpc: RawRpc, signature: str, encoding: str = config.DEFAULT_ENCODING) -> RawBytes:
    wire = wire_encoding_for(encoding)
    result = await rpc.get_transaction(signature, wire)
    payload, tag = extract_wire_payload(result)
    return decode_wire_payload(payload, tag or wire)


async def fetch_transaction(rpc: RawRpc, signature: str, encoding: str = config.DEFAULT_ENCODING) -> ResolvedTransaction:
    """
    Two sequential getTransaction calls on the same signature. The parsed one
    must succeed; a failing raw one leaves the transaction without raw bytes.
    """
    tx = await fetch_parsed(rpc, signature)
    try:
        raw = await fetch_raw_bytes(rpc, signature, encoding)
    except (NetworkError, ValueError) as e:
        logger.warning("Could not retrieve raw transaction bytes: %s. Some features may be limited.", e)
        return tx.without_raw_bytes(str(e))
    logger.debug("raw bytes: %d bytes for %s", len(raw), signature)
    return tx.with_raw_bytes(raw)
