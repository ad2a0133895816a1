"""Raw JSON-RPC calls whose result must be kept exactly as the node sent it."""
from __future__ import annotations

import itertools
import logging
from typing import Any, Dict, List, Optional

import httpx

from . import config
from .errors import NetworkError, RpcError

logger = logging.getLogger(__name__)


class RawRpc:
    """Minimal JSON-RPC 2.0 caller over httpx, one AsyncClient per call."""

    def __init__(self, endpoint: str, timeout: float = config.RPC_TIMEOUT_SEC):
        self.endpoint = endpoint
        self.timeout = timeout
        self._ids = itertools.count(1)

    async def call(self, method: str, *params: Any) -> Any:
        payload = {"jsonrpc": "2.0", "id": next(self._ids), "method": method, "params": list(params)}
        logger.debug("rpc %s -> %s", method, self.endpoint)
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as session:
                resp = await session.post(self.endpoint, json=payload)
                resp.raise_for_status()
                data = resp.json()
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise NetworkError(f"{method} failed: {e}") from e
        except ValueError as e:
            raise NetworkError(f"{method} failed: malformed JSON from {self.endpoint}") from e

        if not isinstance(data, dict):
            raise NetworkError(f"{method} failed: unexpected response {type(data).__name__}")
        if data.get("error"):
            raise RpcError(method, data["error"])
        return data.get("result")

    async def get_transaction(self, signature: str, encoding: str) -> Optional[Dict[str, Any]]:
        return await self.call("getTransaction", signature, {
            "encoding": encoding,
            "maxSupportedTransactionVersion": config.MAX_SUPPORTED_TX_VERSION,
            "commitment": config.COMMITMENT,
        })

    async def get_block_signatures(self, slot: int) -> List[str]:
        res = await self.call("getBlock", slot, {
            "transactionDetails": "signatures",
            "rewards": False,
            "maxSupportedTransactionVersion": config.MAX_SUPPORTED_TX_VERSION,
            "commitment": config.COMMITMENT,
        })
        if not isinstance(res, dict):
            return []
        return [str(s) for s in (res.get("signatures") or [])]
