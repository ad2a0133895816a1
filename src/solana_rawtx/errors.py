# src/solana_rawtx/errors.py - error types surfaced by the CLI
from __future__ import annotations
from typing import Any, Optional

_NOT_FOUND_TOKENS = (
    "not found",
    "Not found",
    "NotFound",
)


class RawTxError(Exception):
    """Base for every error the CLI reports and exits on."""

    exit_code = 1


class UsageError(RawTxError):
    pass


class InvalidAddress(RawTxError):
    def __init__(self, address: str):
        super().__init__(f"Invalid address format: {address}")
        self.address = address


class InvalidSignatureFormat(RawTxError):
    def __init__(self, signature: str):
        super().__init__("Invalid transaction signature format")
        self.signature = signature


class NotFound(RawTxError):
    pass


class TransactionNotFound(RawTxError):
    def __init__(self, signature: str):
        super().__init__(f"Transaction not found: {signature}")
        self.signature = signature


class RawBytesUnavailable(RawTxError):
    pass


class NetworkError(RawTxError):
    pass


class RpcError(NetworkError):
    """JSON-RPC error object returned by the node."""

    def __init__(self, method: str, error: Any):
        if isinstance(error, dict):
            self.code: Optional[int] = error.get("code")
            self.rpc_message = str(error.get("message", error))
        else:
            self.code = None
            self.rpc_message = str(error)
        self.method = method
        super().__init__(f"{method} failed: {self.rpc_message}")


def is_not_found_err(exc: Exception) -> bool:
    msg = f"{exc}"
    return any(tok in msg for tok in _NOT_FOUND_TOKENS)
