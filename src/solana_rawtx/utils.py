from __future__ import annotations
import base64
import binascii
import datetime as dt
from typing import Optional
import base58

LAMPORTS_PER_SOL = 1_000_000_000


def bytes_to_hex(data: bytes) -> str:
    return binascii.hexlify(data).decode("ascii")


def hex_to_bytes(text: str) -> bytes:
    return binascii.unhexlify(text.strip())


def bytes_to_base64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def base64_to_bytes(text: str) -> bytes:
    # validate=True: junk characters must fail instead of being dropped
    return base64.b64decode(text.strip(), validate=True)


def bytes_to_base58(data: bytes) -> str:
    return base58.b58encode(data).decode("ascii")


def base58_to_bytes(text: str) -> bytes:
    return base58.b58decode(text.strip())


def base64_to_hex(text: str) -> str:
    return bytes_to_hex(base64_to_bytes(text))


def hex_to_base64(text: str) -> str:
    return bytes_to_base64(hex_to_bytes(text))


def lamports_to_sol(lamports: int | float) -> float:
    return float(lamports) / LAMPORTS_PER_SOL


def format_slot(slot: Optional[int]) -> str:
    if slot is None:
        return "N/A"
    return f"{slot:,}"


def format_block_time(timestamp: Optional[int]) -> str:
    """Unix seconds -> ISO-8601 UTC, e.g. 2024-03-01T12:00:00.000Z"""
    if timestamp is None:
        return "N/A"
    ts = dt.datetime.fromtimestamp(timestamp, tz=dt.timezone.utc)
    return ts.strftime("%Y-%m-%dT%H:%M:%S.") + f"{ts.microsecond // 1000:03d}Z"
