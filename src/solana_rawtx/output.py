# src/solana_rawtx/output.py - raw bytes to file
from __future__ import annotations
from pathlib import Path
from typing import Union

from .errors import RawBytesUnavailable
from .models import ResolvedTransaction


def save_raw_bytes(path: Union[str, Path], tx: ResolvedTransaction) -> int:
    """Writes the exact wire bytes, returns the byte count."""
    if tx.raw_bytes is None:
        raise RawBytesUnavailable("Raw transaction bytes not available to save")
    data = tx.raw_bytes.data
    with open(path, "wb") as f:
        f.write(data)
    return len(data)
