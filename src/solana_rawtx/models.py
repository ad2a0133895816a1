from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional, Union

from .utils import bytes_to_base64, bytes_to_hex


# ---------------------- Selection mode ----------------------

@dataclass(frozen=True)
class BySignature:
    signature: str


@dataclass(frozen=True)
class LatestInBlock:
    pass


@dataclass(frozen=True)
class LatestForAddress:
    address: str


SelectionMode = Union[BySignature, LatestInBlock, LatestForAddress]


# ---------------------- Raw bytes ----------------------

@dataclass(frozen=True)
class RawBytes:
    """
    Exact wire bytes of a transaction. base64/hex are always derived from
    `data`: build it with RawBytes.from_bytes().
    """

    data: bytes
    base64: str
    hex: str

    @classmethod
    def from_bytes(cls, data: bytes) -> "RawBytes":
        data = bytes(data)
        return cls(data=data, base64=bytes_to_base64(data), hex=bytes_to_hex(data))

    def __len__(self) -> int:
        return len(self.data)


# ---------------------- Instructions ----------------------

@dataclass(frozen=True)
class ParsedInstruction:
    index: int
    program: str
    type: str
    info: Any


@dataclass(frozen=True)
class OpaqueInstruction:
    index: int
    program_id: str


Instruction = Union[ParsedInstruction, OpaqueInstruction]


def parse_instruction(index: int, ix: Dict[str, Any]) -> Instruction:
    """
    jsonParsed instructions come in two shapes:
      - {"program", "programId", "parsed": {"type", "info"}}
      - {"programId", "accounts", "data"}  (program without a parser on the node)
    Some parsers (memo) put a plain value in "parsed".
    """
    program_id = str(ix.get("programId") or "")
    parsed = ix.get("parsed")
    if parsed is None:
        return OpaqueInstruction(index=index, program_id=program_id)
    program = str(ix.get("program") or program_id)
    if isinstance(parsed, dict):
        return ParsedInstruction(index=index, program=program,
                                 type=str(parsed.get("type", "unknown")),
                                 info=parsed.get("info", {}))
    return ParsedInstruction(index=index, program=program, type=program, info=parsed)


# ---------------------- Transaction ----------------------

@dataclass(frozen=True)
class ResolvedTransaction:
    signature: str
    slot: Optional[int]
    block_time: Optional[int]
    version: Union[str, int, None]
    err: Any
    fee: int
    log_messages: List[str]
    signatures: List[str]
    instructions: List[Instruction]
    response: Dict[str, Any] = field(repr=False)
    raw_bytes: Optional[RawBytes] = None
    raw_bytes_issue: Optional[str] = None

    @classmethod
    def from_rpc(cls, signature: str, result: Dict[str, Any]) -> "ResolvedTransaction":
        meta = result.get("meta") or {}
        tx = result.get("transaction") or {}
        msg = tx.get("message") or {}
        return cls(
            signature=signature,
            slot=result.get("slot"),
            block_time=result.get("blockTime"),
            version=result.get("version"),
            err=meta.get("err"),
            fee=int(meta.get("fee") or 0),
            log_messages=[str(x) for x in (meta.get("logMessages") or [])],
            signatures=[str(s) for s in (tx.get("signatures") or [])],
            instructions=[parse_instruction(i, ix) for i, ix in enumerate(msg.get("instructions") or [])],
            response=result,
        )

    @property
    def succeeded(self) -> bool:
        return self.err is None

    @property
    def fee_payer_signature(self) -> Optional[str]:
        return self.signatures[0] if self.signatures else None

    def with_raw_bytes(self, raw: RawBytes) -> "ResolvedTransaction":
        return replace(self, raw_bytes=raw, raw_bytes_issue=None)

    def without_raw_bytes(self, reason: str) -> "ResolvedTransaction":
        return replace(self, raw_bytes=None, raw_bytes_issue=reason)

    def to_json_dict(self) -> Dict[str, Any]:
        out = dict(self.response)
        if self.raw_bytes is not None:
            out["serializedBase64"] = self.raw_bytes.base64
            out["serializedHex"] = self.raw_bytes.hex
        return out
