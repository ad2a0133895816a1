# src/solana_rawtx/presenter.py - text output (full report, quiet line, json)
from __future__ import annotations
import json
from typing import List, Union

from termcolor import colored

from .errors import RawBytesUnavailable, UsageError
from .models import OpaqueInstruction, ParsedInstruction, ResolvedTransaction, Instruction
from .utils import format_block_time, format_slot, lamports_to_sol

MODES = ("full", "quiet", "json")
RULE = "─" * 60

_STYLES = {
    "bold": (None, ["bold"]),
    "dim": (None, ["dark"]),
    "red": ("red", None),
    "green": ("green", None),
    "yellow": ("yellow", None),
    "cyan": ("cyan", None),
    "gray": ("dark_grey", None),
    "white": ("light_grey", None),
    "bold_blue": ("blue", ["bold"]),
}


def paint(text: str, style: str, color: bool) -> str:
    if not color:
        return text
    fg, attrs = _STYLES[style]
    # the caller already decided: no tty or NO_COLOR checks here
    return colored(text, fg, attrs=attrs, force_color=True)


def render_quiet(tx: ResolvedTransaction) -> str:
    raw = tx.raw_bytes
    if raw is not None and raw.base64:
        return raw.base64
    if raw is not None and raw.hex:
        return raw.hex
    raise RawBytesUnavailable("Transaction found but raw bytes not available")


def render_json(tx: ResolvedTransaction) -> str:
    return json.dumps(tx.to_json_dict(), indent=2)


def version_label(version: Union[str, int]) -> str:
    if version == "legacy":
        return "Legacy"
    return f"Versioned (v{version})"


def render_instruction(ix: Instruction, color: bool) -> str:
    if isinstance(ix, ParsedInstruction):
        info = json.dumps(ix.info, indent=2)
        return paint(f"  [{ix.index}] {ix.type}: {info}", "cyan", color)
    if isinstance(ix, OpaqueInstruction):
        return paint(f"  [{ix.index}] Program: {ix.program_id}", "yellow", color)
    raise TypeError(f"unknown instruction variant: {type(ix).__name__}")


def render_log_line(index: int, line: str, color: bool) -> str:
    # naive highlight, not real error detection
    style = "red" if "error" in line.lower() else "gray"
    return paint(f"  [{index}] {line}", style, color)


def _raw_section(tx: ResolvedTransaction, color: bool) -> List[str]:
    raw = tx.raw_bytes
    if raw is None:
        out = [
            "",
            paint("Warning: Raw transaction bytes not available", "yellow", color),
            paint("   The transaction was fetched but could not be serialized to raw bytes.", "dim", color),
        ]
        if tx.raw_bytes_issue:
            out.append(paint(f"   Reason: {tx.raw_bytes_issue}", "dim", color))
        out.append(paint("   Try using --json to see the full transaction data.", "dim", color))
        return out

    return [
        "",
        paint("Raw Transaction (Base64):", "bold", color),
        paint(RULE, "gray", color),
        paint(raw.base64, "white", color),
        paint(RULE, "gray", color),
        "",
        paint("Raw Transaction (Hexadecimal):", "bold", color),
        paint(RULE, "gray", color),
        paint(raw.hex, "white", color),
        paint(RULE, "gray", color),
        "",
        paint(f"Length: {len(raw.base64)} chars (base64), {len(raw.hex)} chars (hex), {len(raw)} bytes", "dim", color),
    ]


def render_full(tx: ResolvedTransaction, color: bool = False) -> str:
    out: List[str] = [
        "",
        paint("╔═══════════════════════════════════════════════════════════╗", "bold_blue", color),
        paint("║          Solana Raw Transaction Bytes Viewer              ║", "bold_blue", color),
        paint("╚═══════════════════════════════════════════════════════════╝", "bold_blue", color),
        "",
    ]

    status = paint("SUCCESS", "green", color) if tx.succeeded else paint("FAILED", "red", color)
    out.append(f"{paint('Status:', 'bold', color)} {status}")
    if not tx.succeeded:
        out.append(f"{paint('Error:', 'red', color)} {json.dumps(tx.err, indent=2)}")

    out.append("")
    out.append(paint("Transaction Details:", "bold", color))
    out.append(f"  Signature: {paint(tx.fee_payer_signature or 'N/A', 'cyan', color)}")
    out.append(f"  Slot: {paint(format_slot(tx.slot), 'yellow', color)}")
    out.append(f"  Block Time: {paint(format_block_time(tx.block_time), 'yellow', color)}")
    fee = f"{tx.fee} lamports ({lamports_to_sol(tx.fee):.9f} SOL)"
    out.append(f"  Fee: {paint(fee, 'yellow', color)}")

    if tx.signatures:
        out.append("")
        out.append(paint("Signers:", "bold", color))
        for i, sig in enumerate(tx.signatures):
            out.append(f"  [{i}] {paint(sig, 'cyan', color)}")

    if tx.version is not None:
        out.append("")
        out.append(f"{paint('Transaction Type:', 'bold', color)} {paint(version_label(tx.version), 'yellow', color)}")

    out.extend(_raw_section(tx, color))

    if tx.instructions or not tx.succeeded:
        out.append("")
        out.append(paint("Instructions:", "bold", color))
        if not tx.succeeded:
            out.append(paint(f"Transaction failed: {json.dumps(tx.err)}", "red", color))
        for ix in tx.instructions:
            out.append(render_instruction(ix, color))

    if tx.log_messages:
        out.append("")
        out.append(paint("Log Messages:", "bold", color))
        for i, line in enumerate(tx.log_messages):
            out.append(render_log_line(i, line, color))

    out.append("")
    return "\n".join(out)


def render(tx: ResolvedTransaction, mode: str = "full", color: bool = False) -> str:
    if mode == "quiet":
        return render_quiet(tx)
    if mode == "json":
        return render_json(tx)
    if mode == "full":
        return render_full(tx, color=color)
    raise UsageError(f"Unknown output mode: {mode}")
