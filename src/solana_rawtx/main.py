from __future__ import annotations
import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from . import __version__, config
from .errors import RawTxError, UsageError
from .fetcher import fetch_transaction
from .models import LatestForAddress, LatestInBlock, ResolvedTransaction
from .output import save_raw_bytes
from .presenter import paint, render
from .resolver import resolve_signature, selection_from_args
from .rpc import RawRpc
from .solana_utils import get_client

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="solana-raw-tx",
        description="Fetch and display raw Solana transaction bytes",
    )
    parser.add_argument("signature", nargs="?",
                        help="Transaction signature to fetch (optional if using --latest or --address)")
    parser.add_argument("-r", "--rpc", help="Custom RPC endpoint URL")
    parser.add_argument("-e", "--encoding", default=config.DEFAULT_ENCODING,
                        help="Encoding type (base64, base58, jsonParsed)")
    parser.add_argument("-o", "--output", help="Save raw bytes to file (.bin)")
    parser.add_argument("-j", "--json", action="store_true", help="Output full JSON response from RPC")
    parser.add_argument("-q", "--quiet", action="store_true",
                        help="Output only the raw encoded string (for piping/scripting)")
    parser.add_argument("-n", "--network", default=config.DEFAULT_NETWORK,
                        help="Network (mainnet, devnet, testnet)")
    parser.add_argument("-l", "--latest", action="store_true",
                        help="Fetch the latest transaction from the most recent block")
    parser.add_argument("-a", "--address", help="Fetch the latest transaction for a specific address")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging on stderr")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser.parse_args(argv)


def output_mode(args: argparse.Namespace) -> str:
    if args.json:
        return "json"
    if args.quiet:
        return "quiet"
    return "full"


def setup_logging(args: argparse.Namespace) -> None:
    if args.quiet or args.json:
        level = logging.ERROR
    elif args.verbose or config.DEBUG:
        level = logging.DEBUG
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, stream=sys.stderr,
                        format="%(levelname)s: %(message)s", force=True)


async def run(args: argparse.Namespace, color: bool = False) -> ResolvedTransaction:
    if args.encoding not in config.ENCODINGS:
        raise UsageError("Invalid encoding. Must be: base64, base58, or jsonParsed")

    rpc_url = config.resolve_rpc_url(args.network, args.rpc)
    logger.debug("RPC endpoint: %s", rpc_url)
    mode = selection_from_args(args.signature, latest=args.latest, address=args.address)
    chatty = output_mode(args) == "full"

    def progress(msg: str) -> None:
        if chatty:
            print(paint(msg, "dim", color))

    rpc = RawRpc(rpc_url)
    client = get_client(rpc_url)
    try:
        if isinstance(mode, LatestInBlock):
            progress(f"Fetching latest transaction from {rpc_url}...")
        elif isinstance(mode, LatestForAddress):
            progress(f"Fetching latest transaction for address {mode.address} from {rpc_url}...")
        resolution = await resolve_signature(mode, client, rpc)

        if isinstance(mode, LatestInBlock):
            progress(f"Found latest transaction from block {resolution.slot}: {resolution.signature}")
        elif isinstance(mode, LatestForAddress):
            progress(f"Found latest transaction: {resolution.signature}")
        else:
            progress(f"Fetching transaction from {rpc_url}...")

        return await fetch_transaction(rpc, resolution.signature, args.encoding)
    finally:
        await client.close()


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging(args)
    color = sys.stdout.isatty() and not config.NO_COLOR
    mode = output_mode(args)

    try:
        tx = asyncio.run(run(args, color=color))

        if args.output:
            n = save_raw_bytes(args.output, tx)
            if mode == "full":
                print(paint(f"Saved raw bytes to {args.output} ({n} bytes)", "green", color))

        print(render(tx, mode, color=color))

        if mode == "full" and (args.latest or args.address):
            print(paint(f"\nTransaction signature: {tx.signature}", "dim", color))
    except RawTxError as e:
        if args.quiet:
            print(str(e), file=sys.stderr)
        else:
            err_color = sys.stderr.isatty() and not config.NO_COLOR
            print(f"{paint('Error:', 'red', err_color)} {e}", file=sys.stderr)
        return e.exit_code
    return 0


def cli() -> None:
    sys.exit(main())


if __name__ == "__main__":
    cli()
