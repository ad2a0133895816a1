# src/solana_rawtx/config.py - .env reading, config values and RPC endpoint choice
from __future__ import annotations
import os
from typing import Optional
from dotenv import load_dotenv

load_dotenv()

NETWORKS = {
    "mainnet": os.getenv("MAINNET_RPC_URL", "https://api.mainnet-beta.solana.com"),
    "devnet": os.getenv("DEVNET_RPC_URL", "https://api.devnet.solana.com"),
    "testnet": os.getenv("TESTNET_RPC_URL", "https://api.testnet.solana.com"),
}
DEFAULT_NETWORK = "mainnet"

# RPC
RPC_TIMEOUT_SEC = 30
COMMITMENT = "confirmed"
MAX_SUPPORTED_TX_VERSION = 0

# Input
MIN_SIGNATURE_LENGTH = 64
ENCODINGS = ("base64", "base58", "jsonParsed")
DEFAULT_ENCODING = "base64"

# Mode
DEBUG = os.getenv("DEBUG", "false").lower() == "true"
NO_COLOR = bool(os.getenv("NO_COLOR", "").strip())


def resolve_rpc_url(network: Optional[str] = None, rpc_url: Optional[str] = None) -> str:
    """
    Explicit URL first (as-is), then a known network name, else mainnet.
    Unknown names are not an error.
    """
    if rpc_url:
        return rpc_url
    if network and network in NETWORKS:
        return NETWORKS[network]
    return NETWORKS[DEFAULT_NETWORK]
