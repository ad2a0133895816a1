"""Fetch a Solana transaction and show its exact wire bytes."""

__version__ = "1.0.0"
