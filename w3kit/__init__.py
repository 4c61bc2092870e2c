"""Request builders and value helpers for Ethereum JSON-RPC endpoints."""

__version__ = "0.1.0"