"""Calls of the "net" namespace."""

from __future__ import annotations

from typing import Any

from w3kit.rpc import CallFactory


def _as_bool(value: Any) -> bool:
    if not isinstance(value, bool):
        raise ValueError(f"cannot decode {value!r} as bool")
    return value


def _as_int(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"cannot decode {value!r} as int")
    return value


def listening() -> CallFactory:
    """Request whether the client is listening for network connections."""
    return CallFactory("net_listening", [], ret_wrapper=_as_bool)


def peer_count() -> CallFactory:
    """Request the number of peers connected to the node."""
    return CallFactory("net_peerCount", [], ret_wrapper=_as_int)


def version() -> CallFactory:
    """Request the network ID (e.g. 1 for mainnet)."""
    return CallFactory("net_version", [], ret_wrapper=_as_int)