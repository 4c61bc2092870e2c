"""Calls of the "web3" namespace."""

from __future__ import annotations

from typing import Any

from w3kit.rpc import CallFactory


def _as_str(value: Any) -> str:
    if not isinstance(value, str):
        raise ValueError(f"cannot decode {value!r} as string")
    return value


def client_version() -> CallFactory:
    """Request the endpoint's client version."""
    return CallFactory("web3_clientVersion", [], ret_wrapper=_as_str)