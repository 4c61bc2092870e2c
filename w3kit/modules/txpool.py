"""Calls of the "txpool" namespace."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Mapping

from w3kit.eth.types import Transaction
from w3kit.rpc import CallFactory
from w3kit.util import ADDRESS_LENGTH, decode_data, decode_quantity, encode_data


def _load_object(data: Any) -> Mapping[str, Any]:
    if isinstance(data, (str, bytes, bytearray)):
        data = json.loads(data)
    if not isinstance(data, Mapping):
        raise ValueError("expected a JSON object")
    return data


def _decode_address(text: str) -> bytes:
    raw = decode_data(text)
    if len(raw) != ADDRESS_LENGTH:
        raise ValueError(f"invalid address {text!r}: must have {ADDRESS_LENGTH} bytes")
    return raw


def _check_nonce_key(key: str) -> None:
    if not key.isdigit() or not key.isascii() or int(key) >= 1 << 64:
        raise ValueError(f"invalid nonce key {key!r}")


def _txs_by_nonce(data: Any) -> list[Transaction]:
    """Decode a nonce-to-transaction object into transactions sorted by nonce."""
    if data is None:
        return []
    obj = _load_object(data)
    txs = []
    for key, value in obj.items():
        _check_nonce_key(key)
        txs.append(Transaction.from_json(value))
    return sorted(txs, key=lambda t: t.nonce)


def _by_sender(data: Any) -> dict[bytes, list[Transaction]]:
    if data is None:
        return {}
    return {
        _decode_address(addr): _txs_by_nonce(txs)
        for addr, txs in _load_object(data).items()
    }


def content() -> CallFactory:
    """Request the pending and queued transactions in the transaction pool."""
    return CallFactory("txpool_content", [], ret_wrapper=ContentResponse.from_json)


def content_from(addr: bytes) -> CallFactory:
    """Request the pending and queued transactions of the given sender."""
    return CallFactory(
        "txpool_contentFrom",
        [encode_data(addr)],
        ret_wrapper=ContentFromResponse.from_json,
    )


def status() -> CallFactory:
    """Request the number of pending and queued transactions."""
    return CallFactory("txpool_status", [], ret_wrapper=StatusResponse.from_json)


@dataclass
class ContentResponse:
    """Pending and queued transactions by sender, each list sorted by nonce."""

    pending: dict[bytes, list[Transaction]] = field(default_factory=dict)
    queued: dict[bytes, list[Transaction]] = field(default_factory=dict)

    @classmethod
    def from_json(cls, data: Any) -> ContentResponse:
        """Build the response from its JSON text or object."""
        obj = _load_object(data)
        return cls(pending=_by_sender(obj.get("pending")), queued=_by_sender(obj.get("queued")))


@dataclass
class ContentFromResponse:
    """Pending and queued transactions of one sender, sorted by nonce."""

    pending: list[Transaction] = field(default_factory=list)
    queued: list[Transaction] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: Any) -> ContentFromResponse:
        """Build the response from its JSON text or object."""
        obj = _load_object(data)
        return cls(
            pending=_txs_by_nonce(obj.get("pending")),
            queued=_txs_by_nonce(obj.get("queued")),
        )


@dataclass
class StatusResponse:
    """Numbers of pending and queued transactions."""

    pending: int = 0
    queued: int = 0

    @classmethod
    def from_json(cls, data: Any) -> StatusResponse:
        """Build the response from its JSON text or object."""
        obj = _load_object(data)
        pending = obj.get("pending")
        queued = obj.get("queued")
        return cls(
            pending=0 if pending is None else decode_quantity(pending),
            queued=0 if queued is None else decode_quantity(queued),
        )