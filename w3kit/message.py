"""Transaction messages without signature."""

from __future__ import annotations

import json
from dataclasses import dataclass, field, fields
from typing import Any, Callable, Mapping

from w3kit.rpc import Func
from w3kit.util import (
    ADDR0,
    ADDRESS_LENGTH,
    HASH_LENGTH,
    decode_data,
    decode_quantity,
    encode_data,
    encode_quantity,
)


def _decode_fixed(text: str, length: int, kind: str) -> bytes:
    raw = decode_data(text)
    if len(raw) != length:
        raise ValueError(f"invalid {kind} {text!r}: must have {length} bytes")
    return raw


def _decode_address(text: str) -> bytes:
    return _decode_fixed(text, ADDRESS_LENGTH, "address")


def _decode_hash(text: str) -> bytes:
    return _decode_fixed(text, HASH_LENGTH, "hash")


def _access_entry_to_json(entry: Any) -> dict[str, Any]:
    if isinstance(entry, tuple):
        address, keys = entry
    else:
        address, keys = entry.address, entry.storage_keys
    return {
        "address": encode_data(address),
        "storageKeys": [encode_data(key) for key in keys],
    }


def _access_entry_from_json(obj: Mapping[str, Any]) -> tuple[bytes, list[bytes]]:
    return (
        _decode_address(obj["address"]),
        [_decode_hash(key) for key in obj.get("storageKeys") or []],
    )


def _optional(obj: Mapping[str, Any], key: str, decode: Callable[[Any], Any]) -> Any:
    value = obj.get(key)
    return None if value is None else decode(value)


@dataclass
class Message:
    """A transaction without the signature.

    If ``input`` is unset but ``func`` is given, the input is encoded from
    ``func`` and ``args`` by the calls that accept a message.

    Access list entries are ``(address, storage_keys)`` pairs or objects with
    ``address`` and ``storage_keys`` attributes. Set-code authorizations are
    kept as their JSON objects.
    """

    from_: bytes = ADDR0
    to: bytes | None = None
    nonce: int = 0
    gas_price: int | None = None
    gas_fee_cap: int | None = None
    gas_tip_cap: int | None = None
    gas: int = 0
    value: int | None = None
    input: bytes | None = None
    access_list: list = field(default_factory=list)
    blob_gas_fee_cap: int | None = None
    blob_hashes: list[bytes] = field(default_factory=list)
    set_code_authorizations: list[dict] = field(default_factory=list)
    func: Func | None = None
    args: tuple = ()

    def set(self, other: Message) -> Message:
        """Copy every field of ``other`` into this message and return it."""
        for f in fields(self):
            setattr(self, f.name, getattr(other, f.name))
        return self

    def encode_input(self) -> bytes | None:
        """Encode the input from ``func`` and ``args`` if it is unset; return it."""
        if self.input is None and self.func is not None:
            self.input = self.func.encode_args(*self.args)
        return self.input

    def to_json(self) -> dict[str, Any]:
        """Return the JSON object, leaving out fields that are unset."""
        out: dict[str, Any] = {}
        if self.from_ != ADDR0:
            out["from"] = encode_data(self.from_)
        if self.to is not None:
            out["to"] = encode_data(self.to)
        if self.nonce:
            out["nonce"] = encode_quantity(self.nonce)
        if self.gas_price is not None:
            out["gasPrice"] = encode_quantity(self.gas_price)
        if self.gas_fee_cap is not None:
            out["maxFeePerGas"] = encode_quantity(self.gas_fee_cap)
        if self.gas_tip_cap is not None:
            out["maxPriorityFeePerGas"] = encode_quantity(self.gas_tip_cap)
        if self.gas > 0:
            out["gas"] = encode_quantity(self.gas)
        if self.value is not None:
            out["value"] = encode_quantity(self.value)
        if self.input:
            out["data"] = encode_data(self.input)
        if self.access_list:
            out["accessList"] = [_access_entry_to_json(e) for e in self.access_list]
        if self.blob_gas_fee_cap is not None:
            out["maxFeePerBlobGas"] = encode_quantity(self.blob_gas_fee_cap)
        if self.blob_hashes:
            out["blobVersionedHashes"] = [encode_data(h) for h in self.blob_hashes]
        if self.set_code_authorizations:
            out["authorizationList"] = list(self.set_code_authorizations)
        return out

    @classmethod
    def from_json(cls, data: str | bytes | Mapping[str, Any]) -> Message:
        """Build a message from its JSON text or decoded JSON object."""
        if isinstance(data, (str, bytes, bytearray)):
            data = json.loads(data)
        if not isinstance(data, Mapping):
            raise ValueError("message must be a JSON object")

        msg = cls()
        sender = data.get("from")
        if sender is not None:
            msg.from_ = _decode_address(sender)
        msg.to = _optional(data, "to", _decode_address)
        msg.nonce = _optional(data, "nonce", decode_quantity) or 0
        msg.gas_fee_cap = _optional(data, "maxFeePerGas", decode_quantity)
        msg.gas_tip_cap = _optional(data, "maxPriorityFeePerGas", decode_quantity)
        msg.gas_price = _optional(data, "gasPrice", decode_quantity)
        if msg.gas_price is not None and msg.gas_fee_cap is None:
            msg.gas_fee_cap = msg.gas_price
        msg.gas = _optional(data, "gas", decode_quantity) or 0
        msg.value = _optional(data, "value", decode_quantity)

        input_data = _optional(data, "input", decode_data)
        call_data = _optional(data, "data", decode_data)
        if input_data:
            msg.input = input_data
        elif call_data:
            msg.input = call_data

        access_list = data.get("accessList") or []
        if access_list:
            msg.access_list = [_access_entry_from_json(e) for e in access_list]
        msg.blob_gas_fee_cap = _optional(data, "maxFeePerBlobGas", decode_quantity)
        blob_hashes = data.get("blobVersionedHashes") or []
        if blob_hashes:
            msg.blob_hashes = [_decode_hash(h) for h in blob_hashes]
        authorizations = data.get("authorizationList") or []
        if authorizations:
            msg.set_code_authorizations = list(authorizations)
        return msg