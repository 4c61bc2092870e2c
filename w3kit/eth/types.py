"""Blocks, headers, transactions, logs and receipts as returned over JSON-RPC."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping

from w3kit.util import (
    ADDR0,
    ADDRESS_LENGTH,
    HASH0,
    HASH_LENGTH,
    decode_data,
    decode_quantity,
)

BLOOM_LENGTH = 256
NONCE_LENGTH = 8

_MISSING = object()


def _load_object(data: Any) -> Mapping[str, Any]:
    if isinstance(data, (str, bytes, bytearray)):
        data = json.loads(data)
    if not isinstance(data, Mapping):
        raise ValueError("expected a JSON object")
    return data


def _fixed(length: int, kind: str) -> Callable[[Any], bytes]:
    def decode(value: Any) -> bytes:
        if not isinstance(value, str):
            raise ValueError(f"cannot decode {value!r} as {kind}")
        raw = decode_data(value)
        if len(raw) != length:
            raise ValueError(f"invalid {kind} {value!r}: must have {length} bytes")
        return raw

    return decode


_address = _fixed(ADDRESS_LENGTH, "address")
_hash = _fixed(HASH_LENGTH, "hash")
_bloom = _fixed(BLOOM_LENGTH, "bloom")
_nonce = _fixed(NONCE_LENGTH, "nonce")


def _data(value: Any) -> bytes:
    if not isinstance(value, str):
        raise ValueError(f"cannot decode {value!r} as bytes")
    return decode_data(value)


def _quantity(value: Any) -> int:
    if not isinstance(value, str):
        raise ValueError(f"cannot decode {value!r} as quantity")
    return decode_quantity(value)


def _get(obj: Mapping[str, Any], key: str, decode: Callable[[Any], Any],
         default: Any = _MISSING) -> Any:
    value = obj.get(key)
    if value is None:
        if default is _MISSING:
            raise ValueError(f"missing required field {key!r}")
        return default
    return decode(value)


@dataclass
class AccessTuple:
    """An address and the storage keys it accesses."""

    address: bytes = ADDR0
    storage_keys: list[bytes] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: Any) -> AccessTuple:
        """Build an access tuple from its JSON text or object."""
        obj = _load_object(data)
        return cls(
            address=_get(obj, "address", _address),
            storage_keys=[_hash(k) for k in obj.get("storageKeys") or []],
        )


def _access_list(value: Any) -> list[AccessTuple]:
    return [AccessTuple.from_json(entry) for entry in value]


@dataclass
class Transaction:
    """A signed transaction of any type."""

    type: int = 0
    chain_id: int | None = None
    nonce: int = 0
    gas_price: int | None = None
    gas_fee_cap: int | None = None
    gas_tip_cap: int | None = None
    gas: int = 0
    to: bytes | None = None
    value: int = 0
    input: bytes = b""
    access_list: list[AccessTuple] = field(default_factory=list)
    blob_gas_fee_cap: int | None = None
    blob_hashes: list[bytes] = field(default_factory=list)
    v: int = 0
    r: int = 0
    s: int = 0
    hash: bytes | None = None

    @classmethod
    def from_json(cls, data: Any) -> Transaction:
        """Build a transaction from its JSON text or object."""
        obj = _load_object(data)
        tx_type = _get(obj, "type", _quantity, 0)
        gas_price = _get(obj, "gasPrice", _quantity, None)
        fee_cap = _get(obj, "maxFeePerGas", _quantity, None)
        tip_cap = _get(obj, "maxPriorityFeePerGas", _quantity, None)
        if tx_type < 2:
            fee_cap = tip_cap = None
        return cls(
            type=tx_type,
            chain_id=_get(obj, "chainId", _quantity, None),
            nonce=_get(obj, "nonce", _quantity),
            gas_price=gas_price,
            gas_fee_cap=fee_cap,
            gas_tip_cap=tip_cap,
            gas=_get(obj, "gas", _quantity),
            to=_get(obj, "to", _address, None),
            value=_get(obj, "value", _quantity),
            input=_get(obj, "input", _data),
            access_list=_get(obj, "accessList", _access_list, []),
            blob_gas_fee_cap=_get(obj, "maxFeePerBlobGas", _quantity, None),
            blob_hashes=[_hash(h) for h in obj.get("blobVersionedHashes") or []],
            v=_get(obj, "v", _quantity, 0),
            r=_get(obj, "r", _quantity, 0),
            s=_get(obj, "s", _quantity, 0),
            hash=_get(obj, "hash", _hash, None),
        )


@dataclass
class Withdrawal:
    """A validator withdrawal."""

    index: int = 0
    validator: int = 0
    address: bytes = ADDR0
    amount: int = 0

    @classmethod
    def from_json(cls, data: Any) -> Withdrawal:
        """Build a withdrawal from its JSON text or object."""
        obj = _load_object(data)
        return cls(
            index=_get(obj, "index", _quantity),
            validator=_get(obj, "validatorIndex", _quantity),
            address=_get(obj, "address", _address),
            amount=_get(obj, "amount", _quantity),
        )


@dataclass
class Header:
    """A block header."""

    parent_hash: bytes = HASH0
    uncle_hash: bytes = HASH0
    coinbase: bytes = ADDR0
    root: bytes = HASH0
    tx_hash: bytes = HASH0
    receipt_hash: bytes = HASH0
    bloom: bytes = bytes(BLOOM_LENGTH)
    difficulty: int = 0
    number: int = 0
    gas_limit: int = 0
    gas_used: int = 0
    time: int = 0
    extra: bytes = b""
    mix_digest: bytes = HASH0
    nonce: bytes = bytes(NONCE_LENGTH)
    base_fee: int | None = None
    withdrawals_hash: bytes | None = None
    blob_gas_used: int | None = None
    excess_blob_gas: int | None = None
    parent_beacon_root: bytes | None = None
    requests_hash: bytes | None = None

    @classmethod
    def from_json(cls, data: Any) -> Header:
        """Build a header from its JSON text or object."""
        obj = _load_object(data)
        return cls(
            parent_hash=_get(obj, "parentHash", _hash),
            uncle_hash=_get(obj, "sha3Uncles", _hash),
            coinbase=_get(obj, "miner", _address),
            root=_get(obj, "stateRoot", _hash),
            tx_hash=_get(obj, "transactionsRoot", _hash),
            receipt_hash=_get(obj, "receiptsRoot", _hash),
            bloom=_get(obj, "logsBloom", _bloom),
            difficulty=_get(obj, "difficulty", _quantity),
            number=_get(obj, "number", _quantity),
            gas_limit=_get(obj, "gasLimit", _quantity),
            gas_used=_get(obj, "gasUsed", _quantity),
            time=_get(obj, "timestamp", _quantity),
            extra=_get(obj, "extraData", _data),
            mix_digest=_get(obj, "mixHash", _hash, HASH0),
            nonce=_get(obj, "nonce", _nonce, bytes(NONCE_LENGTH)),
            base_fee=_get(obj, "baseFeePerGas", _quantity, None),
            withdrawals_hash=_get(obj, "withdrawalsRoot", _hash, None),
            blob_gas_used=_get(obj, "blobGasUsed", _quantity, None),
            excess_blob_gas=_get(obj, "excessBlobGas", _quantity, None),
            parent_beacon_root=_get(obj, "parentBeaconBlockRoot", _hash, None),
            requests_hash=_get(obj, "requestsHash", _hash, None),
        )


@dataclass
class Block:
    """A block: its header, full transactions and withdrawals."""

    header: Header = field(default_factory=Header)
    transactions: list[Transaction] = field(default_factory=list)
    withdrawals: list[Withdrawal] | None = None

    @classmethod
    def from_json(cls, data: Any) -> Block:
        """Build a block from its JSON text or object (full transactions)."""
        obj = _load_object(data)
        withdrawals = obj.get("withdrawals")
        return cls(
            header=Header.from_json(obj),
            transactions=[Transaction.from_json(tx) for tx in obj.get("transactions") or []],
            withdrawals=None if withdrawals is None
            else [Withdrawal.from_json(w) for w in withdrawals],
        )


@dataclass
class Log:
    """A contract log event."""

    address: bytes = ADDR0
    topics: list[bytes] = field(default_factory=list)
    data: bytes = b""
    block_number: int = 0
    tx_hash: bytes = HASH0
    tx_index: int = 0
    block_hash: bytes = HASH0
    index: int = 0
    removed: bool = False

    @classmethod
    def from_json(cls, data: Any) -> Log:
        """Build a log from its JSON text or object."""
        obj = _load_object(data)
        removed = obj.get("removed", False)
        if not isinstance(removed, bool):
            raise ValueError(f"cannot decode {removed!r} as bool")
        return cls(
            address=_get(obj, "address", _address),
            topics=[_hash(t) for t in _get(obj, "topics", list)],
            data=_get(obj, "data", _data),
            block_number=_get(obj, "blockNumber", _quantity, 0),
            tx_hash=_get(obj, "transactionHash", _hash),
            tx_index=_get(obj, "transactionIndex", _quantity, 0),
            block_hash=_get(obj, "blockHash", _hash, HASH0),
            index=_get(obj, "logIndex", _quantity, 0),
            removed=removed,
        )


@dataclass
class Receipt:
    """The receipt of an executed transaction."""

    type: int = 0
    status: int = 0
    cumulative_gas_used: int = 0
    bloom: bytes = bytes(BLOOM_LENGTH)
    logs: list[Log] = field(default_factory=list)
    tx_hash: bytes = HASH0
    contract_address: bytes = ADDR0
    gas_used: int = 0
    effective_gas_price: int | None = None
    block_hash: bytes = HASH0
    block_number: int | None = None
    transaction_index: int = 0

    @classmethod
    def from_json(cls, data: Any) -> Receipt:
        """Build a receipt from its JSON text or object."""
        obj = _load_object(data)
        return cls(
            type=_get(obj, "type", _quantity, 0),
            status=_get(obj, "status", _quantity, 0),
            cumulative_gas_used=_get(obj, "cumulativeGasUsed", _quantity),
            bloom=_get(obj, "logsBloom", _bloom),
            logs=[Log.from_json(log) for log in _get(obj, "logs", list)],
            tx_hash=_get(obj, "transactionHash", _hash),
            contract_address=_get(obj, "contractAddress", _address, ADDR0),
            gas_used=_get(obj, "gasUsed", _quantity),
            effective_gas_price=_get(obj, "effectiveGasPrice", _quantity, None),
            block_hash=_get(obj, "blockHash", _hash, HASH0),
            block_number=_get(obj, "blockNumber", _quantity, None),
            transaction_index=_get(obj, "transactionIndex", _quantity, 0),
        )