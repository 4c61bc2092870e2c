"""Calls of the "eth" namespace about transactions, receipts and nonces."""

from __future__ import annotations

from typing import Any, Callable

from w3kit.eth.types import Receipt, Transaction
from w3kit.rpc import CallFactory, block_number_arg
from w3kit.util import HASH_LENGTH, decode_data, decode_quantity, encode_data, encode_quantity


def _found(decode: Callable[[Any], Any]) -> Callable[[Any], Any]:
    """Wrap a decoder so that a null result is reported as not found."""

    def wrapper(value: Any) -> Any:
        if value is None:
            raise LookupError("not found")
        return decode(value)

    return wrapper


def _decode_hash(value: Any) -> bytes:
    if not isinstance(value, str):
        raise ValueError(f"cannot decode {value!r} as hash")
    raw = decode_data(value)
    if len(raw) != HASH_LENGTH:
        raise ValueError(f"invalid hash {value!r}: must have {HASH_LENGTH} bytes")
    return raw


def _decode_receipts(value: Any) -> list[Receipt]:
    if not isinstance(value, list):
        raise ValueError("expected a JSON array of receipts")
    return [Receipt.from_json(item) for item in value]


def tx(tx_hash: bytes) -> CallFactory:
    """Request the transaction with the given hash."""
    return CallFactory(
        "eth_getTransactionByHash",
        [encode_data(tx_hash)],
        ret_wrapper=_found(Transaction.from_json),
    )


def tx_by_block_hash_and_index(block_hash: bytes, index: int) -> CallFactory:
    """Request the transaction at the index of the block with the given hash."""
    return CallFactory(
        "eth_getTransactionByBlockHashAndIndex",
        [encode_data(block_hash), encode_quantity(index)],
        ret_wrapper=_found(Transaction.from_json),
    )


def tx_by_block_number_and_index(block_number: int | None, index: int) -> CallFactory:
    """Request the transaction at the index of the block with the given number."""
    return CallFactory(
        "eth_getTransactionByBlockNumberAndIndex",
        [block_number_arg(block_number), encode_quantity(index)],
        ret_wrapper=_found(Transaction.from_json),
    )


def send_raw_tx(raw_tx: bytes) -> CallFactory:
    """Send an encoded signed transaction; returns its hash."""
    return CallFactory(
        "eth_sendRawTransaction",
        [encode_data(raw_tx)],
        ret_wrapper=_found(_decode_hash),
    )


def tx_receipt(tx_hash: bytes) -> CallFactory:
    """Request the receipt of the transaction with the given hash."""
    return CallFactory(
        "eth_getTransactionReceipt",
        [encode_data(tx_hash)],
        ret_wrapper=_found(Receipt.from_json),
    )


def block_receipts(number: int | None) -> CallFactory:
    """Request the receipts of all transactions in the given block."""
    return CallFactory(
        "eth_getBlockReceipts",
        [block_number_arg(number)],
        ret_wrapper=_found(_decode_receipts),
    )


def nonce(addr: bytes, block_number: int | None) -> CallFactory:
    """Request the nonce of the address at the given block (None: latest)."""
    return CallFactory(
        "eth_getTransactionCount",
        [encode_data(addr), block_number_arg(block_number)],
        ret_wrapper=_found(decode_quantity),
    )