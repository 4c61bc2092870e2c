"""Calls of the "eth" namespace about blocks, headers and uncles."""

from __future__ import annotations

from w3kit.eth.types import Block, Header
from w3kit.rpc import CallFactory, block_number_arg
from w3kit.util import decode_quantity, encode_data, encode_quantity


def block_by_hash(block_hash: bytes) -> CallFactory:
    """Request the block with the given hash, with full transactions."""
    return CallFactory("eth_getBlockByHash", [encode_data(block_hash), True],
                       ret_wrapper=Block.from_json)


def block_by_number(number: int | None) -> CallFactory:
    """Request the block with the given number (None: latest), with full transactions."""
    return CallFactory("eth_getBlockByNumber", [block_number_arg(number), True],
                       ret_wrapper=Block.from_json)


def block_tx_count_by_hash(block_hash: bytes) -> CallFactory:
    """Request the number of transactions in the block with the given hash."""
    return CallFactory("eth_getBlockTransactionCountByHash", [encode_data(block_hash)],
                       ret_wrapper=decode_quantity)


def block_tx_count_by_number(number: int | None) -> CallFactory:
    """Request the number of transactions in the block with the given number."""
    return CallFactory("eth_getBlockTransactionCountByNumber", [block_number_arg(number)],
                       ret_wrapper=decode_quantity)


def header_by_hash(block_hash: bytes) -> CallFactory:
    """Request the header with the given hash."""
    return CallFactory("eth_getBlockByHash", [encode_data(block_hash), False],
                       ret_wrapper=Header.from_json)


def header_by_number(number: int | None) -> CallFactory:
    """Request the header with the given number (None: latest)."""
    return CallFactory("eth_getBlockByNumber", [block_number_arg(number), False],
                       ret_wrapper=Header.from_json)


def uncle_by_block_hash_and_index(block_hash: bytes, index: int) -> CallFactory:
    """Request the uncle at the index of the block with the given hash."""
    return CallFactory("eth_getUncleByBlockHashAndIndex",
                       [encode_data(block_hash), encode_quantity(index)],
                       ret_wrapper=Header.from_json)


def uncle_by_block_number_and_index(number: int | None, index: int) -> CallFactory:
    """Request the uncle at the index of the block with the given number."""
    return CallFactory("eth_getUncleByBlockNumberAndIndex",
                       [block_number_arg(number), encode_quantity(index)],
                       ret_wrapper=Header.from_json)


def uncle_count_by_block_hash(block_hash: bytes) -> CallFactory:
    """Request the number of uncles of the block with the given hash."""
    return CallFactory("eth_getUncleCountByBlockHash", [encode_data(block_hash)],
                       ret_wrapper=decode_quantity)


def uncle_count_by_block_number(number: int | None) -> CallFactory:
    """Request the number of uncles of the block with the given number."""
    return CallFactory("eth_getUncleCountByBlockNumber", [block_number_arg(number)],
                       ret_wrapper=decode_quantity)