"""Log queries and "eth" subscriptions."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from w3kit.eth.types import Header, Log, Transaction
from w3kit.rpc import CallFactory, RPCSubscriber, block_number_arg
from w3kit.util import encode_data


@dataclass
class FilterQuery:
    """Criteria for selecting logs.

    ``topics`` holds one list of alternatives per position; ``None`` or an
    empty list at a position matches any topic.
    """

    block_hash: bytes | None = None
    from_block: int | None = None
    to_block: int | None = None
    addresses: list[bytes] = field(default_factory=list)
    topics: list[list[bytes] | None] | None = None


def to_filter_arg(query: FilterQuery) -> dict[str, Any]:
    """Return the JSON filter object of a query."""
    topics = None
    if query.topics is not None:
        topics = [None if alts is None else [encode_data(t) for t in alts]
                  for alts in query.topics]
    arg: dict[str, Any] = {"topics": topics}
    if query.addresses:
        arg["address"] = [encode_data(a) for a in query.addresses]
    if query.block_hash is not None:
        if query.from_block is not None or query.to_block is not None:
            raise ValueError("cannot specify both BlockHash and FromBlock/ToBlock")
        arg["blockHash"] = encode_data(query.block_hash)
    else:
        arg["fromBlock"] = "0x0" if query.from_block is None else block_number_arg(query.from_block)
        arg["toBlock"] = block_number_arg(query.to_block)
    return arg


def _decode_logs(value: Any) -> list[Log]:
    if not isinstance(value, list):
        raise ValueError("expected a JSON array of logs")
    return [Log.from_json(item) for item in value]


def logs(query: FilterQuery) -> CallFactory:
    """Request the logs matching the query."""
    return CallFactory("eth_getLogs", [query],
                       args_wrapper=lambda args: [to_filter_arg(args[0])],
                       ret_wrapper=_decode_logs)


@dataclass
class Subscription(RPCSubscriber):
    """An "eth" subscription delivering decoded items to ``queue``."""

    queue: Any
    params: list
    decode: Any = None
    error: Exception | None = None

    def create_request(self) -> tuple[str, Any, list]:
        if self.error is not None:
            raise self.error
        return "eth", self.queue, self.params


def new_heads(queue: Any) -> Subscription:
    """Subscribe to new chain heads."""
    return Subscription(queue, ["newHeads"], Header.from_json)


def pending_transactions(queue: Any) -> Subscription:
    """Subscribe to new pending transactions."""
    return Subscription(queue, ["newPendingTransactions", True], Transaction.from_json)


def new_logs(queue: Any, query: FilterQuery) -> Subscription:
    """Subscribe to logs matching the query."""
    try:
        arg: Any = to_filter_arg(query)
        error = None
    except ValueError as exc:
        arg, error = None, exc
    return Subscription(queue, ["logs", arg], Log.from_json, error)