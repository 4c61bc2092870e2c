"""Core interfaces and request types for JSON-RPC calls."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable

from w3kit.util import ADDR0, HASH0, encode_data, encode_quantity

_BLOCK_TAGS = {-1: "pending", -2: "latest", -3: "finalized", -4: "safe"}


class Func(ABC):
    """ABI encoding and decoding of a contract function."""

    @abstractmethod
    def encode_args(self, *args: Any) -> bytes:
        """ABI-encode the args and prepend the 4-byte selector."""

    @abstractmethod
    def decode_args(self, data: bytes) -> tuple:
        """ABI-decode call input into its arguments."""

    @abstractmethod
    def decode_returns(self, data: bytes) -> tuple:
        """ABI-decode call output into its return values."""


@dataclass
class BatchElem:
    """A single request of a batch and, once answered, its raw result."""

    method: str
    args: list = field(default_factory=list)
    result: Any = None
    error: BaseException | None = None


class RPCCaller(ABC):
    """Something that creates a request and handles its response."""

    @abstractmethod
    def create_request(self) -> BatchElem:
        """Create the request element for the call."""

    @abstractmethod
    def handle_response(self, elem: BatchElem) -> Any:
        """Handle the answered element and return the call's result."""


class RPCSubscriber(ABC):
    """Something that starts a subscription."""

    @abstractmethod
    def create_request(self) -> tuple[str, Any, list]:
        """Return the namespace, the channel and the params of the subscription."""


def block_number_arg(number: int | None) -> str:
    """Return the block parameter for a block number; None means latest."""
    if number is None:
        return "latest"
    if number >= 0:
        return encode_quantity(number)
    try:
        return _BLOCK_TAGS[number]
    except KeyError:
        raise ValueError(f"invalid block number {number}") from None


class CallFactory(RPCCaller):
    """A generic call of one method with fixed arguments.

    ``args_wrapper`` rewrites the arguments when the request is created;
    ``ret_wrapper`` converts the raw JSON result into the returned value.
    """

    def __init__(
        self,
        method: str,
        args: Iterable[Any] | None = None,
        *,
        args_wrapper: Callable[[list], list] | None = None,
        ret_wrapper: Callable[[Any], Any] | None = None,
    ) -> None:
        self.method = method
        self.args = list(args or ())
        self._args_wrapper = args_wrapper
        self._ret_wrapper = ret_wrapper
        self.value: Any = None

    def create_request(self) -> BatchElem:
        args = list(self.args)
        if self._args_wrapper is not None:
            args = list(self._args_wrapper(args))
        return BatchElem(method=self.method, args=args)

    def handle_response(self, elem: BatchElem) -> Any:
        if elem.error is not None:
            raise elem.error
        if elem.result is None:
            raise LookupError("not found")
        value = elem.result
        if self._ret_wrapper is not None:
            value = self._ret_wrapper(value)
        self.value = value
        return value


@dataclass
class BlockOverrides:
    """Block fields to override when executing a call."""

    number: int | None = None
    difficulty: int | None = None
    time: int = 0
    gas_limit: int = 0
    fee_recipient: bytes = ADDR0
    prev_randao: bytes = HASH0
    base_fee_per_gas: int | None = None
    blob_base_fee: int | None = None

    def to_json(self) -> dict[str, str]:
        """Return the JSON object, leaving out fields that are unset."""
        out: dict[str, str] = {}
        if self.number is not None:
            out["number"] = encode_quantity(self.number)
        if self.difficulty is not None:
            out["difficulty"] = encode_quantity(self.difficulty)
        if self.time:
            out["time"] = encode_quantity(self.time)
        if self.gas_limit:
            out["gasLimit"] = encode_quantity(self.gas_limit)
        if self.fee_recipient != ADDR0:
            out["feeRecipient"] = encode_data(self.fee_recipient)
        if self.prev_randao != HASH0:
            out["prevRandao"] = encode_data(self.prev_randao)
        if self.base_fee_per_gas is not None:
            out["baseFeePerGas"] = encode_quantity(self.base_fee_per_gas)
        if self.blob_base_fee is not None:
            out["blobBaseFee"] = encode_quantity(self.blob_base_fee)
        return out