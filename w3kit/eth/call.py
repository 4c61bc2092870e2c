"""Calls of the "eth" namespace that execute messages."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Mapping

from w3kit.eth.types import AccessTuple
from w3kit.message import Message
from w3kit.rpc import BatchElem, CallFactory, Func, RPCCaller, block_number_arg
from w3kit.state import State
from w3kit.util import decode_data, decode_quantity


def _jsonable(arg: Any) -> Any:
    if isinstance(arg, Mapping) and not isinstance(arg, State):
        return State(arg).to_json()
    to_json = getattr(arg, "to_json", None)
    return to_json() if callable(to_json) else arg


def _msg_args_wrapper(args: list) -> list:
    msg = args[0]
    if isinstance(msg, Message):
        msg.encode_input()
    return [_jsonable(arg) for arg in args]


def call(msg: Message, block_number: int | None, overrides: Mapping | None) -> CallFactory:
    """Request the output of the message at the given block (None: latest)."""
    args: list = [msg, block_number_arg(block_number)]
    if overrides is not None:
        args.append(overrides)
    return CallFactory("eth_call", args, args_wrapper=_msg_args_wrapper,
                       ret_wrapper=decode_data)


def estimate_gas(msg: Message, block_number: int | None) -> CallFactory:
    """Request the estimated gas of the message at the given block."""
    return CallFactory("eth_estimateGas", [msg, block_number_arg(block_number)],
                       args_wrapper=_msg_args_wrapper, ret_wrapper=decode_quantity)


def access_list(msg: Message, block_number: int | None) -> CallFactory:
    """Request the access list of the message at the given block."""
    return CallFactory("eth_createAccessList", [msg, block_number_arg(block_number)],
                       args_wrapper=_msg_args_wrapper,
                       ret_wrapper=AccessListResponse.from_json)


@dataclass
class AccessListResponse:
    """An access list and the gas used with it."""

    access_list: list[AccessTuple] = field(default_factory=list)
    gas_used: int = 0

    @classmethod
    def from_json(cls, data: Any) -> AccessListResponse:
        """Build the response from its JSON text or object."""
        if isinstance(data, (str, bytes, bytearray)):
            data = json.loads(data)
        if not isinstance(data, Mapping):
            raise ValueError("expected a JSON object")
        gas_used = data.get("gasUsed")
        return cls(
            access_list=[AccessTuple.from_json(e) for e in data.get("accessList") or []],
            gas_used=0 if gas_used is None else decode_quantity(gas_used),
        )


def call_func(contract: bytes, func: Func, *args: Any) -> CallFuncFactory:
    """Request the returns of ``func`` called on ``contract`` with ``args``."""
    return CallFuncFactory(contract, func, *args)


class CallFuncFactory(RPCCaller):
    """An eth_call of a contract function whose output is ABI-decoded."""

    def __init__(self, contract: bytes, func: Func, *args: Any) -> None:
        self.msg = Message(to=contract, func=func, args=tuple(args))
        self._at_block: int | None = None
        self._overrides: Mapping | None = None

    def from_(self, sender: bytes) -> CallFuncFactory:
        """Set the sender of the call."""
        self.msg.from_ = sender
        return self

    def value(self, value: int | None) -> CallFuncFactory:
        """Set the value sent with the call."""
        self.msg.value = value
        return self

    def at_block(self, block_number: int | None) -> CallFuncFactory:
        """Set the block to call at (None: latest)."""
        self._at_block = block_number
        return self

    def overrides(self, overrides: Mapping | None) -> CallFuncFactory:
        """Set state overrides for the call."""
        self._overrides = overrides
        return self

    def create_request(self) -> BatchElem:
        self.msg.input = self.msg.func.encode_args(*self.msg.args)
        args: list = [self.msg.to_json(), block_number_arg(self._at_block)]
        if self._overrides:
            args.append(_jsonable(self._overrides))
        return BatchElem(method="eth_call", args=args)

    def handle_response(self, elem: BatchElem) -> tuple:
        """Return the ABI-decoded returns of the call."""
        if elem.error is not None:
            raise elem.error
        output = decode_data(elem.result) if isinstance(elem.result, str) else b""
        return self.msg.func.decode_returns(output)