"""Calls of the "debug" namespace: call traces and struct-log traces."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from typing import Any, Mapping

from w3kit.message import Message
from w3kit.rpc import BlockOverrides, CallFactory, block_number_arg
from w3kit.state import State
from w3kit.util import (
    ADDR0,
    ADDRESS_LENGTH,
    HASH_LENGTH,
    decode_data,
    decode_quantity,
    encode_data,
)

_HEX_DIGITS = re.compile(r"[0-9a-fA-F]+")
_DEC_DIGITS = re.compile(r"[0-9]+")
_MAX_UINT256 = (1 << 256) - 1


def _load_object(data: Any) -> Mapping[str, Any]:
    if isinstance(data, (str, bytes, bytearray)):
        data = json.loads(data)
    if not isinstance(data, Mapping):
        raise ValueError("expected a JSON object")
    return data


def _has_0x_prefix(text: str) -> bool:
    return len(text) >= 2 and text[0] == "0" and text[1] in "xX"


def _decode_address(value: Any) -> bytes:
    if not isinstance(value, str):
        raise ValueError(f"cannot decode {value!r} as address")
    raw = decode_data(value)
    if len(raw) != ADDRESS_LENGTH:
        raise ValueError(f"invalid address {value!r}: must have {ADDRESS_LENGTH} bytes")
    return raw


def _as_int(value: Any, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError(f"cannot decode {value!r} as {name}")
    return value


def _as_str(value: Any, name: str) -> str:
    if not isinstance(value, str):
        raise ValueError(f"cannot decode {value!r} as {name}")
    return value


def _as_bool(value: Any, name: str) -> bool:
    if not isinstance(value, bool):
        raise ValueError(f"cannot decode {value!r} as {name}")
    return value


def _optional_prefixed_hash(value: Any) -> bytes:
    """Decode a 32-byte hash written with or without "0x" prefix."""
    text = _as_str(value, "hash")
    if len(text) > 2 and _has_0x_prefix(text):
        text = text[2:]
    if len(text) != 2 * HASH_LENGTH:
        raise ValueError(f"hex string has length {len(text)}, want 64")
    if not _HEX_DIGITS.fullmatch(text):
        raise ValueError(f"invalid hex string {text!r}")
    return bytes.fromhex(text)


def _optional_prefixed_bytes(value: Any) -> bytes:
    text = _as_str(value, "bytes")
    if _has_0x_prefix(text):
        text = text[2:]
    if len(text) % 2:
        raise ValueError("hex string of odd length")
    if text and not _HEX_DIGITS.fullmatch(text):
        raise ValueError(f"invalid hex string {text!r}")
    return bytes.fromhex(text)


def _parse_uint256(value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError(f"cannot decode {value!r} as uint256")
    if isinstance(value, int):
        number = value
    elif isinstance(value, str):
        if _has_0x_prefix(value):
            digits = value[2:]
            if not _HEX_DIGITS.fullmatch(digits):
                raise ValueError(f"invalid hex uint256 {value!r}")
            number = int(digits, 16)
        else:
            if not _DEC_DIGITS.fullmatch(value):
                raise ValueError(f"invalid decimal uint256 {value!r}")
            number = int(value)
    else:
        raise ValueError(f"cannot decode {value!r} as uint256")
    if not 0 <= number <= _MAX_UINT256:
        raise ValueError(f"uint256 {value!r} out of range")
    return number


def _jsonable(arg: Any) -> Any:
    to_json = getattr(arg, "to_json", None)
    return to_json() if callable(to_json) else arg


def _msg_args_wrapper(args: list) -> list:
    """Encode the message input from its func if needed; make args JSON-ready."""
    msg = args[0]
    if isinstance(msg, Message):
        msg.encode_input()
    return [_jsonable(arg) for arg in args]


def _call_tracer_config(overrides: Mapping | None) -> dict[str, Any]:
    config: dict[str, Any] = {"tracer": "callTracer"}
    if overrides:
        config["stateOverrides"] = State(overrides).to_json()
    return config


def call_trace_call(
    msg: Message, block_number: int | None, overrides: Mapping | None
) -> CallFactory:
    """Request the call trace of the given message."""
    return CallFactory(
        "debug_traceCall",
        [msg, block_number_arg(block_number), _call_tracer_config(overrides)],
        args_wrapper=_msg_args_wrapper,
        ret_wrapper=CallTrace.from_json,
    )


def call_trace_tx(tx_hash: bytes, overrides: Mapping | None) -> CallFactory:
    """Request the call trace of the transaction with the given hash."""
    return CallFactory(
        "debug_traceTransaction",
        [encode_data(tx_hash), _call_tracer_config(overrides)],
        ret_wrapper=CallTrace.from_json,
    )


def trace_call(
    msg: Message, block_number: int | None, config: TraceConfig | None
) -> CallFactory:
    """Request the struct-log trace of the given message."""
    if config is None:
        config = TraceConfig()
    return CallFactory(
        "debug_traceCall",
        [msg, block_number_arg(block_number), config],
        args_wrapper=_msg_args_wrapper,
        ret_wrapper=Trace.from_json,
    )


def trace_tx(tx_hash: bytes, config: TraceConfig | None) -> CallFactory:
    """Request the struct-log trace of the transaction with the given hash."""
    if config is None:
        config = TraceConfig()
    return CallFactory(
        "debug_traceTransaction",
        [encode_data(tx_hash), config],
        args_wrapper=lambda args: [_jsonable(arg) for arg in args],
        ret_wrapper=Trace.from_json,
    )


@dataclass
class CallTrace:
    """A call frame as reported by the call tracer."""

    from_: bytes = ADDR0
    to: bytes = ADDR0
    type: str = ""
    gas: int = 0
    gas_used: int = 0
    value: int | None = None
    input: bytes = b""
    output: bytes = b""
    error: str = ""
    revert_reason: str = ""
    calls: list[CallTrace] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: Any) -> CallTrace:
        """Build a call trace from its JSON text or decoded JSON object."""
        obj = _load_object(data)

        def get(key: str, decode: Any, default: Any) -> Any:
            value = obj.get(key)
            return default if value is None else decode(value)

        return cls(
            from_=get("from", _decode_address, ADDR0),
            to=get("to", _decode_address, ADDR0),
            type=get("type", lambda v: _as_str(v, "type"), ""),
            gas=get("gas", decode_quantity, 0),
            gas_used=get("gasUsed", decode_quantity, 0),
            value=get("value", decode_quantity, None),
            input=get("input", decode_data, b""),
            output=get("output", decode_data, b""),
            error=get("error", lambda v: _as_str(v, "error"), ""),
            revert_reason=get("revertReason", lambda v: _as_str(v, "revertReason"), ""),
            calls=[cls.from_json(call) for call in obj.get("calls") or []],
        )


@dataclass
class TraceConfig:
    """Options of the struct-log tracer."""

    overrides: Mapping | None = None
    block_overrides: BlockOverrides | None = None
    enable_stack: bool = False
    enable_memory: bool = False
    enable_storage: bool = False
    limit: int = 0

    def to_json(self) -> dict[str, Any]:
        """Return the JSON object, leaving out fields that are unset."""
        out: dict[str, Any] = {}
        if self.overrides:
            out["stateOverrides"] = State(self.overrides).to_json()
        if self.block_overrides is not None:
            out["blockOverrides"] = self.block_overrides.to_json()
        if not self.enable_storage:
            out["disableStorage"] = True
        if not self.enable_stack:
            out["disableStack"] = True
        if self.enable_memory:
            out["enableMemory"] = True
        out["enableReturnData"] = True
        if self.limit:
            out["limit"] = self.limit
        return out


@dataclass
class StructLog:
    """One executed opcode of a struct-log trace."""

    pc: int = 0
    depth: int = 0
    gas: int = 0
    gas_cost: int = 0
    op: str = ""
    stack: list[int] = field(default_factory=list)
    memory: bytes = b""
    storage: dict[bytes, bytes] | None = None

    @classmethod
    def from_json(cls, data: Any) -> StructLog:
        """Build a struct log from its JSON text or decoded JSON object.

        Field names are matched without regard to case.
        """
        obj = {key.lower(): value for key, value in _load_object(data).items()}

        def number(key: str) -> int:
            value = obj.get(key)
            return 0 if value is None else _as_int(value, key)

        op = obj.get("op")
        stack = obj.get("stack") or []
        memory = obj.get("memory") or []
        storage = obj.get("storage") or {}
        return cls(
            pc=number("pc"),
            depth=number("depth"),
            gas=number("gas"),
            gas_cost=number("gascost"),
            op="" if op is None else _as_str(op, "op"),
            stack=[_parse_uint256(item) for item in stack],
            memory=b"".join(_optional_prefixed_hash(word) for word in memory),
            storage={
                _optional_prefixed_hash(slot): _optional_prefixed_hash(value)
                for slot, value in storage.items()
            }
            or None,
        )


@dataclass
class Trace:
    """A struct-log trace of a call or transaction."""

    gas: int = 0
    failed: bool = False
    output: bytes = b""
    struct_logs: list[StructLog] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: Any) -> Trace:
        """Build a trace from its JSON text or decoded JSON object."""
        obj = _load_object(data)
        gas = obj.get("gas")
        failed = obj.get("failed")
        output = obj.get("returnValue")
        return cls(
            gas=0 if gas is None else _as_int(gas, "gas"),
            failed=False if failed is None else _as_bool(failed, "failed"),
            output=b"" if output is None else _optional_prefixed_bytes(output),
            struct_logs=[StructLog.from_json(log) for log in obj.get("structLogs") or []],
        )