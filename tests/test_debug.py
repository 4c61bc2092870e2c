import json

import pytest

from w3kit.message import Message
from w3kit.modules.debug import (
    CallTrace,
    StructLog,
    Trace,
    TraceConfig,
    call_trace_call,
    call_trace_tx,
    trace_call,
    trace_tx,
)
from w3kit.rpc import BatchElem, BlockOverrides, Func
from w3kit.state import Account, State
from w3kit.util import to_address, to_bytes, to_hash, to_int

C0FE = to_address("0x000000000000000000000000000000000000c0Fe")
DEAD = to_address("0x000000000000000000000000000000000000dEaD")


class _FakeFunc(Func):
    def encode_args(self, *args):
        return b"\x70\xa0\x82\x31" + b"".join(bytes(12) + a for a in args)

    def decode_args(self, data):
        return ()

    def decode_returns(self, data):
        return ()


def test_call_trace_call_request():
    msg = Message(from_=C0FE, to=DEAD, value=to_int("1 ether"))
    factory = call_trace_call(msg, None, State({C0FE: Account(balance=to_int("1 ether"))}))
    elem = factory.create_request()
    assert elem.method == "debug_traceCall"
    assert elem.args == [
        {
            "from": "0x000000000000000000000000000000000000c0fe",
            "to": "0x000000000000000000000000000000000000dead",
            "value": "0xde0b6b3a7640000",
        },
        "latest",
        {
            "tracer": "callTracer",
            "stateOverrides": {
                "0x000000000000000000000000000000000000c0fe": {"balance": "0xde0b6b3a7640000"}
            },
        },
    ]


def test_call_trace_call_response():
    factory = call_trace_call(Message(from_=C0FE, to=DEAD), None, None)
    result = {
        "from": "0x000000000000000000000000000000000000c0fe",
        "gas": hex(49979000),
        "gasUsed": "0x0",
        "to": "0x000000000000000000000000000000000000dead",
        "input": "0x",
        "value": "0xde0b6b3a7640000",
        "type": "CALL",
    }
    got = factory.handle_response(BatchElem("debug_traceCall", result=result))
    assert got == CallTrace(
        from_=C0FE, to=DEAD, type="CALL", gas=49979000, value=to_int("1 ether")
    )


def test_call_trace_tx_revert_reason():
    tx_hash = to_hash("0x6ea1798a2d0d21db18d6e45ca00f230160b05f172f6022aa138a0b605831d740")
    factory = call_trace_tx(tx_hash, State())
    elem = factory.create_request()
    assert elem.method == "debug_traceTransaction"
    assert elem.args == [
        "0x6ea1798a2d0d21db18d6e45ca00f230160b05f172f6022aa138a0b605831d740",
        {"tracer": "callTracer"},
    ]
    result = {
        "from": "0x84abea9c66d30d00549429f5f687e16708aa20c0",
        "gas": hex(146604),
        "gasUsed": hex(81510),
        "to": "0xd0a7333587053a5bae772bd37b9aae724e367619",
        "input": "0x",
        "error": "execution reverted",
        "revertReason": "BA: Insufficient gas (ETH) for refund",
        "value": "0x0",
        "type": "CALL",
    }
    got = factory.handle_response(BatchElem("debug_traceTransaction", result=result))
    assert got == CallTrace(
        from_=to_address("0x84abea9c66d30d00549429f5f687e16708aa20c0"),
        to=to_address("0xd0a7333587053a5bae772bd37b9aae724e367619"),
        type="CALL",
        gas=146604,
        gas_used=81510,
        value=to_int("0x0"),
        error="execution reverted",
        revert_reason="BA: Insufficient gas (ETH) for refund",
    )


def test_call_trace_nested_calls_from_text():
    text = json.dumps({"type": "CALL", "calls": [{"type": "STATICCALL", "output": "0x2a"}]})
    got = CallTrace.from_json(text)
    assert got.calls == [CallTrace(type="STATICCALL", output=b"\x2a")]


def test_call_trace_invalid_address():
    with pytest.raises(ValueError):
        CallTrace.from_json({"from": "0xc0fe"})


def test_trace_config_defaults():
    assert TraceConfig().to_json() == {
        "disableStorage": True,
        "disableStack": True,
        "enableReturnData": True,
    }


def test_trace_config_all_enabled():
    config = TraceConfig(enable_stack=True, enable_memory=True, enable_storage=True, limit=3)
    assert config.to_json() == {"enableMemory": True, "enableReturnData": True, "limit": 3}


def test_trace_config_overrides():
    config = TraceConfig(
        overrides=State({C0FE: Account(nonce=1)}),
        block_overrides=BlockOverrides(number=1),
    )
    got = config.to_json()
    assert got["stateOverrides"] == {
        "0x000000000000000000000000000000000000c0fe": {"nonce": "0x1"}
    }
    assert got["blockOverrides"] == {"number": "0x1"}


def test_trace_tx_without_config():
    tx_hash = to_hash("0x38f299591902bfada359527fa6b9b597a959c41c6f72a3b484807fbf52dc8abe")
    factory = trace_tx(tx_hash, None)
    elem = factory.create_request()
    assert elem.method == "debug_traceTransaction"
    assert elem.args == [
        "0x38f299591902bfada359527fa6b9b597a959c41c6f72a3b484807fbf52dc8abe",
        {"disableStorage": True, "disableStack": True, "enableReturnData": True},
    ]
    result = {"gas": 22224, "failed": False, "returnValue": "", "structLogs": []}
    got = factory.handle_response(BatchElem("debug_traceTransaction", result=result))
    assert got == Trace(gas=22224)


def test_trace_tx_struct_logs():
    tx_hash = to_hash("0xac503dd98281d4d52c2043e297a6e684d175339a7ebf831605fe593f01ce82c3")
    config = TraceConfig(enable_stack=True, enable_memory=True, enable_storage=True, limit=3)
    factory = trace_tx(tx_hash, config)
    zero_word = "00" * 32
    result = {
        "gas": 46121,
        "failed": False,
        "returnValue": "",
        "structLogs": [
            {"pc": 0, "op": "PUSH1", "gas": 228380, "gasCost": 3, "depth": 1, "stack": []},
            {"pc": 2, "op": "PUSH1", "gas": 228377, "gasCost": 3, "depth": 1, "stack": ["0x60"]},
            {
                "pc": 4,
                "op": "MSTORE",
                "gas": 228374,
                "gasCost": 12,
                "depth": 1,
                "stack": ["0x60", "0x40"],
                "memory": [zero_word, zero_word, zero_word],
            },
        ],
    }
    got = factory.handle_response(BatchElem("debug_traceTransaction", result=result))
    assert got == Trace(
        gas=46121,
        struct_logs=[
            StructLog(pc=0, op="PUSH1", gas=228380, gas_cost=3, depth=1),
            StructLog(pc=2, op="PUSH1", gas=228377, gas_cost=3, depth=1, stack=[0x60]),
            StructLog(
                pc=4,
                op="MSTORE",
                gas=228374,
                gas_cost=12,
                depth=1,
                stack=[0x60, 0x40],
                memory=to_bytes("0x" + zero_word * 3),
            ),
        ],
    )


def test_trace_call_request():
    msg = Message(from_=C0FE, to=DEAD, value=to_int("1 ether"))
    config = TraceConfig(overrides=State({C0FE: Account(balance=to_int("1 ether"))}))
    elem = trace_call(msg, None, config).create_request()
    assert elem.method == "debug_traceCall"
    assert elem.args[1] == "latest"
    assert elem.args[2]["stateOverrides"] == {
        "0x000000000000000000000000000000000000c0fe": {"balance": "0xde0b6b3a7640000"}
    }
    assert elem.args[2]["disableStack"] is True


def test_trace_call_encodes_func_input():
    msg = Message(to=DEAD, func=_FakeFunc(), args=(C0FE,))
    elem = trace_call(msg, 255, None).create_request()
    expected = b"\x70\xa0\x82\x31" + bytes(12) + C0FE
    assert msg.input == expected
    assert elem.args[0]["data"] == "0x" + expected.hex()
    assert elem.args[1] == "0xff"


def test_trace_call_keeps_given_input():
    msg = Message(to=DEAD, input=b"\x01", func=_FakeFunc(), args=(C0FE,))
    elem = trace_call(msg, None, None).create_request()
    assert elem.args[0]["data"] == "0x01"


def test_trace_not_found():
    factory = trace_tx(bytes(32), None)
    with pytest.raises(LookupError):
        factory.handle_response(BatchElem("debug_traceTransaction", result=None))


def test_struct_log_storage_optional_prefix():
    slot = "00" * 31 + "01"
    value = "0x" + "00" * 31 + "2a"
    log = StructLog.from_json({"Pc": 7, "Op": "SLOAD", "storage": {slot: value}})
    assert log.pc == 7
    assert log.op == "SLOAD"
    assert log.storage == {bytes(31) + b"\x01": bytes(31) + b"\x2a"}


def test_struct_log_bad_hash_length():
    with pytest.raises(ValueError, match="hex string has length 4, want 64"):
        StructLog.from_json({"memory": ["0xc0fe"]})


def test_trace_return_value():
    assert Trace.from_json('{"gas": 1, "failed": true, "returnValue": "c0fe"}') == Trace(
        gas=1, failed=True, output=b"\xc0\xfe"
    )