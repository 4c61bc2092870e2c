import pytest

from w3kit.eth.call import (
    AccessListResponse,
    access_list,
    call,
    call_func,
    estimate_gas,
)
from w3kit.message import Message
from w3kit.rpc import Func
from w3kit.state import Account, State
from w3kit.util import to_address, to_hash

WETH = to_address("0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2")
HOLDER = to_address("0x000000000000000000000000000000000000c0Fe")
SLOT = to_hash("0xf68b260b81af177c0bf1a03b5d62b15aea1b486f8df26c77f33aed7538cfeb2c")


class BalanceOf(Func):
    selector = bytes.fromhex("70a08231")

    def encode_args(self, *args):
        (addr,) = args
        return self.selector + addr.rjust(32, b"\x00")

    def decode_args(self, data):
        return (data[4 + 12:36],)

    def decode_returns(self, data):
        return (int.from_bytes(data[:32], "big"),)


def balance_msg():
    return Message(to=WETH, func=BalanceOf(), args=(HOLDER,))


def expected_input():
    return "0x70a08231" + "00" * 12 + HOLDER.hex()


def test_call_encodes_input():
    elem = call(balance_msg(), None, None).create_request()
    assert elem.method == "eth_call"
    assert elem.args == [{"to": "0x" + WETH.hex(), "data": expected_input()}, "latest"]
    elem.result = "0x" + "00" * 32
    assert call(balance_msg(), None, None).handle_response(elem) == bytes(32)


def test_call_with_overrides():
    overrides = State({WETH: Account(storage={SLOT: (42).to_bytes(32, "big")})})
    factory = call(balance_msg(), None, overrides)
    elem = factory.create_request()
    assert elem.args[2] == {"0x" + WETH.hex(): {"stateDiff": {
        "0x" + SLOT.hex(): "0x" + (42).to_bytes(32, "big").hex()}}}
    elem.result = "0x" + (42).to_bytes(32, "big").hex()
    assert factory.handle_response(elem) == (42).to_bytes(32, "big")


def test_call_func():
    factory = call_func(WETH, BalanceOf(), HOLDER)
    elem = factory.create_request()
    assert elem.args[0]["data"] == expected_input()
    assert len(elem.args) == 2
    elem.result = "0x" + "00" * 32
    assert factory.handle_response(elem) == (0,)


def test_call_func_options():
    factory = call_func(WETH, BalanceOf(), HOLDER).from_(HOLDER).value(5).at_block(255)
    factory.overrides(State({HOLDER: Account(nonce=1)}))
    elem = factory.create_request()
    assert elem.args[0]["from"] == "0x" + HOLDER.hex()
    assert elem.args[0]["value"] == "0x5"
    assert elem.args[1] == "0xff"
    assert elem.args[2] == {"0x" + HOLDER.hex(): {"nonce": "0x1"}}


def test_estimate_gas():
    factory = estimate_gas(balance_msg(), None)
    elem = factory.create_request()
    assert elem.method == "eth_estimateGas"
    elem.result = "0x5cc6"
    assert factory.handle_response(elem) == 23750


def test_access_list():
    factory = access_list(balance_msg(), None)
    elem = factory.create_request()
    elem.result = {"accessList": [{"address": "0x" + WETH.hex(),
                                   "storageKeys": ["0x" + SLOT.hex()]}],
                   "gasUsed": "0x65c2"}
    resp = factory.handle_response(elem)
    assert resp.gas_used == 26050
    assert resp.access_list[0].address == WETH
    assert resp.access_list[0].storage_keys == [SLOT]


def test_access_list_response_bad_json():
    with pytest.raises(ValueError):
        AccessListResponse.from_json("[]")