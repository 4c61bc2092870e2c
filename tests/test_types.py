import json

import pytest

from w3kit.eth.types import (
    AccessTuple,
    Block,
    Header,
    Log,
    Receipt,
    Transaction,
    Withdrawal,
)

ADDR = "0x5df9b87991262f6ba471f09758cde1c0fc1de734"
HASH = "0x" + "ab" * 32
BLOOM = "0x" + "00" * 256


def header_json(**extra):
    obj = {
        "parentHash": HASH,
        "sha3Uncles": HASH,
        "miner": ADDR,
        "stateRoot": HASH,
        "transactionsRoot": HASH,
        "receiptsRoot": HASH,
        "logsBloom": BLOOM,
        "difficulty": "0x5",
        "number": "0x7",
        "gasLimit": "0x1388",
        "gasUsed": "0x0",
        "timestamp": "0x55ba4224",
        "extraData": "0x",
        "mixHash": HASH,
        "nonce": "0x539bd4979fef1ec4",
    }
    obj.update(extra)
    return obj


def test_header_fields():
    h = Header.from_json(header_json())
    assert h.number == 7
    assert h.coinbase == bytes.fromhex(ADDR[2:])
    assert h.nonce == bytes.fromhex("539bd4979fef1ec4")
    assert h.base_fee is None


def test_header_missing_field():
    obj = header_json()
    del obj["miner"]
    with pytest.raises(ValueError):
        Header.from_json(obj)


def test_header_from_text_equals_object():
    obj = header_json(baseFeePerGas="0x3b9aca00")
    assert Header.from_json(json.dumps(obj)) == Header.from_json(obj)


def test_legacy_transaction():
    tx = Transaction.from_json({
        "type": "0x0", "nonce": "0x0", "gasPrice": "0x2d79883d2000",
        "gas": "0x5208", "to": ADDR, "value": "0x7a69", "input": "0x",
        "v": "0x1c", "r": "0x1", "s": "0x2",
    })
    assert tx.gas_price == 0x2D79883D2000
    assert tx.value == 0x7A69
    assert tx.to == bytes.fromhex(ADDR[2:])
    assert tx.gas_fee_cap is None


def test_contract_creation_has_no_recipient():
    tx = Transaction.from_json({
        "type": "0x2", "chainId": "0x1", "nonce": "0x1", "gas": "0x1",
        "maxFeePerGas": "0x2", "maxPriorityFeePerGas": "0x1",
        "to": None, "value": "0x0", "input": "0x60",
    })
    assert tx.to is None
    assert tx.input == b"\x60"
    assert tx.gas_fee_cap == 2


def test_withdrawal():
    w = Withdrawal.from_json({"index": "0xeb9b8c", "validatorIndex": "0xa474b",
                              "address": ADDR, "amount": "0xeb0d50"})
    assert (w.index, w.validator, w.amount) == (0xEB9B8C, 0xA474B, 0xEB0D50)


def test_block_with_body():
    obj = header_json(
        transactions=[{"type": "0x0", "nonce": "0x3", "gasPrice": "0x1", "gas": "0x1",
                       "to": ADDR, "value": "0x0", "input": "0x"}],
        withdrawals=[],
    )
    block = Block.from_json(obj)
    assert block.transactions[0].nonce == 3
    assert block.withdrawals == []
    assert block.header == Header.from_json(obj)


def test_block_rejects_hash_transactions():
    with pytest.raises(ValueError):
        Block.from_json(header_json(transactions=[HASH]))


def test_log_and_receipt():
    log = {"address": ADDR, "topics": [HASH], "data": "0xff", "blockNumber": "0x2",
           "transactionHash": HASH, "transactionIndex": "0x1", "blockHash": HASH,
           "logIndex": "0x4", "removed": False}
    parsed = Log.from_json(log)
    assert parsed.topics == [bytes.fromhex(HASH[2:])]
    assert parsed.index == 4
    receipt = Receipt.from_json({
        "type": "0x2", "status": "0x1", "cumulativeGasUsed": "0x10",
        "logsBloom": BLOOM, "logs": [log], "transactionHash": HASH,
        "gasUsed": "0x8", "blockNumber": "0x2",
    })
    assert receipt.logs == [parsed]
    assert receipt.status == 1


def test_access_tuple_bad_key():
    with pytest.raises(ValueError):
        AccessTuple.from_json({"address": ADDR, "storageKeys": ["0x01"]})