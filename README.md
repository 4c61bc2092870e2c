# w3kit

Request builders and value helpers for Ethereum JSON-RPC endpoints.

Each RPC method has a small factory function. It returns a request object.
The request object knows which method and which parameters to send. It also
knows how to turn the node's JSON reply into Python values: `int`, `bytes`,
`bool`, and dataclasses for blocks, transactions, receipts, logs and traces.

## Installation

```
pip install w3kit
```

## Value helpers

`w3kit.util` parses the hex and decimal notations that Ethereum uses:

```python
from w3kit.util import to_address, to_bytes, to_hash, to_int, from_wei

to_address("0x000000000000000000000000000000000000c0Fe")  # 20 bytes
to_hash("0x" + "00" * 31 + "01")                         # 32 bytes
to_bytes("0xdead", "beef")                               # b"\xde\xad\xbe\xef"

to_int("0x1111d67bb1bb0000")  # 1230000000000000000
to_int("1.23 ether")          # 1230000000000000000
to_int("1.23 gwei")           # 1230000000

from_wei(1_230000000_000000000, 18)  # "1.23"
```

Malformed input raises `ValueError`.

The module also has these helpers:

- `big_min` and `big_max`.
- `encode_quantity` and `decode_quantity` for `"0x"`-prefixed quantities.
- `encode_data` and `decode_data` for `"0x"`-prefixed byte strings.

## Building requests

These modules hold the method factories:

| Module | Methods |
| --- | --- |
| `w3kit.eth.block` | blocks, headers, transaction counts, uncles |
| `w3kit.eth.tx` | transactions, receipts, block receipts, raw sends, nonces |
| `w3kit.eth.call` | `eth_call`, `eth_estimateGas`, `eth_createAccessList`, and `call_func` for contract functions |
| `w3kit.eth.logs` | `eth_getLogs` with a `FilterQuery`, and the `new_heads`, `pending_transactions` and `new_logs` subscriptions |
| `w3kit.modules.admin` | peers and node info |
| `w3kit.modules.debug` | call traces and struct-log traces |
| `w3kit.modules.net` | listening, peer count, network version |
| `w3kit.modules.txpool` | pool content and status |
| `w3kit.modules.web3` | client version |

Each factory returns an `RPCCaller`. Most factories return a
`w3kit.rpc.CallFactory`. A request has two steps. `create_request()` gives you
a `BatchElem` that holds `method` and `args`. You then fill in the elem's
`result`, or its `error`, from the node's reply. Finally,
`handle_response(elem)` decodes that reply.

```python
from w3kit.eth import block

request = block.block_tx_count_by_number(15050000)
elem = request.create_request()
# elem.method == "eth_getBlockTransactionCountByNumber"
# elem.args == ["0xe5a510"]

elem.result = "0x20"            # the "result" member of the node's reply
count = request.handle_response(elem)   # 32
```

Block numbers work as follows:

- `None` selects the `"latest"` block.
- `-1`, `-2`, `-3` and `-4` select `"pending"`, `"latest"`, `"finalized"` and `"safe"`.

`handle_response` can raise in three ways:

- If `elem.error` is set, it raises that error.
- If the result is `null`, it raises `LookupError("not found")`.
- If the result cannot be decoded, it raises `ValueError`.

## Messages and state overrides

`w3kit.message.Message` describes a call or transaction without a signature.
`to_json()` returns the JSON object and leaves out unset fields.
`Message.from_json()` reads one back.

If a message has no `input`, `encode_input()` builds the input from its
`func` and `args`. `func` is an implementation of the abstract
`w3kit.rpc.Func` class. The package does not ship an ABI encoder, so you
supply your own `Func`.

`w3kit.state.State` maps 20-byte addresses to `Account` objects.
`State.merge(other)` returns a new state with `other` laid over the first one.
`Account.code_hash()` returns the keccak256 hash of the account's code.

`w3kit.rpc.BlockOverrides` and `w3kit.modules.debug.TraceConfig` build the
override and tracer objects that the debug calls send.

## Testing against golden files

`w3kit.rpctest.server.Server` is a local HTTP endpoint that answers exactly
one request. A golden file defines that request and its reply:

```
// comments and empty lines are ignored
> {"jsonrpc":"2.0","id":1,"method":"eth_chainId"}
< {"jsonrpc":"2.0","id":1,"result":"0x1"}
```

```python
from w3kit.rpctest.server import Server

with Server.from_file("testdata/chain_id.golden") as server:
    url = server.url()
    ...
```

`Server` also accepts a file object, or the golden text as `str` or `bytes`.

If the request body differs from the golden file, the server answers with
HTTP status 500. The same happens if the golden file holds an invalid line.
In either case, `close()`, or leaving the `with` block, then raises the first
`GoldenError` it found.

## What this package does not do

- It does not send requests. There is no client and no transport. You post
  `elem.method` and `elem.args` to a node yourself and put the reply back
  into the elem.
- It does not run subscriptions. A subscription's `create_request()` only
  returns the namespace, your queue and the params.
- It has no request builders for these chain queries: balance, block number,
  chain ID, code, gas price, gas tip cap, storage slot and syncing status.
- It does not ABI-encode or ABI-decode. `Func` is an interface only.