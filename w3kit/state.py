"""Account state used for state overrides."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from Crypto.Hash import keccak

from w3kit.util import encode_data, encode_quantity


def _keccak256(data: bytes) -> bytes:
    return keccak.new(digest_bits=256, data=bytes(data)).digest()


EMPTY_CODE_HASH = _keccak256(b"")


@dataclass
class Account:
    """An account's nonce, balance, code and storage.

    Storage maps 32-byte slots to 32-byte values.
    """

    nonce: int = 0
    balance: int | None = None
    code: bytes | None = None
    storage: dict[bytes, bytes] | None = None
    _code_hash: bytes | None = field(default=None, init=False, repr=False, compare=False)

    def code_hash(self) -> bytes:
        """Return the keccak256 hash of the code, cached after the first call."""
        if self._code_hash is None:
            self._code_hash = _keccak256(self.code) if self.code else EMPTY_CODE_HASH
        return self._code_hash

    def deep_copy(self) -> Account:
        """Return a copy that shares no mutable data with this account."""
        return Account(
            nonce=self.nonce,
            balance=self.balance,
            code=bytes(self.code) if self.code is not None else None,
            storage=dict(self.storage) if self.storage else None,
        )

    def _merge(self, src: Account) -> None:
        src_is_zero = src.nonce == 0 and src.balance is None and not src.code
        if not src_is_zero:
            self.nonce = src.nonce
            self.balance = src.balance
            self.code = bytes(src.code) if src.code else None
            self._code_hash = None

        if src.storage:
            if self.storage is None:
                self.storage = dict(src.storage)
            else:
                self.storage.update(src.storage)

    def to_json(self) -> dict[str, Any]:
        """Return the JSON object, leaving out fields that are unset."""
        out: dict[str, Any] = {}
        if self.nonce > 0:
            out["nonce"] = encode_quantity(self.nonce)
        if self.balance is not None:
            out["balance"] = encode_quantity(self.balance)
        if self.code:
            out["code"] = encode_data(self.code)
        if self.storage:
            out["stateDiff"] = {
                encode_data(slot): encode_data(value)
                for slot, value in sorted(self.storage.items())
            }
        return out


def _entry_field(entry: Any, name: str, default: Any = None) -> Any:
    if isinstance(entry, Mapping):
        return entry.get(name, default)
    return getattr(entry, name, default)


class State(dict):
    """Accounts keyed by their 20-byte address."""

    def set_genesis_alloc(self, alloc: Mapping[bytes, Any]) -> State:
        """Return a new state holding the accounts of a genesis allocation."""
        return State(
            {
                addr: Account(
                    nonce=_entry_field(entry, "nonce", 0),
                    balance=_entry_field(entry, "balance"),
                    code=_entry_field(entry, "code"),
                    storage=_entry_field(entry, "storage"),
                )
                for addr, entry in alloc.items()
            }
        )

    def merge(self, other: Mapping[bytes, Account]) -> State:
        """Return a new state with ``other`` merged over this one."""
        merged = State({addr: acc.deep_copy() for addr, acc in self.items()})
        for addr, acc in other.items():
            if addr in merged:
                merged[addr]._merge(acc)
            else:
                merged[addr] = acc.deep_copy()
        return merged

    def to_json(self) -> dict[str, Any]:
        """Return the JSON object of all accounts, keyed by hex address."""
        return {encode_data(addr): acc.to_json() for addr, acc in sorted(self.items())}