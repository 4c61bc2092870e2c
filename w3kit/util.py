"""Helpers for hex strings, addresses, hashes, integers and wei amounts."""

from __future__ import annotations

import json
import re

ADDRESS_LENGTH = 20
HASH_LENGTH = 32

BIG_GWEI = 10**9
BIG_ETHER = 10**18

#: Maximum values of the unsigned integer types uint8 ... uint256.
MAX_UINT = {bits: (1 << bits) - 1 for bits in range(8, 257, 8)}
MAX_UINT256 = MAX_UINT[256]

#: Zero address and zero hash.
ADDR0 = bytes(ADDRESS_LENGTH)
HASH0 = bytes(HASH_LENGTH)

_HEX_BYTES = frozenset(b"0123456789abcdefABCDEF")
_HEX_INT = re.compile(r"[+-]?[0-9a-fA-F]+")
_DEC_INT = re.compile(r"[+-]?[0-9]+")
_HEX_DIGITS = re.compile(r"[0-9a-fA-F]+")

_UNITS = {"ether": BIG_ETHER, "eth": BIG_ETHER, "gwei": BIG_GWEI}
_UNIT_DECIMALS = {"ether": 18, "eth": 18, "gwei": 9}


def _has_0x_prefix(text: str) -> bool:
    return len(text) >= 2 and text[0] == "0" and text[1] in "xX"


def _strip_0x(text: str) -> str:
    return text[2:] if _has_0x_prefix(text) else text


def _quote(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


def _invalid_byte(byte: int) -> str:
    char = chr(byte)
    if char.isprintable():
        return f"invalid byte: U+{byte:04X} '{char}'"
    return f"invalid byte: U+{byte:04X}"


def _decode_hex(text: str) -> bytes:
    """Decode a hex string without prefix, reporting the first bad byte."""
    raw = text.encode()
    bad = next((byte for byte in raw if byte not in _HEX_BYTES), None)
    if bad is not None:
        raise ValueError(_invalid_byte(bad))
    if len(raw) % 2:
        raise ValueError("odd length hex string")
    return bytes.fromhex(text)


def _parse_int(text: str, base: int) -> int | None:
    pattern = _HEX_INT if base == 16 else _DEC_INT
    if not pattern.fullmatch(text):
        return None
    return int(text, base)


def _decode_fixed(text: str, length: int, kind: str) -> bytes:
    digits = _strip_0x(text)
    try:
        raw = _decode_hex(digits)
    except ValueError as exc:
        raise ValueError(f"invalid {kind} {_quote(digits)}: {exc}") from None
    if len(raw) != length:
        raise ValueError(f"invalid {kind} {_quote(digits)}: must have {length} bytes")
    return raw


def to_address(hex_addr: str) -> bytes:
    """Return the 20-byte address of a hex string, with or without "0x"."""
    return _decode_fixed(hex_addr, ADDRESS_LENGTH, "address")


def to_hash(hex_hash: str) -> bytes:
    """Return the 32-byte hash of a hex string, with or without "0x"."""
    return _decode_fixed(hex_hash, HASH_LENGTH, "hash")


def to_bytes(*args: str) -> bytes:
    """Decode and concatenate the given hex strings."""
    parts = []
    for text in args:
        digits = _strip_0x(text)
        try:
            parts.append(_decode_hex(digits))
        except ValueError as exc:
            raise ValueError(f"invalid bytes {_quote(digits)}: {exc}") from None
    return b"".join(parts)


def to_int(str_int: str) -> int:
    """Parse a hex string, or a decimal string with optional unit.

    The units "ether"/"eth" and "gwei" are supported for decimal strings.
    Fraction digits beyond the unit's precision are an error.
    """
    if _has_0x_prefix(str_int):
        value = _parse_int(str_int[2:], 16)
        if value is None:
            raise ValueError(f"invalid hex big {_quote('0x' + str_int[2:])}")
        return value
    return _parse_decimal(str_int)


def _parse_decimal(text: str) -> int:
    number, has_unit, unit = text.partition(" ")
    integer_part, has_fraction, fraction_part = number.partition(".")

    integer = _parse_int(integer_part, 10)
    if integer is None:
        raise ValueError(f"str big {_quote(text)} must be number")

    if not has_unit:
        if has_fraction:
            raise ValueError(f"str big {_quote(text)} without unit must be integer")
        return integer

    unit = unit.lower()
    if unit not in _UNITS:
        raise ValueError(f"str big {_quote(text)} has invalid unit {_quote(unit)}")
    scale = _UNITS[unit]
    integer *= scale

    if not has_fraction:
        return integer

    fraction = _parse_int(fraction_part, 10)
    if fraction is None:
        raise ValueError(f"str big {_quote(text)} must be number")
    if fraction >= scale:
        raise ValueError(f"str big {_quote(text)} exceeds precision")

    exponent = _UNIT_DECIMALS[unit] - len(fraction_part)
    fraction *= 10 ** max(exponent, 0)
    return integer + fraction


def from_wei(wei: int | None, decimals: int) -> str:
    """Format wei as a decimal number with the given number of decimals."""
    if wei is None:
        return "<nil>"
    sign = "-" if wei < 0 else ""
    whole, rest = divmod(abs(wei), 10**decimals)
    if rest == 0:
        return f"{sign}{whole}"
    fraction = str(rest).rjust(decimals, "0").rstrip("0")
    return f"{sign}{whole}.{fraction}"


def big_min(a: int, b: int) -> int:
    """Return the smaller of the two integers."""
    return a if a < b else b


def big_max(a: int, b: int) -> int:
    """Return the larger of the two integers."""
    return a if a > b else b


def encode_quantity(value: int) -> str:
    """Encode an integer as a "0x"-prefixed hex quantity."""
    if value < 0:
        return f"-0x{-value:x}"
    return f"0x{value:x}"


def decode_quantity(text: str) -> int:
    """Decode a "0x"-prefixed hex quantity without leading zero digits."""
    if text == "":
        raise ValueError("empty hex string")
    if not _has_0x_prefix(text):
        raise ValueError("hex string without 0x prefix")
    digits = text[2:]
    if not digits:
        raise ValueError('hex string "0x"')
    if len(digits) > 1 and digits[0] == "0":
        raise ValueError("hex number with leading zero digits")
    if not _HEX_DIGITS.fullmatch(digits):
        raise ValueError("invalid hex string")
    return int(digits, 16)


def encode_data(data: bytes) -> str:
    """Encode bytes as a "0x"-prefixed hex string."""
    return "0x" + bytes(data).hex()


def decode_data(text: str) -> bytes:
    """Decode a "0x"-prefixed hex string of even length."""
    if text == "":
        return b""
    if not _has_0x_prefix(text):
        raise ValueError("hex string without 0x prefix")
    digits = text[2:]
    if len(digits) % 2:
        raise ValueError("hex string of odd length")
    if digits and not _HEX_DIGITS.fullmatch(digits):
        raise ValueError("invalid hex string")
    return bytes.fromhex(digits)