# -*- coding: utf-8 -*-
"""
contracts.stdlib.utils.bytes
============================

Small, deterministic helpers for working with hex/bytes/int values in
contract code: storage key construction, address validation and
hex rendering for logs.

Conventions:
- Hex strings may start with "0x" (preferred) or be bare; output is always
  lowercase with a "0x" prefix.
- Integers inside storage keys are encoded as fixed 32-byte big-endian (u256)
  so that keys for different ids never collide or alias.
- Addresses are opaque bytes of the host's configured length.
"""
from __future__ import annotations

from typing import Union

from execution.errors import Revert

BytesLike = Union[bytes, bytearray]

_U256_MAX = (1 << 256) - 1


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class BytesError(ValueError):
    """Raised on invalid hex/bytes conversions or size violations."""


class InvalidAddress(Revert):
    """An address argument is empty, all-zero, or of the wrong length."""

    reason_code = "U:ADDRESS"
    default_message = "invalid address"


# ---------------------------------------------------------------------------
# Hex
# ---------------------------------------------------------------------------

def strip_0x(s: str) -> str:
    """Remove a leading 0x/0X from *s* if present."""
    return s[2:] if s[:2] in ("0x", "0X") else s


def hex_to_bytes(h: str) -> bytes:
    """Parse a hex string (with or without 0x); odd length is left-padded."""
    s = strip_0x(h.strip())
    if len(s) % 2:
        s = "0" + s
    try:
        return bytes.fromhex(s)
    except ValueError as e:
        raise BytesError(f"invalid hex: {h!r}") from e


def bytes_to_hex(b: BytesLike) -> str:
    if not isinstance(b, (bytes, bytearray)):
        raise BytesError("bytes_to_hex: expected bytes/bytearray")
    return "0x" + bytes(b).hex()


# ---------------------------------------------------------------------------
# Integers & keys
# ---------------------------------------------------------------------------

def u256_be(n: int) -> bytes:
    """Fixed-width 32-byte big-endian encoding of a u256."""
    if not isinstance(n, int) or isinstance(n, bool):
        raise BytesError("u256_be: expected int")
    if n < 0 or n > _U256_MAX:
        raise BytesError("u256_be: out of range")
    return n.to_bytes(32, "big")


def key(prefix: bytes, *parts: Union[int, bytes]) -> bytes:
    """
    Build a storage key: prefix || part1 || part2 ...

    ints become 32-byte big-endian; bytes are appended as-is (callers only
    append fixed-length values such as addresses, so the layout is unambiguous).

    >>> key(b"auction:end:", 1)[-1]
    1
    """
    out = bytearray(prefix)
    for p in parts:
        if isinstance(p, (bytes, bytearray)):
            out += p
        else:
            out += u256_be(p)
    return bytes(out)


# ---------------------------------------------------------------------------
# Addresses
# ---------------------------------------------------------------------------

def require_address(v: object, length: int) -> bytes:
    """Revert with InvalidAddress unless *v* is a non-zero address of *length* bytes."""
    if not isinstance(v, (bytes, bytearray)) or len(v) != length or not any(v):
        raise InvalidAddress(data={"expected_len": length})
    return bytes(v)


__all__ = [
    "BytesError",
    "InvalidAddress",
    "strip_0x",
    "hex_to_bytes",
    "bytes_to_hex",
    "u256_be",
    "key",
    "require_address",
]
