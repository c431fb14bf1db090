"""
execution.runtime.storage_api — per-contract storage handle.

Every contract instance sees its own key space through a `ContractStorage`
bound to (journal, contract address). Reads and writes go straight to the
journal's top overlay, so they are rolled back with the frame that made them.

Design goals
------------
- Deterministic: pure functions over (key, value) with no wall-clock or I/O.
- Safe: strict byte-length caps from `execution.config`.
- Typed helpers for the common u256 ↔ bytes and flag cases.

Public API
----------
- get(key: bytes) -> Optional[bytes]
- set(key: bytes, value: bytes) -> None        # empty value deletes
- delete(key: bytes) -> None
- exists(key: bytes) -> bool
- get_int(key: bytes) -> int                   # 32-byte big-endian u256, 0 when absent
- set_int(key: bytes, value: int) -> None      # 0 deletes the key
- get_flag(key: bytes) -> bool / set_flag(key: bytes, on: bool) -> None
"""

from __future__ import annotations

from typing import Optional

from ..config import Limits
from ..errors import InvalidAccess
from ..state.journal import Journal

U256_MAX = (1 << 256) - 1
_FLAG_ON = b"\x01"


def encode_u256(value: int) -> bytes:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError("value must be int")
    if value < 0 or value > U256_MAX:
        raise ValueError("value out of u256 range")
    return value.to_bytes(32, "big")


def decode_u256(raw: bytes) -> int:
    if len(raw) > 32:
        raise ValueError("u256 payload longer than 32 bytes")
    return int.from_bytes(raw, "big")


class ContractStorage:
    """Key/value storage of one contract, journaled by the host."""

    __slots__ = ("_journal", "_address", "_limits")

    def __init__(self, journal: Journal, address: bytes, limits: Limits) -> None:
        self._journal = journal
        self._address = bytes(address)
        self._limits = limits

    @property
    def address(self) -> bytes:
        return self._address

    # ---------------------------- checks ---------------------------- #

    def _check_key(self, key: bytes) -> bytes:
        if not isinstance(key, (bytes, bytearray)):
            raise InvalidAccess("storage key must be bytes", op="sstore")
        if not key or len(key) > self._limits.max_storage_key_bytes:
            raise InvalidAccess(
                f"storage key must be 1..{self._limits.max_storage_key_bytes} bytes",
                op="sstore",
            )
        return bytes(key)

    def _check_value(self, value: bytes) -> bytes:
        if not isinstance(value, (bytes, bytearray)):
            raise InvalidAccess("storage value must be bytes", op="sstore")
        if len(value) > self._limits.max_storage_value_bytes:
            raise InvalidAccess(
                f"storage value exceeds {self._limits.max_storage_value_bytes} bytes",
                op="sstore",
            )
        return bytes(value)

    # ---------------------------- raw bytes ---------------------------- #

    def get(self, key: bytes) -> Optional[bytes]:
        v = self._journal.storage_get(self._address, self._check_key(key))
        return v or None

    def set(self, key: bytes, value: bytes) -> None:
        self._journal.storage_set(
            self._address, self._check_key(key), self._check_value(value)
        )

    def delete(self, key: bytes) -> None:
        self._journal.storage_delete(self._address, self._check_key(key))

    def exists(self, key: bytes) -> bool:
        return self.get(key) is not None

    # ---------------------------- typed ---------------------------- #

    def get_int(self, key: bytes) -> int:
        raw = self.get(key)
        return 0 if raw is None else decode_u256(raw)

    def set_int(self, key: bytes, value: int) -> None:
        if value == 0:
            self.delete(key)
        else:
            self.set(key, encode_u256(value))

    def get_flag(self, key: bytes) -> bool:
        return self.get(key) == _FLAG_ON

    def set_flag(self, key: bytes, on: bool) -> None:
        if on:
            self.set(key, _FLAG_ON)
        else:
            self.delete(key)


__all__ = ["ContractStorage", "encode_u256", "decode_u256", "U256_MAX"]
