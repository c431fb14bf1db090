"""
execution.state.storage — committed contract storage.

Slots are addressed by (contract address, key) and hold non-empty `bytes`.
Only flushed journal state lands here; everything a running call writes is
staged in journal frames first (see `execution.state.journal`).

Writing an empty value removes the slot, so "absent" and "empty" are the same
state and never need to be told apart by contracts.
"""

from __future__ import annotations

from typing import Dict, Iterator, Optional, Tuple


def _raw(x, what: str) -> bytes:
    if isinstance(x, bytes):
        return x
    if isinstance(x, (bytearray, memoryview)):
        return bytes(x)
    raise TypeError(f"{what} must be bytes-like, got {type(x).__name__}")


class StorageView:
    """
    Committed slots for every contract on a host.

    `max_key_len` / `max_value_len` bound what may be persisted (None = no
    bound); a write past a bound raises ValueError before anything changes.
    """

    def __init__(
        self,
        *,
        max_key_len: Optional[int] = None,
        max_value_len: Optional[int] = None,
    ) -> None:
        self.max_key_len = max_key_len
        self.max_value_len = max_value_len
        self._slots: Dict[bytes, Dict[bytes, bytes]] = {}

    def __len__(self) -> int:
        return sum(len(s) for s in self._slots.values())

    def get(self, address, key, default: bytes = b"") -> bytes:
        slots = self._slots.get(_raw(address, "address"))
        if not slots:
            return default
        return slots.get(_raw(key, "key"), default)

    def has(self, address, key) -> bool:
        return _raw(key, "key") in self._slots.get(_raw(address, "address"), ())

    def set(self, address, key, value) -> None:
        addr, k, v = _raw(address, "address"), _raw(key, "key"), _raw(value, "value")
        if self.max_key_len is not None and len(k) > self.max_key_len:
            raise ValueError(f"storage key is {len(k)} bytes (max {self.max_key_len})")
        if self.max_value_len is not None and len(v) > self.max_value_len:
            raise ValueError(f"storage value is {len(v)} bytes (max {self.max_value_len})")
        if not v:
            self.delete(addr, k)
            return
        self._slots.setdefault(addr, {})[k] = v

    def delete(self, address, key) -> bool:
        """Remove a slot; True if it existed."""
        addr = _raw(address, "address")
        slots = self._slots.get(addr)
        if slots is None or slots.pop(_raw(key, "key"), None) is None:
            return False
        if not slots:
            del self._slots[addr]
        return True

    def items(self, address) -> Iterator[Tuple[bytes, bytes]]:
        """(key, value) pairs of one contract in key order."""
        slots = self._slots.get(_raw(address, "address"), {})
        for k in sorted(slots):
            yield k, slots[k]


__all__ = ["StorageView"]
