"""
execution.types.events — event/log record types for the Animica execution host.

`LogEvent` is a compact, deterministic container used by the execution host to
record contract-emitted events. It is intentionally minimal and dependency-free.

Conventions
-----------
* `address` is the emitting contract, stored as raw bytes.
* `name` is a short ASCII event name (e.g. "BidPlaced").
* `args` is an ordered tuple of (key, value) pairs sorted by key. Values are
  restricted to bytes, bool, int (u256 range) and str, so every event has a
  stable JSON form.

Helpers
-------
* `to_dict()` / `from_dict()` convert to/from JSON-friendly hex forms.
* `get(key)` / `as_dict()` for convenient assertions.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple, Union

ArgValue = Union[bytes, bool, int, str, None]

_U256_MAX = (1 << 256) - 1
MAX_NAME_LEN = 64


def _check_value(key: str, value: Any) -> ArgValue:
    if value is None or isinstance(value, (str, bool)):
        return value
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    if isinstance(value, int):
        if value < 0 or value > _U256_MAX:
            raise ValueError(f"event arg {key!r} out of u256 range")
        return value
    raise TypeError(f"event arg {key!r} has unsupported type {type(value).__name__}")


def _bytes_to_hex(b: bytes) -> str:
    return "0x" + b.hex()


@dataclass(frozen=True)
class LogEvent:
    """
    A single event emitted during call execution.

    Attributes:
        address: bytes — emitter address
        name:    str   — event name
        args:    tuple[(str, value), ...] — arguments sorted by key

    Raises:
        ValueError / TypeError if inputs are empty or obviously malformed.
    """

    address: bytes
    name: str
    args: Tuple[Tuple[str, ArgValue], ...]

    def __init__(self, address: bytes, name: str, args: Optional[Mapping[str, Any]] = None):
        if not isinstance(address, (bytes, bytearray, memoryview)) or len(address) == 0:
            raise ValueError("address must be non-empty bytes")
        if not isinstance(name, str) or not name or len(name) > MAX_NAME_LEN:
            raise ValueError(f"event name must be a non-empty str of at most {MAX_NAME_LEN} chars")
        items = []
        for k, v in (args or {}).items():
            if not isinstance(k, str) or not k:
                raise TypeError("event arg keys must be non-empty str")
            items.append((k, _check_value(k, v)))
        items.sort(key=lambda kv: kv[0])

        object.__setattr__(self, "address", bytes(address))
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "args", tuple(items))

    # --------------------- accessors ---------------------

    def get(self, key: str, default: Any = None) -> Any:
        for k, v in self.args:
            if k == key:
                return v
        return default

    def as_dict(self) -> Dict[str, ArgValue]:
        return dict(self.args)

    # --------------------- conversions & representations ---------------------

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize to a JSON-friendly mapping; bytes become 0x-hex strings.

        Returns:
            {
              "address": "0x..",
              "name":    "BidPlaced",
              "args":    {"amount": 100, "bidder": "0x..", ...}
            }
        """
        return {
            "address": _bytes_to_hex(self.address),
            "name": self.name,
            "args": {
                k: (_bytes_to_hex(v) if isinstance(v, bytes) else v) for k, v in self.args
            },
        }

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "LogEvent":
        """
        Parse from `to_dict()` output. Strings starting with 0x are decoded as bytes.
        """
        addr = d.get("address") or ""
        addr_b = bytes.fromhex(addr[2:]) if isinstance(addr, str) else bytes(addr)
        args: Dict[str, Any] = {}
        for k, v in (d.get("args") or {}).items():
            if isinstance(v, str) and v.startswith("0x"):
                args[k] = bytes.fromhex(v[2:])
            else:
                args[k] = v
        return cls(addr_b, str(d.get("name", "")), args)

    def __repr__(self) -> str:  # pragma: no cover - cosmetic
        return f"LogEvent({self.name}@{self.address.hex()[:8]}…, {dict(self.args)!r})"


__all__ = ["LogEvent", "ArgValue"]
