"""
execution.types.context — what a running contract frame can see.

* BlockContext   one per sampled block: height, timestamp (Unix seconds), chain id
* TxContext      one per top-level call: the signing account and its nonce
* MessageContext one per frame: immediate sender, callee, attached value, depth

Nested calls get a fresh MessageContext whose `sender` is the calling
contract; the BlockContext and TxContext are shared by the whole call tree.
Addresses are raw bytes; `to_dict()` renders them as 0x-hex.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict


def _hex(b: bytes) -> str:
    return "0x" + b.hex()


def _non_negative(name: str, v: int) -> None:
    if not isinstance(v, int) or isinstance(v, bool) or v < 0:
        raise ValueError(f"{name} must be a non-negative int")


def _as_address(name: str, v) -> bytes:
    if not isinstance(v, (bytes, bytearray, memoryview)):
        raise TypeError(f"{name} must be bytes")
    b = bytes(v)
    if not b:
        raise ValueError(f"{name} must not be empty")
    return b


@dataclass(frozen=True)
class BlockContext:
    height: int
    timestamp: int
    chain_id: int

    def __post_init__(self) -> None:
        _non_negative("height", self.height)
        _non_negative("timestamp", self.timestamp)
        if self.chain_id < 1:
            raise ValueError("chain_id must be >= 1")

    def to_dict(self) -> Dict[str, Any]:
        return {"height": self.height, "timestamp": self.timestamp, "chainId": self.chain_id}


@dataclass(frozen=True)
class TxContext:
    """The account that started the call tree and its nonce before the call."""

    origin: bytes
    chain_id: int
    nonce: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "origin", _as_address("origin", self.origin))
        _non_negative("nonce", self.nonce)
        if self.chain_id < 1:
            raise ValueError("chain_id must be >= 1")

    def to_dict(self) -> Dict[str, Any]:
        return {"origin": _hex(self.origin), "chainId": self.chain_id, "nonce": self.nonce}


@dataclass(frozen=True)
class MessageContext:
    """One frame: `sender` is the immediate caller (account or contract)."""

    sender: bytes
    to: bytes
    value: int = 0
    depth: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "sender", _as_address("sender", self.sender))
        object.__setattr__(self, "to", _as_address("to", self.to))
        _non_negative("value", self.value)
        _non_negative("depth", self.depth)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sender": _hex(self.sender),
            "to": _hex(self.to),
            "value": self.value,
            "depth": self.depth,
        }


__all__ = ["BlockContext", "TxContext", "MessageContext"]
