"""
execution.state.accounts — the Account record.

    nonce      u256, bumped once per top-level call or contract creation
    balance    u256, native units
    code_hash  32 bytes; all-zero for plain (externally owned) accounts

Accounts are plain mutable records. The journal hands out private copies per
frame, so mutating one never leaks into a frame that may still be reverted.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass, replace

from execution.errors import InsufficientBalance, StateConflict

U256_MAX: int = (1 << 256) - 1
EMPTY_CODE_HASH: bytes = bytes(32)


def _u256(name: str, value: int) -> int:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be int")
    if value < 0:
        raise ValueError(f"{name} must be non-negative")
    if value > U256_MAX:
        raise OverflowError(f"{name} exceeds u256")
    return value


def _hash32(value) -> bytes:
    h = bytes(value)
    if len(h) != 32:
        raise ValueError("code_hash must be 32 bytes")
    return h


def compute_code_hash(code_id: bytes | str) -> bytes:
    """
    SHA3-256 of a contract's code id ("module.path:ClassName" on this host).
    An empty id yields EMPTY_CODE_HASH.
    """
    if not code_id:
        return EMPTY_CODE_HASH
    raw = code_id.encode("utf-8") if isinstance(code_id, str) else bytes(code_id)
    return hashlib.sha3_256(raw).digest()


@dataclass(slots=True)
class Account:
    nonce: int = 0
    balance: int = 0
    code_hash: bytes = EMPTY_CODE_HASH

    def __post_init__(self) -> None:
        _u256("nonce", self.nonce)
        _u256("balance", self.balance)
        if not isinstance(self.code_hash, (bytes, bytearray, memoryview)):
            raise TypeError("code_hash must be bytes-like")
        self.code_hash = _hash32(self.code_hash)

    @property
    def is_contract(self) -> bool:
        return self.code_hash != EMPTY_CODE_HASH

    def increment_nonce(self) -> None:
        if self.nonce == U256_MAX:
            raise StateConflict("nonce overflow (u256 max)")
        self.nonce += 1

    def credit(self, amount: int) -> None:
        self.balance = _u256("balance", self.balance + _u256("amount", amount))

    def debit(self, amount: int) -> None:
        """Take `amount` out; InsufficientBalance leaves the balance untouched."""
        _u256("amount", amount)
        if amount > self.balance:
            raise InsufficientBalance(data={"balance": self.balance, "amount": amount})
        self.balance -= amount

    def set_code_hash(self, code_hash: bytes) -> None:
        self.code_hash = _hash32(code_hash)

    def copy(self) -> "Account":
        return replace(self)

    def to_dict(self) -> dict:
        return {"nonce": self.nonce, "balance": self.balance, "code_hash": self.code_hash.hex()}

    @classmethod
    def from_dict(cls, data: dict) -> "Account":
        try:
            raw = data["code_hash"]
            return cls(
                nonce=int(data["nonce"]),
                balance=int(data["balance"]),
                code_hash=bytes.fromhex(raw) if isinstance(raw, str) else bytes(raw),
            )
        except (KeyError, TypeError) as e:
            raise ValueError(f"bad account dict: {e}") from e


__all__ = ["Account", "EMPTY_CODE_HASH", "U256_MAX", "compute_code_hash"]
