"""
execution.runtime.addresses — deterministic address derivation.

- Contract addresses: sha3_256("animica/contract" | deployer | nonce_be8), rightmost N bytes.
- Labelled dev accounts: sha3_256("animica/account" | utf8(label)), rightmost N bytes.

N is `ExecutionConfig.address_len` (20 by default).
"""

from __future__ import annotations

import hashlib

ZERO_ADDRESS_BYTE = b"\x00"


def derive_contract_address(deployer: bytes, nonce: int, *, length: int = 20) -> bytes:
    h = hashlib.sha3_256(b"animica/contract" + bytes(deployer) + int(nonce).to_bytes(8, "big"))
    return h.digest()[-length:]


def address_from_label(label: str, *, length: int = 20) -> bytes:
    """Stable test/devnet account for a human label ("alice", "deployer", ...)."""
    if not label:
        raise ValueError("label must be non-empty")
    return hashlib.sha3_256(b"animica/account" + label.encode("utf-8")).digest()[-length:]


def zero_address(length: int = 20) -> bytes:
    return ZERO_ADDRESS_BYTE * length


__all__ = ["derive_contract_address", "address_from_label", "zero_address"]
