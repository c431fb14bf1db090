# -*- coding: utf-8 -*-
"""
contracts.stdlib.utils
======================

Small, deterministic helpers for contracts running on the Animica execution host.

- Storage key construction with fixed-width integer parts.
- Address validation with a compact revert code.
- Hex rendering for logs and tooling.

Revert codes:
- "U:ADDRESS" : address empty, all-zero, or wrong length
"""
from __future__ import annotations

from .bytes import (BytesError, InvalidAddress, bytes_to_hex, hex_to_bytes,
                    key, require_address, strip_0x, u256_be)

__all__ = [
    "BytesError",
    "InvalidAddress",
    "bytes_to_hex",
    "hex_to_bytes",
    "key",
    "require_address",
    "strip_0x",
    "u256_be",
]
