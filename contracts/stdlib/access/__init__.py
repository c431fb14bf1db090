# -*- coding: utf-8 -*-
"""
contracts.stdlib.access
=======================

Deterministic access-control helpers for Animica Python contracts.

Design goals
------------
- **Deterministic only**: No clock, no randomness, no external I/O.
- **Byte-first**: Addresses are `bytes`.
- **Explicit caller**: Helpers take `caller: bytes` so contracts plumb
  `self.msg.sender` from their entrypoint.

Storage layout (by convention)
------------------------------
- Owner: key `b"access:owner"` → `bytes` (address); absent when unset/renounced.

Events (convention)
-------------------
- "OwnershipTransferred" args: {"previous": bytes, "new": bytes}
"""
from __future__ import annotations

from .ownable import (OWNER_KEY, InvalidOwner, Ownable, PermissionDenied,
                      get_owner, init_owner, renounce_ownership, require_owner,
                      transfer_ownership)

__all__ = [
    "OWNER_KEY",
    "InvalidOwner",
    "Ownable",
    "PermissionDenied",
    "get_owner",
    "init_owner",
    "renounce_ownership",
    "require_owner",
    "transfer_ownership",
]
