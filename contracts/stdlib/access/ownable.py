# -*- coding: utf-8 -*-
"""
contracts.stdlib.access.ownable
================================

Minimal, deterministic **Ownable** helper for Animica Python contracts.

This module provides a focused owner storage and control surface:
- read the current owner (`get_owner`)
- initialize the owner once (`init_owner`)
- check that a caller is the owner (`require_owner`)
- transfer ownership to a new account (`transfer_ownership`)
- renounce ownership (clear owner) (`renounce_ownership`)

and an `Ownable` mixin that exposes them as entrypoints on a `Contract`.

Conventions
-----------
- Helpers take the contract (`c`) and the acting address (`caller`)
  explicitly; only `c.storage` and `c.emit` are used.
- The owner value is stored at `OWNER_KEY = b"access:owner"`.
- Events:
    - "OwnershipTransferred" args: {"previous": bytes, "new": bytes}

Typical usage
-------------
    class Vault(Ownable, Contract):
        def init(self) -> None:
            init_owner(self, self.msg.sender)

        @external
        def sweep(self, to: bytes) -> None:
            self._only_owner()
            ...

Safety notes
------------
- `init_owner` is idempotent and will not overwrite a previously set owner.
- `transfer_ownership` rejects an empty `new_owner`; use `renounce_ownership`
  explicitly to leave the contract without an owner.
"""
from __future__ import annotations

from typing import Optional

from execution.errors import Revert
from execution.runtime.contracts import Contract, external, view

OWNER_KEY: bytes = b"access:owner"

__all__ = [
    "OWNER_KEY",
    "PermissionDenied",
    "InvalidOwner",
    "get_owner",
    "init_owner",
    "require_owner",
    "transfer_ownership",
    "renounce_ownership",
    "Ownable",
]


class PermissionDenied(Revert):
    reason_code = "ACCESS:NOT_OWNER"
    default_message = "Ownable: caller is not the owner"


class InvalidOwner(Revert):
    reason_code = "ACCESS:NEW_OWNER_EMPTY"
    default_message = "Ownable: new owner is the empty address"


# --- Owner primitives ---------------------------------------------------------


def get_owner(c: Contract) -> Optional[bytes]:
    """
    Return the current owner address, or None if not set.
    """
    return c.storage.get(OWNER_KEY)


def init_owner(c: Contract, owner: bytes) -> None:
    """
    Initialize the contract owner. Idempotent: does not overwrite if already set.
    """
    if get_owner(c) is None:
        c.storage.set(OWNER_KEY, owner)
        c.emit("OwnershipTransferred", previous=b"", new=owner)


def require_owner(c: Contract, caller: bytes) -> None:
    """
    Revert unless `caller` equals the current owner.
    """
    owner = get_owner(c)
    if owner is None or owner != caller:
        raise PermissionDenied(data={"caller": caller.hex()})


def transfer_ownership(c: Contract, caller: bytes, new_owner: bytes) -> None:
    """
    Owner-only: transfer ownership to `new_owner` (must be non-empty).

    Emits:
        - "OwnershipTransferred" with {"previous": <old>, "new": <new_owner>}
    """
    require_owner(c, caller)
    if not new_owner or not any(new_owner):
        raise InvalidOwner()
    previous = get_owner(c) or b""
    c.storage.set(OWNER_KEY, new_owner)
    c.emit("OwnershipTransferred", previous=previous, new=new_owner)


def renounce_ownership(c: Contract, caller: bytes) -> None:
    """
    Owner-only: renounce ownership (clears the owner key).

    After renounce, `require_owner` always fails.
    Emits:
        - "OwnershipTransferred" with {"previous": <old>, "new": b""}
    """
    require_owner(c, caller)
    previous = get_owner(c) or b""
    c.storage.delete(OWNER_KEY)
    c.emit("OwnershipTransferred", previous=previous, new=b"")


# --- Mixin ----------------------------------------------------------------------


class Ownable(Contract):
    """Owner entrypoints for a Contract; call `init_owner` from `init`."""

    def _only_owner(self) -> None:
        require_owner(self, self.msg.sender)

    @view
    def owner(self) -> Optional[bytes]:
        return get_owner(self)

    @external
    def transfer_ownership(self, new_owner: bytes) -> None:
        transfer_ownership(self, self.msg.sender, new_owner)

    @external
    def renounce_ownership(self) -> None:
        renounce_ownership(self, self.msg.sender)
