"""
contracts.drops.interfaces — the capability the auction ledger holds on a registry.

The ledger never imports DropMinter. It keeps the registry *address* in
storage and talks to it through `MinterCapability`, a structural protocol:
any deployed contract exposing these entrypoints can stand in (tests
use a recording double). The registry still checks `msg.sender` against its
delegate on every call, so holding the reference grants nothing by itself.
"""

from __future__ import annotations

from typing import Protocol, cast

from execution.runtime.contracts import Contract


class MinterCapability(Protocol):
    def create_drop(self, max_supply: int) -> int:
        """Allocate a new drop with `max_supply`; returns its id."""
        ...

    def mint(self, to: bytes, drop_id: int) -> int:
        """Mint the next asset of `drop_id` to `to`; returns the token id."""
        ...

    # views, used to vet a drop id before an auction is attached to it

    def drop_count(self) -> int: ...

    def max_supply(self, drop_id: int) -> int: ...

    def circulating(self, drop_id: int) -> int: ...


def minter_at(caller: Contract, address: bytes) -> MinterCapability:
    """Typed nested-call proxy from `caller` to the registry at `address`."""
    return cast(MinterCapability, caller.contract_at(address))


__all__ = ["MinterCapability", "minter_at"]
