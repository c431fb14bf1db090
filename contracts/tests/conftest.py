# -*- coding: utf-8 -*-
"""
contracts.tests.conftest
========================

Pytest fixtures for the drops contracts.

- `chain`      : fresh `Executor` on a `ManualClock` (advance with `chain.mine(seconds)`)
- `accounts`   : funded, stable addresses for admin and a few bidders
- `minter`     : DropMinter deployed by admin
- `auction`    : AuctionManager deployed by admin, holding `minter` as its registry
- `wired`      : (auction, minter) with the auction set as the minter's delegate
- `ether`      : decimal coin string -> integer units ("0.05" -> 5 * 10**16)

Usage (inside a test file):
    def test_flow(chain, accounts, wired, ether):
        auction, minter = wired
        admin, alice = accounts["admin"], accounts["alice"]
        drop_id = chain.call(auction, "create_auction", 0, 500, ether("0.05"), sender=admin)
        chain.call(auction, "bid", drop_id, sender=alice, value=ether("0.1"))
        chain.mine(1000)
        assert chain.call(auction, "get_prize", drop_id, sender=alice) == 10000
"""
from __future__ import annotations

from decimal import Decimal
from typing import Callable, Dict, Tuple

import pytest

from contracts.drops import AuctionManager, DropMinter
from execution.runtime import Executor, ManualClock

COIN = 10**18
GENESIS_TIME = 1_700_000_000
FUNDED_LABELS = ("admin", "alice", "bob", "carol", "mallory")


def to_units(amount: str) -> int:
    """Exact decimal → integer units; refuses sub-unit precision."""
    q = Decimal(amount) * COIN
    if q != q.to_integral_value():
        raise ValueError(f"{amount!r} has more than 18 decimals")
    return int(q)


@pytest.fixture
def ether() -> Callable[[str], int]:
    return to_units


@pytest.fixture
def chain() -> Executor:
    return Executor(clock=ManualClock(start=GENESIS_TIME))


@pytest.fixture
def accounts(chain: Executor) -> Dict[str, bytes]:
    out: Dict[str, bytes] = {}
    for label in FUNDED_LABELS:
        addr = chain.account(label)
        chain.fund(addr, 100 * COIN)
        out[label] = addr
    return out


@pytest.fixture
def minter(chain: Executor, accounts: Dict[str, bytes]) -> bytes:
    return chain.deploy(DropMinter, sender=accounts["admin"])


@pytest.fixture
def auction(chain: Executor, accounts: Dict[str, bytes], minter: bytes) -> bytes:
    return chain.deploy(AuctionManager, minter, sender=accounts["admin"])


@pytest.fixture
def wired(chain: Executor, accounts: Dict[str, bytes], auction: bytes, minter: bytes) -> Tuple[bytes, bytes]:
    chain.call(minter, "set_authorizer", auction, sender=accounts["admin"])
    return auction, minter
