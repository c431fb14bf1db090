# -*- coding: utf-8 -*-
"""
DropMinter tests: delegate gate, capped supply, numbering, owner setters.

The minter is driven directly by a plain account acting as its delegate
("operator"); the auction-backed flow lives in test_auction_minter_integration.
"""
from __future__ import annotations

import pytest

from contracts.drops import (DropMinter, InvalidArgument, NonexistentToken,
                             PermissionDenied, SupplyExhausted, Unauthorized)
from contracts.stdlib.utils.bytes import InvalidAddress
from execution.runtime.addresses import zero_address


@pytest.fixture
def operator(chain, accounts, minter):
    op = accounts["carol"]
    chain.call(minter, "set_authorizer", op, sender=accounts["admin"])
    return op


# ---------------------------------------------------------------------------
# Deploy & owner surface
# ---------------------------------------------------------------------------

def test_deployer_is_owner_and_no_delegate(chain, accounts, minter):
    assert chain.view(minter, "owner") == accounts["admin"]
    assert chain.view(minter, "authorized_minter") is None
    assert chain.view(minter, "token_stride") == 10_000
    assert chain.view(minter, "drop_count") == 0


def test_set_authorizer_is_owner_only(chain, accounts, minter):
    with pytest.raises(PermissionDenied) as ei:
        chain.call(minter, "set_authorizer", accounts["alice"], sender=accounts["alice"])
    assert ei.value.reason == "ACCESS:NOT_OWNER"
    assert chain.view(minter, "authorized_minter") is None


def test_set_authorizer_rejects_zero_address(chain, accounts, minter):
    with pytest.raises(InvalidAddress):
        chain.call(minter, "set_authorizer", zero_address(20), sender=accounts["admin"])


def test_set_authorizer_emits_event(chain, accounts, minter):
    res = chain.apply_call(minter, "set_authorizer", accounts["bob"], sender=accounts["admin"])
    assert res.is_success
    (ev,) = res.events("AuthorizerChanged")
    assert ev.get("previous") == b""
    assert ev.get("new") == accounts["bob"]


def test_base_uri_owner_only(chain, accounts, minter):
    chain.call(minter, "set_base_uri", "ipfs://drops/", sender=accounts["admin"])
    assert chain.view(minter, "base_uri") == "ipfs://drops/"
    with pytest.raises(PermissionDenied):
        chain.call(minter, "set_base_uri", "https://evil/", sender=accounts["bob"])
    assert chain.view(minter, "base_uri") == "ipfs://drops/"


def test_ownership_transfer_moves_admin_rights(chain, accounts, minter):
    chain.call(minter, "transfer_ownership", accounts["bob"], sender=accounts["admin"])
    assert chain.view(minter, "owner") == accounts["bob"]
    with pytest.raises(PermissionDenied):
        chain.call(minter, "set_base_uri", "x", sender=accounts["admin"])
    chain.call(minter, "set_base_uri", "x", sender=accounts["bob"])


# ---------------------------------------------------------------------------
# Drops
# ---------------------------------------------------------------------------

def test_create_drop_requires_delegate(chain, accounts, minter, operator):
    with pytest.raises(Unauthorized) as ei:
        chain.call(minter, "create_drop", 5, sender=accounts["admin"])
    assert ei.value.reason == "MINTER:UNAUTHORIZED"
    assert chain.view(minter, "drop_count") == 0


def test_create_drop_allocates_increasing_ids(chain, minter, operator):
    assert chain.call(minter, "create_drop", 5, sender=operator) == 1
    assert chain.call(minter, "create_drop", 1, sender=operator) == 2
    assert chain.view(minter, "drop_count") == 2
    assert chain.view(minter, "max_supply", 1) == 5
    assert chain.view(minter, "max_supply", 2) == 1
    assert chain.view(minter, "circulating", 1) == 0


def test_unknown_drop_reads_zero(chain, minter):
    assert chain.view(minter, "max_supply", 42) == 0
    assert chain.view(minter, "circulating", 42) == 0


def test_set_max_supply_requires_delegate(chain, accounts, minter, operator):
    chain.call(minter, "create_drop", 2, sender=operator)
    with pytest.raises(Unauthorized):
        chain.call(minter, "set_max_supply", 1, 10, sender=accounts["admin"])
    assert chain.view(minter, "max_supply", 1) == 2


@pytest.mark.parametrize(
    "method,args",
    [
        ("create_drop", (-1,)),
        ("set_max_supply", (1, -5)),
        ("set_max_supply", (-1, 3)),
        ("mint", (None, -1)),
    ],
)
def test_negative_arguments_revert(chain, accounts, minter, operator, method, args):
    chain.call(minter, "create_drop", 2, sender=operator)
    args = tuple(accounts["alice"] if a is None else a for a in args)
    res = chain.apply_call(minter, method, *args, sender=operator)
    assert res.reason == "DROPS:INVALID_ARGUMENT"
    assert chain.view(minter, "drop_count") == 1
    assert chain.view(minter, "max_supply", 1) == 2
    assert chain.view(minter, "circulating", 1) == 0


def test_negative_ids_in_queries(chain, minter):
    with pytest.raises(InvalidArgument):
        chain.view(minter, "max_supply", -1)
    with pytest.raises(InvalidArgument):
        chain.view(minter, "owner_of", -10_000)


def test_zero_stride_rejected_at_deploy(chain, accounts):
    with pytest.raises(InvalidArgument) as ei:
        chain.deploy(DropMinter, 0, sender=accounts["admin"])
    assert ei.value.message == "token_stride must be >= 1"


# ---------------------------------------------------------------------------
# Minting
# ---------------------------------------------------------------------------

def test_cap_one_drop_mints_once(chain, accounts, minter, operator):
    drop = chain.call(minter, "create_drop", 1, sender=operator)
    token = chain.call(minter, "mint", accounts["alice"], drop, sender=operator)
    assert token == 10_000
    assert chain.view(minter, "owner_of", token) == accounts["alice"]
    assert chain.view(minter, "balance_of", accounts["alice"]) == 1
    assert chain.view(minter, "circulating", drop) == 1

    with pytest.raises(SupplyExhausted) as ei:
        chain.call(minter, "mint", accounts["bob"], drop, sender=operator)
    assert ei.value.reason == "MINTER:SUPPLY_EXHAUSTED"
    assert chain.view(minter, "circulating", drop) == 1
    assert chain.view(minter, "balance_of", accounts["bob"]) == 0


def test_sequential_numbering_per_drop(chain, accounts, minter, operator):
    d1 = chain.call(minter, "create_drop", 3, sender=operator)
    d2 = chain.call(minter, "create_drop", 3, sender=operator)
    ids = [
        chain.call(minter, "mint", accounts["alice"], d1, sender=operator),
        chain.call(minter, "mint", accounts["bob"], d2, sender=operator),
        chain.call(minter, "mint", accounts["alice"], d1, sender=operator),
    ]
    assert ids == [10_000, 20_000, 10_001]
    assert chain.view(minter, "balance_of", accounts["alice"]) == 2
    assert chain.view(minter, "drop_of", 20_000) == 2


def test_mint_emits_transfer_from_zero(chain, accounts, minter, operator):
    drop = chain.call(minter, "create_drop", 1, sender=operator)
    res = chain.apply_call(minter, "mint", accounts["alice"], drop, sender=operator)
    (ev,) = res.events("Transfer")
    assert ev.get("from") == zero_address(20)
    assert ev.get("to") == accounts["alice"]
    assert ev.get("token_id") == 10_000


def test_mint_on_uncreated_drop_is_exhausted(chain, accounts, minter, operator):
    with pytest.raises(SupplyExhausted):
        chain.call(minter, "mint", accounts["alice"], 7, sender=operator)


def test_mint_is_not_payable(chain, accounts, minter, operator):
    from execution.errors import InvalidAccess

    drop = chain.call(minter, "create_drop", 1, sender=operator)
    before = chain.balance_of(operator)
    with pytest.raises(InvalidAccess):
        chain.call(minter, "mint", accounts["alice"], drop, sender=operator, value=1)
    assert chain.balance_of(operator) == before
    assert chain.view(minter, "circulating", drop) == 0


def test_non_delegate_mint_then_reassigned_delegate_succeeds(chain, accounts, minter, operator):
    drop = chain.call(minter, "create_drop", 2, sender=operator)
    bob = accounts["bob"]
    with pytest.raises(Unauthorized):
        chain.call(minter, "mint", bob, drop, sender=bob)

    chain.call(minter, "set_authorizer", bob, sender=accounts["admin"])
    assert chain.call(minter, "mint", bob, drop, sender=bob) == 10_000
    # previous delegate lost its rights
    with pytest.raises(Unauthorized):
        chain.call(minter, "mint", bob, drop, sender=operator)


def test_lowering_cap_below_circulating_is_accepted_and_blocks_mints(chain, accounts, minter, operator):
    drop = chain.call(minter, "create_drop", 3, sender=operator)
    chain.call(minter, "mint", accounts["alice"], drop, sender=operator)
    chain.call(minter, "mint", accounts["alice"], drop, sender=operator)

    res = chain.apply_call(minter, "set_max_supply", drop, 1, sender=operator)
    assert res.is_success
    (ev,) = res.events("MaxSupplyChanged")
    assert (ev.get("previous"), ev.get("new")) == (3, 1)
    assert chain.view(minter, "max_supply", drop) == 1
    assert chain.view(minter, "circulating", drop) == 2

    with pytest.raises(SupplyExhausted):
        chain.call(minter, "mint", accounts["alice"], drop, sender=operator)

    chain.call(minter, "set_max_supply", drop, 4, sender=operator)
    assert chain.call(minter, "mint", accounts["alice"], drop, sender=operator) == 10_002


def test_stride_bounds_the_serial_range(chain, accounts):
    admin = accounts["admin"]
    small = chain.deploy(DropMinter, 3, sender=admin)
    chain.call(small, "set_authorizer", admin, sender=admin)
    drop = chain.call(small, "create_drop", 100, sender=admin)
    ids = [chain.call(small, "mint", admin, drop, sender=admin) for _ in range(3)]
    assert ids == [3, 4, 5]
    with pytest.raises(SupplyExhausted):
        chain.call(small, "mint", admin, drop, sender=admin)


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------

def test_owner_of_unminted_raises(chain, minter):
    with pytest.raises(NonexistentToken) as ei:
        chain.view(minter, "owner_of", 10_000)
    assert ei.value.reason == "MINTER:NONEXISTENT_TOKEN"


def test_token_uri(chain, accounts, minter, operator):
    chain.call(minter, "set_base_uri", "ipfs://cid/", sender=accounts["admin"])
    drop = chain.call(minter, "create_drop", 1, sender=operator)
    token = chain.call(minter, "mint", accounts["alice"], drop, sender=operator)
    assert chain.view(minter, "token_uri", token) == "ipfs://cid/10000"
    with pytest.raises(NonexistentToken):
        chain.view(minter, "token_uri", token + 1)
