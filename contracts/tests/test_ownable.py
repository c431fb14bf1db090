# -*- coding: utf-8 -*-
"""
Ownable mixin: init, transfer, renounce, and the owner gate.
"""
from __future__ import annotations

import pytest

from contracts.stdlib.access import (InvalidOwner, Ownable, PermissionDenied,
                                     init_owner)
from execution.runtime.contracts import external, view


class Vault(Ownable):
    def init(self) -> None:
        init_owner(self, self.msg.sender)
        # second call is a no-op
        init_owner(self, b"\x01" * self.address_len)

    @external
    def poke(self) -> int:
        self._only_owner()
        n = self.storage.get_int(b"pokes") + 1
        self.storage.set_int(b"pokes", n)
        return n

    @view
    def pokes(self) -> int:
        return self.storage.get_int(b"pokes")


@pytest.fixture
def vault(chain, accounts):
    return chain.deploy(Vault, sender=accounts["admin"])


def test_deployer_becomes_owner_once(chain, accounts):
    res_before = len(chain.results)
    addr = chain.deploy(Vault, sender=accounts["admin"])
    assert chain.view(addr, "owner") == accounts["admin"]
    deploy_result = chain.results[res_before]
    assert [e.name for e in deploy_result.logs] == ["OwnershipTransferred"]


def test_only_owner_gate(chain, accounts, vault):
    assert chain.call(vault, "poke", sender=accounts["admin"]) == 1
    with pytest.raises(PermissionDenied):
        chain.call(vault, "poke", sender=accounts["alice"])
    assert chain.view(vault, "pokes") == 1


def test_transfer_ownership(chain, accounts, vault):
    admin, alice = accounts["admin"], accounts["alice"]
    with pytest.raises(PermissionDenied):
        chain.call(vault, "transfer_ownership", alice, sender=alice)

    res = chain.apply_call(vault, "transfer_ownership", alice, sender=admin)
    (ev,) = res.events("OwnershipTransferred")
    assert (ev.get("previous"), ev.get("new")) == (admin, alice)
    assert chain.call(vault, "poke", sender=alice) == 1
    with pytest.raises(PermissionDenied):
        chain.call(vault, "poke", sender=admin)


def test_transfer_to_empty_owner_rejected(chain, accounts, vault):
    with pytest.raises(InvalidOwner):
        chain.call(vault, "transfer_ownership", b"\x00" * 20, sender=accounts["admin"])
    assert chain.view(vault, "owner") == accounts["admin"]


def test_renounce_locks_the_gate(chain, accounts, vault):
    admin = accounts["admin"]
    chain.call(vault, "renounce_ownership", sender=admin)
    assert chain.view(vault, "owner") is None
    with pytest.raises(PermissionDenied):
        chain.call(vault, "poke", sender=admin)
