"""
Journal checkpoint laws: revert restores, commit folds into the parent,
nested checkpoints behave as a stack, deletions shadow the base.
"""
from typing import Dict

import pytest

from execution.errors import StateConflict
from execution.state.accounts import Account, compute_code_hash
from execution.state.journal import Journal
from execution.state.storage import StorageView

A = b"\xaa" * 20
B = b"\xbb" * 20


# ===================================================
# Helpers
# ===================================================

def _journal(balances: Dict[bytes, int] = None, slots: Dict[bytes, bytes] = None):
    accounts = {addr: Account(balance=bal) for addr, bal in (balances or {}).items()}
    storage = StorageView()
    for k, v in (slots or {}).items():
        storage.set(A, k, v)
    return Journal(accounts, storage), accounts, storage


def _visible(j: Journal, addr: bytes = A) -> Dict[bytes, bytes]:
    return dict(j.storage_items(addr))


# ===================================================
# Tests
# ===================================================

def test_basic_checkpoint_revert_restores_exact_state():
    j, accounts, storage = _journal({A: 100}, {b"k": b"v"})
    m = j.checkpoint()
    j.ensure_account_for_write(A).debit(40)
    j.storage_set(A, b"k", b"changed")
    j.storage_set(A, b"new", b"x")
    assert j.balance_of(A) == 60
    j.revert_to(m)

    assert j.balance_of(A) == 100
    assert _visible(j) == {b"k": b"v"}
    assert accounts[A].balance == 100


def test_basic_commit_persists_changes():
    j, accounts, storage = _journal({A: 100})
    m = j.checkpoint()
    j.ensure_account_for_write(B).credit(5)
    j.storage_set(A, b"k", b"v")
    j.commit_to(m)
    # committed into the root overlay only
    assert B not in accounts
    j.flush()
    assert accounts[B].balance == 5
    assert storage.get(A, b"k") == b"v"


def test_nested_checkpoints_commit_and_revert():
    j, _, _ = _journal()
    outer = j.checkpoint()
    j.storage_set(A, b"outer", b"1")
    inner = j.checkpoint()
    j.storage_set(A, b"inner", b"2")
    j.revert_to(inner)
    assert _visible(j) == {b"outer": b"1"}

    inner = j.checkpoint()
    j.storage_set(A, b"inner", b"3")
    j.commit_to(inner)
    j.commit_to(outer)
    assert _visible(j) == {b"outer": b"1", b"inner": b"3"}


def test_revert_to_outer_marker_drops_nested_layers():
    j, _, _ = _journal()
    outer = j.checkpoint()
    j.storage_set(A, b"a", b"1")
    j.checkpoint()
    j.storage_set(A, b"b", b"2")
    j.checkpoint()
    j.storage_set(A, b"c", b"3")
    j.revert_to(outer)
    assert _visible(j) == {}
    assert j.depth() == outer


def test_deletion_shadows_base_until_flushed():
    j, _, storage = _journal(slots={b"k": b"v"})
    m = j.checkpoint()
    j.storage_delete(A, b"k")
    assert j.storage_get(A, b"k") == b""
    j.commit_to(m)
    # still hidden after merging into the parent overlay
    assert j.storage_get(A, b"k") == b""
    assert storage.get(A, b"k") == b"v"
    j.flush()
    assert not storage.has(A, b"k")


def test_empty_value_is_a_delete():
    j, _, _ = _journal(slots={b"k": b"v"})
    j.storage_set(A, b"k", b"")
    assert _visible(j) == {}


def test_account_copy_on_write():
    j, accounts, _ = _journal({A: 10})
    m = j.checkpoint()
    acc = j.get_account_for_write(A)
    acc.credit(1)
    assert accounts[A].balance == 10
    j.revert_to(m)
    assert j.balance_of(A) == 10


def test_create_account_conflicts_with_existing_contract():
    j, _, _ = _journal({A: 7})
    acc = j.create_account(A, code_hash=compute_code_hash("x:Y"))
    # a pre-funded plain account is upgraded in place
    assert acc.is_contract and acc.balance == 7
    with pytest.raises(StateConflict):
        j.create_account(A, code_hash=compute_code_hash("x:Z"))


def test_top_is_dirty_tracks_only_the_top_layer():
    j, _, _ = _journal()
    j.checkpoint()
    j.storage_set(A, b"k", b"v")
    j.checkpoint()
    assert not j.top_is_dirty()
    j.storage_get(A, b"k")
    assert not j.top_is_dirty()
    j.ensure_account_for_write(B)
    assert j.top_is_dirty()
