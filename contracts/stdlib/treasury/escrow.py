# -*- coding: utf-8 -*-
"""
contracts.stdlib.treasury.escrow
================================

Per-account escrow ledger for contracts that hold funds in their own
balance on behalf of others (bidders, depositors). Funds enter with
the call's attached value and leave only through a `Withdrawal`.

Design goals
------------
- **Deterministic**: pure arithmetic and storage; no clocks or randomness.
- **Debit-then-transfer**: `release()` reads the balance and debits it in one
  step, returning a `Withdrawal` record. Value moves only through
  `pay(c, withdrawal)`, which therefore always runs *after* the ledger
  says the money is gone. A re-entrant second `release()` sees zero.
- **Scoped**: one contract can run many independent books (e.g. one per
  auction) by passing a `scope` integer.

State & storage layout
----------------------
Integers are stored as 32-byte big-endian u256; `P` is the book's prefix.

    P + "bal:" + u256(scope) + account  -> u256 held for account
    P + "total"                         -> u256 held across all scopes

Error codes (revert reasons)
----------------------------
- "ESCROW:NO_FUNDS"    nothing (or not enough) to release for (scope, account)
- "ESCROW:NEG_AMOUNT"  deposit or partial release amount <= 0

Usage pattern (inside a contract)
---------------------------------
    book = EscrowBook(self, b"auction:esc:")

    @external(payable=True)
    def deposit(self, scope: int) -> None:
        book.deposit(scope, self.msg.sender, self.msg.value)

    @external
    def withdraw(self, scope: int) -> None:
        w = book.release(scope, self.msg.sender)   # balance is zero from here on
        pay(self, w)                               # external transfer last

Invariant: `total()` never exceeds the contract's own balance.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Optional

from execution.errors import Revert
from execution.runtime.contracts import Contract

from ..utils.bytes import key

_BAL: Final[bytes] = b"bal:"
_TOTAL: Final[bytes] = b"total"


class EscrowEmpty(Revert):
    reason_code = "ESCROW:NO_FUNDS"
    default_message = "no escrowed funds"


class EscrowBadAmount(Revert):
    reason_code = "ESCROW:NEG_AMOUNT"
    default_message = "escrow amount must be positive"


@dataclass(frozen=True)
class Withdrawal:
    """Funds already debited from the book, waiting to be paid out."""

    scope: int
    account: bytes
    amount: int


class EscrowBook:
    """Escrow balances of one contract under a storage prefix."""

    __slots__ = ("_c", "_prefix")

    def __init__(self, c: Contract, prefix: bytes) -> None:
        self._c = c
        self._prefix = bytes(prefix)

    def _bal_key(self, scope: int, account: bytes) -> bytes:
        return key(self._prefix + _BAL, scope, account)

    # ---- reads ----

    def balance_of(self, scope: int, account: bytes) -> int:
        return self._c.storage.get_int(self._bal_key(scope, account))

    def total(self) -> int:
        return self._c.storage.get_int(self._prefix + _TOTAL)

    # ---- writes ----

    def deposit(self, scope: int, account: bytes, amount: int) -> int:
        """Add `amount` to the account's escrow; returns the new escrowed total."""
        if amount <= 0:
            raise EscrowBadAmount(data={"amount": amount})
        s = self._c.storage
        k = self._bal_key(scope, account)
        new_bal = s.get_int(k) + amount
        s.set_int(k, new_bal)
        s.set_int(self._prefix + _TOTAL, self.total() + amount)
        return new_bal

    def release(self, scope: int, account: bytes, amount: Optional[int] = None) -> Withdrawal:
        """
        Debit `amount` (default: everything) from the account's escrow.

        Raises EscrowEmpty when the escrow is zero or smaller than `amount`,
        and EscrowBadAmount for a non-positive `amount`.
        """
        s = self._c.storage
        k = self._bal_key(scope, account)
        held = s.get_int(k)
        if amount is None:
            amount = held
        elif amount <= 0:
            raise EscrowBadAmount(data={"amount": amount})
        if held == 0 or amount > held:
            raise EscrowEmpty(data={"scope": scope, "held": held, "amount": amount})
        s.set_int(k, held - amount)
        s.set_int(self._prefix + _TOTAL, self.total() - amount)
        return Withdrawal(scope=scope, account=account, amount=amount)


def pay(c: Contract, withdrawal: Withdrawal, to: Optional[bytes] = None) -> None:
    """Send a released withdrawal to its account (or to `to`)."""
    c.send_value(withdrawal.account if to is None else to, withdrawal.amount)


__all__ = ["EscrowBook", "EscrowEmpty", "EscrowBadAmount", "Withdrawal", "pay"]
