# -*- coding: utf-8 -*-
"""
contracts.stdlib.treasury
=========================

Helpers for contracts that hold native value in their own balance.

Public API
----------
- EscrowBook            : per-(scope, account) escrow ledger (see `escrow`)
- Withdrawal            : released funds awaiting payout
- pay(c, withdrawal)    : the only payout path for released escrow
- balance(c) -> int     : the contract's own balance

Error codes
-----------
- "ESCROW:NO_FUNDS"   : nothing to release
- "ESCROW:NEG_AMOUNT" : non-positive deposit
"""

from __future__ import annotations

from execution.runtime.contracts import Contract

from .escrow import EscrowBadAmount, EscrowBook, EscrowEmpty, Withdrawal, pay


def balance(c: Contract) -> int:
    """Native balance held by contract `c`."""
    return c.self_balance()


__all__ = [
    "EscrowBook",
    "EscrowEmpty",
    "EscrowBadAmount",
    "Withdrawal",
    "pay",
    "balance",
]
