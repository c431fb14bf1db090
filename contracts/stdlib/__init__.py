# -*- coding: utf-8 -*-
"""
contracts.stdlib
================

Reusable building blocks for contracts on the Animica execution host.

Subpackages
-----------
- access    : Ownable (owner storage, owner-gated entrypoints)
- treasury  : escrow ledger with debit-then-transfer withdrawals
- token     : non-fungible ownership table
- utils     : storage keys, address checks, hex helpers

Every helper works through a `Contract`'s journaled storage, so it inherits
the host's all-or-nothing rollback on failure.
"""
from __future__ import annotations

__all__ = ["access", "treasury", "token", "utils"]
