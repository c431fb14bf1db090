"""
execution.runtime.transfers — deterministic value transfer over the journal

Implements the simplest state action: move funds sender → recipient.

Semantics
---------
- Amount must be a non-negative int; zero is a no-op that still touches nothing.
- Sender is debited *first*; an insufficient balance raises
  `InsufficientBalance` (a Revert) before the recipient is touched.
- Recipient account is created on first credit.
- All writes land in the journal's top overlay, so the caller's checkpoint
  decides whether they survive.

Receive hooks (contract recipients) are the executor's business, not this
module's: `transfer_value` only moves balances.
"""

from __future__ import annotations

import logging

from ..state.journal import Journal

log = logging.getLogger(__name__)


def transfer_value(journal: Journal, sender: bytes, recipient: bytes, amount: int) -> None:
    """
    Debit `sender` then credit `recipient` by `amount` inside the current overlay.
    """
    if not isinstance(amount, int) or isinstance(amount, bool):
        raise TypeError("amount must be int")
    if amount < 0:
        raise ValueError("amount must be non-negative")
    if amount == 0:
        return
    src = journal.ensure_account_for_write(sender)
    src.debit(amount)
    dst = journal.ensure_account_for_write(recipient)
    dst.credit(amount)
    log.debug("transfer %s -> %s amount=%d", sender.hex()[:8], recipient.hex()[:8], amount)


def mint_value(journal: Journal, recipient: bytes, amount: int) -> None:
    """Credit `recipient` out of thin air (genesis/faucet funding)."""
    if amount < 0:
        raise ValueError("amount must be non-negative")
    journal.ensure_account_for_write(recipient).credit(amount)


__all__ = ["transfer_value", "mint_value"]
