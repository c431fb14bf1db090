"""
Animica contracts — Python contracts for the Animica execution host.

- contracts.stdlib : shared helpers (access control, escrow, token tables)
- contracts.drops  : capped-supply drop registry (DropMinter) and the
                     auction ledger that sells one asset per drop (AuctionManager)
"""
