"""
contracts.drops — capped-supply drops sold one asset per auction.

- DropMinter     : asset registry; mints only for its delegate
- AuctionManager : escrowed-bid ledger; mints the winner's asset as the delegate

Typical wiring (see tests/ for complete flows):

    minter = host.deploy(DropMinter, sender=admin)
    auction = host.deploy(AuctionManager, minter, sender=admin)
    host.call(minter, "set_authorizer", auction, sender=admin)
    drop_id = host.call(auction, "create_auction", 0, 3600, starting_price, sender=admin)
"""

from __future__ import annotations

from .auction import Auction, AuctionManager, AuctionState, BidRule
from .errors import *  # noqa: F401,F403
from .errors import __all__ as _errors_all
from .interfaces import MinterCapability, minter_at
from .minter import DropMinter

__all__ = [
    "DropMinter",
    "AuctionManager",
    "Auction",
    "AuctionState",
    "BidRule",
    "MinterCapability",
    "minter_at",
    *_errors_all,
]
