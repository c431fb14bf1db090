"""
contracts.drops.errors — named reverts of the drop registry and auction ledger.

Every error is a `Revert` with a stable `reason` code; the message mirrors the
short human strings wallets show. Any of them aborts the whole call: the host
rolls back every storage, balance and event effect.

Registry (DropMinter)
---------------------
  Unauthorized           MINTER:UNAUTHORIZED       caller is not the delegate
  SupplyExhausted        MINTER:SUPPLY_EXHAUSTED   circulating reached the cap
  NonexistentToken       MINTER:NONEXISTENT_TOKEN  token id never minted

Shared
------
  InvalidArgument        DROPS:INVALID_ARGUMENT    negative id, price or supply

Auction ledger (AuctionManager)
-------------------------------
  AuctionNotFound        AUCTION:NOT_FOUND
  DuplicateAuction       AUCTION:EXISTS
  UnknownDrop            AUCTION:UNKNOWN_DROP      explicit id the registry cannot sell
  InvalidAuctionWindow   AUCTION:BAD_WINDOW
  AuctionNotStarted      AUCTION:NOT_STARTED
  AuctionEnded           AUCTION:ENDED
  AuctionNotEnded        AUCTION:NOT_ENDED
  BelowStartingPrice     AUCTION:BELOW_STARTING_PRICE
  BidTooLow              AUCTION:BID_TOO_LOW
  WinnerCannotWithdraw   AUCTION:WINNER_CANNOT_WITHDRAW
  NoFundsToWithdraw      AUCTION:NO_FUNDS
  NotTheWinner           AUCTION:NOT_THE_WINNER
  AlreadyClaimed         AUCTION:ALREADY_CLAIMED
  ProceedsAlreadyCollected AUCTION:PROCEEDS_COLLECTED
  MinterNotSet           AUCTION:MINTER_NOT_SET

`PermissionDenied` (owner gate) lives in contracts.stdlib.access and is
re-exported here for convenience.
"""

from __future__ import annotations

from execution.errors import Revert

from ..stdlib.access import PermissionDenied


class DropsError(Revert):
    """Base class of every drops revert."""

    reason_code = "DROPS:ERROR"
    default_message = "drops error"


class InvalidArgument(DropsError):
    reason_code = "DROPS:INVALID_ARGUMENT"
    default_message = "invalid argument"


def require_uint(name: str, value: int) -> int:
    """Return `value` if it is a non-negative int, else raise InvalidArgument."""
    if not isinstance(value, int) or isinstance(value, bool) or value < 0:
        raise InvalidArgument(f"{name} must be a non-negative integer", data={name: value})
    return value


# ---- registry ----


class Unauthorized(DropsError):
    reason_code = "MINTER:UNAUTHORIZED"
    default_message = "Unauthorized"


class SupplyExhausted(DropsError):
    reason_code = "MINTER:SUPPLY_EXHAUSTED"
    default_message = "Max supply reached"


class NonexistentToken(DropsError):
    reason_code = "MINTER:NONEXISTENT_TOKEN"
    default_message = "owner query for nonexistent token"


# ---- auction ledger ----


class AuctionNotFound(DropsError):
    reason_code = "AUCTION:NOT_FOUND"
    default_message = "Auction not found"


class DuplicateAuction(DropsError):
    reason_code = "AUCTION:EXISTS"
    default_message = "Auction for drop exists"


class UnknownDrop(DropsError):
    reason_code = "AUCTION:UNKNOWN_DROP"
    default_message = "drop unknown to the registry or sold out"


class InvalidAuctionWindow(DropsError):
    reason_code = "AUCTION:BAD_WINDOW"
    default_message = "end offset must exceed start offset"


class AuctionNotStarted(DropsError):
    reason_code = "AUCTION:NOT_STARTED"
    default_message = "Auction not started"


class AuctionEnded(DropsError):
    reason_code = "AUCTION:ENDED"
    default_message = "Auction ended"


class AuctionNotEnded(DropsError):
    reason_code = "AUCTION:NOT_ENDED"
    default_message = "Auction not ended"


class BelowStartingPrice(DropsError):
    reason_code = "AUCTION:BELOW_STARTING_PRICE"
    default_message = "must be greater than starting price"


class BidTooLow(DropsError):
    reason_code = "AUCTION:BID_TOO_LOW"
    default_message = "must be greater than highest bid"


class WinnerCannotWithdraw(DropsError):
    reason_code = "AUCTION:WINNER_CANNOT_WITHDRAW"
    default_message = "winner cannot withdraw"


class NoFundsToWithdraw(DropsError):
    reason_code = "AUCTION:NO_FUNDS"
    default_message = "no funds to withdraw"


class NotTheWinner(DropsError):
    reason_code = "AUCTION:NOT_THE_WINNER"
    default_message = "not the winner"


class AlreadyClaimed(DropsError):
    reason_code = "AUCTION:ALREADY_CLAIMED"
    default_message = "Already got prize"


class ProceedsAlreadyCollected(DropsError):
    reason_code = "AUCTION:PROCEEDS_COLLECTED"
    default_message = "proceeds already collected"


class MinterNotSet(DropsError):
    reason_code = "AUCTION:MINTER_NOT_SET"
    default_message = "minter not set"


__all__ = [
    "DropsError",
    "InvalidArgument",
    "require_uint",
    "PermissionDenied",
    "Unauthorized",
    "SupplyExhausted",
    "NonexistentToken",
    "AuctionNotFound",
    "DuplicateAuction",
    "UnknownDrop",
    "InvalidAuctionWindow",
    "AuctionNotStarted",
    "AuctionEnded",
    "AuctionNotEnded",
    "BelowStartingPrice",
    "BidTooLow",
    "WinnerCannotWithdraw",
    "NoFundsToWithdraw",
    "NotTheWinner",
    "AlreadyClaimed",
    "ProceedsAlreadyCollected",
    "MinterNotSet",
]
