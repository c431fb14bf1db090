"""
contracts.drops.auction — AuctionManager, the escrowed-bid auction ledger.

One auction per drop id. Bidders escrow native value inside the window
`[start_time, end_time)`; after the window closes the highest bidder claims
the drop's asset, which the ledger mints on the registry as its delegate.
Everybody else withdraws their escrow.

Lifecycle (per drop id)
-----------------------
    NON_EXISTENT --create_auction--> CREATED   (now <  start_time)
                                     OPEN      (start_time <= now < end_time)
                                     ENDED     (now >= end_time)
                 --get_prize-------> CLAIMED

Drop ids
--------
Without an explicit id, `create_auction` asks the registry for a fresh
one-asset drop (or, with no registry, takes the next local id). An explicit
id must name a drop the registry already allocated and can still mint from;
anything else is `UnknownDrop`, so auto-allocated ids can never land on an
auction that was attached by hand.

Bid rule
--------
The value a bid competes with is fixed per ledger at deploy (`BidRule`):

  CUMULATIVE  prior escrow + attached value (the default). The leader's escrow
              always equals `highest_bid`.
  PER_BID     attached value alone. Escrow still accumulates, so a bidder
              who bids twice holds more than their standing bid; the
              difference is their surplus.

Either way a bid must be strictly above `highest_bid` (ties lose) and a
bidder's first bid must be strictly above the starting price.

Funds
-----
Bids accumulate in an `EscrowBook` scoped by drop id. After the window closes
losers take theirs back with `withdraw`, and so does the winner for any
surplus above `highest_bid`. Exactly `highest_bid` stays locked as the price
of the asset until the owner sweeps it with `collect_proceeds`. The book is
debited before value leaves, so a re-entrant withdraw from a `receive` hook
finds nothing.

Claiming
--------
`get_prize` marks the auction claimed and asks the registry to mint in the
same transaction. A registry refusal (e.g. the ledger lost its delegate
authority) reverts the whole call, flag included, so the winner can retry
once authority is restored; a registry that calls back into `get_prize`
already sees the auction as claimed.

Storage layout (u256 = 32-byte big-endian drop id)
--------------------------------------------------
    "access:owner"                  -> owner (Ownable)
    "auction:minter"                -> registry address
    "auction:rule"                  -> BidRule value
    "auction:last_drop"             -> u256, highest drop id with an auction
    "auction:exists:"  + u256       -> flag
    "auction:start:"   + u256       -> u256 start time
    "auction:end:"     + u256       -> u256 end time
    "auction:price:"   + u256       -> u256 starting price
    "auction:top_bid:" + u256       -> u256 highest effective bid
    "auction:top_by:"  + u256       -> highest bidder address
    "auction:claimed:" + u256       -> flag
    "auction:swept:"   + u256       -> flag, proceeds collected
    "auction:esc:*"                 -> escrow book

Events
------
    MinterChanged {previous, new}
    AuctionCreated {drop_id, start_time, end_time, starting_price}
    BidPlaced {drop_id, bidder, amount, bid, escrow}
    Withdrawn {drop_id, bidder, amount}
    PrizeClaimed {drop_id, winner, token_id}
    ProceedsCollected {drop_id, to, amount}
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from execution.runtime.contracts import external, view

from ..stdlib.access import Ownable, init_owner
from ..stdlib.treasury import EscrowBook, pay
from ..stdlib.utils.bytes import bytes_to_hex, key, require_address
from .errors import (AlreadyClaimed, AuctionEnded, AuctionNotEnded,
                     AuctionNotFound, AuctionNotStarted, BelowStartingPrice,
                     BidTooLow, DuplicateAuction, InvalidAuctionWindow,
                     MinterNotSet, NoFundsToWithdraw, NotTheWinner,
                     ProceedsAlreadyCollected, UnknownDrop,
                     WinnerCannotWithdraw, require_uint)
from .interfaces import minter_at

log = logging.getLogger(__name__)

# ---- Storage keys ----------------------------------------------------------

K_MINTER = b"auction:minter"
K_RULE = b"auction:rule"
K_LAST_DROP = b"auction:last_drop"
P_EXISTS = b"auction:exists:"
P_START = b"auction:start:"
P_END = b"auction:end:"
P_PRICE = b"auction:price:"
P_TOP_BID = b"auction:top_bid:"
P_TOP_BY = b"auction:top_by:"
P_CLAIMED = b"auction:claimed:"
P_SWEPT = b"auction:swept:"
ESCROW_PREFIX = b"auction:esc:"


# ---- Types -----------------------------------------------------------------


class BidRule(str, Enum):
    CUMULATIVE = "cumulative"
    PER_BID = "per_bid"


class AuctionState(str, Enum):
    NON_EXISTENT = "non_existent"
    CREATED = "created"
    OPEN = "open"
    ENDED = "ended"
    CLAIMED = "claimed"


@dataclass(frozen=True)
class Auction:
    """Read-only snapshot of one auction record."""

    drop_id: int
    start_time: int
    end_time: int
    starting_price: int
    highest_bid: int
    highest_bidder: Optional[bytes]
    claimed: bool
    proceeds_collected: bool

    def state_at(self, now: int) -> AuctionState:
        if self.claimed:
            return AuctionState.CLAIMED
        if now < self.start_time:
            return AuctionState.CREATED
        if now < self.end_time:
            return AuctionState.OPEN
        return AuctionState.ENDED


# ---- Contract --------------------------------------------------------------


class AuctionManager(Ownable):
    """
    Multi-drop auction ledger with escrowed bids.

    The default `BidRule.CUMULATIVE` ranks a bidder by everything they have
    escrowed. The legacy contract ranked each bid on its own value, which is
    what `BidRule.PER_BID` reproduces. The two disagree whenever a bidder
    comes back:

    - a1 0.1, a2 0.2, a1 0.2: the last bid equals the highest bid, a
      rejected tie under PER_BID, but counts as 0.3 and leads under
      CUMULATIVE.
    - a1 0.1, a2 0.2, a1 0.3 (the usual round trip): PER_BID records a
      0.3 highest bid with 0.4 escrowed (0.1 surplus, refundable after the
      end); CUMULATIVE records 0.4.

    Deploy with `bid_rule=BidRule.PER_BID` to keep the legacy behaviour.
    """

    def init(
        self,
        minter: Optional[bytes] = None,
        bid_rule: Union[BidRule, str] = BidRule.CUMULATIVE,
    ) -> None:
        rule = BidRule(bid_rule)
        init_owner(self, self.msg.sender)
        self.storage.set(K_RULE, rule.value.encode("ascii"))
        if minter is not None:
            self.storage.set(K_MINTER, require_address(minter, self.address_len))

    @property
    def _book(self) -> EscrowBook:
        return EscrowBook(self, ESCROW_PREFIX)

    def _rule(self) -> BidRule:
        raw = self.storage.get(K_RULE)
        return BidRule(raw.decode("ascii")) if raw else BidRule.CUMULATIVE

    def _load(self, drop_id: int) -> Optional[Auction]:
        require_uint("drop_id", drop_id)
        s = self.storage
        if not s.get_flag(key(P_EXISTS, drop_id)):
            return None
        return Auction(
            drop_id=drop_id,
            start_time=s.get_int(key(P_START, drop_id)),
            end_time=s.get_int(key(P_END, drop_id)),
            starting_price=s.get_int(key(P_PRICE, drop_id)),
            highest_bid=s.get_int(key(P_TOP_BID, drop_id)),
            highest_bidder=s.get(key(P_TOP_BY, drop_id)),
            claimed=s.get_flag(key(P_CLAIMED, drop_id)),
            proceeds_collected=s.get_flag(key(P_SWEPT, drop_id)),
        )

    def _require(self, drop_id: int) -> Auction:
        a = self._load(drop_id)
        if a is None:
            raise AuctionNotFound(data={"drop_id": drop_id})
        return a

    def _require_ended(self, drop_id: int) -> Auction:
        a = self._require(drop_id)
        now = self.block.timestamp
        if now < a.end_time:
            raise AuctionNotEnded(data={"drop_id": drop_id, "end_time": a.end_time, "now": now})
        return a

    def _require_sellable(self, minter: bytes, drop_id: int) -> None:
        reg = minter_at(self, minter)
        count = reg.drop_count()
        if drop_id < 1 or drop_id > count:
            raise UnknownDrop(data={"drop_id": drop_id, "drop_count": count})
        cap, minted = reg.max_supply(drop_id), reg.circulating(drop_id)
        if cap <= minted:
            raise UnknownDrop(
                "drop has nothing left to mint",
                data={"drop_id": drop_id, "max_supply": cap, "circulating": minted},
            )

    def _locked(self, a: Auction, account: bytes) -> int:
        """Escrow of `account` that `withdraw` must leave in place."""
        if account == a.highest_bidder and not a.proceeds_collected:
            return a.highest_bid
        return 0

    # ---- administration ----------------------------------------------------

    @external
    def set_minter(self, minter: bytes) -> None:
        self._only_owner()
        new = require_address(minter, self.address_len)
        previous = self.storage.get(K_MINTER) or b""
        self.storage.set(K_MINTER, new)
        self.emit("MinterChanged", previous=previous, new=new)

    @external
    def create_auction(
        self,
        start_offset: int,
        end_offset: int,
        starting_price: int,
        drop_id: Optional[int] = None,
    ) -> int:
        self._only_owner()
        if start_offset < 0 or end_offset <= start_offset:
            raise InvalidAuctionWindow(
                data={"start_offset": start_offset, "end_offset": end_offset}
            )
        require_uint("starting_price", starting_price)

        minter = self.storage.get(K_MINTER)
        if drop_id is None:
            if minter is not None:
                # one auction sells exactly one asset
                drop_id = minter_at(self, minter).create_drop(1)
            else:
                drop_id = self.storage.get_int(K_LAST_DROP) + 1
        elif minter is not None:
            self._require_sellable(minter, require_uint("drop_id", drop_id))
        if self._load(drop_id) is not None:
            raise DuplicateAuction(data={"drop_id": drop_id})

        now = self.block.timestamp
        start_time, end_time = now + start_offset, now + end_offset
        s = self.storage
        s.set_flag(key(P_EXISTS, drop_id), True)
        s.set_int(key(P_START, drop_id), start_time)
        s.set_int(key(P_END, drop_id), end_time)
        s.set_int(key(P_PRICE, drop_id), starting_price)
        if drop_id > s.get_int(K_LAST_DROP):
            s.set_int(K_LAST_DROP, drop_id)

        self.emit(
            "AuctionCreated",
            drop_id=drop_id,
            start_time=start_time,
            end_time=end_time,
            starting_price=starting_price,
        )
        log.info("auction for drop %d: [%d, %d) from %d", drop_id, start_time, end_time, starting_price)
        return drop_id

    # ---- bidding -----------------------------------------------------------

    @external(payable=True)
    def bid(self, drop_id: int) -> int:
        """Escrow the attached value as a bid; returns the effective bid."""
        a = self._require(drop_id)
        now = self.block.timestamp
        if now < a.start_time:
            raise AuctionNotStarted(data={"drop_id": drop_id, "start_time": a.start_time})
        if now >= a.end_time:
            raise AuctionEnded(data={"drop_id": drop_id, "end_time": a.end_time})

        bidder, amount = self.msg.sender, self.msg.value
        book = self._book
        prior = book.balance_of(drop_id, bidder)
        if prior == 0 and amount <= a.starting_price:
            raise BelowStartingPrice(data={"amount": amount, "starting_price": a.starting_price})

        effective = prior + amount if self._rule() is BidRule.CUMULATIVE else amount
        if effective <= a.highest_bid:
            raise BidTooLow(data={"bid": effective, "highest_bid": a.highest_bid})

        escrow = book.deposit(drop_id, bidder, amount)
        self.storage.set_int(key(P_TOP_BID, drop_id), effective)
        self.storage.set(key(P_TOP_BY, drop_id), bidder)
        self.emit("BidPlaced", drop_id=drop_id, bidder=bidder, amount=amount, bid=effective, escrow=escrow)
        log.debug("drop %d: %s leads with %d", drop_id, bytes_to_hex(bidder), effective)
        return effective

    @external
    def withdraw(self, drop_id: int) -> int:
        """
        Refund escrow after the auction ended: a loser's whole balance, or the
        winner's surplus above `highest_bid`.
        """
        a = self._require_ended(drop_id)
        caller = self.msg.sender
        book = self._book
        held = book.balance_of(drop_id, caller)
        refundable = held - self._locked(a, caller)
        if caller == a.highest_bidder and refundable <= 0:
            raise WinnerCannotWithdraw(data={"drop_id": drop_id})
        if refundable <= 0:
            raise NoFundsToWithdraw(data={"drop_id": drop_id})
        w = book.release(drop_id, caller, refundable)
        self.emit("Withdrawn", drop_id=drop_id, bidder=caller, amount=w.amount)
        pay(self, w)
        return w.amount

    # ---- settlement --------------------------------------------------------

    @external
    def get_prize(self, drop_id: int) -> int:
        """Mint the drop's asset to the winner; returns the token id."""
        a = self._require_ended(drop_id)
        caller = self.msg.sender
        if a.highest_bidder is None or caller != a.highest_bidder:
            raise NotTheWinner(data={"drop_id": drop_id})
        if a.claimed:
            raise AlreadyClaimed(data={"drop_id": drop_id})
        minter = self.storage.get(K_MINTER)
        if minter is None:
            raise MinterNotSet()

        self.storage.set_flag(key(P_CLAIMED, drop_id), True)
        token_id = minter_at(self, minter).mint(caller, drop_id)
        self.emit("PrizeClaimed", drop_id=drop_id, winner=caller, token_id=token_id)
        log.info("drop %d claimed by %s as token %d", drop_id, bytes_to_hex(caller), token_id)
        return token_id

    @external
    def collect_proceeds(self, drop_id: int, to: bytes) -> int:
        """Owner: pay the winning bid out of the winner's escrow to `to`, once per auction."""
        self._only_owner()
        to = require_address(to, self.address_len)
        a = self._require_ended(drop_id)
        if a.proceeds_collected:
            raise ProceedsAlreadyCollected(data={"drop_id": drop_id})
        if a.highest_bidder is None:
            raise NoFundsToWithdraw(data={"drop_id": drop_id})
        w = self._book.release(drop_id, a.highest_bidder, a.highest_bid)
        self.storage.set_flag(key(P_SWEPT, drop_id), True)
        self.emit("ProceedsCollected", drop_id=drop_id, to=to, amount=w.amount)
        pay(self, w, to=to)
        return w.amount

    # ---- queries -------------------------------------------------------------

    @view
    def minter(self) -> Optional[bytes]:
        return self.storage.get(K_MINTER)

    @view
    def bid_rule(self) -> BidRule:
        return self._rule()

    @view
    def last_drop_id(self) -> int:
        return self.storage.get_int(K_LAST_DROP)

    @view
    def get_auction(self, drop_id: int) -> Auction:
        return self._require(drop_id)

    @view
    def auction_state(self, drop_id: int) -> AuctionState:
        a = self._load(drop_id)
        if a is None:
            return AuctionState.NON_EXISTENT
        return a.state_at(self.block.timestamp)

    @view
    def highest_bid(self, drop_id: int) -> int:
        return self.storage.get_int(key(P_TOP_BID, require_uint("drop_id", drop_id)))

    @view
    def highest_bidder(self, drop_id: int) -> Optional[bytes]:
        return self.storage.get(key(P_TOP_BY, require_uint("drop_id", drop_id)))

    @view
    def bid_of(self, drop_id: int, bidder: bytes) -> int:
        return self._book.balance_of(require_uint("drop_id", drop_id), bidder)

    @view
    def is_claimed(self, drop_id: int) -> bool:
        return self.storage.get_flag(key(P_CLAIMED, require_uint("drop_id", drop_id)))

    @view
    def escrow_total(self) -> int:
        return self._book.total()


__all__ = ["AuctionManager", "Auction", "AuctionState", "BidRule"]
