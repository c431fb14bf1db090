"""
contracts.drops.minter — DropMinter, the capped-supply asset registry.

A *drop* is a pool of sequentially-numbered assets with a supply cap. The
registry mints only at the request of its single delegate (the
"authorizer"), which the owner assigns and may reassign at any time; the
auction ledger is the usual delegate.

Numbering
---------
    token_id = drop_id * stride + circulating_before_mint

with `stride` fixed at deploy (10_000 by default), so drop 1's first asset is
10000. Minting stops at `min(max_supply, stride)` per drop, which keeps
numbers from ever spilling into the next drop's range.

Storage layout
--------------
    "access:owner"              -> owner (Ownable)
    "minter:authorized"         -> delegate address
    "minter:base_uri"           -> utf-8 base URI
    "minter:stride"             -> u256
    "minter:drop_count"         -> u256, last allocated drop id (ids start at 1)
    "minter:max:"  + u256(drop) -> u256 cap
    "minter:circ:" + u256(drop) -> u256 minted so far
    "nft:*"                     -> ownership table (contracts.stdlib.token.nonfungible)

Events
------
    DropCreated {drop_id, max_supply}
    MaxSupplyChanged {drop_id, previous, new}
    AuthorizerChanged {previous, new}
    BaseURIChanged {uri}
    Transfer {from, to, token_id}

Notes
-----
- `set_max_supply` overwrites the cap without comparing it to `circulating`
  and without checking that the drop was created. Lowering a cap below
  `circulating` simply blocks further mints.
- `max_supply` of an unknown drop is 0; `owner_of` of an unminted id raises
  `NonexistentToken`.
- Negative ids, caps or a zero stride raise `InvalidArgument`.
"""

from __future__ import annotations

import logging
from typing import Optional

from execution.runtime.contracts import external, view

from ..stdlib.access import Ownable, init_owner
from ..stdlib.token import nonfungible as nft
from ..stdlib.utils.bytes import bytes_to_hex, key, require_address
from .config import get_config
from .errors import (InvalidArgument, NonexistentToken, SupplyExhausted,
                     Unauthorized, require_uint)

log = logging.getLogger(__name__)

# ---- Storage keys ----------------------------------------------------------

K_AUTHORIZED = b"minter:authorized"
K_BASE_URI = b"minter:base_uri"
K_STRIDE = b"minter:stride"
K_DROP_COUNT = b"minter:drop_count"
P_MAX = b"minter:max:"
P_CIRC = b"minter:circ:"


class DropMinter(Ownable):
    """Capped-supply, delegate-gated asset registry."""

    def init(self, token_stride: Optional[int] = None, base_uri: Optional[str] = None) -> None:
        cfg = get_config()
        stride = cfg.token_stride if token_stride is None else int(token_stride)
        if stride < 1:
            raise InvalidArgument("token_stride must be >= 1", data={"token_stride": stride})
        init_owner(self, self.msg.sender)
        self.storage.set_int(K_STRIDE, stride)
        uri = cfg.default_base_uri if base_uri is None else base_uri
        if uri:
            self.storage.set(K_BASE_URI, uri.encode("utf-8"))

    # ---- gates -------------------------------------------------------------

    def _only_delegate(self) -> None:
        caller = self.msg.sender
        if caller != self.storage.get(K_AUTHORIZED):
            raise Unauthorized(data={"caller": bytes_to_hex(caller)})

    # ---- owner administration ---------------------------------------------

    @external
    def set_authorizer(self, identity: bytes) -> None:
        self._only_owner()
        new = require_address(identity, self.address_len)
        previous = self.storage.get(K_AUTHORIZED) or b""
        self.storage.set(K_AUTHORIZED, new)
        self.emit("AuthorizerChanged", previous=previous, new=new)
        log.info("DropMinter %s delegate -> %s", bytes_to_hex(self.address), bytes_to_hex(new))

    @external
    def set_base_uri(self, uri: str) -> None:
        self._only_owner()
        self.storage.set(K_BASE_URI, uri.encode("utf-8"))
        self.emit("BaseURIChanged", uri=uri)

    # ---- delegate operations ----------------------------------------------

    @external
    def create_drop(self, max_supply: int) -> int:
        self._only_delegate()
        require_uint("max_supply", max_supply)
        drop_id = self.storage.get_int(K_DROP_COUNT) + 1
        self.storage.set_int(K_DROP_COUNT, drop_id)
        self.storage.set_int(key(P_MAX, drop_id), max_supply)
        self.emit("DropCreated", drop_id=drop_id, max_supply=max_supply)
        log.info("drop %d created (max_supply=%d)", drop_id, max_supply)
        return drop_id

    @external
    def set_max_supply(self, drop_id: int, new_max: int) -> None:
        self._only_delegate()
        require_uint("new_max", new_max)
        k = key(P_MAX, require_uint("drop_id", drop_id))
        previous = self.storage.get_int(k)
        self.storage.set_int(k, new_max)
        self.emit("MaxSupplyChanged", drop_id=drop_id, previous=previous, new=new_max)

    @external
    def mint(self, to: bytes, drop_id: int) -> int:
        self._only_delegate()
        to = require_address(to, self.address_len)
        require_uint("drop_id", drop_id)
        stride = self.storage.get_int(K_STRIDE)
        circ_key = key(P_CIRC, drop_id)
        circulating = self.storage.get_int(circ_key)
        cap = self.storage.get_int(key(P_MAX, drop_id))
        if circulating >= cap or circulating >= stride:
            raise SupplyExhausted(
                data={"drop_id": drop_id, "circulating": circulating, "max_supply": cap}
            )
        token_id = drop_id * stride + circulating
        nft.mint(self, to, token_id)
        self.storage.set_int(circ_key, circulating + 1)
        log.info("minted token %d of drop %d to %s", token_id, drop_id, bytes_to_hex(to))
        return token_id

    # ---- queries ---------------------------------------------------------------

    @view
    def authorized_minter(self) -> Optional[bytes]:
        return self.storage.get(K_AUTHORIZED)

    @view
    def base_uri(self) -> str:
        raw = self.storage.get(K_BASE_URI)
        return raw.decode("utf-8") if raw else ""

    @view
    def token_stride(self) -> int:
        return self.storage.get_int(K_STRIDE)

    @view
    def drop_count(self) -> int:
        return self.storage.get_int(K_DROP_COUNT)

    @view
    def max_supply(self, drop_id: int) -> int:
        return self.storage.get_int(key(P_MAX, require_uint("drop_id", drop_id)))

    @view
    def circulating(self, drop_id: int) -> int:
        return self.storage.get_int(key(P_CIRC, require_uint("drop_id", drop_id)))

    @view
    def owner_of(self, token_id: int) -> bytes:
        owner = nft.owner_of(self, require_uint("token_id", token_id))
        if owner is None:
            raise NonexistentToken(data={"token_id": token_id})
        return owner

    @view
    def balance_of(self, owner: bytes) -> int:
        return nft.balance_of(self, owner)

    @view
    def drop_of(self, token_id: int) -> int:
        self.owner_of(token_id)
        return token_id // self.storage.get_int(K_STRIDE)

    @view
    def token_uri(self, token_id: int) -> str:
        self.owner_of(token_id)
        return f"{self.base_uri()}{token_id}"


__all__ = ["DropMinter"]
