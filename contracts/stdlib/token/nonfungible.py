# -*- coding: utf-8 -*-
"""
contracts.stdlib.token.nonfungible
==================================

Ownership table for uniquely-numbered (non-fungible) assets.

Storage layout
--------------
    "nft:owner:" + u256(token_id) -> owner address
    "nft:bal:"   + owner          -> u256 number of tokens owned

Events
------
    "Transfer" {from: zero-address, to, token_id}   (emitted on mint)

Only minting is provided; secondary transfers are out of scope.
"""
from __future__ import annotations

from typing import Optional

from execution.errors import Revert
from execution.runtime.contracts import Contract

from ..utils.bytes import key

OWNER_PREFIX = b"nft:owner:"
BALANCE_PREFIX = b"nft:bal:"


class TokenExists(Revert):
    reason_code = "NFT:EXISTS"
    default_message = "token already minted"


def owner_of(c: Contract, token_id: int) -> Optional[bytes]:
    return c.storage.get(key(OWNER_PREFIX, token_id))


def balance_of(c: Contract, owner: bytes) -> int:
    return c.storage.get_int(key(BALANCE_PREFIX, owner))


def mint(c: Contract, to: bytes, token_id: int) -> None:
    s = c.storage
    k = key(OWNER_PREFIX, token_id)
    if s.exists(k):
        raise TokenExists(data={"token_id": token_id})
    s.set(k, to)
    bk = key(BALANCE_PREFIX, to)
    s.set_int(bk, s.get_int(bk) + 1)
    c.emit("Transfer", **{"from": b"\x00" * c.address_len, "to": to, "token_id": token_id})


__all__ = ["TokenExists", "owner_of", "balance_of", "mint", "OWNER_PREFIX", "BALANCE_PREFIX"]
