"""
execution.state.journal — call-frame journal over accounts and storage.

The host opens one frame per contract call. A frame collects the account
copies and storage slots its call touched; reads look through the open frames
newest-first and then fall back to committed state.

    j = Journal(accounts, storage)
    mark = j.checkpoint()
    j.ensure_account_for_write(addr).credit(100)
    j.storage_set(addr, b"auction:last_drop", b"\\x01")
    j.commit_to(mark)      # fold into the caller's frame
    j.flush()              # persist into `accounts` / `storage`

`revert_to(mark)` throws away the frame opened by `checkpoint()` together with
every frame opened after it.

The journal does not check economics. Amount and access checks happen in
`execution.runtime` before anything is written.
"""

from __future__ import annotations

from typing import Dict, Iterator, List, MutableMapping, Optional, Tuple

from execution.errors import StateConflict

from .accounts import EMPTY_CODE_HASH, Account
from .storage import StorageView

Slot = Tuple[bytes, bytes]

# Staged deletion; shadows older frames and committed storage.
_GONE: Optional[bytes] = None


def _addr(x) -> bytes:
    if not isinstance(x, (bytes, bytearray, memoryview)):
        raise TypeError("address must be bytes-like")
    return bytes(x)


def _slot(address, key) -> Slot:
    if not isinstance(key, (bytes, bytearray, memoryview)):
        raise TypeError("key must be bytes-like")
    return _addr(address), bytes(key)


class _Frame:
    __slots__ = ("accounts", "slots")

    def __init__(self) -> None:
        self.accounts: Dict[bytes, Account] = {}
        self.slots: Dict[Slot, Optional[bytes]] = {}

    def absorb(self, child: "_Frame") -> None:
        self.accounts.update(child.accounts)
        self.slots.update(child.slots)

    def __bool__(self) -> bool:
        return bool(self.accounts or self.slots)


class Journal:
    """Nested write frames over a committed account map and a StorageView."""

    def __init__(self, accounts: MutableMapping[bytes, Account], storage: StorageView) -> None:
        self._accounts = accounts
        self._storage = storage
        # frames[0] is the root frame and is never popped.
        self._frames: List[_Frame] = [_Frame()]

    # ---- frames ------------------------------------------------------------

    def depth(self) -> int:
        return len(self._frames)

    def checkpoint(self) -> int:
        """Open a frame; return the depth to pass to commit_to / revert_to."""
        mark = len(self._frames)
        self._frames.append(_Frame())
        return mark

    def commit_to(self, mark: int) -> None:
        """Fold every frame above `mark` into the frame below it."""
        self._check_mark(mark)
        while len(self._frames) > mark:
            child = self._frames.pop()
            self._frames[-1].absorb(child)

    def revert_to(self, mark: int) -> None:
        """Drop every frame above `mark`."""
        self._check_mark(mark)
        del self._frames[mark:]

    def flush(self) -> None:
        """Commit all frames and write the result to committed state."""
        self.commit_to(1)
        root = self._frames[0]
        for addr, acc in root.accounts.items():
            self._accounts[addr] = acc.copy()
        for (addr, key), value in root.slots.items():
            if value is _GONE:
                self._storage.delete(addr, key)
            else:
                self._storage.set(addr, key, value)
        self._frames[0] = _Frame()

    def top_is_dirty(self) -> bool:
        """True if the newest frame has staged anything."""
        return bool(self._frames[-1])

    @staticmethod
    def _check_mark(mark: int) -> None:
        if mark < 1:
            raise ValueError("checkpoint mark must be >= 1")

    # ---- accounts ----------------------------------------------------------

    def get_account(self, address) -> Optional[Account]:
        """Current view of an account. Treat the result as read-only."""
        addr = _addr(address)
        for frame in reversed(self._frames):
            acc = frame.accounts.get(addr)
            if acc is not None:
                return acc
        return self._accounts.get(addr)

    def get_account_for_write(self, address) -> Optional[Account]:
        """The newest frame's private copy of an account, or None if it does not exist."""
        addr = _addr(address)
        top = self._frames[-1].accounts
        if addr not in top:
            acc = self.get_account(addr)
            if acc is None:
                return None
            top[addr] = acc.copy()
        return top[addr]

    def ensure_account_for_write(self, address) -> Account:
        addr = _addr(address)
        acc = self.get_account_for_write(addr)
        if acc is None:
            acc = self._frames[-1].accounts[addr] = Account()
        return acc

    def create_account(
        self,
        address,
        *,
        initial_balance: int = 0,
        code_hash: Optional[bytes] = None,
    ) -> Account:
        """
        Install code at `address`. A funded plain account keeps its balance;
        an address that already holds code raises StateConflict.
        """
        addr = _addr(address)
        current = self.get_account(addr)
        if current is not None and current.is_contract:
            raise StateConflict("account already exists", address=addr.hex())
        acc = self.ensure_account_for_write(addr)
        if initial_balance:
            acc.credit(initial_balance)
        acc.set_code_hash(code_hash if code_hash is not None else EMPTY_CODE_HASH)
        return acc

    def balance_of(self, address) -> int:
        acc = self.get_account(address)
        return acc.balance if acc is not None else 0

    # ---- storage -----------------------------------------------------------

    def storage_get(self, address, key, default: bytes = b"") -> bytes:
        slot = _slot(address, key)
        for frame in reversed(self._frames):
            if slot in frame.slots:
                value = frame.slots[slot]
                return default if value is _GONE else value
        return self._storage.get(slot[0], slot[1], default=default)

    def storage_set(self, address, key, value) -> None:
        """Stage a write; an empty value stages a deletion."""
        if not isinstance(value, (bytes, bytearray, memoryview)):
            raise TypeError("value must be bytes-like")
        value = bytes(value)
        self._frames[-1].slots[_slot(address, key)] = value if value else _GONE

    def storage_delete(self, address, key) -> None:
        self._frames[-1].slots[_slot(address, key)] = _GONE

    def storage_items(self, address) -> Iterator[Tuple[bytes, bytes]]:
        """Visible (key, value) pairs of one contract in key order."""
        addr = _addr(address)
        visible = dict(self._storage.items(addr))
        for frame in self._frames:
            for (owner, key), value in frame.slots.items():
                if owner != addr:
                    continue
                if value is _GONE:
                    visible.pop(key, None)
                else:
                    visible[key] = value
        for key in sorted(visible):
            yield key, visible[key]


__all__ = ["Journal"]
