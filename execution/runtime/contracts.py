"""
execution.runtime.contracts — Python contract model for the execution host.

A contract is a subclass of `Contract`. Its state lives only in journaled
storage (never in instance attributes), so every frame can be rolled back.
Entrypoints are ordinary methods marked with a decorator:

    class Counter(Contract):
        def init(self, start: int = 0) -> None:        # runs once, at deploy
            self.storage.set_int(b"n", start)

        @external
        def bump(self) -> int:
            n = self.storage.get_int(b"n") + 1
            self.storage.set_int(b"n", n)
            self.emit("Bumped", n=n)
            return n

        @external(payable=True)
        def donate(self) -> None: ...

        @view
        def current(self) -> int:
            return self.storage.get_int(b"n")

Frame context
-------------
Inside an entrypoint:
  - `self.msg`     MessageContext (sender, to, value, depth) of the running frame
  - `self.block`   BlockContext (height, timestamp, chain_id) sampled once per call
  - `self.tx`      TxContext (origin, nonce) of the top-level call
  - `self.storage` ContractStorage bound to this contract's address

Effects
-------
  - `emit(name, **args)`          append a LogEvent to the frame
  - `send_value(to, amount)`      pay out of this contract's balance; contract
                                  recipients run their `receive` entrypoint
  - `contract_at(address)`        `ContractRef` proxy for nested calls, e.g.
                                  `self.contract_at(minter).mint(to, drop_id)`

Rules enforced by the host
--------------------------
  - Only decorated methods are callable; `init` only at deploy.
  - Value sent to a non-payable entrypoint is rejected.
  - `@view` frames must not write state.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Dict, Optional, TypeVar

from ..types.context import BlockContext, MessageContext, TxContext
from .storage_api import ContractStorage

if TYPE_CHECKING:
    from .executor import Executor

F = TypeVar("F", bound=Callable[..., Any])

ENTRYPOINT_ATTR = "__animica_entrypoint__"
RECEIVE_ENTRYPOINT = "receive"


# ---- Entrypoint markers -------------------------------------------------------


@dataclass(frozen=True)
class EntryPoint:
    name: str
    payable: bool = False
    readonly: bool = False


def external(fn: Optional[F] = None, *, payable: bool = False) -> Any:
    """Mark a method as a state-changing entrypoint (`payable=True` accepts value)."""

    def deco(f: F) -> F:
        setattr(f, ENTRYPOINT_ATTR, EntryPoint(name=f.__name__, payable=payable))
        return f

    return deco(fn) if fn is not None else deco


def view(fn: F) -> F:
    """Mark a method as a read-only entrypoint."""
    setattr(fn, ENTRYPOINT_ATTR, EntryPoint(name=fn.__name__, readonly=True))
    return fn


def entrypoint_of(cls: type, name: str) -> Optional[EntryPoint]:
    if name.startswith("_"):
        return None
    fn = getattr(cls, name, None)
    return getattr(fn, ENTRYPOINT_ATTR, None)


# ---- Contract base --------------------------------------------------------------


class Contract:
    """Base class for contracts deployed on the `Executor`."""

    def __init__(self, host: "Executor", address: bytes) -> None:
        self._host = host
        self._address = bytes(address)
        self._storage = ContractStorage(host.journal, self._address, host.config.limits)

    # -- identity / context --

    @property
    def address(self) -> bytes:
        return self._address

    @property
    def storage(self) -> ContractStorage:
        return self._storage

    @property
    def msg(self) -> MessageContext:
        return self._host.current_message(self._address)

    @property
    def block(self) -> BlockContext:
        return self._host.block

    @property
    def tx(self) -> TxContext:
        return self._host.current_tx()

    @property
    def address_len(self) -> int:
        return self._host.config.address_len

    # -- effects --

    def emit(self, name: str, **args: Any) -> None:
        self._host.emit(self._address, name, args)

    def self_balance(self) -> int:
        return self._host.balance_of(self._address)

    def send_value(self, to: bytes, amount: int) -> None:
        self._host.send_value(self._address, to, amount)

    def contract_at(self, address: bytes) -> "ContractRef":
        return ContractRef(self._host, caller=self._address, address=address)

    # -- introspection --

    @classmethod
    def entrypoints(cls) -> Dict[str, EntryPoint]:
        out: Dict[str, EntryPoint] = {}
        for name in dir(cls):
            ep = entrypoint_of(cls, name)
            if ep is not None:
                out[name] = ep
        return out

    @classmethod
    def code_id(cls) -> str:
        return f"{cls.__module__}:{cls.__qualname__}"

    def __repr__(self) -> str:  # pragma: no cover - cosmetic
        return f"{type(self).__name__}(0x{self._address.hex()})"


class ContractRef:
    """
    Proxy for calling another contract from inside a frame.

    Attribute access yields a callable; calling it opens a nested frame whose
    `msg.sender` is the calling contract. Keyword `value` attaches native value.
    """

    __slots__ = ("_host", "_caller", "_address")

    def __init__(self, host: "Executor", *, caller: bytes, address: bytes) -> None:
        self._host = host
        self._caller = bytes(caller)
        self._address = bytes(address)

    @property
    def address(self) -> bytes:
        return self._address

    def __getattr__(self, method: str) -> Callable[..., Any]:
        if method.startswith("_"):
            raise AttributeError(method)

        def _call(*args: Any, value: int = 0, **kwargs: Any) -> Any:
            return self._host.nested_call(
                self._caller, self._address, method, args, kwargs, value=value
            )

        _call.__name__ = method
        return _call

    def __repr__(self) -> str:  # pragma: no cover - cosmetic
        return f"ContractRef(0x{self._address.hex()})"


__all__ = [
    "Contract",
    "ContractRef",
    "EntryPoint",
    "external",
    "view",
    "entrypoint_of",
    "RECEIVE_ENTRYPOINT",
]
