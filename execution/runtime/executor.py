"""
execution.runtime.executor — the in-process contract host.

`Executor` owns the world state (accounts + storage behind a Journal), the block
clock, and the registry of deployed Python contracts. It applies top-level
calls one at a time and runs every contract frame inside its own journal
checkpoint.

Call lifecycle (top-level)
--------------------------
1. Sample the clock once → BlockContext(height, timestamp, chain_id).
2. Bump the origin's nonce (survives a revert, like a signed tx would).
3. Open a frame: checkpoint, move `value` origin → contract, run the entrypoint.
4. Success → commit the frame and flush to base state; logs are returned.
   Failure → revert the frame (balances, storage, logs), keep the nonce bump,
   then either re-raise (`call`) or report (`apply_call`).

Nested frames
-------------
`Contract.contract_at(addr).method(...)` and `Contract.send_value(...)` to a
contract address open nested frames with `msg.sender` = calling contract. A
failing nested frame is reverted on its own; the exception propagates into the
caller, which fails in turn unless it catches the error explicitly.

Entry points
------------
- deploy(cls, *args, sender, value=0, **kw) -> address
- call(address, method, *args, sender, value=0, **kw) -> return value (raises on failure)
- apply_call(...)                                      -> ApplyResult (never raises ExecError)
- view(address, method, *args, **kw)                   -> return value, state untouched
- fund(address, amount) / balance_of(address)
- mine(seconds=0, blocks=1)                            -> advance clock and height
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, MutableMapping, Optional, Sequence, Tuple, Type, TypeVar

from ..config import ExecutionConfig, get_config
from ..errors import ExecError, InvalidAccess, Revert
from ..state.accounts import Account, compute_code_hash
from ..state.journal import Journal
from ..state.storage import StorageView
from ..types.context import BlockContext, MessageContext, TxContext
from ..types.events import LogEvent
from ..types.result import ApplyResult
from ..types.status import TxStatus
from .addresses import address_from_label, derive_contract_address, zero_address
from .contracts import RECEIVE_ENTRYPOINT, Contract, EntryPoint, entrypoint_of
from .env import Clock, ManualClock, make_block_env
from .transfers import mint_value, transfer_value

log = logging.getLogger(__name__)

C = TypeVar("C", bound=Contract)


@dataclass
class _Frame:
    contract: Contract
    msg: MessageContext
    marker: int
    readonly: bool = False
    events: List[LogEvent] = field(default_factory=list)


class Executor:
    """
    Deterministic single-threaded host for Python contracts.

    Parameters
    ----------
    clock : Clock, optional
        Time oracle; defaults to a ManualClock at DEFAULT_GENESIS_TIME.
    config : ExecutionConfig, optional
        Defaults to `execution.config.get_config()` (environment driven).
    accounts / storage :
        Optional base state containers (e.g. to share state between hosts in tests).
    """

    def __init__(
        self,
        *,
        clock: Optional[Clock] = None,
        config: Optional[ExecutionConfig] = None,
        accounts: Optional[MutableMapping[bytes, Account]] = None,
        storage: Optional[StorageView] = None,
    ) -> None:
        self.config = config or get_config()
        self.clock: Clock = clock if clock is not None else ManualClock()
        limits = self.config.limits
        self.journal = Journal(
            accounts if accounts is not None else {},
            storage
            if storage is not None
            else StorageView(
                max_key_len=limits.max_storage_key_bytes,
                max_value_len=limits.max_storage_value_bytes,
            ),
        )
        self._contracts: Dict[bytes, Contract] = {}
        self._frames: List[_Frame] = []
        self._root_events: List[LogEvent] = []
        self._height = 0
        self._block: Optional[BlockContext] = None
        self._tx: Optional[TxContext] = None
        self.results: List[ApplyResult] = []

    # ------------------------------------------------------------------ #
    # Chain-level helpers
    # ------------------------------------------------------------------ #

    @property
    def height(self) -> int:
        return self._height

    @property
    def block(self) -> BlockContext:
        """BlockContext of the running call, or a fresh sample when idle."""
        if self._block is not None:
            return self._block
        return make_block_env(self.clock, height=self._height, chain_id=self.config.chain_id)

    def now(self) -> int:
        return self.block.timestamp

    def mine(self, seconds: int = 0, *, blocks: int = 1) -> BlockContext:
        """Advance the clock by `seconds` (ManualClock) and the height by `blocks`."""
        self._require_idle("mine")
        if blocks < 0:
            raise ValueError("blocks must be >= 0")
        if seconds:
            advance = getattr(self.clock, "advance", None)
            if advance is None:
                raise TypeError(f"{type(self.clock).__name__} cannot be advanced manually")
            advance(seconds)
        self._height += blocks
        return self.block

    def account(self, label: str) -> bytes:
        """Deterministic address for a human label; does not create state."""
        return address_from_label(label, length=self.config.address_len)

    @property
    def zero_address(self) -> bytes:
        return zero_address(self.config.address_len)

    def fund(self, address: bytes, amount: int) -> None:
        """Credit `amount` to `address` (genesis/faucet style) and persist."""
        self._require_idle("fund")
        mint_value(self.journal, self._check_address(address), amount)
        self.journal.flush()

    def balance_of(self, address: bytes) -> int:
        return self.journal.balance_of(address)

    def nonce_of(self, address: bytes) -> int:
        acc = self.journal.get_account(address)
        return 0 if acc is None else acc.nonce

    def contract(self, address: bytes) -> Contract:
        c = self._contracts.get(bytes(address))
        if c is None:
            raise InvalidAccess("no contract at address", address=bytes(address).hex())
        return c

    def is_contract(self, address: bytes) -> bool:
        return bytes(address) in self._contracts

    # ------------------------------------------------------------------ #
    # Top-level calls
    # ------------------------------------------------------------------ #

    def deploy(
        self,
        contract_cls: Type[C],
        *args: Any,
        sender: bytes,
        value: int = 0,
        **kwargs: Any,
    ) -> bytes:
        """Create a contract account, run `init(*args, **kwargs)`, return its address."""
        result, err = self._apply(
            sender, lambda origin: self._create(origin, contract_cls, args, kwargs, value)
        )
        if err is not None:
            raise err
        return result.return_value

    def call(
        self,
        address: bytes,
        method: str,
        *args: Any,
        sender: bytes,
        value: int = 0,
        **kwargs: Any,
    ) -> Any:
        """Apply a call; return the entrypoint's value or raise its ExecError."""
        result, err = self._apply(
            sender,
            lambda origin: self._invoke(origin, address, method, args, kwargs, value, depth=0),
        )
        if err is not None:
            raise err
        return result.return_value

    def apply_call(
        self,
        address: bytes,
        method: str,
        *args: Any,
        sender: bytes,
        value: int = 0,
        **kwargs: Any,
    ) -> ApplyResult:
        """Apply a call and report the outcome as an ApplyResult."""
        result, _ = self._apply(
            sender,
            lambda origin: self._invoke(origin, address, method, args, kwargs, value, depth=0),
        )
        return result

    def view(
        self,
        address: bytes,
        method: str,
        *args: Any,
        sender: Optional[bytes] = None,
        **kwargs: Any,
    ) -> Any:
        """Run an entrypoint against current state and discard every effect."""
        self._require_idle("view")
        origin = self._check_address(sender if sender is not None else self.zero_address)
        self._block = self.block
        self._tx = TxContext(origin=origin, chain_id=self.config.chain_id, nonce=self.nonce_of(origin))
        marker = self.journal.checkpoint()
        try:
            return self._invoke(origin, address, method, args, kwargs, 0, depth=0)
        finally:
            self.journal.revert_to(marker)
            self._root_events.clear()
            self._tx = None
            self._block = None

    # ------------------------------------------------------------------ #
    # Hooks used by Contract / ContractRef
    # ------------------------------------------------------------------ #

    def current_message(self, address: bytes) -> MessageContext:
        frame = self._top_frame("msg")
        if frame.msg.to != address:
            raise InvalidAccess("contract context read outside its own frame", op="msg")
        return frame.msg

    def current_tx(self) -> TxContext:
        if self._tx is None:
            raise InvalidAccess("no call in progress", op="tx")
        return self._tx

    def emit(self, address: bytes, name: str, args: Mapping[str, Any]) -> None:
        frame = self._top_frame("emit")
        if frame.contract.address != address:
            raise InvalidAccess("event emitted outside its own frame", op="emit")
        if len(frame.events) >= self.config.limits.max_logs_per_call:
            raise InvalidAccess("too many logs in one frame", op="emit")
        frame.events.append(LogEvent(address, name, dict(args)))

    def nested_call(
        self,
        caller: bytes,
        address: bytes,
        method: str,
        args: Sequence[Any],
        kwargs: Mapping[str, Any],
        *,
        value: int = 0,
    ) -> Any:
        frame = self._top_frame("call")
        if frame.contract.address != caller:
            raise InvalidAccess("nested call from a contract that is not executing", op="call")
        return self._invoke(caller, address, method, args, kwargs, value, depth=frame.msg.depth + 1)

    def send_value(self, sender: bytes, to: bytes, amount: int) -> None:
        """
        Pay `amount` from an executing contract. Contract recipients run their
        `receive` entrypoint in a nested frame; accounts are simply credited.
        """
        frame = self._top_frame("send_value")
        if frame.contract.address != sender:
            raise InvalidAccess("value sent from a contract that is not executing", op="send_value")
        if frame.readonly:
            raise InvalidAccess("value transfer inside a view", op="send_value")
        to = self._check_address(to)
        if to in self._contracts:
            self._invoke(sender, to, RECEIVE_ENTRYPOINT, (), {}, amount, depth=frame.msg.depth + 1)
            return
        transfer_value(self.journal, sender, to, amount)

    # ------------------------------------------------------------------ #
    # Internals
    # ------------------------------------------------------------------ #

    def _require_idle(self, op: str) -> None:
        if self._frames:
            raise InvalidAccess(f"{op} is not allowed while a call is executing", op=op)

    def _top_frame(self, op: str) -> _Frame:
        if not self._frames:
            raise InvalidAccess("no call in progress", op=op)
        return self._frames[-1]

    def _check_address(self, address: Any) -> bytes:
        if not isinstance(address, (bytes, bytearray)) or len(address) != self.config.address_len:
            raise InvalidAccess(
                f"address must be {self.config.address_len} bytes", op="address"
            )
        return bytes(address)

    def _apply(
        self, sender: bytes, body: Callable[[bytes], Any]
    ) -> Tuple[ApplyResult, Optional[ExecError]]:
        self._require_idle("apply")
        origin = self._check_address(sender)
        block = make_block_env(self.clock, height=self._height, chain_id=self.config.chain_id)
        acct = self.journal.ensure_account_for_write(origin)
        self._tx = TxContext(origin=origin, chain_id=block.chain_id, nonce=acct.nonce)
        acct.increment_nonce()
        self._block = block
        self._root_events = []
        try:
            ret = body(origin)
        except ExecError as e:
            self.journal.flush()
            status = TxStatus.REVERT if isinstance(e, Revert) else TxStatus.ERROR
            log.info("call from %s reverted: %s", origin.hex()[:8], e)
            result = ApplyResult(status=status, error=e.to_dict(), block_height=block.height)
            self.results.append(result)
            return result, e
        except BaseException:
            self.journal.flush()
            raise
        finally:
            self._tx = None
            self._block = None
        self.journal.flush()
        result = ApplyResult(
            status=TxStatus.SUCCESS,
            return_value=ret,
            logs=tuple(self._root_events),
            block_height=block.height,
        )
        self._root_events = []
        self.results.append(result)
        return result, None

    def _create(
        self,
        origin: bytes,
        contract_cls: Type[Contract],
        args: Sequence[Any],
        kwargs: Mapping[str, Any],
        value: int,
    ) -> bytes:
        if not (isinstance(contract_cls, type) and issubclass(contract_cls, Contract)):
            raise TypeError("contract_cls must be a Contract subclass")
        # Origin nonce was already bumped for this call; use the pre-bump value.
        address = derive_contract_address(
            origin, self._tx.nonce if self._tx else 0, length=self.config.address_len
        )
        marker = self.journal.checkpoint()
        try:
            self.journal.create_account(
                address, code_hash=compute_code_hash(contract_cls.code_id())
            )
        except BaseException:
            self.journal.revert_to(marker)
            raise
        instance = contract_cls(self, address)
        self._contracts[address] = instance
        try:
            init = getattr(instance, "init", None)
            self._run_frame(
                origin,
                instance,
                EntryPoint(name="init", payable=True),
                (lambda: init(*args, **kwargs)) if init is not None else (lambda: None),
                value,
                depth=0,
            )
        except BaseException:
            self._contracts.pop(address, None)
            self.journal.revert_to(marker)
            raise
        self.journal.commit_to(marker)
        log.info("deployed %s at 0x%s", contract_cls.__name__, address.hex())
        return address

    def _invoke(
        self,
        caller: bytes,
        address: bytes,
        method: str,
        args: Sequence[Any],
        kwargs: Mapping[str, Any],
        value: int,
        *,
        depth: int,
    ) -> Any:
        address = self._check_address(address)
        contract = self._contracts.get(address)
        if contract is None:
            raise InvalidAccess("no contract at address", address=address.hex())
        ep = entrypoint_of(type(contract), method)
        if ep is None:
            raise InvalidAccess(f"{method!r} is not an entrypoint", op=method, address=address.hex())
        bound = getattr(contract, method)
        return self._run_frame(caller, contract, ep, lambda: bound(*args, **kwargs), value, depth=depth)

    def _run_frame(
        self,
        caller: bytes,
        contract: Contract,
        ep: EntryPoint,
        body: Callable[[], Any],
        value: int,
        *,
        depth: int,
    ) -> Any:
        if depth > self.config.limits.max_call_depth:
            raise InvalidAccess("call depth exceeded", op=ep.name)
        if value < 0:
            raise ValueError("value must be non-negative")
        if value and not ep.payable:
            raise InvalidAccess(f"{ep.name!r} is not payable", op=ep.name)
        if self._frames and self._frames[-1].readonly and not ep.readonly:
            raise InvalidAccess("state-changing call inside a view", op=ep.name)

        marker = self.journal.checkpoint()
        frame = _Frame(
            contract=contract,
            msg=MessageContext(sender=caller, to=contract.address, value=value, depth=depth),
            marker=marker,
            readonly=ep.readonly,
        )
        self._frames.append(frame)
        log.debug("enter %s.%s depth=%d value=%d", type(contract).__name__, ep.name, depth, value)
        try:
            if value:
                transfer_value(self.journal, caller, contract.address, value)
            ret = body()
            if ep.readonly and self.journal.top_is_dirty():
                raise InvalidAccess("view entrypoint modified state", op=ep.name)
        except BaseException:
            self.journal.revert_to(marker)
            log.debug("revert %s.%s depth=%d", type(contract).__name__, ep.name, depth)
            raise
        else:
            self.journal.commit_to(marker)
            sink = self._frames[-2].events if len(self._frames) > 1 else self._root_events
            sink.extend(frame.events)
            log.debug("exit %s.%s depth=%d", type(contract).__name__, ep.name, depth)
            return ret
        finally:
            self._frames.pop()


__all__ = ["Executor"]
