"""
execution.types — canonical execution-layer types for the Animica host.

This package groups small, dependency-light dataclasses and enums that are shared
across the execution host (journal, executor) and the contracts running on it.

Public surface (re-exported):
    TxStatus                                  : Enum — SUCCESS / REVERT / ERROR
    LogEvent                                  : Dataclass — (address, name, args)
    BlockContext, TxContext, MessageContext   : Dataclasses — execution contexts
    ApplyResult                               : Dataclass — result of applying a call
"""

from __future__ import annotations

from .context import BlockContext, MessageContext, TxContext
from .events import LogEvent
from .result import ApplyResult
from .status import TxStatus

__all__ = [
    "TxStatus",
    "LogEvent",
    "BlockContext",
    "TxContext",
    "MessageContext",
    "ApplyResult",
]
