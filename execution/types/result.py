"""
execution.types.result — ApplyResult, the outcome of one top-level call.

A failed call carries `error` (an `ExecError.to_dict()`) and no logs: its
journal frames were rolled back, and so were the events they emitted.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional, Tuple

from .events import LogEvent
from .status import TxStatus


@dataclass(frozen=True, init=False)
class ApplyResult:
    status: TxStatus
    return_value: Any
    logs: Tuple[LogEvent, ...]
    error: Optional[Dict[str, Any]]
    block_height: int

    def __init__(
        self,
        *,
        status: TxStatus,
        return_value: Any = None,
        logs: Iterable[LogEvent] = (),
        error: Optional[Dict[str, Any]] = None,
        block_height: int = 0,
    ):
        logs = tuple(logs)
        bad = next((ev for ev in logs if not isinstance(ev, LogEvent)), None)
        if bad is not None:
            raise TypeError(f"logs must hold LogEvent objects, got {type(bad).__name__}")
        if block_height < 0:
            raise ValueError("block_height must be >= 0")
        for name, value in (
            ("status", status),
            ("return_value", return_value),
            ("logs", logs),
            ("error", error),
            ("block_height", int(block_height)),
        ):
            object.__setattr__(self, name, value)

    @property
    def is_success(self) -> bool:
        return self.status.is_success

    @property
    def reason(self) -> Optional[str]:
        """Revert reason code, if any."""
        return ((self.error or {}).get("data") or {}).get("reason")

    def events(self, name: str) -> Tuple[LogEvent, ...]:
        return tuple(ev for ev in self.logs if ev.name == name)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": str(self.status),
            "returnValue": self.return_value,
            "logs": [ev.to_dict() for ev in self.logs],
            "error": self.error,
            "blockHeight": self.block_height,
        }

    def __repr__(self) -> str:  # pragma: no cover - cosmetic
        return (
            f"ApplyResult({self.status.code}, logs={len(self.logs)}, "
            f"reason={self.reason}, height={self.block_height})"
        )


__all__ = ["ApplyResult"]
