"""
execution.errors — failures raised while the host runs a call.

ExecError
 ├─ Revert               contract-level failure with a stable reason code
 │   └─ InsufficientBalance
 ├─ InvalidAccess        the call broke a host rule
 └─ StateConflict        account lifecycle clash (e.g. address already holds code)

A Revert maps to `TxStatus.REVERT`; anything else to `TxStatus.ERROR`. Either
way the journal frame the exception escapes from is rolled back.

This module imports nothing from the rest of the package so the state layer
can raise these without cycles.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


def _details(data: Optional[Dict[str, Any]], **extra: Any) -> Optional[Dict[str, Any]]:
    out: Dict[str, Any] = dict(data or {})
    for k, v in extra.items():
        if v is not None:
            out.setdefault(k, v)
    return out or None


@dataclass
class ExecError(Exception):
    """
    Base host error.

    `code` is a stable machine string ("REVERT", "INVALID_ACCESS", ...);
    `data` holds JSON-friendly details.
    """
    message: str = "execution error"
    code: str = "EXEC_ERROR"
    data: Optional[Dict[str, Any]] = field(default=None)

    def __str__(self) -> str:  # pragma: no cover - trivial
        suffix = f" ({self.data})" if self.data else ""
        return f"{self.code}: {self.message}{suffix}"

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"code": self.code, "message": self.message}
        if self.data is not None:
            out["data"] = self.data
        return out


class Revert(ExecError):
    """
    Contract-raised failure.

        raise Revert("nothing escrowed", reason="ESCROW:NO_FUNDS")

    Subclasses pin `reason_code` / `default_message` so call sites can just
    `raise AuctionEnded(data={...})`.
    """

    reason_code: Optional[str] = None
    default_message: str = "reverted"

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        reason: Optional[str] = None,
        data: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message=message or self.default_message,
            code="REVERT",
            data=_details(data, reason=reason if reason is not None else self.reason_code),
        )

    @property
    def reason(self) -> Optional[str]:
        return None if self.data is None else self.data.get("reason")


class InsufficientBalance(Revert):
    reason_code = "EXEC:INSUFFICIENT_BALANCE"
    default_message = "insufficient balance"


class InvalidAccess(ExecError):
    """
    Host rule violation: unknown contract, non-entrypoint method, value sent to
    a non-payable entrypoint, a write from a view, or calls nested too deep.
    """

    def __init__(
        self,
        message: str = "invalid access",
        *,
        op: Optional[str] = None,
        address: Optional[str] = None,
        data: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message=message, code="INVALID_ACCESS", data=_details(data, op=op, address=address)
        )


class StateConflict(ExecError):
    def __init__(
        self,
        message: str = "state conflict",
        *,
        address: Optional[str] = None,
        data: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, code="STATE_CONFLICT", data=_details(data, address=address))


def error_to_result_fields(err: ExecError) -> Dict[str, Any]:
    """`{"status": "REVERT" | "ERROR", "error": {...}}` for an ApplyResult."""
    return {
        "status": "REVERT" if isinstance(err, Revert) else "ERROR",
        "error": err.to_dict(),
    }


__all__ = [
    "ExecError",
    "Revert",
    "InsufficientBalance",
    "InvalidAccess",
    "StateConflict",
    "error_to_result_fields",
]
