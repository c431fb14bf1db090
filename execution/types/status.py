"""
execution.types.status — outcome of one applied call.

SUCCESS  the entrypoint returned
REVERT   a `Revert` escaped (contract-level failure, carries a reason code)
ERROR    a host rule was broken (InvalidAccess, StateConflict)
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

_ALIASES = {
    "ok": "success",
    "passed": "success",
    "fail": "revert",
    "failed": "revert",
    "err": "error",
    "invalid": "error",
}


class TxStatus(str, Enum):
    SUCCESS = "success"
    REVERT = "revert"
    ERROR = "error"

    @property
    def code(self) -> str:
        """Upper-case form used in result payloads."""
        return self.value.upper()

    @property
    def is_success(self) -> bool:
        return self is TxStatus.SUCCESS

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.value

    @classmethod
    def from_str(cls, s: str, *, default: Optional["TxStatus"] = None) -> "TxStatus":
        """Case-insensitive parse; unknown input returns `default` or raises ValueError."""
        norm = (s or "").strip().lower()
        try:
            return cls(_ALIASES.get(norm, norm))
        except ValueError:
            if default is not None:
                return default
            raise ValueError(f"unknown TxStatus: {s!r}") from None


__all__ = ["TxStatus"]
