"""
execution.state — state subsystem (accounts, storage, journal).

This package provides the deterministic state layer used by the execution
host. To keep import-time overhead low and avoid circulars, the common
symbols are lazily re-exported from their submodules on first access.

Submodules:
- accounts: Account records (nonce, balance, code hash)
- storage:  Per-account storage view (key/value)
- journal:  Journaling writes, checkpoints, revert/commit
"""

from __future__ import annotations

from importlib import import_module as _imp
from typing import Any, Dict, Tuple

# Map of public attributes → (submodule, symbol)
_exports: Dict[str, Tuple[str, str]] = {
    "Account": ("accounts", "Account"),
    "StorageView": ("storage", "StorageView"),
    "Journal": ("journal", "Journal"),
}

__all__ = tuple(_exports.keys())


def __getattr__(name: str) -> Any:
    """
    Lazy attribute loader to avoid import-time dependency tangles.
    """
    if name in _exports:
        submod, symbol = _exports[name]
        mod = _imp(f"{__name__}.{submod}")
        return getattr(mod, symbol)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
