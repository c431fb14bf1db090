"""
execution.runtime — call execution orchestration.

This package wires together the state machine pieces needed to run contract
calls deterministically:

Submodules (thin overview)
--------------------------
- env          : block clock (ManualClock) and BlockContext construction
- transfers    : pure value transfers over the journal (debit-then-credit)
- storage_api  : per-contract storage handle with typed codecs
- contracts    : Contract base class, entrypoint decorators, cross-contract refs
- executor     : the host (deploy / call / apply_call / view / mine)

Re-exports
----------
For convenience, a few common entrypoints are exposed at the package level:

    from execution.runtime import Executor, Contract, external, view

These are lazily loaded; importing this package does not import the
submodules until the attributes are first accessed.
"""

from __future__ import annotations

from importlib import import_module
from typing import Any, Dict, Tuple

__all__ = (
    "env",
    "transfers",
    "storage_api",
    "contracts",
    "executor",
)

# Lazy symbol re-exports: name -> (module, attribute)
_EXPORTS: Dict[str, Tuple[str, str]] = {
    "Executor": ("executor", "Executor"),
    "Contract": ("contracts", "Contract"),
    "external": ("contracts", "external"),
    "view": ("contracts", "view"),
    "ManualClock": ("env", "ManualClock"),
}


def __getattr__(name: str) -> Any:  # PEP 562 lazy attribute access
    if name in __all__:
        return import_module(f"{__name__}.{name}")
    if name in _EXPORTS:
        mod_name, attr = _EXPORTS[name]
        mod = import_module(f"{__name__}.{mod_name}")
        return getattr(mod, attr)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
