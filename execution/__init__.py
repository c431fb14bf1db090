"""
Animica execution layer — deterministic in-process contract host: accounts, journaled
storage, value transfers, nested call frames and a monotonic clock.

This package exposes only lightweight metadata at import time. Import the host from
`execution.runtime.executor` and the contract base class from `execution.runtime.contracts`.
"""

from .version import __version__

__all__ = ["__version__"]
