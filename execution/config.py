"""
execution.config — runtime configuration for the Animica execution host.

This module centralizes knobs for:
  • Chain identity (chain id carried in every BlockContext)
  • Address scheme (raw address length accepted by the host)
  • Limits (call depth, storage key/value sizes, logs per call)

Configuration may be provided via environment variables. Safe defaults are chosen so a
local developer run (and the test-suite) works out of the box.

Environment variables (all optional):
  ANIMICA_CHAIN_ID                      -> integer >= 1 (default: 1337)
  ANIMICA_EXEC_ADDRESS_LEN              -> integer, bytes per address (default: 20)
  ANIMICA_EXEC_MAX_CALL_DEPTH           -> integer (default: 64)
  ANIMICA_EXEC_MAX_STORAGE_KEY_BYTES    -> e.g. "128", "1KiB" (default: 128)
  ANIMICA_EXEC_MAX_STORAGE_VALUE_BYTES  -> e.g. "4KiB" (default: 4096)
  ANIMICA_EXEC_MAX_LOGS_PER_CALL        -> integer (default: 256)

Programmatic usage:
    from execution.config import get_config
    cfg = get_config()
    if depth > cfg.limits.max_call_depth:
        ...

Note: This module does not perform any I/O beyond reading env vars.
"""

from __future__ import annotations

import os
import re
from dataclasses import asdict, dataclass
from functools import lru_cache
from typing import Dict, Mapping, Optional, Union

# ----------------------------- helpers -------------------------------------


_SIZE_RE = re.compile(r"^\s*(\d+)\s*([kKmM]i?[bB])?\s*$")

_UNITS = {
    "b": 1,
    "kb": 1000,
    "kib": 1024,
    "mb": 1000**2,
    "mib": 1024**2,
}


def _parse_size_bytes(s: Union[str, int]) -> int:
    """
    Parse human-friendly byte sizes:
      "4KiB", "4KB", "4096", 4096 -> bytes (int)
    """
    if isinstance(s, int):
        if s < 0:
            raise ValueError("size must be non-negative")
        return s

    m = _SIZE_RE.match(str(s))
    if not m:
        raise ValueError(f"invalid size: {s!r}")
    unit = (m.group(2) or "B").lower()
    if unit not in _UNITS:
        raise ValueError(f"unknown size unit: {unit}")
    return int(m.group(1)) * _UNITS[unit]


def _int_env(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw.strip(), 0)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer (got {raw!r})") from e


# ------------------------------ dataclasses ---------------------------------


@dataclass(frozen=True)
class Limits:
    max_call_depth: int = 64
    max_storage_key_bytes: int = 128
    max_storage_value_bytes: int = 4096
    max_logs_per_call: int = 256


@dataclass(frozen=True)
class ExecutionConfig:
    chain_id: int
    address_len: int
    limits: Limits

    def to_dict(self) -> Dict[str, object]:
        return asdict(self)


# ------------------------------ loader --------------------------------------

# field -> (env var, default, parser)
_LIMIT_FIELDS = {
    "max_call_depth": ("ANIMICA_EXEC_MAX_CALL_DEPTH", 64, int),
    "max_storage_key_bytes": ("ANIMICA_EXEC_MAX_STORAGE_KEY_BYTES", 128, None),
    "max_storage_value_bytes": ("ANIMICA_EXEC_MAX_STORAGE_VALUE_BYTES", 4096, None),
    "max_logs_per_call": ("ANIMICA_EXEC_MAX_LOGS_PER_CALL", 256, int),
}


def _read(env: Mapping[str, str], ov: Mapping[str, int], field: str, var: str, default: int, parse) -> int:
    if field in ov:
        return int(ov[field])
    if parse is None:
        return _parse_size_bytes(env.get(var) or default)
    return _int_env(env, var, default)


def _validate(cfg: ExecutionConfig) -> ExecutionConfig:
    if cfg.chain_id < 1:
        raise ValueError("chain_id must be >= 1")
    if not 8 <= cfg.address_len <= 64:
        raise ValueError("address_len must be within [8, 64]")
    lim = cfg.limits
    for name in ("max_call_depth", "max_storage_key_bytes", "max_storage_value_bytes"):
        if getattr(lim, name) < 1:
            raise ValueError(f"{name} must be >= 1")
    if lim.max_logs_per_call < 0:
        raise ValueError("max_logs_per_call must be >= 0")
    return cfg


def load_config(
    env: Optional[Mapping[str, str]] = None,
    *,
    overrides: Optional[Mapping[str, int]] = None,
) -> ExecutionConfig:
    """
    Build an ExecutionConfig from `env` (default: os.environ).

    `overrides` wins over the environment; keys are the ExecutionConfig /
    Limits field names ('chain_id', 'address_len', 'max_call_depth', ...).
    """
    env = os.environ if env is None else env
    ov = dict(overrides or {})
    limits = Limits(**{f: _read(env, ov, f, *spec) for f, spec in _LIMIT_FIELDS.items()})
    return _validate(
        ExecutionConfig(
            chain_id=_read(env, ov, "chain_id", "ANIMICA_CHAIN_ID", 1337, int),
            address_len=_read(env, ov, "address_len", "ANIMICA_EXEC_ADDRESS_LEN", 20, int),
            limits=limits,
        )
    )


@lru_cache(maxsize=1)
def get_config() -> ExecutionConfig:
    """Process-wide config, read from os.environ on first use."""
    return load_config()


def summary(cfg: Optional[ExecutionConfig] = None) -> str:
    """One-line rendering for startup logs."""
    cfg = cfg or get_config()
    lim = cfg.limits
    return (
        f"exec{{chain={cfg.chain_id}, addr={cfg.address_len}B, depth={lim.max_call_depth}, "
        f"key={lim.max_storage_key_bytes}B, value={lim.max_storage_value_bytes}B, "
        f"logs={lim.max_logs_per_call}}}"
    )


__all__ = [
    "Limits",
    "ExecutionConfig",
    "load_config",
    "get_config",
    "summary",
]
