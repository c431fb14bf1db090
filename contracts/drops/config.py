"""
contracts.drops.config — deploy-time defaults for the drops contracts.

Environment variables (all optional):
  ANIMICA_DROPS_TOKEN_STRIDE     -> token ids per drop (default: 10000);
                                    token_id = drop_id * stride + serial
  ANIMICA_DROPS_DEFAULT_BASE_URI -> base URI a fresh DropMinter starts with (default: "")

Values are read once (cached) and copied into contract storage at deploy, so a
deployed contract never changes behavior when the environment does.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Mapping, Optional

DEFAULT_TOKEN_STRIDE = 10_000


@dataclass(frozen=True)
class DropsConfig:
    token_stride: int = DEFAULT_TOKEN_STRIDE
    default_base_uri: str = ""


def load_config(env: Optional[Mapping[str, str]] = None) -> DropsConfig:
    env = os.environ if env is None else env
    raw = env.get("ANIMICA_DROPS_TOKEN_STRIDE", "").strip()
    stride = int(raw) if raw else DEFAULT_TOKEN_STRIDE
    if stride < 1:
        raise ValueError("ANIMICA_DROPS_TOKEN_STRIDE must be >= 1")
    return DropsConfig(
        token_stride=stride,
        default_base_uri=env.get("ANIMICA_DROPS_DEFAULT_BASE_URI", ""),
    )


@lru_cache(maxsize=1)
def get_config() -> DropsConfig:
    return load_config()


__all__ = ["DropsConfig", "DEFAULT_TOKEN_STRIDE", "load_config", "get_config"]
