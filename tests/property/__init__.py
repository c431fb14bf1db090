# -*- coding: utf-8 -*-
"""
Hypothesis profiles for the property suite.

Profiles:
- dev     local default, random examples
- ci      derandomized, more examples, verbose failures (picked when CI is set)
- stress  long soak

Select with HYPOTHESIS_PROFILE=dev|ci|stress. Per-test @settings still win.
"""
from __future__ import annotations

import os
from typing import Final

from hypothesis import HealthCheck, Verbosity, settings

_SLOW = (HealthCheck.too_slow, HealthCheck.filter_too_much)

settings.register_profile(
    "dev",
    settings(max_examples=50, deadline=None, suppress_health_check=_SLOW),
)
settings.register_profile(
    "ci",
    settings(
        max_examples=100,
        deadline=None,
        suppress_health_check=_SLOW,
        verbosity=Verbosity.verbose,
        derandomize=True,
    ),
)
settings.register_profile(
    "stress",
    settings(
        max_examples=1000,
        deadline=None,
        suppress_health_check=_SLOW + (HealthCheck.data_too_large,),
        derandomize=True,
    ),
)


def _env_truthy(name: str) -> bool:
    return (os.getenv(name) or "").lower() not in ("", "0", "false", "no", "off")


_active: Final[str] = os.getenv("HYPOTHESIS_PROFILE") or ("ci" if _env_truthy("CI") else "dev")
settings.load_profile(_active)


def active_profile() -> str:
    """Name of the loaded Hypothesis profile."""
    return _active


__all__ = ["active_profile"]
