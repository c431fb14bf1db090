# -*- coding: utf-8 -*-
"""
contracts.stdlib.token
======================

Token helpers for Animica Python contracts.

- `nonfungible`: ownership table for uniquely-numbered assets (owner_of,
  balance_of, mint) with a "Transfer" event on mint.
"""
from __future__ import annotations

from . import nonfungible

__all__ = ["nonfungible"]
