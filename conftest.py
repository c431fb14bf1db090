"""
Repo-wide pytest hooks.

- Deterministic env defaults for every suite (execution, contracts, property).
- Cached env configs are dropped before each test so monkeypatched env vars
  take effect.
"""
import os

import pytest


def _set_if_absent(key: str, value: str) -> None:
    if not os.environ.get(key):
        os.environ[key] = value


_set_if_absent("PYTHONHASHSEED", "0")
_set_if_absent("TZ", "UTC")
_set_if_absent("ANIMICA_CHAIN_ID", "1337")


def pytest_configure(config):
    config.addinivalue_line("markers", "slow: long-running property or soak test")


@pytest.fixture(autouse=True)
def _fresh_config_caches():
    from contracts.drops import config as drops_config
    from execution import config as exec_config

    exec_config.get_config.cache_clear()
    drops_config.get_config.cache_clear()
    yield
    exec_config.get_config.cache_clear()
    drops_config.get_config.cache_clear()
