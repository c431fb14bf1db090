# -*- coding: utf-8 -*-
from __future__ import annotations

import pytest

from contracts.drops import DropMinter
from contracts.drops import config as drops_config


def test_defaults():
    cfg = drops_config.load_config({})
    assert cfg.token_stride == 10_000
    assert cfg.default_base_uri == ""


def test_env_overrides():
    cfg = drops_config.load_config(
        {"ANIMICA_DROPS_TOKEN_STRIDE": "500", "ANIMICA_DROPS_DEFAULT_BASE_URI": "ar://x/"}
    )
    assert cfg.token_stride == 500
    assert cfg.default_base_uri == "ar://x/"


def test_bad_stride_rejected():
    with pytest.raises(ValueError):
        drops_config.load_config({"ANIMICA_DROPS_TOKEN_STRIDE": "0"})


def test_deploy_copies_config_into_storage(chain, accounts, monkeypatch):
    monkeypatch.setenv("ANIMICA_DROPS_TOKEN_STRIDE", "100")
    monkeypatch.setenv("ANIMICA_DROPS_DEFAULT_BASE_URI", "ipfs://d/")
    drops_config.get_config.cache_clear()
    try:
        addr = chain.deploy(DropMinter, sender=accounts["admin"])
    finally:
        drops_config.get_config.cache_clear()
    assert chain.view(addr, "token_stride") == 100
    assert chain.view(addr, "base_uri") == "ipfs://d/"
