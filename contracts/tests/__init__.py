# -*- coding: utf-8 -*-
"""
contracts.tests
================

Contract tests run on the in-process execution host (`execution.runtime`).
Shared fixtures live in `conftest.py`; env defaults come from the repo-root
conftest.
"""
