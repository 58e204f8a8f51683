"""Shared fixtures."""

from __future__ import annotations

import os
from datetime import datetime, timezone

import pytest


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Keep PHISH_* overrides from the developer's shell out of the tests."""
    for name in list(os.environ):
        if name.startswith("PHISH_"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def now():
    return datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)
