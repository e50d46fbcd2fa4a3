"""Fixtures for core unit tests."""

from __future__ import annotations

import pytest


@pytest.fixture(autouse=True)
def _isolated_config_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep stray STAGING__/CONFIG_DIR variables out of settings tests."""
    for name in ("CONFIG_DIR", "STAGING__TTL_SECONDS"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("APP_ENV", "test")
