"""Root conftest for all tests - isolate global logging and config state."""

import pytest

import tradetrack.system.config as system_config
from tradetrack.system import LoggerFactory


@pytest.fixture(autouse=True)
def isolated_system_state(monkeypatch, tmp_path):
    """Run each test from an empty directory with fresh config and logging."""
    monkeypatch.delenv("TRADETRACK_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(system_config, "_system_config", None)
    LoggerFactory.reset()
    yield
    LoggerFactory.reset()
