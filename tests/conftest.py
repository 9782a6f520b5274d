"""Pytest configuration and shared fixtures."""

import pytest

from emitter.logging_config import configure_logging


def pytest_configure(config):
    """Configure pytest markers and quiet logging."""
    config.addinivalue_line("markers", "slow: mark test as slow running")
    configure_logging(level="WARNING", colors=False)


@pytest.fixture
def default_emitter(monkeypatch):
    """Fresh process-wide emitter for the module-level helpers."""
    monkeypatch.setattr("emitter.events.emitter._emitter", None)
    from emitter.events import get_emitter

    bus = get_emitter()
    yield bus
    bus.remove_all_listeners()
