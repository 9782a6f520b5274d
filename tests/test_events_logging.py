import logging

import pytest

from emitter.config import EmitterSettings
from emitter.events import EventEmitter
from emitter.logging_config import configure_logging


@pytest.fixture
def debug_logging(caplog):
    configure_logging(level="DEBUG", colors=False)
    caplog.set_level(logging.DEBUG)
    yield caplog
    configure_logging(level="WARNING", colors=False)


def test_registration_logged_at_debug(debug_logging):
    emitter = EventEmitter()

    unsubscribe = emitter.on("x", lambda e: None)
    emitter.on_any(lambda e: None)
    emitter.once("x", lambda e: None)
    emitter.emit("x")
    unsubscribe()
    emitter.remove_all_listeners()

    text = debug_logging.text
    assert "listener_added" in text
    assert "listener_removed" in text
    assert "listeners_cleared" in text
    assert "'x'" in text


def test_isolated_error_logged(debug_logging):
    emitter = EventEmitter(EmitterSettings(isolate_errors=True))

    def failing(e):
        raise RuntimeError("boom")

    emitter.on("x", failing)
    emitter.emit("x")

    errors = [r for r in debug_logging.records if r.levelno == logging.ERROR]
    assert errors
    assert "listener_error" in errors[0].getMessage()
    assert "boom" in debug_logging.text
