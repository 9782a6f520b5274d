"""
Event emitter module.

Provides synchronous publish/subscribe with scoped and global listeners.
"""

from emitter.events.emitter import (
    EmitterEvent,
    EventEmitter,
    EventName,
    Listener,
    ListenerFailure,
    ListenerMode,
    ListenerRecord,
    Token,
    Unsubscribe,
    emit,
    get_emitter,
    on,
    once,
    remove_all_listeners,
)

__all__ = [
    "EmitterEvent",
    "EventEmitter",
    "EventName",
    "Listener",
    "ListenerFailure",
    "ListenerMode",
    "ListenerRecord",
    "Token",
    "Unsubscribe",
    "emit",
    "get_emitter",
    "on",
    "once",
    "remove_all_listeners",
]
