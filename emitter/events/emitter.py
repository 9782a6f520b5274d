"""
Event emitter with scoped and global listeners.

Provides:
- Persistent and one-shot listeners keyed by event name
- Global listeners that observe every event, called before scoped ones
- Unsubscribe handles that are safe to call more than once
- Snapshot dispatch: listeners added during an emit wait for the next one,
  listeners removed during an emit are skipped if not reached yet
- Optional listener error isolation with a bounded failure list
"""

from __future__ import annotations

from collections.abc import Callable, Hashable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from emitter.config import EmitterSettings
from emitter.logging_config import get_logger
from emitter.utils import delete_all, generate_id

logger = get_logger(__name__)


# =============================================================================
# Types & Enums
# =============================================================================

# Event names are strings, numbers or opaque tokens; anything hashable works.
EventName = Hashable

# Listener signature: listener(event, *data)
Listener = Callable[..., Any]

Unsubscribe = Callable[[], None]

LISTENER_ID_PREFIX = "lst_"


class ListenerMode(str, Enum):
    """How long a listener stays registered."""

    ON = "on"
    ONCE = "once"


class Token:
    """
    Opaque event name that is only equal to itself.

    Two tokens with the same description are still different event names.
    """

    __slots__ = ("description",)

    def __init__(self, description: str = ""):
        self.description = description

    def __repr__(self) -> str:
        return f"Token({self.description!r})"


class _Missing:
    def __repr__(self) -> str:
        return "<MISSING>"


MISSING: Any = _Missing()


def _event_key(event_name: EventName) -> Hashable:
    # True == 1 and hash(True) == hash(1); keep booleans apart from integers.
    if isinstance(event_name, bool):
        return (bool, event_name)
    return event_name


# =============================================================================
# Data Classes
# =============================================================================


@dataclass(frozen=True)
class EmitterEvent:
    """
    Event passed as the first argument to every listener of one emit call.

    Attributes:
        name: Event name that was emitted
        source: Emitter that dispatched the event
    """

    name: EventName
    source: EventEmitter


@dataclass
class ListenerRecord:
    """Registered listener."""

    id: str
    mode: ListenerMode
    callback: Listener


@dataclass
class ListenerFailure:
    """Exception raised by a listener while errors are isolated."""

    event: EmitterEvent
    listener_id: str
    error: Exception
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


# =============================================================================
# Event Emitter
# =============================================================================


class EventEmitter:
    """
    Synchronous event emitter.

    Listeners are called in registration order, global listeners first.
    Listener exceptions propagate out of ``emit`` unless the emitter was
    built with ``isolate_errors`` enabled.

    Example:
        emitter = EventEmitter()
        unsubscribe = emitter.on("saved", lambda event, path: print(path))
        emitter.emit("saved", "/tmp/out.json")
        unsubscribe()
    """

    def __init__(self, settings: EmitterSettings | None = None):
        """
        Initialize an empty emitter.

        Args:
            settings: Emitter settings (defaults when omitted)
        """
        self._settings = settings if settings is not None else EmitterSettings()
        self._listeners: dict[Hashable, dict[str, ListenerRecord]] = {}
        self._global_listeners: dict[str, ListenerRecord] = {}
        self._failures: list[ListenerFailure] = []

    @property
    def settings(self) -> EmitterSettings:
        return self._settings

    # -------------------------------------------------------------------------
    # Subscription
    # -------------------------------------------------------------------------

    def on(self, event_name_or_listener: Any, listener: Listener | None = None) -> Unsubscribe:
        """
        Register a persistent listener.

        ``on(event_name, listener)`` listens to one event name.
        ``on(listener)`` listens to every event, like ``on_any``.

        Returns:
            Unsubscribe function
        """
        if listener is not None:
            return self._add_listener(ListenerMode.ON, listener, event_name_or_listener)
        if callable(event_name_or_listener):
            return self._add_listener(ListenerMode.ON, event_name_or_listener)
        raise TypeError("on() requires a listener")

    def on_any(self, listener: Listener) -> Unsubscribe:
        """Register a persistent listener for every event."""
        return self._add_listener(ListenerMode.ON, listener)

    def once(self, event_name: EventName, listener: Listener) -> Unsubscribe:
        """
        Register a listener that is removed right before its first call.

        There is no global form.

        Returns:
            Unsubscribe function
        """
        return self._add_listener(ListenerMode.ONCE, listener, event_name)

    def remove_all_listeners(self) -> None:
        """
        Remove every listener, resetting the emitter to its initial state.

        Collections are emptied in place before being replaced, so an emit
        in progress stops reaching the removed listeners.
        """
        for listeners in self._listeners.values():
            delete_all(listeners)
        delete_all(self._listeners)
        delete_all(self._global_listeners)

        self._listeners = {}
        self._global_listeners = {}
        logger.debug("listeners_cleared")

    def _add_listener(
        self,
        mode: ListenerMode,
        listener: Listener,
        event_name: EventName = MISSING,
    ) -> Unsubscribe:
        listener_id = LISTENER_ID_PREFIX + generate_id(self._settings.id_length)
        record = ListenerRecord(id=listener_id, mode=mode, callback=listener)

        if event_name is MISSING:
            self._global_listeners[listener_id] = record
        else:
            self._listeners.setdefault(_event_key(event_name), {})[listener_id] = record

        logger.debug(
            "listener_added",
            listener_id=listener_id,
            event_name=None if event_name is MISSING else repr(event_name),
            mode=mode.value,
        )

        def unsubscribe() -> None:
            self._remove_listener(listener_id, event_name)

        return unsubscribe

    def _remove_listener(self, listener_id: str, event_name: EventName = MISSING) -> None:
        if event_name is MISSING:
            listeners = self._global_listeners
        else:
            listeners = self._listeners.get(_event_key(event_name))

        if listeners is not None and listener_id in listeners:
            del listeners[listener_id]
            logger.debug("listener_removed", listener_id=listener_id)

    # -------------------------------------------------------------------------
    # Dispatch
    # -------------------------------------------------------------------------

    def emit(self, event_name: EventName, *data: Any) -> None:
        """
        Call the global listeners, then the listeners of ``event_name``.

        Args:
            event_name: Event name
            *data: Positional arguments passed to every listener after the event
        """
        event = EmitterEvent(name=event_name, source=self)

        if self._global_listeners:
            self._call_listeners(self._global_listeners, event, data)

        listeners = self._listeners.get(_event_key(event_name))
        if listeners:
            self._call_listeners(listeners, event, data)

    def _call_listeners(
        self,
        listeners: dict[str, ListenerRecord],
        event: EmitterEvent,
        data: tuple[Any, ...],
    ) -> None:
        # Iterate ids, not records: a listener may remove one that comes later.
        for listener_id in list(listeners):
            record = listeners.get(listener_id)
            if record is None:
                continue

            if record.mode is ListenerMode.ONCE:
                del listeners[listener_id]

            if not self._settings.isolate_errors:
                record.callback(event, *data)
                continue

            try:
                record.callback(event, *data)
            except Exception as e:
                logger.exception(
                    "listener_error",
                    event_name=repr(event.name),
                    listener_id=listener_id,
                )
                self._add_failure(ListenerFailure(event=event, listener_id=listener_id, error=e))

    # -------------------------------------------------------------------------
    # Listener Failures
    # -------------------------------------------------------------------------

    def _add_failure(self, failure: ListenerFailure) -> None:
        self._failures.append(failure)
        if len(self._failures) > self._settings.max_errors:
            del self._failures[: len(self._failures) - self._settings.max_errors]

    def get_listener_errors(self, limit: int = 100) -> list[ListenerFailure]:
        """Get the most recent isolated listener failures (oldest first)."""
        if limit <= 0:
            return []
        return self._failures[-limit:]

    def clear_listener_errors(self) -> int:
        """Forget recorded listener failures and return how many there were."""
        count = len(self._failures)
        self._failures.clear()
        return count

    # -------------------------------------------------------------------------
    # Introspection
    # -------------------------------------------------------------------------

    def listener_count(self, event_name: EventName = MISSING) -> int:
        """
        Count registered listeners.

        Args:
            event_name: Event name, or omitted for the global listeners

        Returns:
            Number of listeners
        """
        if event_name is MISSING:
            return len(self._global_listeners)
        return len(self._listeners.get(_event_key(event_name), ()))

    def has_listeners(self, event_name: EventName) -> bool:
        """Check whether emitting ``event_name`` would call any listener."""
        return bool(self._global_listeners) or self.listener_count(event_name) > 0

    def event_names(self) -> list[EventName]:
        """Event names with at least one scoped listener, in first-registration order."""
        names: list[EventName] = []
        for key, listeners in self._listeners.items():
            if not listeners:
                continue
            if isinstance(key, tuple) and len(key) == 2 and key[0] is bool:
                names.append(key[1])
            else:
                names.append(key)
        return names

    def get_stats(self) -> dict[str, Any]:
        """Get emitter statistics."""
        return {
            "events": len(self.event_names()),
            "scoped_listeners": sum(len(listeners) for listeners in self._listeners.values()),
            "global_listeners": len(self._global_listeners),
            "listener_errors": len(self._failures),
        }


# =============================================================================
# Global Instance
# =============================================================================

_emitter: EventEmitter | None = None


def get_emitter() -> EventEmitter:
    """Get or create the global emitter, configured from the environment."""
    global _emitter
    if _emitter is None:
        _emitter = EventEmitter(EmitterSettings.from_env())
    return _emitter


# =============================================================================
# Convenience Functions
# =============================================================================


def on(event_name_or_listener: Any, listener: Listener | None = None):
    """
    Register a persistent listener on the global emitter (can be used as decorator).

    Usage:
        @on("model.saved")
        def on_saved(event, path):
            ...

        # Or:
        unsubscribe = on("model.saved", handler)
        unsubscribe = on(handler)  # every event

    The decorator form needs a non-callable event name.
    """
    bus = get_emitter()

    if listener is not None or callable(event_name_or_listener):
        return bus.on(event_name_or_listener, listener)

    def decorator(fn: Listener) -> Listener:
        bus.on(event_name_or_listener, fn)
        return fn

    return decorator


def once(event_name: EventName, listener: Listener) -> Unsubscribe:
    """Register a one-shot listener on the global emitter."""
    return get_emitter().once(event_name, listener)


def emit(event_name: EventName, *data: Any) -> None:
    """Emit an event on the global emitter."""
    get_emitter().emit(event_name, *data)


def remove_all_listeners() -> None:
    """Remove every listener from the global emitter."""
    get_emitter().remove_all_listeners()
