"""Single-owner state container with a publish/subscribe update contract.

The owner replaces the whole value in one assignment and every listener is
called with the new value. Listener failures are logged and isolated so a
broken subscriber cannot abort the owner's state change.
"""

import logging
from collections.abc import Callable
from typing import Generic, TypeVar

T = TypeVar("T")

Listener = Callable[[T], None]

logger = logging.getLogger("sk.state")


class Observable(Generic[T]):
    def __init__(self, initial: T) -> None:
        self._value = initial
        self._listeners: list[Listener[T]] = []

    @property
    def value(self) -> T:
        return self._value

    def subscribe(self, listener: Listener[T]) -> Callable[[], None]:
        """Register a listener; returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def publish(self, value: T) -> None:
        self._value = value
        for listener in list(self._listeners):
            try:
                listener(value)
            except Exception:
                logger.exception("State listener %r failed", listener)

    def clear_listeners(self) -> None:
        self._listeners.clear()
