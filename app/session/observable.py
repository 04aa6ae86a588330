from __future__ import annotations

from collections.abc import Callable
from typing import Generic, TypeVar

S = TypeVar("S")

Listener = Callable[[S], None]
Unsubscribe = Callable[[], None]


class Observable(Generic[S]):
    """
    Holds an immutable snapshot and pushes it to subscribers.

    Delivery is synchronous and in subscription order; a subscriber always
    receives the current snapshot immediately on subscribe.
    """

    def __init__(self, initial: S) -> None:
        self._state = initial
        self._listeners: list[Listener[S]] = []

    @property
    def state(self) -> S:
        return self._state

    def subscribe(self, listener: Listener[S]) -> Unsubscribe:
        self._listeners.append(listener)
        listener(self._state)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _set(self, state: S) -> None:
        self._state = state
        for listener in list(self._listeners):
            listener(state)
