"""Session-scoped owner of the current search state."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

from marquee.search.state_machine import SearchState, apply

StateListener = Callable[[SearchState], None]


@dataclass
class SearchStore:
    _state: SearchState = field(default_factory=SearchState)
    _listeners: list[StateListener] = field(default_factory=list)

    @property
    def state(self) -> SearchState:
        return self._state

    def dispatch(self, event: object) -> SearchState:
        self._state = apply(self._state, event)
        for listener in list(self._listeners):
            listener(self._state)
        return self._state

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe
