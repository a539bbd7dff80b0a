"""Query/result state and the pure transition function that drives it."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Union

from marquee.search.types import MovieRecord


class SearchStatus(Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    ERRORED = "errored"


@dataclass(frozen=True)
class SearchState:
    query: str = ""
    results: tuple[MovieRecord, ...] = ()
    status: SearchStatus = SearchStatus.IDLE


@dataclass(frozen=True)
class InputChanged:
    text: str


@dataclass(frozen=True)
class SearchBegan:
    token: int | None = None


@dataclass(frozen=True)
class SearchSucceeded:
    records: tuple[MovieRecord, ...]
    token: int | None = None


@dataclass(frozen=True)
class SearchFailed:
    token: int | None = None
    reason: str = ""


SearchEvent = Union[InputChanged, SearchBegan, SearchSucceeded, SearchFailed]


def apply(state: SearchState, event: object) -> SearchState:
    """Return the state that follows ``event``.

    Total over any input: unknown events hand back ``state`` unchanged.
    Each recognised event fixes the next status on its own, so the last
    event applied always wins regardless of the prior status.
    """
    if isinstance(event, InputChanged):
        return replace(state, query=event.text)
    if isinstance(event, SearchBegan):
        return replace(state, status=SearchStatus.LOADING)
    if isinstance(event, SearchSucceeded):
        return replace(state, results=event.records, status=SearchStatus.LOADED)
    if isinstance(event, SearchFailed):
        # Stale results stay so the view does not flash an empty list.
        return replace(state, status=SearchStatus.ERRORED)
    return state
