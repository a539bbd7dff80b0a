"""Query/result state machine and the catalog search that drives it."""

from .controller import SearchController
from .errors import CatalogError, MalformedResponseError, ResponseError, TransportError
from .state_machine import (
    InputChanged,
    SearchBegan,
    SearchFailed,
    SearchState,
    SearchStatus,
    SearchSucceeded,
    apply,
)
from .store import SearchStore
from .types import MovieRecord

__all__ = [
    "CatalogError",
    "InputChanged",
    "MalformedResponseError",
    "MovieRecord",
    "ResponseError",
    "SearchBegan",
    "SearchController",
    "SearchFailed",
    "SearchState",
    "SearchStatus",
    "SearchStore",
    "SearchSucceeded",
    "TransportError",
    "apply",
]
