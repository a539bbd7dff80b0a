"""Drives one catalog lookup per submit through the search state machine."""

from __future__ import annotations

import itertools
from typing import Any, Awaitable, Callable

from marquee import logger
from marquee.search.errors import CatalogError
from marquee.search.parsers import filter_displayable, parse_search_payload
from marquee.search.state_machine import SearchBegan, SearchEvent, SearchFailed, SearchSucceeded

Dispatch = Callable[[SearchEvent], Any]
FetchResults = Callable[[str], Awaitable[Any]]


class SearchController:
    """Turn a submitted query into a begin event and exactly one terminal event.

    ``search`` dispatches ``SearchBegan`` before its first suspension point so
    a loading view can render immediately. Every failure of the remote call
    (transport, HTTP status, unreadable or malformed body) ends as a single
    ``SearchFailed``; nothing is raised to the caller.

    Overlapping searches are allowed. By default the terminal event that
    lands last wins, even when it belongs to an older request. With
    ``discard_stale=True`` a terminal event is dropped unless its token is
    the most recently issued one.
    """

    def __init__(
        self,
        dispatch: Dispatch,
        fetch_results: FetchResults,
        *,
        discard_stale: bool = False,
    ) -> None:
        self._dispatch = dispatch
        self._fetch_results = fetch_results
        self.discard_stale = discard_stale
        self._tokens = itertools.count(1)
        self._latest_token = 0

    @property
    def latest_token(self) -> int:
        return self._latest_token

    async def search(self, query: str) -> None:
        token = next(self._tokens)
        self._latest_token = token
        self._dispatch(SearchBegan(token=token))
        logger.debug(f"Search #{token} started for '{query}'")

        try:
            payload = await self._fetch_results(query)
            records = parse_search_payload(payload)
        except CatalogError as exc:
            self._fail(token, query, str(exc))
            return
        except Exception as exc:
            self._fail(token, query, f"{type(exc).__name__}: {exc}")
            return

        displayable = filter_displayable(records)
        dropped = len(records) - len(displayable)
        if dropped:
            logger.debug(f"Search #{token}: hid {dropped} result(s) without a poster")
        self._finish(SearchSucceeded(records=tuple(displayable), token=token))

    def _fail(self, token: int, query: str, reason: str) -> None:
        self._finish(SearchFailed(token=token, reason=reason))
        logger.debug(f"Search #{token} for '{query}' failed: {reason}")

    def _finish(self, event: SearchSucceeded | SearchFailed) -> None:
        if self.discard_stale and event.token != self._latest_token:
            logger.debug(
                f"Search #{event.token} settled after newer search #{self._latest_token}; discarded"
            )
            return
        self._dispatch(event)
