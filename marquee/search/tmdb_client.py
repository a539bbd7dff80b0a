"""Minimal movie catalog client adapter for single-page title searches."""

from __future__ import annotations

import asyncio
import time
from typing import Any, Dict

import aiohttp

from marquee import logger
from marquee.__version__ import __version__
from marquee.catalog_auth import build_catalog_auth
from marquee.config import CatalogConfig
from marquee.search.errors import MalformedResponseError, ResponseError, TransportError
from marquee.search.protocols import CatalogClient

DEFAULT_USER_AGENT = f"Marquee/{__version__}"
SERVICE_NAME = "TMDB"
SEARCH_PAGE = 1
ERROR_DETAIL_LIMIT = 200


class TmdbServiceAdapter(CatalogClient):
    """Simple catalog adapter for movie title searches."""

    def __init__(self, catalog: CatalogConfig):
        if not catalog.api_key:
            raise ValueError("Catalog API key is required for search adapter.")

        self.catalog = catalog
        self.timeout = catalog.timeout
        self.base_url = catalog.api_url.rstrip("/")
        self._auth_headers, self._auth_params = build_catalog_auth(catalog.api_key)
        self._session: aiohttp.ClientSession | None = None
        self._session_lock = asyncio.Lock()

    async def fetch_results(self, query: str) -> Any:
        """Search movies by title; page 1 only, adult titles excluded."""
        params: Dict[str, Any] = {
            "query": query,
            "page": SEARCH_PAGE,
            "include_adult": "false",
        }
        return await self._request("/search/movie", params)

    async def check_credential(self) -> Any:
        """Call the authentication endpoint to confirm the credential is accepted."""
        return await self._request("/authentication", {})

    async def _request(self, endpoint: str, params: Dict[str, Any]) -> Any:
        url = f"{self.base_url}{endpoint}"
        query_params = {**params, **self._auth_params}
        log = logger.get_logger()
        log.api_request("GET", url, query_params)
        request_start = time.time()

        session = await self._ensure_session()
        try:
            async with session.get(url, params=query_params) as response:
                if not 200 <= response.status < 300:
                    text = await response.text(errors="replace")
                    log.api_failed(SERVICE_NAME, f"HTTP {response.status} {response.reason or ''}".rstrip())
                    raise ResponseError(response.status, response.reason or "", text[:ERROR_DETAIL_LIMIT])
                try:
                    data = await response.json(content_type=None)
                except ValueError as exc:
                    log.api_failed(SERVICE_NAME, f"unreadable body: {exc}")
                    raise MalformedResponseError(f"{SERVICE_NAME} response is not valid JSON: {exc}") from exc
                elapsed_ms = (time.time() - request_start) * 1000
                log.api_response(response.status, data, elapsed_ms)
                return data
        except (asyncio.TimeoutError, aiohttp.ClientError) as exc:
            detail = str(exc) or type(exc).__name__
            log.api_failed(SERVICE_NAME, detail)
            raise TransportError(f"{SERVICE_NAME} request failed: {detail}") from exc

    async def _ensure_session(self) -> aiohttp.ClientSession:
        session = self._session
        if session is not None and not session.closed:
            return session

        async with self._session_lock:
            session = self._session
            if session is None or session.closed:
                timeout = aiohttp.ClientTimeout(total=self.timeout)
                self._session = aiohttp.ClientSession(
                    headers=self._get_headers(),
                    timeout=timeout,
                )
            return self._session

    def _get_headers(self) -> Dict[str, str]:
        return {
            **self._auth_headers,
            "Accept": "application/json",
            "User-Agent": DEFAULT_USER_AGENT,
        }

    async def close(self) -> None:
        """Close any open connections."""
        async with self._session_lock:
            session = self._session
            self._session = None
        if session is not None and not session.closed:
            await session.close()
