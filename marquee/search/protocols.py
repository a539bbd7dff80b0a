"""Protocol definitions for catalog clients."""

from __future__ import annotations

from typing import Any, Protocol


class CatalogClient(Protocol):
    """Minimal catalog client API used by the search controller."""

    async def fetch_results(self, query: str) -> Any:
        ...
