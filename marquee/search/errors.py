"""Failure taxonomy for remote catalog lookups."""

from __future__ import annotations


class CatalogError(Exception):
    """Base class for every failure raised while fetching catalog results."""


class TransportError(CatalogError):
    """Network, DNS, refused-connection or timeout failure during the call."""


class ResponseError(CatalogError):
    """The catalog answered with a non-2xx HTTP status."""

    def __init__(self, status: int, reason: str = "", detail: str = "") -> None:
        self.status = status
        self.reason = reason
        self.detail = detail
        message = f"HTTP {status}"
        if reason:
            message = f"{message} {reason}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class MalformedResponseError(CatalogError):
    """Body is not JSON or does not carry a usable results list."""
