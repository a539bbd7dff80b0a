"""Credential placement for catalog API requests."""

from __future__ import annotations


def _is_read_access_token(credential: str) -> bool:
    parts = credential.split(".")
    return len(parts) == 3 and all(parts)


def build_catalog_auth(credential: str) -> tuple[dict[str, str], dict[str, str]]:
    """
    Return ``(headers, params)`` carrying the catalog credential.

    v4 read-access tokens are JWTs and travel as a Bearer header; v3 API
    keys are plain hex strings and travel as the ``api_key`` query parameter.
    """
    key = (credential or "").strip()
    if key.lower().startswith("bearer "):
        return {"Authorization": f"Bearer {key[7:].strip()}"}, {}
    if _is_read_access_token(key):
        return {"Authorization": f"Bearer {key}"}, {}
    return {}, {"api_key": key}
