"""Payload guards and record parsing for movie search responses."""

from __future__ import annotations

from typing import Iterable

from marquee.search.errors import MalformedResponseError
from marquee.search.types import MovieRecord

SEARCH_PAYLOAD_CONTEXT = "search payload"


def expect_dict(value: object, context: str) -> dict:
    if isinstance(value, dict):
        return value
    value_type = type(value).__name__
    raise MalformedResponseError(f"{context} has unexpected type '{value_type}'")


def required_list_of_dicts(container: dict, key: str, context: str) -> list[dict]:
    if key not in container:
        raise MalformedResponseError(f"{context} is missing '{key}'")
    values = container[key]
    if not isinstance(values, list):
        value_type = type(values).__name__
        raise MalformedResponseError(f"{context}.{key} has unexpected type '{value_type}'")
    return [expect_dict(value, f"{context}.{key}[{idx}]") for idx, value in enumerate(values)]


def _parse_id(value: object, context: str) -> int:
    if isinstance(value, bool):
        raise MalformedResponseError(f"{context}.id is not an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdecimal():
        return int(value)
    raise MalformedResponseError(f"{context}.id is not an integer")


def _parse_rating(value: object) -> float:
    if isinstance(value, bool):
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def _text(value: object) -> str:
    return value if isinstance(value, str) else ""


def parse_movie_record(item: dict, context: str = "result") -> MovieRecord:
    poster_path = item.get("poster_path")
    return MovieRecord(
        id=_parse_id(item.get("id"), context),
        title=_text(item.get("title")),
        release_date=_text(item.get("release_date")),
        rating=_parse_rating(item.get("vote_average")),
        overview=_text(item.get("overview")),
        poster_path=poster_path if isinstance(poster_path, str) and poster_path else None,
    )


def parse_search_payload(payload: object) -> list[MovieRecord]:
    """Turn a decoded search response into records, rejecting broken shapes.

    A body without a ``results`` list is malformed, not an empty result.
    """
    root = expect_dict(payload, SEARCH_PAYLOAD_CONTEXT)
    items = required_list_of_dicts(root, "results", SEARCH_PAYLOAD_CONTEXT)
    return [
        parse_movie_record(item, f"{SEARCH_PAYLOAD_CONTEXT}.results[{idx}]")
        for idx, item in enumerate(items)
    ]


def has_poster(record: MovieRecord) -> bool:
    return bool(record.poster_path)


def filter_displayable(records: Iterable[MovieRecord]) -> list[MovieRecord]:
    return [record for record in records if has_poster(record)]


def poster_url(record: MovieRecord, image_base_url: str) -> str | None:
    if not has_poster(record):
        return None
    return f"{image_base_url.rstrip('/')}{record.poster_path}"
