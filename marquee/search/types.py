"""Shared data structures for the search helpers."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class MovieRecord:
    """One catalog item as returned by the movie search endpoint."""

    id: int
    title: str
    release_date: str
    rating: float
    overview: str
    poster_path: Optional[str] = None
