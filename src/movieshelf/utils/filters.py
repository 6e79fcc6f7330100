"""Translate validated query parameters into a filter and sort description.

The result is independent of any database: the movie store decides how
to turn a `MovieFilter` into a WHERE clause.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping

SORTABLE_FIELDS = ("title", "director", "releaseYear", "genre", "rating", "createdAt")


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class SortSpec:
    """Single-key ordering."""

    field: str = "createdAt"
    direction: SortDirection = SortDirection.DESC


DEFAULT_SORT = SortSpec()


@dataclass(frozen=True)
class MovieFilter:
    """
    Conjunction of optional conditions on movies.

    Text conditions are case-insensitive substring matches; `release_year`
    is an exact match and the rating bounds are inclusive.
    """

    title: str | None = None
    genre: str | None = None
    director: str | None = None
    release_year: int | None = None
    min_rating: float | None = None
    max_rating: float | None = None

    def is_empty(self) -> bool:
        return all(value is None for value in self.__dict__.values())


def _text(value: Any) -> str | None:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def build_filter(params: Mapping[str, Any]) -> MovieFilter:
    """
    Build a movie filter from normalized query parameters.

    Recognized keys are `genre`, `director`, `year`, `minRating` and
    `maxRating`; blank values are ignored.
    """
    year = params.get("year")
    min_rating = params.get("minRating")
    max_rating = params.get("maxRating")
    return MovieFilter(
        genre=_text(params.get("genre")),
        director=_text(params.get("director")),
        release_year=int(year) if year is not None else None,
        min_rating=float(min_rating) if min_rating is not None else None,
        max_rating=float(max_rating) if max_rating is not None else None,
    )


def build_sort(params: Mapping[str, Any]) -> SortSpec:
    """Resolve `sortBy`/`sortOrder` into a sort spec (default: createdAt desc)."""
    sort_by = params.get("sortBy")
    if not sort_by:
        return DEFAULT_SORT
    if sort_by not in SORTABLE_FIELDS:
        raise ValueError(f"Cannot sort by {sort_by!r}")
    direction = SortDirection(params.get("sortOrder") or SortDirection.DESC.value)
    return SortSpec(field=sort_by, direction=direction)
