"""Read-side movie operations: list, get, search, by-genre and statistics."""

import asyncio
import logging
from collections.abc import Iterable
from typing import Any, Mapping

from movieshelf.config import Settings
from movieshelf.models.movie import Movie
from movieshelf.schemas.movie import MovieResponse, PaginationResponse
from movieshelf.services.errors import (
    InvalidIdentifierError,
    MissingParameterError,
    NotFoundError,
    ValidationFailedError,
)
from movieshelf.services.movie_store import MovieStore
from movieshelf.services.results import Ok, Result, returns_result
from movieshelf.services.validation import (
    Invalid,
    validate_identifier,
    validate_pagination,
    validate_query_params,
)
from movieshelf.utils.filters import MovieFilter, build_filter, build_sort
from movieshelf.utils.pagination import paginate

logger = logging.getLogger(__name__)

PAGINATION_KEYS = ("page", "limit")


def to_responses(movies: Iterable[Movie]) -> list[MovieResponse]:
    return [MovieResponse.model_validate(movie) for movie in movies]


class RetrievalPipeline:
    """
    Query-side entry points.

    Every public method returns a `Result`; validation problems never
    reach the store.
    """

    def __init__(self, store: MovieStore, settings: Settings) -> None:
        self.store = store
        self.settings = settings

    def _checked_params(self, params: Mapping[str, Any]) -> dict[str, Any]:
        """
        Whitelist the filter and sort parameters.

        `page` and `limit` are passed through untouched so that their
        problems surface from `validate_pagination` as invalid parameters.
        """
        filters = {key: value for key, value in params.items() if key not in PAGINATION_KEYS}
        checked = validate_query_params(filters)
        if isinstance(checked, Invalid):
            raise ValidationFailedError(errors=checked.errors)

        values = dict(checked.values)
        for key in PAGINATION_KEYS:
            value = params.get(key)
            if value is not None and str(value).strip():
                values[key] = value
        return values

    async def _page(self, movie_filter: MovieFilter, params: Mapping[str, Any]) -> Ok:
        page_request = validate_pagination(params.get("page"), params.get("limit"), self.settings)
        sort = build_sort(params)

        # Page and total are independent reads over the same filter
        movies, total = await asyncio.gather(
            self.store.find(movie_filter, sort, skip=page_request.skip, limit=page_request.limit),
            self.store.count(movie_filter),
        )
        pagination = paginate(page_request, total)
        return Ok(
            data=to_responses(movies),
            pagination=PaginationResponse.model_validate(pagination),
        )

    @returns_result
    async def list_movies(self, params: Mapping[str, Any]) -> Result:
        """
        List movies one page at a time.

        Accepts the raw query mapping: page, limit, sortBy, sortOrder and
        the genre/director/year/minRating/maxRating filters.
        """
        values = self._checked_params(params)
        return await self._page(build_filter(values), values)

    @returns_result
    async def get_movie(self, movie_id: str) -> Result:
        if not validate_identifier(movie_id):
            raise InvalidIdentifierError()

        movie = await self.store.find_by_id(movie_id.lower())
        if movie is None:
            raise NotFoundError()
        return Ok(data=MovieResponse.model_validate(movie))

    @returns_result
    async def search_movies(self, search: str | None, params: Mapping[str, Any]) -> Result:
        """Case-insensitive title search, paginated like `list_movies`."""
        if search is None or not search.strip():
            raise MissingParameterError("Search term is required")

        values = self._checked_params(params)
        return await self._page(MovieFilter(title=search.strip()), values)

    @returns_result
    async def get_movies_by_genre(self, genre: str | None) -> Result:
        """All movies whose genre contains `genre`, unpaginated."""
        if genre is None or not genre.strip():
            raise MissingParameterError("Genre is required")

        movies = await self.store.find(MovieFilter(genre=genre.strip()), build_sort({}))
        return Ok(data=to_responses(movies))

    @returns_result
    async def get_statistics(self) -> Result:
        return Ok(data=await self.store.aggregate_statistics())
