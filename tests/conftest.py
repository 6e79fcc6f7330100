"""Shared test fixtures."""

from collections.abc import AsyncIterator
from datetime import datetime, timedelta, timezone
from typing import Any

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from movieshelf.api.routes import health, movies
from movieshelf.config import Settings, get_settings
from movieshelf.database import get_store
from movieshelf.main import register_exception_handlers
from movieshelf.models.movie import Movie
from movieshelf.schemas.movie import MovieStatistics
from movieshelf.utils.filters import MovieFilter, SortDirection, SortSpec
from movieshelf.utils.ids import generate_object_id

SORT_ATTRIBUTES = {"releaseYear": "release_year", "createdAt": "created_at"}


def _contains(value: str | None, term: str) -> bool:
    return value is not None and term.lower() in value.lower()


class InMemoryMovieStore:
    """Dict-backed stand-in for SqlMovieStore with the same filter semantics."""

    def __init__(self) -> None:
        self.movies: dict[str, Movie] = {}
        self._clock = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def _tick(self) -> datetime:
        self._clock += timedelta(seconds=1)
        return self._clock

    @staticmethod
    def _matches(movie: Movie, f: MovieFilter) -> bool:
        if f.title and not _contains(movie.title, f.title):
            return False
        if f.genre and not _contains(movie.genre, f.genre):
            return False
        if f.director and not _contains(movie.director, f.director):
            return False
        if f.release_year is not None and movie.release_year != f.release_year:
            return False
        if f.min_rating is not None and (movie.rating is None or movie.rating < f.min_rating):
            return False
        if f.max_rating is not None and (movie.rating is None or movie.rating > f.max_rating):
            return False
        return True

    async def find(
        self,
        movie_filter: MovieFilter,
        sort: SortSpec,
        skip: int = 0,
        limit: int | None = None,
    ) -> list[Movie]:
        attribute = SORT_ATTRIBUTES.get(sort.field, sort.field)
        matching = [m for m in self.movies.values() if self._matches(m, movie_filter)]
        matching.sort(
            key=lambda m: (getattr(m, attribute) is None, getattr(m, attribute)),
            reverse=sort.direction is SortDirection.DESC,
        )
        end = None if limit is None else skip + limit
        return matching[skip:end]

    async def count(self, movie_filter: MovieFilter) -> int:
        return sum(1 for m in self.movies.values() if self._matches(m, movie_filter))

    async def find_by_id(self, movie_id: str) -> Movie | None:
        return self.movies.get(movie_id)

    async def insert(self, values: dict[str, Any]) -> Movie:
        now = self._tick()
        movie = Movie(id=generate_object_id(), created_at=now, updated_at=now, **values)
        self.movies[movie.id] = movie
        return movie

    async def update_by_id(self, movie_id: str, values: dict[str, Any]) -> Movie | None:
        movie = self.movies.get(movie_id)
        if movie is None:
            return None
        for field, value in values.items():
            setattr(movie, field, value)
        movie.updated_at = self._tick()
        return movie

    async def delete_by_id(self, movie_id: str) -> Movie | None:
        return self.movies.pop(movie_id, None)

    async def aggregate_statistics(self) -> MovieStatistics:
        if not self.movies:
            return MovieStatistics()
        ratings = [m.rating for m in self.movies.values() if m.rating is not None]
        years = [m.release_year for m in self.movies.values() if m.release_year is not None]
        return MovieStatistics(
            total_movies=len(self.movies),
            average_rating=sum(ratings) / len(ratings) if ratings else None,
            highest_rating=max(ratings, default=None),
            lowest_rating=min(ratings, default=None),
            latest_year=max(years, default=None),
            oldest_year=min(years, default=None),
        )

    async def ping(self) -> None:
        return None


@pytest.fixture
def test_settings() -> Settings:
    return Settings(_env_file=None, default_page_size=10, max_page_size=100)


@pytest.fixture
def memory_store() -> InMemoryMovieStore:
    return InMemoryMovieStore()


@pytest.fixture
def test_app(test_settings: Settings) -> FastAPI:
    """Minimal FastAPI app without the database lifespan, for API tests."""
    app = FastAPI()
    register_exception_handlers(app)
    app.include_router(health.router)
    app.include_router(movies.router, prefix="/api/v1")
    app.dependency_overrides[get_settings] = lambda: test_settings
    return app


@pytest.fixture
async def client(test_app: FastAPI, memory_store: InMemoryMovieStore) -> AsyncIterator[AsyncClient]:
    """HTTP client whose requests are served from the in-memory store."""
    test_app.dependency_overrides[get_store] = lambda: memory_store
    try:
        async with AsyncClient(
            transport=ASGITransport(app=test_app), base_url="http://test"
        ) as http_client:
            yield http_client
    finally:
        test_app.dependency_overrides.clear()
