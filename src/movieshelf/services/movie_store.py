"""Movie persistence backed by SQLAlchemy's asyncio extension."""

import logging
from collections.abc import Sequence
from typing import Any, Protocol

from sqlalchemy import ColumnElement, Select, func, literal, select
from sqlalchemy.exc import IntegrityError, InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from movieshelf.models.movie import Movie
from movieshelf.schemas.movie import MovieStatistics
from movieshelf.services.errors import ConstraintViolationError, StoreUnavailableError
from movieshelf.utils.filters import MovieFilter, SortDirection, SortSpec

logger = logging.getLogger(__name__)

SORT_COLUMNS = {
    "title": Movie.title,
    "director": Movie.director,
    "releaseYear": Movie.release_year,
    "genre": Movie.genre,
    "rating": Movie.rating,
    "createdAt": Movie.created_at,
}

# Attributes a caller may write; id and timestamps are owned by the store.
WRITABLE_FIELDS = frozenset({"title", "director", "release_year", "genre", "rating"})

# Failures that mean the database could not be reached at all
UNAVAILABLE_ERRORS = (OperationalError, InterfaceError, OSError)

CONSTRAINT_MESSAGES = {
    "ck_movies_rating_range": "Rating must be between 1 and 10",
    "ck_movies_release_year_range": "Release year must be between 1800 and 2100",
}


class MovieStore(Protocol):
    """Data access contract used by the movie pipelines."""

    async def find(
        self,
        movie_filter: MovieFilter,
        sort: SortSpec,
        skip: int = 0,
        limit: int | None = None,
    ) -> list[Movie]: ...

    async def count(self, movie_filter: MovieFilter) -> int: ...

    async def find_by_id(self, movie_id: str) -> Movie | None: ...

    async def insert(self, values: dict[str, Any]) -> Movie: ...

    async def update_by_id(self, movie_id: str, values: dict[str, Any]) -> Movie | None: ...

    async def delete_by_id(self, movie_id: str) -> Movie | None: ...

    async def aggregate_statistics(self) -> MovieStatistics: ...

    async def ping(self) -> None: ...


def filter_clauses(movie_filter: MovieFilter) -> list[ColumnElement[bool]]:
    """Translate a movie filter into WHERE clauses to be ANDed together."""
    clauses: list[ColumnElement[bool]] = []
    if movie_filter.title:
        clauses.append(Movie.title.icontains(movie_filter.title, autoescape=True))
    if movie_filter.genre:
        clauses.append(Movie.genre.icontains(movie_filter.genre, autoescape=True))
    if movie_filter.director:
        clauses.append(Movie.director.icontains(movie_filter.director, autoescape=True))
    if movie_filter.release_year is not None:
        clauses.append(Movie.release_year == movie_filter.release_year)
    if movie_filter.min_rating is not None:
        clauses.append(Movie.rating >= movie_filter.min_rating)
    if movie_filter.max_rating is not None:
        clauses.append(Movie.rating <= movie_filter.max_rating)
    return clauses


def order_clause(sort: SortSpec) -> ColumnElement[Any]:
    column = SORT_COLUMNS[sort.field]
    return column.asc() if sort.direction is SortDirection.ASC else column.desc()


def _constraint_errors(error: IntegrityError) -> list[str]:
    text = str(error.orig)
    errors = [message for name, message in CONSTRAINT_MESSAGES.items() if name in text]
    return errors or [f"Database rejected the record: {text}"]


class SqlMovieStore:
    """
    Movie store over an async SQLAlchemy session factory.

    Each operation runs in its own session so independent reads (such as
    a page fetch and its count) can be awaited concurrently.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self.session_factory = session_factory

    async def _scalars(self, stmt: Select[Any]) -> Sequence[Any]:
        try:
            async with self.session_factory() as session:
                result = await session.execute(stmt)
                return result.scalars().all()
        except UNAVAILABLE_ERRORS as e:
            logger.error(f"Movie store query failed: {e}")
            raise StoreUnavailableError() from e

    async def find(
        self,
        movie_filter: MovieFilter,
        sort: SortSpec,
        skip: int = 0,
        limit: int | None = None,
    ) -> list[Movie]:
        stmt = select(Movie).where(*filter_clauses(movie_filter)).order_by(order_clause(sort))
        if skip:
            stmt = stmt.offset(skip)
        if limit is not None:
            stmt = stmt.limit(limit)
        return list(await self._scalars(stmt))

    async def count(self, movie_filter: MovieFilter) -> int:
        stmt = select(func.count()).select_from(Movie).where(*filter_clauses(movie_filter))
        rows = await self._scalars(stmt)
        return int(rows[0]) if rows else 0

    async def find_by_id(self, movie_id: str) -> Movie | None:
        rows = await self._scalars(select(Movie).where(Movie.id == movie_id))
        return rows[0] if rows else None

    async def insert(self, values: dict[str, Any]) -> Movie:
        movie = Movie(**{k: v for k, v in values.items() if k in WRITABLE_FIELDS})
        try:
            async with self.session_factory() as session:
                session.add(movie)
                await session.commit()
                await session.refresh(movie)
        except IntegrityError as e:
            raise ConstraintViolationError(errors=_constraint_errors(e)) from e
        except UNAVAILABLE_ERRORS as e:
            logger.error(f"Movie store insert failed: {e}")
            raise StoreUnavailableError() from e
        return movie

    async def update_by_id(self, movie_id: str, values: dict[str, Any]) -> Movie | None:
        try:
            async with self.session_factory() as session:
                movie = await session.get(Movie, movie_id)
                if movie is None:
                    return None
                for field, value in values.items():
                    if field in WRITABLE_FIELDS:
                        setattr(movie, field, value)
                await session.commit()
                await session.refresh(movie)
                return movie
        except IntegrityError as e:
            raise ConstraintViolationError(errors=_constraint_errors(e)) from e
        except UNAVAILABLE_ERRORS as e:
            logger.error(f"Movie store update failed: {e}")
            raise StoreUnavailableError() from e

    async def delete_by_id(self, movie_id: str) -> Movie | None:
        try:
            async with self.session_factory() as session:
                movie = await session.get(Movie, movie_id)
                if movie is None:
                    return None
                await session.delete(movie)
                await session.commit()
                return movie
        except UNAVAILABLE_ERRORS as e:
            logger.error(f"Movie store delete failed: {e}")
            raise StoreUnavailableError() from e

    async def aggregate_statistics(self) -> MovieStatistics:
        stmt = select(
            func.count(Movie.id),
            func.avg(Movie.rating),
            func.max(Movie.rating),
            func.min(Movie.rating),
            func.max(Movie.release_year),
            func.min(Movie.release_year),
        )
        try:
            async with self.session_factory() as session:
                row = (await session.execute(stmt)).one()
        except UNAVAILABLE_ERRORS as e:
            logger.error(f"Movie store aggregate failed: {e}")
            raise StoreUnavailableError() from e

        total, average, highest, lowest, latest, oldest = row
        if not total:
            return MovieStatistics()
        return MovieStatistics(
            total_movies=total,
            average_rating=float(average) if average is not None else None,
            highest_rating=highest,
            lowest_rating=lowest,
            latest_year=latest,
            oldest_year=oldest,
        )

    async def ping(self) -> None:
        """Round-trip a trivial query; raises `StoreUnavailableError` on failure."""
        await self._scalars(select(literal(1)))
