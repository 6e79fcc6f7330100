"""Pydantic schemas for API requests and responses."""

from movieshelf.schemas.movie import (
    MovieCreate,
    MovieQueryParams,
    MovieResponse,
    MovieStatistics,
    MovieUpdate,
    PaginationParams,
    PaginationResponse,
)

__all__ = [
    "MovieCreate",
    "MovieUpdate",
    "MovieQueryParams",
    "PaginationParams",
    "MovieResponse",
    "PaginationResponse",
    "MovieStatistics",
]
