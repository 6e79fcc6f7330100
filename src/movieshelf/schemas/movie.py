"""Pydantic schemas for movie requests and responses.

Request schemas read camelCase keys (``releaseYear``); response schemas
serialize to camelCase when dumped with ``by_alias=True``.
"""

from datetime import datetime
from typing import Any, Literal

from pydantic import (
    AliasGenerator,
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

SortField = Literal["title", "director", "releaseYear", "genre", "rating", "createdAt"]

# Reported when an optional movie field is sent as null or a boolean
FIELD_TYPE_MESSAGES = {
    "director": "Director name must be a string",
    "release_year": "Release year must be a number",
    "genre": "Genre must be a string",
    "rating": "Rating must be a number",
}

INPUT_CONFIG = ConfigDict(
    alias_generator=to_camel,
    str_strip_whitespace=True,
    extra="ignore",
)

OUTPUT_CONFIG = ConfigDict(
    from_attributes=True,
    alias_generator=AliasGenerator(serialization_alias=to_camel),
)


class MovieUpdate(BaseModel):
    """Movie fields accepted on update; every field is optional."""

    model_config = INPUT_CONFIG

    title: str | None = Field(default=None, min_length=1, max_length=200)
    director: str | None = Field(default=None, max_length=100)
    release_year: int | None = Field(default=None, ge=1800, le=2100)
    genre: str | None = Field(default=None, max_length=50)
    rating: float | None = Field(default=None, ge=1, le=10, allow_inf_nan=False)

    @field_validator("director", "release_year", "genre", "rating", mode="before")
    @classmethod
    def reject_null_and_bool(cls, value: Any, info: ValidationInfo) -> Any:
        # Booleans would otherwise coerce to 1/0; omitting the key is the way to skip a field
        if value is None or isinstance(value, bool):
            raise PydanticCustomError("field_type", FIELD_TYPE_MESSAGES[info.field_name])
        return value

    @field_validator("title")
    @classmethod
    def title_not_null(cls, value: str | None) -> str:
        if value is None:
            raise PydanticCustomError("title_null", "Title cannot be empty")
        return value

    @field_validator("rating")
    @classmethod
    def rating_precision(cls, value: float | None) -> float | None:
        if value is not None and round(value, 1) != value:
            raise PydanticCustomError(
                "number_precision", "Rating can have at most 1 decimal place"
            )
        return value


class MovieCreate(MovieUpdate):
    """Movie fields accepted on create; title is mandatory."""

    title: str = Field(min_length=1, max_length=200)


class MovieQueryParams(BaseModel):
    """Recognized query-string parameters for listing and searching."""

    model_config = INPUT_CONFIG

    page: int | None = Field(default=None, ge=1)
    limit: int | None = Field(default=None, ge=1)
    sort_by: SortField | None = None
    sort_order: Literal["asc", "desc"] | None = None
    genre: str | None = None
    director: str | None = None
    min_rating: float | None = Field(default=None, ge=1, le=10)
    max_rating: float | None = Field(default=None, ge=1, le=10)
    year: int | None = Field(default=None, ge=1800, le=2100)
    search: str | None = None

    @model_validator(mode="before")
    @classmethod
    def drop_blank_values(cls, data: Any) -> Any:
        """Treat `?year=` and friends as if the parameter were not sent."""
        if not isinstance(data, dict):
            return data
        return {
            key: value
            for key, value in data.items()
            if not (isinstance(value, str) and not value.strip())
        }


class PaginationParams(BaseModel):
    """Page/limit pair before the configured bounds are applied."""

    model_config = ConfigDict(extra="ignore")

    page: int = Field(default=1, ge=1)
    limit: int | None = Field(default=None, ge=1)


class MovieResponse(BaseModel):
    """Movie response schema."""

    model_config = OUTPUT_CONFIG

    id: str
    title: str
    director: str | None = None
    release_year: int | None = None
    genre: str | None = None
    rating: float | None = None
    formatted_rating: str
    created_at: datetime
    updated_at: datetime


class PaginationResponse(BaseModel):
    model_config = OUTPUT_CONFIG

    page: int
    limit: int
    total: int
    pages: int


class MovieStatistics(BaseModel):
    """
    Aggregate figures over the whole collection.

    Rating figures only consider movies with a rating, year figures only
    movies with a release year. An empty collection yields the defaults.
    """

    model_config = OUTPUT_CONFIG

    total_movies: int = 0
    average_rating: float | None = 0
    highest_rating: float | None = 0
    lowest_rating: float | None = 0
    latest_year: int | None = None
    oldest_year: int | None = None
