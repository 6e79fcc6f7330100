"""Validation rules for movie payloads, pagination and query parameters.

Field constraints live on the pydantic schemas in `movieshelf.schemas.movie`.
This module runs them and turns pydantic's error list into the
human-readable messages returned to clients, reporting every violation
in one pass.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, TypeAlias

from pydantic import BaseModel, ValidationError
from pydantic_core import ErrorDetails

from movieshelf.config import Settings
from movieshelf.schemas.movie import (
    MovieCreate,
    MovieQueryParams,
    MovieUpdate,
    PaginationParams,
)
from movieshelf.services.errors import InvalidParameterError
from movieshelf.utils.ids import is_object_id
from movieshelf.utils.pagination import PageRequest


class ValidationMode(str, Enum):
    CREATE = "create"
    UPDATE = "update"


@dataclass(frozen=True)
class Valid:
    """Normalized values (snake_case keys for entities, camelCase for queries)."""

    values: dict[str, Any]


@dataclass(frozen=True)
class Invalid:
    errors: list[str]


ValidationResult: TypeAlias = Valid | Invalid


FIELD_LABELS = {
    "title": "Title",
    "director": "Director name",
    "releaseYear": "Release year",
    "genre": "Genre",
    "rating": "Rating",
    "page": "Page",
    "limit": "Limit",
    "sortBy": "sortBy",
    "sortOrder": "sortOrder",
    "minRating": "Minimum rating",
    "maxRating": "Maximum rating",
    "year": "Year",
    "search": "Search term",
}

# Messages by pydantic error type; formatted with the field label and the
# error context (ge, le, max_length, expected, ...).
TYPE_MESSAGES = {
    "missing": "{label} is required",
    "model_type": "{label} must be an object",
    "string_type": "{label} must be a string",
    "string_too_short": "{label} cannot be empty",
    "string_too_long": "{label} cannot exceed {max_length} characters",
    "int_type": "{label} must be a number",
    "int_parsing": "{label} must be a number",
    "int_from_float": "{label} must be an integer",
    "float_type": "{label} must be a number",
    "float_parsing": "{label} must be a number",
    "finite_number": "{label} must be a number",
    "greater_than_equal": "{label} must be at least {ge}",
    "less_than_equal": "{label} cannot exceed {le}",
    "literal_error": "{label} must be one of {expected}",
}

FIELD_MESSAGES = {
    ("releaseYear", "greater_than_equal"): "Release year must be after 1800",
}

# Raised by schema validators with a complete message
CUSTOM_ERROR_TYPES = frozenset({"title_null", "number_precision", "field_type"})


def format_error(error: ErrorDetails) -> str:
    """Render one pydantic error as a client-facing message."""
    field = str(error["loc"][0]) if error["loc"] else ""
    label = FIELD_LABELS.get(field, field or "Request body")

    override = FIELD_MESSAGES.get((field, error["type"]))
    if override:
        return override

    if error["type"] in CUSTOM_ERROR_TYPES:
        return error["msg"]

    template = TYPE_MESSAGES.get(error["type"])
    if template is None:
        return f"{label}: {error['msg']}"
    return template.format(label=label, **error.get("ctx", {}))


def _run(schema: type[BaseModel], data: Any, **dump_options: Any) -> ValidationResult:
    try:
        model = schema.model_validate(data)
    except ValidationError as e:
        return Invalid(errors=[format_error(err) for err in e.errors()])
    return Valid(values=model.model_dump(exclude_unset=True, **dump_options))


def validate_entity(data: Any, mode: ValidationMode) -> ValidationResult:
    """
    Validate a movie payload.

    In create mode the title is mandatory; in update mode every field is
    optional. Unknown keys are dropped and strings are trimmed. On success
    the values use model attribute names (``release_year``) and contain
    only the fields present in the payload.
    """
    schema = MovieCreate if mode is ValidationMode.CREATE else MovieUpdate
    return _run(schema, data)


def validate_pagination(
    page: Any,
    limit: Any,
    settings: Settings,
) -> PageRequest:
    """
    Resolve page/limit into a bounded page request.

    Missing values default to page 1 and the configured default page
    size. Raises `InvalidParameterError` on values below 1 or a limit
    above the configured maximum.
    """
    raw = {key: value for key, value in (("page", page), ("limit", limit)) if value is not None}
    try:
        params = PaginationParams.model_validate(raw)
    except ValidationError as e:
        message = format_error(e.errors()[0])
        raise InvalidParameterError(f"Invalid pagination parameters: {message}") from e

    resolved_limit = params.limit if params.limit is not None else settings.default_page_size
    if resolved_limit > settings.max_page_size:
        raise InvalidParameterError(
            f"Invalid pagination parameters: Limit cannot exceed {settings.max_page_size}"
        )
    return PageRequest(page=params.page, limit=resolved_limit)


def validate_identifier(movie_id: Any) -> bool:
    """Whether `movie_id` has the shape of a store identifier (24 hex chars)."""
    return is_object_id(movie_id)


def validate_query_params(params: Mapping[str, Any]) -> ValidationResult:
    """
    Whitelist-validate list/search query parameters.

    Unrecognized keys are dropped. On success the values keep their
    query-string (camelCase) names.
    """
    return _run(MovieQueryParams, dict(params), by_alias=True, exclude_none=True)
