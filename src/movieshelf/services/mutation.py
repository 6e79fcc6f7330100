"""Write-side movie operations: create, partial update and delete."""

import logging
from typing import Any

from movieshelf.schemas.movie import MovieResponse
from movieshelf.services.errors import (
    ConstraintViolationError,
    EmptyPayloadError,
    InvalidIdentifierError,
    NotFoundError,
    ValidationFailedError,
)
from movieshelf.services.movie_store import MovieStore
from movieshelf.services.results import Ok, Result, returns_result
from movieshelf.services.validation import (
    Invalid,
    ValidationMode,
    validate_entity,
    validate_identifier,
)

logger = logging.getLogger(__name__)


class MutationPipeline:
    """
    Create/update/delete entry points.

    Identifier shape and payload checks happen before the store is
    touched, so a rejected request has no side effects.
    """

    def __init__(self, store: MovieStore) -> None:
        self.store = store

    def _validated(self, payload: Any, mode: ValidationMode) -> dict[str, Any]:
        checked = validate_entity(payload, mode)
        if isinstance(checked, Invalid):
            raise ValidationFailedError(errors=checked.errors)
        return checked.values

    @staticmethod
    def _checked_id(movie_id: str) -> str:
        if not validate_identifier(movie_id):
            raise InvalidIdentifierError()
        return movie_id.lower()

    @returns_result
    async def create_movie(self, payload: Any) -> Result:
        values = self._validated(payload, ValidationMode.CREATE)
        try:
            movie = await self.store.insert(values)
        except ConstraintViolationError as e:
            logger.warning(f"Store rejected new movie {values.get('title')!r}: {e.errors}")
            raise

        logger.info(f"Created movie {movie.id}: {movie.summary()}")
        return Ok(data=MovieResponse.model_validate(movie), message="Movie created successfully")

    @returns_result
    async def update_movie(self, movie_id: str, payload: Any) -> Result:
        """
        Apply a partial update.

        Only the fields present in the payload are written; a missing
        movie is reported as not found rather than created.
        """
        checked_id = self._checked_id(movie_id)
        if not payload:
            raise EmptyPayloadError()

        values = self._validated(payload, ValidationMode.UPDATE)
        try:
            movie = await self.store.update_by_id(checked_id, values)
        except ConstraintViolationError as e:
            logger.warning(f"Store rejected update of movie {checked_id}: {e.errors}")
            raise

        if movie is None:
            logger.warning(f"Update requested for missing movie {checked_id}")
            raise NotFoundError()

        logger.info(f"Updated movie {checked_id} fields: {sorted(values)}")
        return Ok(data=MovieResponse.model_validate(movie), message="Movie updated successfully")

    @returns_result
    async def delete_movie(self, movie_id: str) -> Result:
        checked_id = self._checked_id(movie_id)

        movie = await self.store.delete_by_id(checked_id)
        if movie is None:
            logger.warning(f"Delete requested for missing movie {checked_id}")
            raise NotFoundError()

        logger.info(f"Deleted movie {checked_id} ({movie.title!r})")
        return Ok(data=MovieResponse.model_validate(movie), message="Movie deleted successfully")
