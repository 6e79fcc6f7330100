"""Result values returned by the movie pipelines."""

import functools
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, ParamSpec, TypeAlias

from movieshelf.services.errors import (
    ErrorKind,
    MovieServiceError,
    Outcome,
    StoreUnavailableError,
)
from movieshelf.utils.pagination import Pagination

logger = logging.getLogger(__name__)

P = ParamSpec("P")


@dataclass(frozen=True)
class Ok:
    """Successful outcome; `pagination` is set for paged listings."""

    data: Any
    pagination: Pagination | None = None
    message: str | None = None

    @property
    def outcome(self) -> Outcome:
        return Outcome.SUCCESS


@dataclass(frozen=True)
class Err:
    """Failed outcome carrying the error kind and client-facing details."""

    kind: ErrorKind
    message: str
    errors: list[str] | None = None

    @property
    def outcome(self) -> Outcome:
        return self.kind.outcome

    @classmethod
    def from_exception(cls, exc: MovieServiceError) -> "Err":
        return cls(kind=exc.kind, message=exc.message, errors=exc.errors)


Result: TypeAlias = Ok | Err


def returns_result(func: Callable[P, Awaitable[Result]]) -> Callable[P, Awaitable[Result]]:
    """
    Convert pipeline errors raised by `func` into `Err` values.

    `StoreUnavailableError` and exceptions outside the pipeline taxonomy
    are left to propagate to the transport layer.
    """

    @functools.wraps(func)
    async def wrapper(*args: P.args, **kwargs: P.kwargs) -> Result:
        try:
            return await func(*args, **kwargs)
        except StoreUnavailableError:
            raise
        except MovieServiceError as e:
            logger.debug(f"{func.__qualname__} failed with {e.kind.value}: {e.message}")
            return Err.from_exception(e)

    return wrapper
