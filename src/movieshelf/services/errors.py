"""Error taxonomy for the movie pipelines."""

from enum import Enum


class Outcome(str, Enum):
    """Coarse status classification the transport maps to protocol codes."""

    SUCCESS = "success"
    CLIENT_ERROR = "client_error"
    NOT_FOUND = "not_found"
    SERVER_ERROR = "server_error"


class ErrorKind(str, Enum):
    VALIDATION_FAILED = "validation_failed"
    INVALID_PARAMETER = "invalid_parameter"
    INVALID_IDENTIFIER = "invalid_identifier"
    MISSING_PARAMETER = "missing_parameter"
    EMPTY_PAYLOAD = "empty_payload"
    NOT_FOUND = "not_found"
    CONSTRAINT_VIOLATION = "constraint_violation"
    STORE_UNAVAILABLE = "store_unavailable"
    INTERNAL = "internal"

    @property
    def outcome(self) -> Outcome:
        if self is ErrorKind.NOT_FOUND:
            return Outcome.NOT_FOUND
        if self in (ErrorKind.STORE_UNAVAILABLE, ErrorKind.INTERNAL):
            return Outcome.SERVER_ERROR
        return Outcome.CLIENT_ERROR


class MovieServiceError(Exception):
    """Base class for failures raised inside the movie pipelines."""

    kind = ErrorKind.INTERNAL
    default_message = "Internal server error"

    def __init__(self, message: str | None = None, errors: list[str] | None = None) -> None:
        self.message = message or self.default_message
        self.errors = errors
        super().__init__(self.message)


class ValidationFailedError(MovieServiceError):
    kind = ErrorKind.VALIDATION_FAILED
    default_message = "Validation failed"


class InvalidParameterError(MovieServiceError):
    kind = ErrorKind.INVALID_PARAMETER
    default_message = "Invalid parameter"


class InvalidIdentifierError(MovieServiceError):
    kind = ErrorKind.INVALID_IDENTIFIER
    default_message = "Invalid movie ID format"


class MissingParameterError(MovieServiceError):
    kind = ErrorKind.MISSING_PARAMETER
    default_message = "Required parameter is missing"


class EmptyPayloadError(MovieServiceError):
    kind = ErrorKind.EMPTY_PAYLOAD
    default_message = "Request body cannot be empty"


class NotFoundError(MovieServiceError):
    kind = ErrorKind.NOT_FOUND
    default_message = "Movie not found"


class ConstraintViolationError(MovieServiceError):
    kind = ErrorKind.CONSTRAINT_VIOLATION
    default_message = "Validation failed"


class StoreUnavailableError(MovieServiceError):
    """The movie store could not be reached. Propagates to the transport."""

    kind = ErrorKind.STORE_UNAVAILABLE
    default_message = "Database connection error"
