"""Domain exceptions raised by service functions and mapped to HTTP errors by the API."""


class RestodeskError(Exception):
    """Base class for expected, user-facing domain failures."""

    status_code: int = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(RestodeskError):
    """Raised when input is well-formed but violates a business rule."""

    status_code = 400


class NotFoundError(RestodeskError):
    """Raised when a referenced row does not exist."""

    status_code = 404


class ConflictError(RestodeskError):
    """Raised when a write would break a uniqueness or merge invariant."""

    status_code = 409
