from core.exceptions.base import AbstractException


class InvalidRequestException(AbstractException):
    """Raised when a request carries missing or malformed data."""

    status_code = 400
    default_error_code = "INVALID_REQUEST"


class NotFoundException(AbstractException):
    """Raised when no record matches the requested identifier."""

    status_code = 404
    default_error_code = "NOT_FOUND"
