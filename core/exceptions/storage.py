from core.exceptions.base import AbstractException


class StorageException(AbstractException):
    """Raised when the image store cannot save or delete an object."""

    status_code = 500
    default_error_code = "STORAGE_ERROR"
