from typing import Optional


class AbstractException(Exception):
    """Base exception for errors that are reported back to the API client."""

    status_code: int = 500
    default_error_code: str = "INTERNAL_ERROR"

    def __init__(self, message: str, error_code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.default_error_code
