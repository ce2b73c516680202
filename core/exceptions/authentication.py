from core.exceptions.base import AbstractException


class UnauthorizedException(AbstractException):
    status_code = 401
    default_error_code = "UNAUTHORIZED"


class ForbiddenException(AbstractException):
    status_code = 403
    default_error_code = "FORBIDDEN"
