from core.exceptions.base import AbstractException
from core.exceptions.request import InvalidRequestException, NotFoundException
from core.exceptions.authentication import ForbiddenException, UnauthorizedException
from core.exceptions.storage import StorageException

__all__ = [
    "AbstractException",
    "InvalidRequestException",
    "NotFoundException",
    "ForbiddenException",
    "UnauthorizedException",
    "StorageException",
]
