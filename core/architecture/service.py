import inspect
from typing import Any, Callable, Dict, Type, TypeVar

from fastapi import Depends

from core.db.core import SessionDep

T = TypeVar("T", bound="AbstractService")


class AbstractService:
    """
    Base class for request-scoped services.

    Subclasses list what they need from FastAPI in ``DEPENDENCIES``; every
    entry becomes a keyword argument of the generated dependency function
    and is passed to ``__init__`` unchanged.
    """

    DEPENDENCIES: Dict[str, Any] = {"session": SessionDep}

    def __init__(self, **kwargs):
        for name, value in kwargs.items():
            setattr(self, name, value)

    @classmethod
    def _build_dependency_function(cls: Type[T]) -> Callable[..., T]:
        def dependency(**kwargs) -> T:
            return cls(**kwargs)

        dependency.__signature__ = inspect.Signature(
            [
                inspect.Parameter(
                    name, inspect.Parameter.KEYWORD_ONLY, annotation=annotation
                )
                for name, annotation in cls.DEPENDENCIES.items()
            ]
        )
        dependency.__name__ = f"get_{cls.__name__}"
        return dependency

    @classmethod
    def get_dependency(cls: Type[T]) -> Any:
        """
        Returns a FastAPI dependency for this service.

        This can be used in route definitions to inject the service automatically.
        """
        return Depends(cls._build_dependency_function())
