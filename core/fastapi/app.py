import importlib
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, Awaitable, Callable, Iterable, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.cors import CORSMiddleware

from core.exceptions.base import AbstractException

logger = logging.getLogger(__name__)

Hook = Callable[[FastAPI], Awaitable[None]]


def _error_content(message: str, error_code: Optional[str] = None) -> dict:
    return {"error": message, "errorCode": error_code}


def _format_validation_errors(exc: RequestValidationError) -> str:
    messages = []
    for error in exc.errors():
        location = ".".join(
            str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")
        )
        message = error.get("msg", "Invalid value")
        messages.append(f"{location}: {message}" if location else message)
    return "; ".join(messages) or "Invalid request"


async def abstract_exception_handler(request: Request, exc: AbstractException):
    if exc.status_code >= 500:
        logger.error(f"{exc.error_code} on {request.method} {request.url.path}: {exc.message}")
    return ORJSONResponse(
        status_code=exc.status_code,
        content=_error_content(exc.message, exc.error_code),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return ORJSONResponse(
        status_code=400,
        content=_error_content(_format_validation_errors(exc), "VALIDATION_ERROR"),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return ORJSONResponse(
        status_code=exc.status_code,
        content=_error_content(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return ORJSONResponse(
        status_code=500,
        content=_error_content("Internal server error", "INTERNAL_ERROR"),
    )


def discover_routers(apps_dir: str) -> list:
    """Import ``<apps_dir>.api.<name>.router`` for every app that ships a router module."""
    package = importlib.import_module(f"{apps_dir}.api")
    routers = []
    for path in package.__path__:
        if not Path(path).is_dir():
            continue
        for child in sorted(Path(path).iterdir()):
            if child.is_dir() and (child / "router.py").is_file():
                module = importlib.import_module(f"{apps_dir}.api.{child.name}.router")
                routers.append(module.router)
    return routers


def create_app(
    apps_dir: str = "apps",
    title: str = "API",
    api_prefix: str = "",
    cors_origins: Iterable[str] = ("*",),
    debug: bool = False,
    state: Optional[dict[str, Any]] = None,
    static_mounts: Optional[dict[str, str]] = None,
    on_startup: Optional[Hook] = None,
    on_shutdown: Optional[Hook] = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        apps_dir (str): Package holding ``api/<app>/router.py`` modules.
        api_prefix (str): Prefix for every discovered router.
        state (dict): Objects placed on ``app.state`` before the first request.
        static_mounts (dict): URL path -> directory served as static files.
        on_startup / on_shutdown: Coroutines receiving the app.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if on_startup:
            await on_startup(app)
        yield
        if on_shutdown:
            await on_shutdown(app)

    app = FastAPI(
        title=title,
        debug=debug,
        lifespan=lifespan,
        default_response_class=ORJSONResponse,
    )

    for key, value in (state or {}).items():
        setattr(app.state, key, value)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(AbstractException, abstract_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    for router in discover_routers(apps_dir):
        app.include_router(router, prefix=api_prefix)

    for url_path, directory in (static_mounts or {}).items():
        app.mount(url_path, StaticFiles(directory=directory, check_dir=False), name=url_path.strip("/"))

    return app
