import logging
from pathlib import Path

from fastapi import FastAPI
from sqlalchemy.engine import make_url

from apps.settings import AppConfig
from apps.storage import create_storage
from core.db.core import Database
from core.fastapi.app import create_app

logger = logging.getLogger(__name__)

UPLOADS_MOUNT = "/uploads"


def configure_logging(settings: AppConfig):
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def ensure_sqlite_directory(database_url: str):
    url = make_url(database_url)
    if url.get_backend_name() == "sqlite" and url.database and url.database != ":memory:":
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)


def build_application(settings: AppConfig) -> FastAPI:
    """
    Wire the database, image storage and routers for one settings object.

    Tests build their own settings and call this directly.
    """
    configure_logging(settings)
    ensure_sqlite_directory(settings.DATABASE_URL)

    database = Database(settings.DATABASE_URL, echo=settings.DEBUG)
    storage = create_storage(settings)

    static_mounts = {}
    if settings.STORAGE_BACKEND == "local":
        Path(settings.STORAGE_VOLUME).mkdir(parents=True, exist_ok=True)
        static_mounts[UPLOADS_MOUNT] = settings.STORAGE_VOLUME

    async def on_startup(app: FastAPI):
        logger.info("Application starting up")
        if settings.AUTO_CREATE_TABLES:
            await database.create_all()

    async def on_shutdown(app: FastAPI):
        await database.dispose()
        logger.info("Application shut down")

    return create_app(
        apps_dir="apps",
        title="Dealership API",
        api_prefix=settings.API_PREFIX,
        cors_origins=settings.cors_origins,
        debug=settings.DEBUG,
        state={"settings": settings, "database": database, "storage": storage},
        static_mounts=static_mounts,
        on_startup=on_startup,
        on_shutdown=on_shutdown,
    )
