import logging
from typing import Annotated, AsyncIterator

from fastapi import Depends, Request
from sqlalchemy import event, inspect
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from core.db.base import AbstractSQLModel

logger = logging.getLogger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """
    Owns the async engine and session factory for one application instance.

    Args:
        url (str): SQLAlchemy async database URL.
        echo (bool): Log every emitted SQL statement.
    """

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        self.engine: AsyncEngine = create_async_engine(url, echo=echo)
        if self.engine.dialect.name == "sqlite":
            # cascade deletes on car_images rely on this
            event.listen(self.engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        self.session_factory = async_sessionmaker(
            self.engine, expire_on_commit=False, autoflush=False
        )

    async def create_all(self):
        async with self.engine.begin() as connection:
            await connection.run_sync(AbstractSQLModel.metadata.create_all)
        logger.info("Database tables are ready")

    async def drop_all(self):
        async with self.engine.begin() as connection:
            await connection.run_sync(AbstractSQLModel.metadata.drop_all)

    async def table_status(self, table_names) -> dict[str, bool]:
        async with self.engine.connect() as connection:
            existing = await connection.run_sync(
                lambda sync_conn: set(inspect(sync_conn).get_table_names())
            )
        return {name: name in existing for name in table_names}

    async def dispose(self):
        await self.engine.dispose()


def get_database(request: Request) -> Database:
    return request.app.state.database


async def get_session(
    database: Annotated[Database, Depends(get_database)],
) -> AsyncIterator[AsyncSession]:
    async with database.session_factory() as session:
        yield session


DatabaseDep = Annotated[Database, Depends(get_database)]
SessionDep = Annotated[AsyncSession, Depends(get_session)]
