# apps/api/health/router.py
from fastapi import APIRouter
from fastapi.responses import ORJSONResponse

from core.db.base import AbstractSQLModel
from core.db.core import DatabaseDep

router = APIRouter(tags=["Health"])


@router.get("/health", description="Report whether every table exists")
async def health_endpoint(database: DatabaseDep):
    tables = await database.table_status(sorted(AbstractSQLModel.metadata.tables))
    ready = all(tables.values())
    return ORJSONResponse(
        status_code=200 if ready else 503,
        content={"status": "ok" if ready else "degraded", "tables": tables},
    )
