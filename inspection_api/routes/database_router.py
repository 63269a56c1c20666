from typing import List
from fastapi import APIRouter, Depends, HTTPException

from inspection_api.core.session import SessionContext
from inspection_api.models.database import TableData, TableInfo, TableSchema
from inspection_api.routes.dependencies import require_admin
from inspection_api.services import database_browser

database_router = APIRouter(prefix="/database", tags=["Database"])


def check_table(table_name: str) -> str:
    if table_name not in database_browser.KNOWN_COLLECTIONS:
        raise HTTPException(status_code=404, detail=f"Unknown table '{table_name}'")
    return table_name


@database_router.get("/tables", response_model=List[TableInfo])
async def tables(session: SessionContext = Depends(require_admin)):
    return await database_browser.get_tables()


@database_router.get("/tables/{table_name}/schema", response_model=TableSchema)
async def schema(table_name: str, session: SessionContext = Depends(require_admin)):
    return await database_browser.get_table_schema(check_table(table_name))


@database_router.get("/tables/{table_name}/data", response_model=TableData)
async def data(table_name: str, session: SessionContext = Depends(require_admin)):
    return await database_browser.get_table_data(check_table(table_name))
