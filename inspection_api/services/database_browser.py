from typing import List

from inspection_api.core import database
from inspection_api.core.config import settings
from inspection_api.models.database import ColumnInfo, TableData, TableInfo, TableSchema

KNOWN_COLLECTIONS = ["users", "quick_checks", "state_inspections", "bank_deposits", "label_templates"]


async def get_tables() -> List[TableInfo]:
    return [TableInfo(name=name) for name in KNOWN_COLLECTIONS]


async def get_table_schema(table_name: str) -> TableSchema:
    """Documents are schemaless; every collection reports the same id + data shape."""
    return TableSchema(
        columns=[
            ColumnInfo(name="id", type="string", not_null=True, primary_key=True),
            ColumnInfo(name="data", type="json", not_null=False, primary_key=False),
        ],
        date_columns=["created_at", "timestamp"],
        searchable_columns=["id"],
    )


async def get_table_data(table_name: str) -> TableData:
    rows = await database.get_store(table_name).query(limit=settings.TABLE_PREVIEW_LIMIT)

    columns = ["id"]
    for row in rows:
        for key in row:
            if key not in columns:
                columns.append(key)

    return TableData(
        columns=columns,
        rows=rows,
        total=len(rows),
        page=1,
        total_pages=1,
        has_next=False,
        has_prev=False,
    )
