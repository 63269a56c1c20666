from typing import Any, Dict, List

from inspection_api.models.base import CamelModel


class TableInfo(CamelModel):
    name: str


class ColumnInfo(CamelModel):
    name: str
    type: str
    not_null: bool
    primary_key: bool


class TableSchema(CamelModel):
    columns: List[ColumnInfo]
    date_columns: List[str]
    searchable_columns: List[str]


class TableData(CamelModel):
    columns: List[str]
    rows: List[Dict[str, Any]]
    total: int
    page: int
    total_pages: int
    has_next: bool
    has_prev: bool
