"""
Shared fixtures.

The motor-backed store is swapped for ``InMemoryStore``, which keeps the
same async interface and the same equality / array-contains query rules.
"""
import copy
import uuid
from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from inspection_api.core import database
from inspection_api.core.errors import NotFoundError
from inspection_api.core.session import SessionContext
from inspection_api.main import app
from inspection_api.routes.dependencies import get_session, require_user


def matches(document: Dict[str, Any], filters: Optional[Dict[str, Any]]) -> bool:
    for key, expected in (filters or {}).items():
        actual = document.get(key)
        if isinstance(actual, list):
            if expected not in actual:
                return False
        elif actual != expected:
            return False
    return True


class InMemoryStore:
    def __init__(self, name: str):
        self.name = name
        self.documents: Dict[str, Dict[str, Any]] = {}

    async def add(self, data: Dict[str, Any]) -> str:
        doc_id = str(data.get("id") or uuid.uuid4().hex)
        await self.set(doc_id, data)
        return doc_id

    async def set(self, doc_id: str, data: Dict[str, Any]) -> None:
        fields = {k: v for k, v in copy.deepcopy(data).items() if k != "id"}
        self.documents[doc_id] = {"id": doc_id, **fields}

    async def get(self, doc_id: str) -> Optional[Dict[str, Any]]:
        document = self.documents.get(doc_id)
        return copy.deepcopy(document) if document else None

    async def update(self, doc_id: str, updates: Dict[str, Any]) -> bool:
        if doc_id not in self.documents:
            raise NotFoundError(f"Document '{doc_id}' not found in '{self.name}'")
        self.documents[doc_id].update({k: v for k, v in copy.deepcopy(updates).items() if k != "id"})
        return True

    async def delete(self, doc_id: str) -> bool:
        return self.documents.pop(doc_id, None) is not None

    async def query(self, filters=None, order_by=None, descending=False, limit=None) -> List[Dict[str, Any]]:
        rows = [copy.deepcopy(d) for d in self.documents.values() if matches(d, filters)]
        if order_by:
            rows.sort(key=lambda row: row.get(order_by) or "", reverse=descending)
        return rows[:limit] if limit else rows

    async def count(self, filters=None) -> int:
        return len(await self.query(filters))


class InMemoryDatabase:
    def __init__(self):
        self.stores: Dict[str, InMemoryStore] = {}

    def get_store(self, name: str) -> InMemoryStore:
        return self.stores.setdefault(name, InMemoryStore(name))

    def __getitem__(self, name: str) -> InMemoryStore:
        return self.get_store(name)


@pytest.fixture
def memory_db(monkeypatch):
    db = InMemoryDatabase()
    monkeypatch.setattr(database, "get_store", db.get_store)
    return db


@pytest.fixture
def technician():
    return SessionContext.for_user(
        "tech-1", "tess@example.com", {"name": "Tess Tech", "role": "technician"}, token="tech-token"
    )


@pytest.fixture
def admin():
    return SessionContext.for_user(
        "admin-1", "ada@example.com", {"name": "Ada Admin", "role": "admin"}, token="admin-token"
    )


@pytest.fixture
def api(memory_db):
    # No context manager: the lifespan (Mongo ping, change stream) stays off in tests
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


@pytest.fixture
def login_as():
    def _login(session: SessionContext):
        app.dependency_overrides[require_user] = lambda: session
        app.dependency_overrides[get_session] = lambda: session
    return _login
