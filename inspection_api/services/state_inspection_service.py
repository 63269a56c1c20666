from typing import Any, Dict, List

from inspection_api.core import database
from inspection_api.core.clock import now_iso
from inspection_api.core.errors import NotFoundError
from inspection_api.core.logger import get_logger

logger = get_logger(__name__)

STATE_INSPECTIONS = "state_inspections"
FLEET_ACCOUNTS = "fleet_accounts"


def clean(data: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in data.items() if value is not None and key != "id"}


# -------------------------------------------------------------------
# State inspection records
# -------------------------------------------------------------------
async def get_records() -> List[Dict[str, Any]]:
    return await database.get_store(STATE_INSPECTIONS).query(order_by="createdAt", descending=True)


async def get_record(record_id: str) -> Dict[str, Any]:
    record = await database.get_store(STATE_INSPECTIONS).get(record_id)
    if record is None:
        raise NotFoundError(f"State inspection '{record_id}' not found")
    return record


async def create_record(data: Dict[str, Any]) -> Dict[str, Any]:
    record = {**clean(data), "createdAt": now_iso()}
    record_id = await database.get_store(STATE_INSPECTIONS).add(record)
    logger.info(f"Created state inspection {record_id}")
    return {"id": record_id, **record}


async def update_record(record_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
    updates = clean(data)
    await database.get_store(STATE_INSPECTIONS).update(record_id, updates)
    return {"id": record_id, **updates}


async def delete_record(record_id: str) -> bool:
    return await database.get_store(STATE_INSPECTIONS).delete(record_id)


async def get_stats() -> Dict[str, int]:
    store = database.get_store(STATE_INSPECTIONS)
    return {
        "total": await store.count(),
        "passed": await store.count({"status": "passed"}),
        "failed": await store.count({"status": "failed"}),
    }


# -------------------------------------------------------------------
# Fleet accounts
# -------------------------------------------------------------------
async def get_fleet_accounts() -> List[Dict[str, Any]]:
    return await database.get_store(FLEET_ACCOUNTS).query(order_by="name")


async def create_fleet_account(data: Dict[str, Any]) -> Dict[str, Any]:
    account = {**clean(data), "createdAt": now_iso()}
    account_id = await database.get_store(FLEET_ACCOUNTS).add(account)
    logger.info(f"Created fleet account {account_id} ({account.get('name')})")
    return {"id": account_id, **account}


async def update_fleet_account(account_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
    updates = clean(data)
    await database.get_store(FLEET_ACCOUNTS).update(account_id, updates)
    return {"id": account_id, **updates}


async def delete_fleet_account(account_id: str) -> bool:
    return await database.get_store(FLEET_ACCOUNTS).delete(account_id)
