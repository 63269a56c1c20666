import json
from typing import Any, Dict, List, Optional

from inspection_api.core import database
from inspection_api.core.clock import now_iso
from inspection_api.core.logger import get_logger

logger = get_logger(__name__)

QUICK_CHECKS = "quick_checks"
DRAFTS = "quick_check_drafts"


# -------------------------------------------------------------------
# Submitted quick checks
# -------------------------------------------------------------------
async def submit_quick_check(form: Dict[str, Any]) -> Dict[str, Any]:
    record = {**form, "created_at": now_iso()}
    doc_id = await database.get_store(QUICK_CHECKS).add(record)
    logger.info(f"Quick check {doc_id} submitted by {form.get('user_email') or form.get('user') or 'unknown'}")
    return {
        "id": doc_id,
        **record,
        "data": form.get("data") or json.dumps(form, default=str),
    }


async def get_quick_check_history() -> List[Dict[str, Any]]:
    return await database.get_store(QUICK_CHECKS).query(order_by="created_at", descending=True)


async def delete_quick_check(check_id: str) -> bool:
    deleted = await database.get_store(QUICK_CHECKS).delete(str(check_id))
    logger.info(f"Delete quick check {check_id}: {'removed' if deleted else 'not found'}")
    return deleted


async def update_quick_check_status(check_id: str, status: str) -> None:
    await database.get_store(QUICK_CHECKS).update(str(check_id), {"status": status})


# Submitted and active lists are the full history until quick checks carry a workflow state
get_active_quick_checks = get_quick_check_history
get_submitted_quick_checks = get_quick_check_history


# -------------------------------------------------------------------
# Drafts
# -------------------------------------------------------------------
async def create_draft(title: str, data: Dict[str, Any]) -> str:
    timestamp = now_iso()
    return await database.get_store(DRAFTS).add({
        "title": title,
        **data,
        "is_draft": True,
        "created_at": timestamp,
        "updated_at": timestamp,
    })


async def update_draft(draft_id: str, title: str, data: Dict[str, Any]) -> None:
    await database.get_store(DRAFTS).update(str(draft_id), {
        "title": title,
        **data,
        "updated_at": now_iso(),
    })


async def get_drafts(user_id: Optional[str] = None) -> List[Dict[str, Any]]:
    filters = {"user": user_id} if user_id else None
    return await database.get_store(DRAFTS).query(filters, order_by="updated_at", descending=True)


async def delete_all_drafts(user_id: Optional[str] = None) -> int:
    store = database.get_store(DRAFTS)
    drafts = await get_drafts(user_id)
    deleted = 0
    for draft in drafts:
        if await store.delete(draft["id"]):
            deleted += 1
    logger.info(f"Deleted {deleted} drafts for {user_id or 'all users'}")
    return deleted
