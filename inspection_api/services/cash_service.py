import asyncio
from typing import Any, Dict, Iterable, List, Tuple

from inspection_api.core import database
from inspection_api.core.clock import now_iso
from inspection_api.core.logger import get_logger
from inspection_api.core.session import SessionContext
from inspection_api.models.cash import CashAnalytics
from inspection_api.services.image_upload import get_display_url, upload_image

logger = get_logger(__name__)

BANK_DEPOSITS = "bank_deposits"
DRAWER_COUNTS = "drawer_counts"
DRAWER_SETTINGS = "drawer_settings"


def stamp(data: Dict[str, Any], session: SessionContext) -> Dict[str, Any]:
    return {
        **data,
        "timestamp": now_iso(),
        "userId": session.user_id,
        "userName": session.name,
    }


# -------------------------------------------------------------------
# Helpers
# -------------------------------------------------------------------
def calculate_total_cash(counts: Iterable[Dict[str, Any]]) -> float:
    return sum(float(c.get("value") or 0) * float(c.get("count") or 0) for c in counts)


def calculate_cash_out(start: float, end: float) -> float:
    return end - start


# -------------------------------------------------------------------
# Bank deposits
# -------------------------------------------------------------------
async def submit_bank_deposit(deposit: Dict[str, Any], session: SessionContext) -> Dict[str, Any]:
    record = stamp(deposit, session)
    deposit_id = await database.get_store(BANK_DEPOSITS).add(record)
    logger.info(f"Bank deposit {deposit_id} submitted by {session.user_id}")
    return {"id": deposit_id, **record}


async def get_bank_deposits() -> List[Dict[str, Any]]:
    return await database.get_store(BANK_DEPOSITS).query(order_by="timestamp", descending=True)


async def delete_bank_deposit(deposit_id: str) -> bool:
    return await database.get_store(BANK_DEPOSITS).delete(deposit_id)


async def upload_deposit_images(files: List[Tuple[bytes, str, str]]) -> List[str]:
    """Upload (content, filename, content_type) triples; failed uploads are dropped."""
    results = await asyncio.gather(*[
        upload_image(content, filename, "deposits", content_type)
        for content, filename, content_type in files
    ])
    failed = [r for r in results if not r.success]
    if failed:
        logger.warning(f"{len(failed)} of {len(results)} deposit images failed to upload")
    return [get_display_url(r) for r in results if r.success]


# -------------------------------------------------------------------
# Drawer counts
# -------------------------------------------------------------------
async def submit_drawer_count(count: Dict[str, Any], session: SessionContext) -> Dict[str, Any]:
    record = stamp(count, session)
    count_id = await database.get_store(DRAWER_COUNTS).add(record)
    return {"id": count_id, **record}


async def get_drawer_counts() -> List[Dict[str, Any]]:
    return await database.get_store(DRAWER_COUNTS).query(order_by="timestamp", descending=True)


async def update_drawer_count(count_id: str, updates: Dict[str, Any]) -> None:
    await database.get_store(DRAWER_COUNTS).update(count_id, updates)


async def delete_drawer_count(count_id: str) -> bool:
    return await database.get_store(DRAWER_COUNTS).delete(count_id)


# -------------------------------------------------------------------
# Drawer settings
# -------------------------------------------------------------------
async def get_drawer_settings() -> List[Dict[str, Any]]:
    return await database.get_store(DRAWER_SETTINGS).query()


async def create_drawer_settings(settings: Dict[str, Any]) -> Dict[str, Any]:
    settings_id = await database.get_store(DRAWER_SETTINGS).add(settings)
    return {"id": settings_id, **settings}


async def update_drawer_settings(settings_id: str, updates: Dict[str, Any]) -> None:
    await database.get_store(DRAWER_SETTINGS).update(settings_id, updates)


async def delete_drawer_settings(settings_id: str) -> bool:
    return await database.get_store(DRAWER_SETTINGS).delete(settings_id)


# -------------------------------------------------------------------
# Analytics
# -------------------------------------------------------------------
async def get_cash_analytics() -> CashAnalytics:
    deposits = await get_bank_deposits()
    counts = await get_drawer_counts()

    total_deposits = sum(float(d.get("amount") or 0) for d in deposits)
    return CashAnalytics(
        total_deposits=total_deposits,
        total_drawer_counts=len(counts),
        total_variance=sum(float(c.get("variance") or 0) for c in counts),
        average_deposit=total_deposits / len(deposits) if deposits else 0,
    )
