from typing import Any, Dict, List, Optional

from inspection_api.core import database
from inspection_api.core.errors import DataAccessError
from inspection_api.core.logger import get_logger
from inspection_api.core.session import SessionContext

logger = get_logger(__name__)

USERS = "users"


async def get_users() -> List[Dict[str, Any]]:
    return await database.get_store(USERS).query()


async def delete_user(user_id: str) -> bool:
    # Only the profile document goes; the identity account stays with the provider
    return await database.get_store(USERS).delete(user_id)


async def enable_user(user_id: str) -> None:
    await database.get_store(USERS).update(user_id, {"disabled": False})
    logger.info(f"Enabled user {user_id}")


async def disable_user(user_id: str) -> None:
    await database.get_store(USERS).update(user_id, {"disabled": True})
    logger.info(f"Disabled user {user_id}")


async def update_user_role(user_id: str, role: str) -> None:
    await database.get_store(USERS).update(user_id, {"role": role})
    logger.info(f"Changed role of user {user_id} to {role}")


async def update_profile(data: Dict[str, Any]) -> bool:
    updates = dict(data)
    user_id = updates.pop("user_id", None)
    if not user_id:
        logger.warning("Profile update without user_id skipped")
        return False
    await database.get_store(USERS).update(user_id, updates)
    return True


async def get_user_profile(user_id: Optional[str] = None,
                           session: Optional[SessionContext] = None) -> Optional[Dict[str, Any]]:
    target = user_id or (session.user_id if session else None)
    if not target:
        raise DataAccessError("No user ID available")
    return await database.get_store(USERS).get(target)


async def lookup_user_by_pin(pin: str) -> Optional[Dict[str, Any]]:
    matches = await database.get_store(USERS).query({"pin": pin}, limit=1)
    return matches[0] if matches else None
