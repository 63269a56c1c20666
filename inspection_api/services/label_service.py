from typing import Any, Dict, List, Optional

from inspection_api.core import database
from inspection_api.core.clock import now_iso
from inspection_api.core.errors import NotFoundError
from inspection_api.core.logger import get_logger

logger = get_logger(__name__)

LABEL_TEMPLATES = "label_templates"


async def get_all_templates(archived: Optional[bool] = None) -> List[Dict[str, Any]]:
    filters = {"archived": archived} if archived is not None else None
    return await database.get_store(LABEL_TEMPLATES).query(filters)


async def get_active_templates() -> List[Dict[str, Any]]:
    return await get_all_templates(False)


async def get_archived_templates() -> List[Dict[str, Any]]:
    return await get_all_templates(True)


async def get_template(template_id: str) -> Dict[str, Any]:
    template = await database.get_store(LABEL_TEMPLATES).get(template_id)
    if template is None:
        raise NotFoundError("Label template not found")
    return template


async def create_template(data: Dict[str, Any], created_by: Optional[str] = None) -> Dict[str, Any]:
    timestamp = now_iso()
    template = {
        "archived": False,
        **data,
        "created_by": created_by,
        "created_at": timestamp,
        "updated_at": timestamp,
    }
    template_id = await database.get_store(LABEL_TEMPLATES).add(template)
    logger.info(f"Created label template {template_id} ({template.get('label_name')})")
    return {"id": template_id, **template}


async def update_template(template_id: str, updates: Dict[str, Any]) -> Dict[str, Any]:
    await database.get_store(LABEL_TEMPLATES).update(template_id, {**updates, "updated_at": now_iso()})
    return await get_template(template_id)


async def set_archived(template_id: str, archived: bool) -> Dict[str, Any]:
    logger.info(f"{'Archiving' if archived else 'Restoring'} label template {template_id}")
    return await update_template(template_id, {"archived": archived})


async def delete_template(template_id: str) -> bool:
    return await database.get_store(LABEL_TEMPLATES).delete(template_id)
