from typing import Any, Dict, List, Optional

from inspection_api.models.base import DocumentInput


class LabelTemplateInput(DocumentInput):
    label_name: Optional[str] = None
    fields: Optional[List[Dict[str, Any]]] = None
    paper_size: Optional[str] = None
    width: Optional[float] = None
    height: Optional[float] = None
    archived: Optional[bool] = None
