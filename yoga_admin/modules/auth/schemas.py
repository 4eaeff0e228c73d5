from pydantic import BaseModel
from typing import List, Optional


class MeResponse(BaseModel):
    id: str
    email: Optional[str] = None
    roles: List[str]
    is_admin: bool
    can_manage_roles: bool
    admin_source: Optional[str] = None  # "modern" | "legacy"
