from enum import Enum
from pydantic import BaseModel
from typing import Optional, List
from datetime import datetime


class UserFilter(str, Enum):
    ALL = "all"
    ADMINS = "admins"
    REGULAR = "regular"


class DirectoryUserResponse(BaseModel):
    id: Optional[str] = None
    email: str
    full_name: Optional[str] = None
    created_at: Optional[datetime] = None
    bookings_count: int = 0
    queries_count: int = 0
    roles: List[str] = []
    is_admin: bool = False
