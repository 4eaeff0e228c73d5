from pydantic import BaseModel
from typing import List


class AssignmentCreate(BaseModel):
    user_id: str
    role_name: str


class UserRolesResponse(BaseModel):
    user_id: str
    roles: List[str]
