from fastapi import APIRouter, Depends
from yoga_admin.authz.evaluator import AuthorizationContext
from yoga_admin.config import settings
from yoga_admin.core.dependencies import get_authorization_context
from yoga_admin.database.supabase_client import get_supabase
from yoga_admin.modules.users.schemas import DirectoryUserResponse, UserFilter
from yoga_admin.modules.users.service import UserDirectoryService
from supabase import Client
from typing import List, Optional

router = APIRouter(prefix="/users", tags=["users"])


def get_user_directory(supabase: Client = Depends(get_supabase)) -> UserDirectoryService:
    return UserDirectoryService(supabase, legacy_fallback=settings.legacy_admin_fallback)


@router.get("", response_model=List[DirectoryUserResponse])
async def list_users(
    search: Optional[str] = None,
    filter_by: UserFilter = UserFilter.ALL,
    ctx: AuthorizationContext = Depends(get_authorization_context),
    service: UserDirectoryService = Depends(get_user_directory)
):
    """Users who booked or asked a question, with role and admin status (admin only)"""
    return service.list_users(ctx, search=search, filter_by=filter_by)
