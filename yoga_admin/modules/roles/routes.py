from fastapi import APIRouter, Depends
from yoga_admin.authz.evaluator import AuthorizationContext
from yoga_admin.authz.policies import Operation, Resource
from yoga_admin.core.dependencies import require_policy
from yoga_admin.database.supabase_client import get_supabase
from yoga_admin.modules.roles.schemas import RoleCreate, RoleUpdate, RoleResponse
from yoga_admin.modules.roles.service import RoleCatalogService
from supabase import Client
from typing import List

router = APIRouter(prefix="/roles", tags=["roles"])


def get_role_service(supabase: Client = Depends(get_supabase)) -> RoleCatalogService:
    return RoleCatalogService(supabase)


@router.get("", response_model=List[RoleResponse])
async def list_roles(service: RoleCatalogService = Depends(get_role_service)):
    """List all roles ordered by name (public)"""
    return service.list_roles()


@router.post("", response_model=RoleResponse, status_code=201)
async def create_role(
    role_data: RoleCreate,
    ctx: AuthorizationContext = Depends(require_policy(Resource.ROLE, Operation.WRITE)),
    service: RoleCatalogService = Depends(get_role_service)
):
    """Create a new role (super_admin only)"""
    return service.create_role(role_data)


@router.put("/{role_id}", response_model=RoleResponse)
async def update_role(
    role_id: str,
    role_data: RoleUpdate,
    ctx: AuthorizationContext = Depends(require_policy(Resource.ROLE, Operation.WRITE)),
    service: RoleCatalogService = Depends(get_role_service)
):
    """Update a role's description (super_admin only)"""
    return service.update_description(role_id, role_data)


@router.delete("/{role_id}", status_code=204)
async def delete_role(
    role_id: str,
    ctx: AuthorizationContext = Depends(require_policy(Resource.ROLE, Operation.WRITE)),
    service: RoleCatalogService = Depends(get_role_service)
):
    """Delete a custom role and its assignments (super_admin only)"""
    service.delete_role(role_id)
    return None
