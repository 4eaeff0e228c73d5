from fastapi import APIRouter, Depends
from yoga_admin.authz.evaluator import AuthorizationContext
from yoga_admin.authz.policies import Operation, Resource, enforce
from yoga_admin.core.dependencies import get_authorization_context, require_policy
from yoga_admin.database.supabase_client import get_supabase
from yoga_admin.modules.assignments.schemas import AssignmentCreate, UserRolesResponse
from yoga_admin.modules.assignments.service import AssignmentStore
from supabase import Client
from typing import List

router = APIRouter(prefix="/assignments", tags=["assignments"])


def get_assignment_store(supabase: Client = Depends(get_supabase)) -> AssignmentStore:
    return AssignmentStore(supabase)


@router.get("", response_model=List[UserRolesResponse])
async def list_assignments(
    ctx: AuthorizationContext = Depends(get_authorization_context),
    store: AssignmentStore = Depends(get_assignment_store)
):
    """List all assignments grouped by user (admins), or the caller's own"""
    if ctx.is_admin():
        return store.all_assignments()
    return [UserRolesResponse(user_id=ctx.identity_id, roles=sorted(store.roles_for(ctx.identity_id)))]


@router.get("/users/{user_id}", response_model=UserRolesResponse)
async def get_user_roles(
    user_id: str,
    ctx: AuthorizationContext = Depends(get_authorization_context),
    store: AssignmentStore = Depends(get_assignment_store)
):
    """Roles held by a user (self or admin)"""
    enforce(ctx, Resource.ASSIGNMENT, Operation.READ, owner_id=user_id)
    return UserRolesResponse(user_id=user_id, roles=sorted(store.roles_for(user_id)))


@router.post("", response_model=UserRolesResponse, status_code=201)
async def assign_role(
    assignment: AssignmentCreate,
    ctx: AuthorizationContext = Depends(require_policy(Resource.ASSIGNMENT, Operation.WRITE)),
    store: AssignmentStore = Depends(get_assignment_store)
):
    """Grant a role to a user (super_admin only, idempotent)"""
    store.assign(assignment.user_id, assignment.role_name, assigned_by=ctx.identity_id)
    return UserRolesResponse(user_id=assignment.user_id, roles=sorted(store.roles_for(assignment.user_id)))


@router.delete("/users/{user_id}/roles/{role_name}", status_code=204)
async def revoke_role(
    user_id: str,
    role_name: str,
    ctx: AuthorizationContext = Depends(require_policy(Resource.ASSIGNMENT, Operation.WRITE)),
    store: AssignmentStore = Depends(get_assignment_store)
):
    """Revoke a role from a user (super_admin only, idempotent)"""
    store.revoke(user_id, role_name)
    return None
