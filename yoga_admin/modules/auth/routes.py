from fastapi import APIRouter, Depends
from yoga_admin.authz.evaluator import AuthorizationContext
from yoga_admin.core.dependencies import get_authorization_context
from yoga_admin.database.supabase_client import get_supabase
from yoga_admin.modules.assignments.service import AssignmentStore
from yoga_admin.modules.auth.schemas import MeResponse
from supabase import Client

router = APIRouter(prefix="/auth", tags=["auth"])


@router.get("/me", response_model=MeResponse)
async def get_me(ctx: AuthorizationContext = Depends(get_authorization_context)):
    """Current identity and its evaluated roles (for frontend UI)"""
    return MeResponse(id=ctx.identity.id, email=ctx.identity.email, **ctx.summary())


@router.post("/me/onboard", response_model=MeResponse)
async def onboard(
    ctx: AuthorizationContext = Depends(get_authorization_context),
    supabase: Client = Depends(get_supabase)
):
    """Grant the default role on the caller's first sign-in"""
    store = AssignmentStore(supabase)
    if not store.assign_default_role(ctx.identity_id):
        return MeResponse(id=ctx.identity.id, email=ctx.identity.email, **ctx.summary())
    roles = ctx.roles | store.roles_for(ctx.identity_id)
    refreshed = AuthorizationContext.for_identity(ctx.identity, roles, ctx.legacy_entry)
    return MeResponse(id=ctx.identity.id, email=ctx.identity.email, **refreshed.summary())
