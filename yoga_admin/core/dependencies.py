"""
Core dependencies for identity resolution and policy checks
"""

from fastapi import Depends, Request, Security
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from yoga_admin.authz.evaluator import AuthorizationContext, Identity
from yoga_admin.authz.policies import Operation, Resource, enforce
from yoga_admin.authz.resolver import resolve_authorization_context
from yoga_admin.config import settings
from yoga_admin.database.supabase_client import get_supabase
from yoga_admin.modules.auth.service import AuthService
from supabase import Client
from typing import Any, Dict, Optional

security = HTTPBearer()
optional_security = HTTPBearer(auto_error=False)


def get_auth_service(supabase: Client = Depends(get_supabase)) -> AuthService:
    return AuthService(supabase)


def get_current_user(
    credentials: HTTPAuthorizationCredentials = Security(security),
    auth_service: AuthService = Depends(get_auth_service)
) -> Dict[str, Any]:
    """Extract current user info from JWT token"""
    return auth_service.get_current_user(credentials.credentials)


def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(optional_security),
    auth_service: AuthService = Depends(get_auth_service)
) -> Optional[Dict[str, Any]]:
    """Current user if a bearer token was sent, otherwise None (public endpoints)"""
    if credentials is None:
        return None
    return auth_service.get_current_user(credentials.credentials)


def _context_for_request(request: Request, user_data: Optional[Dict[str, Any]], supabase: Client) -> AuthorizationContext:
    """Resolve the caller's roles once per request and keep the snapshot on request.state."""
    if user_data is None:
        return AuthorizationContext.anonymous()
    cached = getattr(request.state, "authz_context", None)
    if cached is not None and cached.identity_id == str(user_data["id"]):
        return cached
    ctx = resolve_authorization_context(
        Identity.from_user_data(user_data),
        supabase,
        legacy_fallback=settings.legacy_admin_fallback,
    )
    request.state.authz_context = ctx
    return ctx


def get_authorization_context(
    request: Request,
    user_data: Dict[str, Any] = Depends(get_current_user),
    supabase: Client = Depends(get_supabase)
) -> AuthorizationContext:
    return _context_for_request(request, user_data, supabase)


def get_optional_authorization_context(
    request: Request,
    user_data: Optional[Dict[str, Any]] = Depends(get_optional_user),
    supabase: Client = Depends(get_supabase)
) -> AuthorizationContext:
    return _context_for_request(request, user_data, supabase)


def require_policy(resource: Resource, operation: Operation):
    """Factory function to create a policy check dependency"""
    def check_policy(ctx: AuthorizationContext = Depends(get_authorization_context)) -> AuthorizationContext:
        return enforce(ctx, resource, operation)
    return check_policy
