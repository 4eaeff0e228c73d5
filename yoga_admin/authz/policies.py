"""
Policy enforcement layer: one read/write predicate per protected resource class.

Services call ``enforce`` before every store access. The same rules are installed
as row-level-security policies in ``supabase/migrations`` so direct database
clients are held to them too.
"""

import logging
from enum import Enum
from typing import Callable, Dict, Optional, Tuple

from yoga_admin.authz.evaluator import AuthorizationContext
from yoga_admin.authz.roles import RoleName
from yoga_admin.core.exceptions import Unauthorized

logger = logging.getLogger(__name__)


class Resource(str, Enum):
    BOOKING = "booking"
    QUERY = "query"
    MESSAGE = "message"
    CONTENT = "content"
    ROLE = "role"
    ASSIGNMENT = "assignment"


class Operation(str, Enum):
    READ = "read"
    WRITE = "write"


Predicate = Callable[[AuthorizationContext, Optional[str]], bool]


def _always(ctx: AuthorizationContext, owner_id: Optional[str]) -> bool:
    return True


def _admin(ctx: AuthorizationContext, owner_id: Optional[str]) -> bool:
    return ctx.is_admin()


def _admin_or_owner(ctx: AuthorizationContext, owner_id: Optional[str]) -> bool:
    return ctx.is_admin() or ctx.owns(owner_id)


def _curator_or_admin(ctx: AuthorizationContext, owner_id: Optional[str]) -> bool:
    return ctx.has_role(RoleName.MANTRA_CURATOR) or ctx.is_admin()


def _role_manager(ctx: AuthorizationContext, owner_id: Optional[str]) -> bool:
    return ctx.can_manage_roles()


# (predicate, requirement shown to the caller when it fails)
POLICIES: Dict[Tuple[Resource, Operation], Tuple[Predicate, str]] = {
    (Resource.BOOKING, Operation.READ): (_admin_or_owner, "admin access or ownership of the booking"),
    (Resource.BOOKING, Operation.WRITE): (_admin, "admin access"),
    (Resource.QUERY, Operation.READ): (_admin, "admin access"),
    (Resource.QUERY, Operation.WRITE): (_admin, "admin access"),
    (Resource.MESSAGE, Operation.READ): (_admin, "admin access"),
    (Resource.MESSAGE, Operation.WRITE): (_admin, "admin access"),
    (Resource.CONTENT, Operation.READ): (_always, "nothing"),
    (Resource.CONTENT, Operation.WRITE): (_curator_or_admin, "the mantra_curator role or admin access"),
    (Resource.ROLE, Operation.READ): (_always, "nothing"),
    (Resource.ROLE, Operation.WRITE): (_role_manager, "the super_admin role"),
    (Resource.ASSIGNMENT, Operation.READ): (_admin_or_owner, "admin access or being the assignee"),
    (Resource.ASSIGNMENT, Operation.WRITE): (_role_manager, "the super_admin role"),
}


def is_allowed(
    ctx: AuthorizationContext,
    resource: Resource,
    operation: Operation,
    owner_id: Optional[str] = None,
) -> bool:
    predicate, _ = POLICIES[(Resource(resource), Operation(operation))]
    return predicate(ctx, owner_id)


def enforce(
    ctx: AuthorizationContext,
    resource: Resource,
    operation: Operation,
    owner_id: Optional[str] = None,
) -> AuthorizationContext:
    """Raise ``Unauthorized`` naming the missing precondition unless the policy allows the access."""
    resource, operation = Resource(resource), Operation(operation)
    predicate, requirement = POLICIES[(resource, operation)]
    if predicate(ctx, owner_id):
        return ctx
    logger.warning(
        "Denied %s on %s for identity %s",
        operation.value, resource.value, ctx.identity_id or "anonymous",
    )
    raise Unauthorized(f"Cannot {operation.value} {resource.value}: requires {requirement}")
