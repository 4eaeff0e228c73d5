import logging

from supabase import Client

from yoga_admin.authz.evaluator import AuthorizationContext, Identity
from yoga_admin.authz.legacy import LegacyAdminDirectory
from yoga_admin.core.exceptions import AuthzError
from yoga_admin.modules.assignments.service import AssignmentStore

logger = logging.getLogger(__name__)


def resolve_authorization_context(identity: Identity, supabase: Client, legacy_fallback: bool = True) -> AuthorizationContext:
    """
    Take one snapshot of an identity's roles for the current request.

    Fails closed: if the store cannot be read, the identity is evaluated with an
    empty role set and no legacy entry.
    """
    try:
        roles = AssignmentStore(supabase).roles_for(identity.id)
        legacy_entry = LegacyAdminDirectory(supabase).entry_for(identity.email) if legacy_fallback else None
    except AuthzError as e:
        logger.error("Could not resolve roles for %s, treating as unprivileged: %s", identity.id, e.detail)
        return AuthorizationContext.for_identity(identity)
    return AuthorizationContext.for_identity(identity, roles, legacy_entry)
