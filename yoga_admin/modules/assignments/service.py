import logging
from datetime import datetime, timezone
from supabase import Client
from yoga_admin.authz.roles import DEFAULT_ROLE, RoleName
from yoga_admin.database.supabase_client import run_query
from yoga_admin.modules.assignments.schemas import UserRolesResponse
from yoga_admin.modules.roles.service import RoleCatalogService
from typing import Dict, List, Optional, Set, Union

logger = logging.getLogger(__name__)

ONBOARDING_TABLE = "user_onboarding"


def _role_name(role: Union[RoleName, str]) -> str:
    return role.value if isinstance(role, RoleName) else str(role)


class AssignmentStore:
    """Many-to-many mapping of identities to roles. Callers are responsible for policy checks."""

    def __init__(self, supabase: Client):
        self.supabase = supabase
        self.catalog = RoleCatalogService(supabase)

    def assign(self, identity_id: str, role_name: Union[RoleName, str], assigned_by: Optional[str] = None) -> None:
        """Grant a role; granting a role already held is a no-op"""
        role = self.catalog.get_role_by_name(_role_name(role_name))
        run_query(
            self.supabase.table("user_roles").upsert(
                {
                    "user_id": identity_id,
                    "role_id": role.id,
                    "assigned_by": assigned_by,
                    "assigned_at": datetime.now(timezone.utc).isoformat(),
                },
                on_conflict="user_id,role_id",
                ignore_duplicates=True,
            ),
            "assign role",
        )
        logger.info("Assigned role %s to %s (by %s)", role.name, identity_id, assigned_by or "system")

    def revoke(self, identity_id: str, role_name: Union[RoleName, str]) -> None:
        """Revoke a role; revoking a role not held is a no-op"""
        role = self.catalog.get_role_by_name(_role_name(role_name))
        result = run_query(
            self.supabase.table("user_roles")
            .delete()
            .eq("user_id", identity_id)
            .eq("role_id", role.id),
            "revoke role",
        )
        if result.data:
            logger.info("Revoked role %s from %s", role.name, identity_id)

    def roles_for(self, identity_id: str) -> Set[str]:
        """Role names held by an identity, read in a single query"""
        result = run_query(
            self.supabase.table("user_roles")
            .select("role_id, roles(name)")
            .eq("user_id", identity_id),
            "read user roles",
        )
        return {
            row["roles"]["name"]
            for row in result.data or []
            if row.get("roles") and row["roles"].get("name")
        }

    def all_assignments(self) -> List[UserRolesResponse]:
        """All assignments grouped per identity, for administrative listing"""
        result = run_query(
            self.supabase.table("user_roles").select("user_id, role_id, roles(name)"),
            "list assignments",
        )
        grouped: Dict[str, Set[str]] = {}
        for row in result.data or []:
            roles = grouped.setdefault(str(row["user_id"]), set())
            if row.get("roles") and row["roles"].get("name"):
                roles.add(row["roles"]["name"])
        return [
            UserRolesResponse(user_id=user_id, roles=sorted(roles))
            for user_id, roles in sorted(grouped.items())
        ]

    def is_onboarded(self, identity_id: str) -> bool:
        result = run_query(
            self.supabase.table(ONBOARDING_TABLE).select("user_id").eq("user_id", identity_id).limit(1),
            "read onboarding record",
        )
        return bool(result.data)

    def assign_default_role(self, identity_id: str) -> bool:
        """
        Grant the default role once per identity.

        Returns False without touching ``user_roles`` when the identity was already
        onboarded, so a later revocation of the default role sticks.
        """
        if self.is_onboarded(identity_id):
            return False
        self.assign(identity_id, DEFAULT_ROLE)
        run_query(
            self.supabase.table(ONBOARDING_TABLE).upsert(
                {"user_id": identity_id, "onboarded_at": datetime.now(timezone.utc).isoformat()},
                on_conflict="user_id",
                ignore_duplicates=True,
            ),
            "record onboarding",
        )
        logger.info("Onboarded %s with role %s", identity_id, DEFAULT_ROLE.value)
        return True
