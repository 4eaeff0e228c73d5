import logging
from datetime import datetime, timezone
from supabase import Client
from yoga_admin.authz.roles import RoleName
from yoga_admin.core.exceptions import Conflict, NotFound, UnknownRole
from yoga_admin.database.supabase_client import run_query
from yoga_admin.modules.roles.schemas import RoleCreate, RoleUpdate, RoleResponse, CatalogReport
from typing import List

logger = logging.getLogger(__name__)


class RoleCatalogService:
    """Data access for the roles table. Callers are responsible for policy checks."""

    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_roles(self) -> List[RoleResponse]:
        """List all roles ordered by name"""
        result = run_query(
            self.supabase.table("roles").select("*").order("name"),
            "list roles",
        )
        return [RoleResponse(**role) for role in result.data or []]

    def get_role_by_id(self, role_id: str) -> RoleResponse:
        result = run_query(
            self.supabase.table("roles").select("*").eq("id", role_id).limit(1),
            "read role",
        )
        if not result.data:
            raise NotFound("Role not found")
        return RoleResponse(**result.data[0])

    def get_role_by_name(self, name: str) -> RoleResponse:
        result = run_query(
            self.supabase.table("roles").select("*").eq("name", name).limit(1),
            "read role",
        )
        if not result.data:
            raise UnknownRole(name)
        return RoleResponse(**result.data[0])

    def create_role(self, role_data: RoleCreate) -> RoleResponse:
        """Create a new role"""
        result = run_query(
            self.supabase.table("roles").insert({
                "name": role_data.name,
                "description": role_data.description
            }),
            "create role",
        )
        if not result.data:
            raise Conflict("Role was not created")
        logger.info("Created role %s", role_data.name)
        return RoleResponse(**result.data[0])

    def update_description(self, role_id: str, role_data: RoleUpdate) -> RoleResponse:
        """Update a role's description; names are immutable"""
        result = run_query(
            self.supabase.table("roles")
            .update({
                "description": role_data.description,
                "updated_at": datetime.now(timezone.utc).isoformat(),
            })
            .eq("id", role_id),
            "update role",
        )
        if not result.data:
            raise NotFound("Role not found")
        return RoleResponse(**result.data[0])

    def delete_role(self, role_id: str) -> bool:
        """Delete a custom role together with its assignments"""
        role = self.get_role_by_id(role_id)
        if role.name in RoleName.names():
            raise Conflict(f"Predefined role {role.name} cannot be deleted")

        # Remove assignments first
        run_query(
            self.supabase.table("user_roles").delete().eq("role_id", role_id),
            "delete role assignments",
        )
        result = run_query(
            self.supabase.table("roles").delete().eq("id", role_id),
            "delete role",
        )
        logger.info("Deleted role %s", role.name)
        return len(result.data or []) > 0

    def validate_catalog(self) -> CatalogReport:
        """Compare the roles table against the predefined role enumeration"""
        stored = {role.name for role in self.list_roles()}
        report = CatalogReport(
            missing=sorted(RoleName.names() - stored),
            custom=sorted(stored - RoleName.names()),
        )
        if report.custom:
            logger.info("Custom roles present in catalog: %s", ", ".join(report.custom))
        if report.missing:
            logger.error("Predefined roles missing from catalog: %s", ", ".join(report.missing))
        return report
