"""
Legacy compatibility shim over the deprecated ``admin_users`` table.

``admin_users`` keys admins by email rather than identity id. It is read-only here:
the resolver consults it as an OR-fallback for admin status while
``settings.legacy_admin_fallback`` is on, and ``migrate_legacy_admins`` copies its
rows into ``user_roles`` so the fallback can be switched off.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from supabase import Client

from yoga_admin.authz.evaluator import LegacyAdminEntry
from yoga_admin.config.roles_config import LEGACY_ROLE_MAPPING
from yoga_admin.database.supabase_client import run_query

logger = logging.getLogger(__name__)

LEGACY_TABLE = "admin_users"


class LegacyAdminDirectory:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def entry_for(self, email: Optional[str]) -> Optional[LegacyAdminEntry]:
        """Return the admin_users entry for an email, if any"""
        if not email:
            return None
        result = run_query(
            self.supabase.table(LEGACY_TABLE)
            .select("email, role")
            .eq("email", email)
            .limit(1),
            "read legacy admin entry",
        )
        if not result.data:
            return None
        row = result.data[0]
        return LegacyAdminEntry(email=row["email"], role=row["role"])

    def is_admin_legacy(self, email: Optional[str]) -> bool:
        entry = self.entry_for(email)
        return entry is not None and entry.grants_admin

    def list_entries(self) -> List[LegacyAdminEntry]:
        result = run_query(
            self.supabase.table(LEGACY_TABLE).select("email, role").order("email"),
            "list legacy admin entries",
        )
        return [LegacyAdminEntry(email=row["email"], role=row["role"]) for row in result.data or []]


@dataclass
class MigrationReport:
    migrated: List[str] = field(default_factory=list)
    unmatched: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)


def migrate_legacy_admins(directory: LegacyAdminDirectory, store, identity_ids_by_email: Dict[str, str]) -> MigrationReport:
    """
    Grant every legacy admin the matching role in the assignment store.

    ``identity_ids_by_email`` maps auth emails to identity ids. Emails match exactly,
    as they do at request time and in the is_admin() SQL function; entries without an
    identity are reported as unmatched and left in place. Safe to re-run since
    ``store.assign`` is idempotent.
    """
    report = MigrationReport()
    for entry in directory.list_entries():
        role = LEGACY_ROLE_MAPPING.get(entry.role)
        if role is None:
            logger.warning("Skipping legacy entry %s with unsupported role %s", entry.email, entry.role)
            report.skipped.append(entry.email)
            continue
        identity_id = identity_ids_by_email.get(entry.email)
        if identity_id is None:
            logger.warning("No identity found for legacy admin %s", entry.email)
            report.unmatched.append(entry.email)
            continue
        store.assign(identity_id, role)
        report.migrated.append(entry.email)
    logger.info(
        "Legacy admin migration: %d migrated, %d unmatched, %d skipped",
        len(report.migrated), len(report.unmatched), len(report.skipped),
    )
    return report
