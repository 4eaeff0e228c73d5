"""
Seed Roles Script
Populates the roles table from the role catalog config, then copies legacy
admin_users entries into user_roles.
Can be run manually after applying the migrations, and re-run safely.
"""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from yoga_admin.authz.legacy import LegacyAdminDirectory, migrate_legacy_admins
from yoga_admin.config.roles_config import ROLE_CATALOG
from yoga_admin.database.supabase_client import get_supabase
from yoga_admin.modules.assignments.service import AssignmentStore
from supabase import Client
import logging

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def seed_roles(supabase: Client):
    """Seed predefined roles from config"""
    logger.info("Seeding roles...")

    created_count = 0
    updated_count = 0

    for role in ROLE_CATALOG:
        existing = supabase.table("roles")\
            .select("id")\
            .eq("name", role["name"])\
            .execute()

        if existing.data:
            supabase.table("roles")\
                .update({"description": role["description"]})\
                .eq("name", role["name"])\
                .execute()
            updated_count += 1
            logger.debug(f"Updated role: {role['name']}")
        else:
            supabase.table("roles").insert({
                "name": role["name"],
                "description": role["description"]
            }).execute()
            created_count += 1
            logger.debug(f"Created role: {role['name']}")

    logger.info(f"Roles seeded: {created_count} created, {updated_count} updated")
    return created_count + updated_count


def identity_ids_by_email(supabase: Client, per_page: int = 1000) -> dict:
    """Map auth.users emails to ids via the admin API (requires the service role key)"""
    ids = {}
    page = 1
    while True:
        users = supabase.auth.admin.list_users(page=page, per_page=per_page)
        for user in users:
            if user.email:
                ids[user.email] = user.id
        if len(users) < per_page:
            return ids
        page += 1


def migrate_admins(supabase: Client):
    """Copy legacy admin_users entries into user_roles"""
    logger.info("Migrating legacy admins...")
    report = migrate_legacy_admins(
        LegacyAdminDirectory(supabase),
        AssignmentStore(supabase),
        identity_ids_by_email(supabase),
    )
    for email in report.unmatched:
        logger.warning(f"Legacy admin without an auth account, left in admin_users: {email}")
    return report


def main():
    """Main function to seed roles and migrate legacy admins"""
    try:
        supabase = get_supabase()

        role_count = seed_roles(supabase)
        report = migrate_admins(supabase)

        logger.info("Seeding completed successfully!")
        logger.info(f"Total: {role_count} roles processed, {len(report.migrated)} legacy admins migrated")

    except Exception as e:
        logger.error(f"Error during seeding: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
