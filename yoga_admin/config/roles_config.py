"""
Role Catalog Configuration
Defines the predefined roles seeded into the ``roles`` table and checked at startup.
Used by the seed script and by ``RoleCatalogService.validate_catalog``.
"""

from yoga_admin.authz.roles import RoleName

ROLE_DESCRIPTIONS = {
    RoleName.SUPER_ADMIN: "Complete platform control and configuration",
    RoleName.ADMIN: "Site content management and moderation",
    RoleName.YOGA_ACHARYA: "Create and publish yoga classes/courses",
    RoleName.MANTRA_CURATOR: "Create and edit blog posts/articles",
    RoleName.SANGHA_GUIDE: "Monitor community discussions and moderate content",
    RoleName.ENERGY_EXCHANGE_LEAD: "Manage product catalog and commerce",
    RoleName.ZEN_ANALYST: "Access analytics and generate reports",
    RoleName.YOGI_IN_TRAINING: "Access enrolled courses and participate in community",
}

# Legacy admin_users.role value -> role granted when migrating into user_roles
LEGACY_ROLE_MAPPING = {
    "super_admin": RoleName.SUPER_ADMIN,
    "admin": RoleName.ADMIN,
}


def get_role_catalog():
    """
    Returns the predefined roles as rows ready for the ``roles`` table, ordered by name.
    Format: [{"name": "admin", "description": "..."}, ...]
    """
    return sorted(
        ({"name": role.value, "description": description} for role, description in ROLE_DESCRIPTIONS.items()),
        key=lambda row: row["name"],
    )


ROLE_CATALOG = get_role_catalog()
