"""
Authorization evaluator.

An ``AuthorizationContext`` is an immutable snapshot of one caller's role
assignments (and, while the legacy fallback is enabled, their ``admin_users``
entry) taken once per request. All checks are pure functions of that snapshot,
so a single authorization decision never observes a concurrent grant or revoke
halfway through.
"""

from dataclasses import dataclass
from typing import Any, ClassVar, Dict, FrozenSet, Iterable, Optional, Union

from yoga_admin.authz.roles import ADMIN_ROLES, ROLE_MANAGER_ROLE, RoleName, role_values


@dataclass(frozen=True)
class Identity:
    """Authenticated principal as reported by Supabase Auth."""

    id: str
    email: Optional[str] = None

    @classmethod
    def from_user_data(cls, user_data: Dict[str, Any]) -> "Identity":
        return cls(id=str(user_data["id"]), email=user_data.get("email"))


@dataclass(frozen=True)
class LegacyAdminEntry:
    email: str
    role: str

    @property
    def grants_admin(self) -> bool:
        return self.role in {role.value for role in ADMIN_ROLES}

    def matches(self, email: Optional[str]) -> bool:
        return bool(email) and self.email == email


@dataclass(frozen=True)
class ModernGrant:
    role: RoleName
    source: ClassVar[str] = "modern"


@dataclass(frozen=True)
class LegacyGrant:
    entry: LegacyAdminEntry
    source: ClassVar[str] = "legacy"


AdminGrant = Union[ModernGrant, LegacyGrant]


def effective_admin_status(
    roles: FrozenSet[str],
    legacy_entry: Optional[LegacyAdminEntry] = None,
    email: Optional[str] = None,
) -> Optional[AdminGrant]:
    """
    Single place where the role system and the legacy admin list are merged.

    Assignments win over the legacy list; the legacy entry only counts when it
    belongs to ``email`` and carries an admin-equivalent role. Dropping the
    ``legacy_entry`` argument is all it takes to retire the admin_users table.
    """
    for role in (RoleName.SUPER_ADMIN, RoleName.ADMIN):
        if role.value in roles:
            return ModernGrant(role)
    if legacy_entry is not None and legacy_entry.grants_admin and legacy_entry.matches(email):
        return LegacyGrant(legacy_entry)
    return None


@dataclass(frozen=True)
class AuthorizationContext:
    identity: Optional[Identity]
    roles: FrozenSet[str] = frozenset()
    legacy_entry: Optional[LegacyAdminEntry] = None

    @classmethod
    def anonymous(cls) -> "AuthorizationContext":
        return cls(identity=None)

    @classmethod
    def for_identity(
        cls, identity: Identity, roles: Iterable[str] = (), legacy_entry: Optional[LegacyAdminEntry] = None
    ) -> "AuthorizationContext":
        return cls(identity=identity, roles=frozenset(roles), legacy_entry=legacy_entry)

    @property
    def identity_id(self) -> Optional[str]:
        return self.identity.id if self.identity else None

    @property
    def is_authenticated(self) -> bool:
        return self.identity is not None

    def has_role(self, name: Union[RoleName, str]) -> bool:
        return RoleName.parse(name).value in self.roles

    def has_any_role(self, names: Iterable[Union[RoleName, str]]) -> bool:
        return not self.roles.isdisjoint(role_values(names))

    @property
    def admin_grant(self) -> Optional[AdminGrant]:
        if self.identity is None:
            return None
        return effective_admin_status(self.roles, self.legacy_entry, self.identity.email)

    def is_admin(self) -> bool:
        return self.admin_grant is not None

    def can_manage_roles(self) -> bool:
        return self.has_role(ROLE_MANAGER_ROLE)

    def owns(self, owner_id: Optional[str]) -> bool:
        return self.identity is not None and owner_id is not None and str(owner_id) == self.identity.id

    def summary(self) -> Dict[str, Any]:
        grant = self.admin_grant
        return {
            "roles": sorted(self.roles),
            "is_admin": grant is not None,
            "can_manage_roles": self.can_manage_roles(),
            "admin_source": grant.source if grant else None,
        }
