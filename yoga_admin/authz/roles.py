"""
Closed enumeration of the platform's predefined roles.

Policies reference roles only through ``RoleName`` members, so a misspelled role
fails at import time instead of silently evaluating to "no role". Strings coming
from requests or the database go through ``RoleName.parse``.
"""

from enum import Enum
from typing import Iterable, FrozenSet, Union

from yoga_admin.core.exceptions import UnknownRole


class RoleName(str, Enum):
    SUPER_ADMIN = "super_admin"
    ADMIN = "admin"
    YOGA_ACHARYA = "yoga_acharya"
    MANTRA_CURATOR = "mantra_curator"
    SANGHA_GUIDE = "sangha_guide"
    ENERGY_EXCHANGE_LEAD = "energy_exchange_lead"
    ZEN_ANALYST = "zen_analyst"
    YOGI_IN_TRAINING = "yogi_in_training"

    @classmethod
    def parse(cls, value: Union["RoleName", str]) -> "RoleName":
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise UnknownRole(str(value)) from None

    @classmethod
    def names(cls) -> FrozenSet[str]:
        return frozenset(role.value for role in cls)


ADMIN_ROLES: FrozenSet[RoleName] = frozenset({RoleName.ADMIN, RoleName.SUPER_ADMIN})
ROLE_MANAGER_ROLE = RoleName.SUPER_ADMIN
DEFAULT_ROLE = RoleName.YOGI_IN_TRAINING


def role_values(roles: Iterable[Union[RoleName, str]]) -> FrozenSet[str]:
    return frozenset(RoleName.parse(role).value for role in roles)
