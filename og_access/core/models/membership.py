from enum import Enum
from typing import List, Set

from pydantic import BaseModel, Field

from og_access.core.models.entity import EntityId
from og_access.core.models.role import Role


class MembershipState(str, Enum):
    """Lifecycle state of a membership"""

    ACTIVE = "active"
    PENDING = "pending"
    BLOCKED = "blocked"


class Membership(BaseModel):
    """Relation between a user and a group, carrying role assignments"""

    id: EntityId
    user_id: EntityId
    group_type: str
    group_id: EntityId
    state: MembershipState = MembershipState.ACTIVE
    roles: List[Role] = Field(default_factory=list, description="Ordered roles")
    permissions: Set[str] = Field(
        default_factory=set, description="Permissions granted to this membership directly"
    )

    def is_active(self) -> bool:
        return self.state == MembershipState.ACTIVE

    def get_roles(self) -> List[Role]:
        return list(self.roles)

    def has_role(self, role_name: str) -> bool:
        return any(role.name == role_name for role in self.roles)

    def has_permission(self, permission: str) -> bool:
        """Check if any role or a direct grant includes the permission"""
        if permission in self.permissions:
            return True
        return any(role.has_permission(permission) for role in self.roles)

    @property
    def cache_tags(self) -> List[str]:
        return [f"og_membership:{self.id}"]

    @property
    def cache_contexts(self) -> List[str]:
        return []

    @property
    def cache_max_age(self) -> int:
        return -1
