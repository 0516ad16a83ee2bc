"""Group roles and their default definitions"""

from enum import Enum
from typing import List, Set

from pydantic import BaseModel, Field

NON_MEMBER = "non-member"
MEMBER = "member"
ADMINISTRATOR = "administrator"


class RoleType(str, Enum):
    """Whether a role exists for every group bundle or was added on top"""

    REQUIRED = "required"  # Cannot be removed, e.g. member
    STANDARD = "standard"


class Role(BaseModel):
    """A set of permissions granted to members of a group bundle"""

    name: str = Field(..., min_length=1, description="Machine name, e.g. 'member'")
    label: str = ""
    group_type: str = Field(..., description="Entity type of the group")
    group_bundle: str = Field(..., description="Bundle of the group")
    role_type: RoleType = RoleType.STANDARD
    is_admin: bool = Field(
        default=False, description="Admin roles hold every permission in the group"
    )
    permissions: Set[str] = Field(default_factory=set)

    @property
    def id(self) -> str:
        return f"{self.group_type}-{self.group_bundle}-{self.name}"

    def has_permission(self, permission: str) -> bool:
        if self.is_admin:
            return True
        return permission in self.permissions

    def grant_permission(self, permission: str) -> "Role":
        self.permissions.add(permission)
        return self

    def revoke_permission(self, permission: str) -> "Role":
        self.permissions.discard(permission)
        return self

    @classmethod
    def default_roles(cls, group_type: str, group_bundle: str) -> List["Role"]:
        """Get the roles every group bundle starts with"""
        return [
            cls(
                name=NON_MEMBER,
                label="Non-member",
                group_type=group_type,
                group_bundle=group_bundle,
                role_type=RoleType.REQUIRED,
                permissions={"subscribe"},
            ),
            cls(
                name=MEMBER,
                label="Member",
                group_type=group_type,
                group_bundle=group_bundle,
                role_type=RoleType.REQUIRED,
                permissions={"unsubscribe"},
            ),
            cls(
                name=ADMINISTRATOR,
                label="Administrator",
                group_type=group_type,
                group_bundle=group_bundle,
                is_admin=True,
            ),
        ]
