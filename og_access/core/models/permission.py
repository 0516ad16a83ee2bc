"""Permission definitions and permission cache entries"""

from enum import Enum
from typing import List, Optional, Set

from pydantic import BaseModel, Field

from og_access.core.models.cacheable import CacheableMetadata

ADMINISTER_GROUP_PERMISSION = "administer group"
UPDATE_GROUP_PERMISSION = "update group"


class Ownership(str, Enum):
    """Which group content entities an entity-operation permission covers"""

    OWN = "own"
    ANY = "any"


class PermissionTier(str, Enum):
    """Cache tier of a permission set"""

    PRE_ALTER = "pre_alter"
    POST_ALTER = "post_alter"


class GroupPermission(BaseModel):
    """A permission that applies to the group itself"""

    name: str
    title: str = ""
    description: str = ""
    default_roles: List[str] = Field(default_factory=list)
    restrict_access: bool = False


class GroupContentOperationPermission(BaseModel):
    """A permission granting an entity operation on group content"""

    name: str = Field(..., description="Permission string, e.g. 'update own article content'")
    operation: str = Field(..., description="Entity operation, e.g. 'update'")
    ownership: Ownership = Ownership.ANY
    title: str = ""
    entity_type: Optional[str] = None
    bundle: Optional[str] = None

    def applies_to(self, operation: str, is_owner: bool) -> bool:
        """Check if the permission covers the operation for this ownership"""
        if self.operation != operation:
            return False
        if self.ownership == Ownership.ANY:
            return True
        return is_owner


class PermissionCacheEntry(BaseModel):
    """Permissions of one user in one group, as stored in a cache tier"""

    permissions: Set[str] = Field(default_factory=set)
    is_admin: bool = False
    cacheable_metadata: CacheableMetadata = Field(default_factory=CacheableMetadata)
