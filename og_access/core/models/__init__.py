from og_access.core.models.access_result import AccessResult, AccessResultKind
from og_access.core.models.cacheable import (PERMANENT, CacheableDependency,
                                             CacheableMetadata)
from og_access.core.models.entity import (ANONYMOUS_ID, USER_ENTITY_TYPE,
                                          Account, Entity)
from og_access.core.models.membership import Membership, MembershipState
from og_access.core.models.permission import (ADMINISTER_GROUP_PERMISSION,
                                              UPDATE_GROUP_PERMISSION,
                                              GroupContentOperationPermission,
                                              GroupPermission, Ownership,
                                              PermissionCacheEntry,
                                              PermissionTier)
from og_access.core.models.role import Role, RoleType

__all__ = [
    "AccessResult",
    "AccessResultKind",
    "CacheableMetadata",
    "CacheableDependency",
    "PERMANENT",
    "Entity",
    "Account",
    "ANONYMOUS_ID",
    "USER_ENTITY_TYPE",
    "Membership",
    "MembershipState",
    "Role",
    "RoleType",
    "GroupPermission",
    "GroupContentOperationPermission",
    "Ownership",
    "PermissionTier",
    "PermissionCacheEntry",
    "ADMINISTER_GROUP_PERMISSION",
    "UPDATE_GROUP_PERMISSION",
]
