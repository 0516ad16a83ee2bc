from og_access.core.authorization.alter import (OG_USER_ACCESS_HOOK,
                                                AlterContext,
                                                AlterHookRegistry)
from og_access.core.authorization.cache import PermissionCache
from og_access.core.authorization.entity_access import EntityAccessResolver
from og_access.core.authorization.group_access import GroupAccessResolver
from og_access.core.authorization.operation_access import \
    EntityOperationPermissionResolver
from og_access.core.authorization.service import OgAccess

__all__ = [
    "OG_USER_ACCESS_HOOK",
    "AlterContext",
    "AlterHookRegistry",
    "PermissionCache",
    "GroupAccessResolver",
    "EntityAccessResolver",
    "EntityOperationPermissionResolver",
    "OgAccess",
]
