"""In-memory permission cache scoped to the lifetime of one OgAccess instance"""

from typing import Dict, Iterable, Optional, Tuple

from og_access.core.models import (Account, CacheableMetadata, Entity,
                                   PermissionCacheEntry, PermissionTier)
from og_access.infrastructure.logging import get_logger

logger = get_logger(__name__)

CacheKey = Tuple[str, str, str, PermissionTier]


class PermissionCache:
    """
    Two-tier memoization of a user's permissions in a group.

    The pre-alter tier holds the permissions aggregated from the membership
    roles and does not depend on the operation. The post-alter tier holds the
    permissions after the alter hooks ran, one entry per operation, since the
    hooks receive the operation in their context.

    Entries live until reset() is called. Nothing is persisted.
    """

    def __init__(self):
        self._entries: Dict[CacheKey, Dict[Optional[str], PermissionCacheEntry]] = {}

    @staticmethod
    def _make_key(group: Entity, user: Account, tier: PermissionTier) -> CacheKey:
        return (group.entity_type_id, str(group.id), str(user.id), PermissionTier(tier))

    @staticmethod
    def _slot(tier: PermissionTier, operation: Optional[str]) -> Optional[str]:
        # The pre-alter tier is operation independent
        return operation if tier == PermissionTier.POST_ALTER else None

    def get(
        self,
        group: Entity,
        user: Account,
        tier: PermissionTier,
        operation: Optional[str] = None,
    ) -> Optional[PermissionCacheEntry]:
        """Get a cached entry, or None if nothing was stored yet"""
        entries = self._entries.get(self._make_key(group, user, tier))
        if not entries:
            return None
        return entries.get(self._slot(tier, operation))

    def get_or_empty(
        self,
        group: Entity,
        user: Account,
        tier: PermissionTier,
        operation: Optional[str] = None,
    ) -> PermissionCacheEntry:
        """Get a cached entry, defaulting to an empty permission set"""
        entry = self.get(group, user, tier, operation)
        return entry if entry is not None else PermissionCacheEntry()

    def has(
        self,
        group: Entity,
        user: Account,
        tier: PermissionTier,
        operation: Optional[str] = None,
    ) -> bool:
        return self.get(group, user, tier, operation) is not None

    def set(
        self,
        group: Entity,
        user: Account,
        tier: PermissionTier,
        permissions: Iterable[str],
        is_admin: bool,
        cacheable_metadata: CacheableMetadata,
        operation: Optional[str] = None,
    ) -> PermissionCacheEntry:
        """Store the permissions of a user in a group"""
        entry = PermissionCacheEntry(
            permissions=set(permissions),
            is_admin=is_admin,
            cacheable_metadata=cacheable_metadata.copy_metadata(),
        )
        key = self._make_key(group, user, tier)
        self._entries.setdefault(key, {})[self._slot(tier, operation)] = entry

        logger.debug(
            "permission_cache_set",
            group_type=group.entity_type_id,
            group_id=group.id,
            user_id=user.id,
            tier=key[3].value,
            operation=operation,
            is_admin=is_admin,
            permission_count=len(entry.permissions),
        )
        return entry

    def reset(self) -> None:
        """Clear every cached entry"""
        self._entries.clear()
        logger.debug("permission_cache_reset")

    def __len__(self) -> int:
        return sum(len(entries) for entries in self._entries.values())
