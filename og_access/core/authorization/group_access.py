"""Access checks against a group entity"""

from typing import Optional

from og_access.core.authorization.alter import AlterContext, AlterHookRegistry
from og_access.core.authorization.cache import PermissionCache
from og_access.core.config import Settings
from og_access.core.exceptions import ValidationError
from og_access.core.interfaces import (AccountProxyInterface,
                                       GroupManagerInterface,
                                       MembershipManagerInterface)
from og_access.core.models import (ADMINISTER_GROUP_PERMISSION,
                                   UPDATE_GROUP_PERMISSION, AccessResult,
                                   Account, CacheableMetadata, Entity,
                                   PermissionCacheEntry, PermissionTier)
from og_access.core.models.entity import same_id
from og_access.infrastructure.logging import get_logger

logger = get_logger(__name__)

# Cache tag covering every membership, used when a user has none in a group
MEMBERSHIP_LIST_CACHE_TAG = "og_membership_list"


def validate_operation(operation: str) -> None:
    if not isinstance(operation, str) or not operation.strip():
        raise ValidationError(["Operation must be a non-empty string"])


class GroupAccessResolver:
    """Decides whether a user may perform an operation on a group"""

    def __init__(
        self,
        settings: Settings,
        account_proxy: AccountProxyInterface,
        group_manager: GroupManagerInterface,
        membership_manager: MembershipManagerInterface,
        alter_registry: AlterHookRegistry,
        cache: PermissionCache,
    ):
        self.settings = settings
        self.account_proxy = account_proxy
        self.group_manager = group_manager
        self.membership_manager = membership_manager
        self.alter_registry = alter_registry
        self.cache = cache

    def user_access(
        self,
        group: Entity,
        operation: str,
        user: Optional[Account] = None,
        skip_alter: bool = False,
        ignore_admin: bool = False,
    ) -> AccessResult:
        """
        Check if a user has access to an operation on a group.

        Args:
            group: The group entity
            operation: The operation, e.g. 'view' or 'update group'
            user: The user to check, defaults to the session user
            skip_alter: Decide on the raw role permissions, without alter hooks
            ignore_admin: Ignore 'administer group', the group owner and admin roles

        Returns:
            Neutral if the entity is not a group, allowed or forbidden otherwise
        """
        validate_operation(operation)

        # Whether an entity is a group depends on the settings, so they are
        # the minimal caching data.
        cacheable_metadata = CacheableMetadata.create_from_object(self.settings)
        if not self.group_manager.is_group(group.entity_type_id, group.bundle):
            return AccessResult.neutral().add_cacheable_dependency(cacheable_metadata)

        if user is None:
            user = self.account_proxy.get_account()

        # From here on the result varies per user when checking the session user
        if same_id(user.id, self.account_proxy.id()):
            cacheable_metadata.add_cache_contexts(["user"])

        if same_id(user.id, self.settings.superuser_id):
            return self._decide(AccessResult.allowed(), group, user, operation, "superuser") \
                .add_cacheable_dependency(cacheable_metadata)

        if not ignore_admin:
            user_access = AccessResult.allowed_if_has_permission(user, ADMINISTER_GROUP_PERMISSION)
            if user_access.is_allowed():
                return self._decide(user_access, group, user, operation, "administer_group") \
                    .add_cacheable_dependency(cacheable_metadata)

        # Editing a group maps to the special group permission.
        if operation == "edit":
            operation = UPDATE_GROUP_PERMISSION

        if (
            not ignore_admin
            and self.settings.group_manager_full_access
            and user.is_authenticated
            and group.has_owner()
        ):
            # Ownership of the group may change
            cacheable_metadata.add_cacheable_dependency(group)
            if same_id(group.owner_id, user.id):
                return self._decide(AccessResult.allowed(), group, user, operation, "group_owner") \
                    .add_cacheable_dependency(cacheable_metadata)

        pre_alter = self.cache.get(group, user, PermissionTier.PRE_ALTER)
        if pre_alter is None:
            pre_alter = self._aggregate_permissions(group, user, cacheable_metadata)

        if skip_alter:
            entry = pre_alter
        else:
            if not self.cache.has(group, user, PermissionTier.POST_ALTER, operation):
                self._alter_permissions(group, user, operation, pre_alter, cacheable_metadata)
            entry = self.cache.get_or_empty(group, user, PermissionTier.POST_ALTER, operation)

        metadata = entry.cacheable_metadata.merge(cacheable_metadata)
        if (entry.is_admin and not ignore_admin) or operation in entry.permissions:
            reason = "group_admin" if entry.is_admin and not ignore_admin else "group_permission"
            return self._decide(AccessResult.allowed(), group, user, operation, reason) \
                .add_cacheable_dependency(metadata)

        return self._decide(
            AccessResult.forbidden(reason=f"The '{operation}' group permission is required."),
            group,
            user,
            operation,
            "missing_permission",
        ).add_cacheable_dependency(metadata)

    def _aggregate_permissions(
        self,
        group: Entity,
        user: Account,
        cacheable_metadata: CacheableMetadata,
    ) -> PermissionCacheEntry:
        """Collect the permissions of the user's membership roles in the group"""
        metadata = cacheable_metadata.copy_metadata()
        permissions = set()
        is_admin = False

        membership = self.membership_manager.get_membership(user, group)
        if membership is not None:
            metadata.add_cacheable_dependency(membership)
            permissions.update(membership.permissions)
            for role in membership.get_roles():
                # An admin role grants everything, no need to look further.
                if role.is_admin:
                    is_admin = True
                    break
                permissions.update(role.permissions)
        else:
            metadata.add_cache_tags([MEMBERSHIP_LIST_CACHE_TAG])

        return self.cache.set(group, user, PermissionTier.PRE_ALTER, permissions, is_admin, metadata)

    def _alter_permissions(
        self,
        group: Entity,
        user: Account,
        operation: str,
        pre_alter: PermissionCacheEntry,
        cacheable_metadata: CacheableMetadata,
    ) -> PermissionCacheEntry:
        """Let the alter hooks modify a copy of the pre-alter permissions"""
        permissions = set(pre_alter.permissions)
        metadata = pre_alter.cacheable_metadata.merge(cacheable_metadata)
        context = AlterContext(operation=operation, group=group, user=user)

        self.alter_registry.alter(permissions, metadata, context)

        return self.cache.set(
            group,
            user,
            PermissionTier.POST_ALTER,
            permissions,
            pre_alter.is_admin,
            metadata,
            operation=operation,
        )

    def _decide(
        self,
        result: AccessResult,
        group: Entity,
        user: Account,
        operation: str,
        reason: str,
    ) -> AccessResult:
        logger.debug(
            "og_access_decision",
            group_type=group.entity_type_id,
            group_id=group.id,
            user_id=user.id,
            operation=operation,
            result=result.kind.value,
            reason=reason,
        )
        return result
