"""Access service for groups and group content"""

from typing import Optional

from og_access.core.authorization.alter import AlterHookRegistry
from og_access.core.authorization.cache import PermissionCache
from og_access.core.authorization.entity_access import EntityAccessResolver
from og_access.core.authorization.group_access import GroupAccessResolver
from og_access.core.authorization.operation_access import \
    EntityOperationPermissionResolver
from og_access.core.config import Settings, get_settings
from og_access.core.interfaces import (AccountProxyInterface,
                                       GroupManagerInterface,
                                       MembershipManagerInterface,
                                       PermissionManagerInterface)
from og_access.core.models import AccessResult, Account, Entity
from og_access.infrastructure.logging import get_logger

logger = get_logger(__name__)


class OgAccess:
    """
    Determines if users have access to groups and group content.

    One instance owns one permission cache. Hosts serving requests from
    several workers create one instance per worker, or pass a cache whose
    lifetime matches the request.

    Access checks return results and never raise for missing data. The one
    exception is a programming error: every check raises ValidationError
    when the operation is not a non-empty string.
    """

    def __init__(
        self,
        account_proxy: AccountProxyInterface,
        group_manager: GroupManagerInterface,
        membership_manager: MembershipManagerInterface,
        permission_manager: PermissionManagerInterface,
        settings: Optional[Settings] = None,
        alter_registry: Optional[AlterHookRegistry] = None,
        cache: Optional[PermissionCache] = None,
    ):
        self.settings = settings or get_settings()
        self.alter_registry = alter_registry or AlterHookRegistry()
        self.cache = cache if cache is not None else PermissionCache()

        self.group_access = GroupAccessResolver(
            settings=self.settings,
            account_proxy=account_proxy,
            group_manager=group_manager,
            membership_manager=membership_manager,
            alter_registry=self.alter_registry,
            cache=self.cache,
        )
        self.operation_access = EntityOperationPermissionResolver(
            account_proxy=account_proxy,
            membership_manager=membership_manager,
            permission_manager=permission_manager,
        )
        self.entity_access = EntityAccessResolver(
            group_manager=group_manager,
            membership_manager=membership_manager,
            group_access=self.group_access,
            operation_access=self.operation_access,
        )

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

        Raises:
            ValidationError: If the operation is empty or not a string
        """
        return self.group_access.user_access(
            group, operation, user, skip_alter=skip_alter, ignore_admin=ignore_admin
        )

    def user_access_entity(
        self,
        operation: str,
        entity: Entity,
        user: Optional[Account] = None,
    ) -> AccessResult:
        """
        Check if a user may perform an operation on a group or group content entity.

        Raises:
            ValidationError: If the operation is empty or not a string
        """
        return self.entity_access.user_access_entity(operation, entity, user)

    def user_access_group_content_entity_operations(
        self,
        operation: str,
        group_entity: Entity,
        group_content_entity: Entity,
        user: Optional[Account] = None,
    ) -> AccessResult:
        """
        Check access to an entity operation on group content through a group.

        Raises:
            ValidationError: If the operation is empty or not a string
        """
        return self.operation_access.user_access_group_content_entity_operations(
            operation, group_entity, group_content_entity, user
        )

    def reset(self) -> None:
        """Clear the permission cache"""
        self.cache.reset()
        logger.info("og_access_reset")
