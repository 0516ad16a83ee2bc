"""Access checks for entity operations on group content"""

from typing import List, Optional

from og_access.core.authorization.group_access import validate_operation
from og_access.core.interfaces import (AccountProxyInterface,
                                       MembershipManagerInterface,
                                       PermissionManagerInterface)
from og_access.core.models import (AccessResult, Account, CacheableMetadata,
                                   Entity, GroupContentOperationPermission)
from og_access.core.models.entity import same_id
from og_access.infrastructure.logging import get_logger

logger = get_logger(__name__)


class EntityOperationPermissionResolver:
    """Maps entity operations on group content to group permissions"""

    def __init__(
        self,
        account_proxy: AccountProxyInterface,
        membership_manager: MembershipManagerInterface,
        permission_manager: PermissionManagerInterface,
    ):
        self.account_proxy = account_proxy
        self.membership_manager = membership_manager
        self.permission_manager = permission_manager

    def get_applicable_permissions(
        self,
        operation: str,
        group_entity: Entity,
        group_content_entity: Entity,
        user: Account,
    ) -> List[GroupContentOperationPermission]:
        """Get the permissions granting the operation, given the user's ownership"""
        is_owner = group_content_entity.has_owner() and same_id(
            group_content_entity.owner_id, user.id
        )
        permissions = self.permission_manager.get_default_entity_operation_permissions(
            group_entity.entity_type_id,
            group_entity.bundle,
            {group_content_entity.entity_type_id: [group_content_entity.bundle]},
        )
        return [
            permission for permission in permissions
            if permission.applies_to(operation, is_owner)
        ]

    def user_access_group_content_entity_operations(
        self,
        operation: str,
        group_entity: Entity,
        group_content_entity: Entity,
        user: Optional[Account] = None,
    ) -> AccessResult:
        """
        Check access to an entity operation on a group content entity.

        Access is granted when the user's membership in the group holds one
        of the permissions mapped to the operation. Permissions for 'own'
        content only count when the user owns the content entity.

        Args:
            operation: The entity operation, e.g. 'update'
            group_entity: The group to read the permissions from
            group_content_entity: The entity the operation is requested on
            user: The user to check, defaults to the session user

        Returns:
            Allowed if the membership grants the operation, neutral otherwise
        """
        validate_operation(operation)

        if user is None:
            user = self.account_proxy.get_account()

        permissions = self.get_applicable_permissions(
            operation, group_entity, group_content_entity, user
        )

        cacheable_metadata = CacheableMetadata.create_from_object(group_content_entity)
        if same_id(user.id, self.account_proxy.id()):
            cacheable_metadata.add_cache_contexts(["user"])

        membership = self.membership_manager.get_membership(user, group_entity)
        if membership is not None:
            cacheable_metadata.add_cacheable_dependency(membership)
            for permission in permissions:
                if membership.has_permission(permission.name):
                    logger.debug(
                        "og_entity_operation_allowed",
                        group_type=group_entity.entity_type_id,
                        group_id=group_entity.id,
                        entity_type=group_content_entity.entity_type_id,
                        entity_id=group_content_entity.id,
                        user_id=user.id,
                        operation=operation,
                        permission=permission.name,
                    )
                    return AccessResult.allowed().add_cacheable_dependency(cacheable_metadata)

        return AccessResult.neutral().add_cacheable_dependency(cacheable_metadata)
