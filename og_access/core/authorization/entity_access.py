"""Access checks for entities that are groups, group content, or both"""

from typing import Optional

from og_access.core.authorization.group_access import (GroupAccessResolver,
                                                       validate_operation)
from og_access.core.authorization.operation_access import \
    EntityOperationPermissionResolver
from og_access.core.interfaces import (GroupManagerInterface, GroupMap,
                                       MembershipManagerInterface)
from og_access.core.models import (USER_ENTITY_TYPE, AccessResult, Account,
                                   Entity)


class EntityAccessResolver:
    """Extends group access checks to arbitrary entities"""

    def __init__(
        self,
        group_manager: GroupManagerInterface,
        membership_manager: MembershipManagerInterface,
        group_access: GroupAccessResolver,
        operation_access: EntityOperationPermissionResolver,
    ):
        self.group_manager = group_manager
        self.membership_manager = membership_manager
        self.group_access = group_access
        self.operation_access = operation_access

    def _get_groups(self, entity: Entity) -> GroupMap:
        # Users belong to groups through their memberships
        if entity.entity_type_id == USER_ENTITY_TYPE:
            return self.membership_manager.get_user_groups(entity)
        return self.group_manager.get_groups(entity)

    def user_access_entity(
        self,
        operation: str,
        entity: Entity,
        user: Optional[Account] = None,
    ) -> AccessResult:
        """Check if a user may perform an operation on an entity"""
        validate_operation(operation)
        result = AccessResult.neutral()

        entity_type_id = entity.entity_type_id
        bundle = entity.bundle

        if self.group_manager.is_group(entity_type_id, bundle):
            user_access = self.group_access.user_access(entity, operation, user)
            if user_access.is_allowed():
                return user_access

            # The entity may also be content of another group that allows the
            # operation, so remember the denial instead of returning it.
            result = AccessResult.forbidden(reason=user_access.reason) \
                .inherit_cacheability(user_access)

        is_group_content = self.group_manager.is_group_content(entity_type_id, bundle)
        cache_tags = entity.list_cache_tags

        groups = self._get_groups(entity)

        if is_group_content and any(groups.values()):
            forbidden = AccessResult.forbidden().add_cache_tags(cache_tags) \
                .inherit_cacheability(result)
            for entity_groups in groups.values():
                for group in entity_groups:
                    operation_access = self.operation_access \
                        .user_access_group_content_entity_operations(operation, group, entity, user)
                    if operation_access.is_allowed():
                        return operation_access.add_cache_tags(cache_tags)

                    user_access = self.group_access.user_access(group, operation, user)
                    if user_access.is_allowed():
                        return user_access.add_cache_tags(cache_tags)

                    forbidden.inherit_cacheability(operation_access) \
                        .inherit_cacheability(user_access)
            return forbidden

        # Either not group content, or orphaned group content
        if is_group_content:
            result.add_cache_tags(cache_tags)

        return result
