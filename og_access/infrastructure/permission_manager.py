"""Permission definitions for groups and group content"""

from typing import Dict, List, Mapping, Sequence, Tuple

from og_access.core.models import (ADMINISTER_GROUP_PERMISSION,
                                   UPDATE_GROUP_PERMISSION,
                                   GroupContentOperationPermission,
                                   GroupPermission, Ownership)
from og_access.core.models.role import ADMINISTRATOR, MEMBER, NON_MEMBER
from og_access.infrastructure.logging import get_logger

logger = get_logger(__name__)


class PermissionManager:
    """Provides the permissions available in a group bundle"""

    def __init__(self):
        # (group entity type, group bundle) -> additional permissions
        self._extra_permissions: Dict[Tuple[str, str], List[GroupContentOperationPermission]] = {}

    def get_default_group_permissions(self) -> List[GroupPermission]:
        """Get the permissions that apply to every group"""
        return [
            GroupPermission(
                name="subscribe",
                title="Subscribe to group",
                description="Allow non-members to request membership to a group (approval required).",
                default_roles=[NON_MEMBER],
            ),
            GroupPermission(
                name="subscribe without approval",
                title="Subscribe to group (no approval required)",
                description="Allow non-members to join a group without an approval from group administrators.",
            ),
            GroupPermission(
                name="unsubscribe",
                title="Unsubscribe from group",
                description="Allow members to unsubscribe themselves from a group, removing their membership.",
                default_roles=[MEMBER],
            ),
            GroupPermission(
                name="approve and deny subscription",
                title="Approve and deny subscription",
                description="Users may allow or deny another user's subscription request.",
                default_roles=[ADMINISTRATOR],
            ),
            GroupPermission(
                name="add user",
                title="Add user",
                description="Users may add other users to the group without approval.",
                default_roles=[ADMINISTRATOR],
            ),
            GroupPermission(
                name="manage members",
                title="Manage members",
                description="Users may remove group members and alter member status and roles.",
                default_roles=[ADMINISTRATOR],
                restrict_access=True,
            ),
            GroupPermission(
                name=ADMINISTER_GROUP_PERMISSION,
                title="Administer group",
                description="Manage group members and content in the group.",
                default_roles=[ADMINISTRATOR],
                restrict_access=True,
            ),
            GroupPermission(
                name=UPDATE_GROUP_PERMISSION,
                title="Edit group",
                description="Edit the group. Note: This permission controls only node entity type groups.",
                default_roles=[ADMINISTRATOR],
            ),
        ]

    def get_entity_operation_permissions(
        self,
        entity_type_id: str,
        bundle_id: str,
    ) -> List[GroupContentOperationPermission]:
        """Get the create, update and delete permissions of a group content bundle"""
        permissions = [
            GroupContentOperationPermission(
                name=f"create {bundle_id} content",
                title=f"{bundle_id}: Create new content",
                operation="create",
                ownership=Ownership.ANY,
                entity_type=entity_type_id,
                bundle=bundle_id,
            ),
        ]
        for operation, verb in (("update", "Edit"), ("delete", "Delete")):
            for ownership in (Ownership.OWN, Ownership.ANY):
                permissions.append(
                    GroupContentOperationPermission(
                        name=f"{operation} {ownership.value} {bundle_id} content",
                        title=f"{bundle_id}: {verb} {ownership.value} content",
                        operation=operation,
                        ownership=ownership,
                        entity_type=entity_type_id,
                        bundle=bundle_id,
                    )
                )
        return permissions

    def add_permission(
        self,
        group_entity_type_id: str,
        group_bundle_id: str,
        permission: GroupContentOperationPermission,
    ) -> None:
        """Make an additional entity-operation permission available in a group bundle"""
        self._extra_permissions.setdefault((group_entity_type_id, group_bundle_id), []) \
            .append(permission)
        logger.info(
            "entity_operation_permission_added",
            group_type=group_entity_type_id,
            group_bundle=group_bundle_id,
            permission=permission.name,
            operation=permission.operation,
            ownership=permission.ownership.value,
        )

    def get_default_entity_operation_permissions(
        self,
        group_entity_type_id: str,
        group_bundle_id: str,
        group_content_bundle_ids: Mapping[str, Sequence[str]],
    ) -> List[GroupContentOperationPermission]:
        """
        Get the entity-operation permissions of group content in a group bundle.

        Args:
            group_entity_type_id: Entity type of the group
            group_bundle_id: Bundle of the group
            group_content_bundle_ids: Content bundles keyed by entity type

        Returns:
            Generated permissions for every content bundle, followed by the
            additional permissions registered for the group bundle that match
            one of the content bundles
        """
        permissions = []
        for entity_type_id, bundle_ids in group_content_bundle_ids.items():
            for bundle_id in bundle_ids:
                permissions.extend(self.get_entity_operation_permissions(entity_type_id, bundle_id))

        for permission in self._extra_permissions.get((group_entity_type_id, group_bundle_id), []):
            if permission.entity_type is None:
                permissions.append(permission)
                continue
            bundle_ids = group_content_bundle_ids.get(permission.entity_type)
            if bundle_ids is not None and (permission.bundle is None or permission.bundle in bundle_ids):
                permissions.append(permission)

        return permissions
