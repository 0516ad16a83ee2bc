"""Collaborator contracts consumed by the access checks"""

from typing import Dict, List, Mapping, Optional, Protocol, Sequence

from og_access.core.models import (Account, Entity,
                                   GroupContentOperationPermission, Membership)

# Groups keyed by entity type, in the order the collaborator returns them
GroupMap = Dict[str, List[Entity]]


class AccountProxyInterface(Protocol):
    """Gives access to the account of the current session"""

    def get_account(self) -> Account: ...

    def id(self) -> object: ...


class GroupManagerInterface(Protocol):
    """Knows which bundles are groups or group content"""

    def is_group(self, entity_type_id: str, bundle: str) -> bool: ...

    def is_group_content(self, entity_type_id: str, bundle: str) -> bool: ...

    def get_groups(self, entity: Entity) -> GroupMap: ...


class MembershipManagerInterface(Protocol):
    """Loads memberships of users in groups"""

    def get_membership(self, user: Account, group: Entity) -> Optional[Membership]: ...

    def get_user_groups(self, user: Account) -> GroupMap: ...


class PermissionManagerInterface(Protocol):
    """Provides the entity-operation permissions of group bundles"""

    def get_default_entity_operation_permissions(
        self,
        group_entity_type_id: str,
        group_bundle_id: str,
        group_content_bundle_ids: Mapping[str, Sequence[str]],
    ) -> List[GroupContentOperationPermission]: ...
