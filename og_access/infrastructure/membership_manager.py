"""In-memory membership storage"""

from itertools import count
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from og_access.core.exceptions import NotFoundError
from og_access.core.models import (Account, Entity, Membership,
                                   MembershipState, Role)
from og_access.core.models.role import MEMBER
from og_access.infrastructure.logging import get_logger

logger = get_logger(__name__)

MembershipKey = Tuple[str, str, str]

DEFAULT_STATES: Sequence[MembershipState] = (MembershipState.ACTIVE,)


class MembershipManager:
    """Stores memberships of users in groups"""

    def __init__(self):
        self._memberships: Dict[MembershipKey, Membership] = {}
        self._groups: Dict[Tuple[str, str], Entity] = {}
        self._ids = count(1)

    @staticmethod
    def _make_key(user: Account, group: Entity) -> MembershipKey:
        return (str(user.id), group.entity_type_id, str(group.id))

    def create_membership(
        self,
        user: Account,
        group: Entity,
        roles: Optional[Iterable[Role]] = None,
        state: MembershipState = MembershipState.ACTIVE,
        permissions: Iterable[str] = (),
    ) -> Membership:
        """
        Create or replace the membership of a user in a group.

        Args:
            user: The member
            group: The group
            roles: Ordered roles, defaults to the member role of the group bundle
            state: Membership state
            permissions: Permissions granted to the membership directly

        Returns:
            The stored membership
        """
        if roles is None:
            roles = [
                role for role in Role.default_roles(group.entity_type_id, group.bundle)
                if role.name == MEMBER
            ]

        key = self._make_key(user, group)
        existing = self._memberships.get(key)
        membership = Membership(
            id=existing.id if existing else next(self._ids),
            user_id=user.id,
            group_type=group.entity_type_id,
            group_id=group.id,
            state=state,
            roles=list(roles),
            permissions=set(permissions),
        )
        self._memberships[key] = membership
        self._groups[(group.entity_type_id, str(group.id))] = group

        logger.info(
            "membership_saved",
            membership_id=membership.id,
            user_id=user.id,
            group_type=group.entity_type_id,
            group_id=group.id,
            state=state.value,
            roles=[role.name for role in membership.roles],
        )
        return membership

    def get_membership(
        self,
        user: Account,
        group: Entity,
        states: Sequence[MembershipState] = DEFAULT_STATES,
    ) -> Optional[Membership]:
        """Get the membership of a user in a group, if it is in one of the states"""
        membership = self._memberships.get(self._make_key(user, group))
        if membership is None or membership.state not in states:
            return None
        return membership

    def get_memberships(
        self,
        user: Account,
        states: Sequence[MembershipState] = DEFAULT_STATES,
    ) -> List[Membership]:
        return [
            membership for (user_id, _, _), membership in self._memberships.items()
            if user_id == str(user.id) and membership.state in states
        ]

    def get_user_groups(
        self,
        user: Account,
        states: Sequence[MembershipState] = DEFAULT_STATES,
    ) -> Dict[str, List[Entity]]:
        """Get the groups a user is a member of, keyed by group entity type"""
        groups: Dict[str, List[Entity]] = {}
        for membership in self.get_memberships(user, states):
            group = self._groups[(membership.group_type, str(membership.group_id))]
            groups.setdefault(group.entity_type_id, []).append(group)
        return groups

    def delete_membership(self, user: Account, group: Entity) -> Membership:
        """
        Delete the membership of a user in a group.

        Raises:
            NotFoundError: If the user has no membership in the group
        """
        key = self._make_key(user, group)
        if key not in self._memberships:
            raise NotFoundError("Membership", ":".join(key))

        membership = self._memberships.pop(key)
        logger.info(
            "membership_deleted",
            membership_id=membership.id,
            user_id=user.id,
            group_type=group.entity_type_id,
            group_id=group.id,
        )
        return membership
