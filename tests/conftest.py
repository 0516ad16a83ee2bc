"""Pytest configuration and fixtures"""

import pytest

from og_access.core.authorization import AlterHookRegistry, OgAccess
from og_access.core.config import Settings
from og_access.core.models import Account, Entity, Role
from og_access.infrastructure import (CurrentUser, GroupManager,
                                      MembershipManager, PermissionManager)
from og_access.infrastructure.logging import clear_context


@pytest.fixture(autouse=True)
def log_context():
    """Start every test with empty log context"""
    clear_context()
    yield
    clear_context()


@pytest.fixture
def settings() -> Settings:
    """Settings with node:group configured as a group"""
    return Settings(_env_file=None, groups={"node": ["group"]})


@pytest.fixture
def group_manager(settings: Settings) -> GroupManager:
    """Group manager where articles can be posted in groups"""
    manager = GroupManager(settings)
    manager.add_group_content_bundle("node", "article", [("node", "group")])
    return manager


@pytest.fixture
def membership_manager() -> MembershipManager:
    return MembershipManager()


@pytest.fixture
def permission_manager() -> PermissionManager:
    return PermissionManager()


@pytest.fixture
def current_user() -> CurrentUser:
    """Session with an anonymous user"""
    return CurrentUser()


@pytest.fixture
def alter_registry() -> AlterHookRegistry:
    return AlterHookRegistry()


@pytest.fixture
def og_access(
    settings: Settings,
    current_user: CurrentUser,
    group_manager: GroupManager,
    membership_manager: MembershipManager,
    permission_manager: PermissionManager,
    alter_registry: AlterHookRegistry,
) -> OgAccess:
    return OgAccess(
        account_proxy=current_user,
        group_manager=group_manager,
        membership_manager=membership_manager,
        permission_manager=permission_manager,
        settings=settings,
        alter_registry=alter_registry,
    )


@pytest.fixture
def group_owner() -> Account:
    return Account(id=5, username="owner")


@pytest.fixture
def member() -> Account:
    return Account(id=2, username="member")


@pytest.fixture
def outsider() -> Account:
    return Account(id=3, username="outsider")


@pytest.fixture
def group(group_owner: Account) -> Entity:
    return Entity(entity_type_id="node", bundle="group", id=10, owner_id=group_owner.id)


@pytest.fixture
def other_group() -> Entity:
    return Entity(entity_type_id="node", bundle="group", id=11, owner_id=5)


@pytest.fixture
def make_role():
    """Factory for roles of the node:group bundle"""

    def _make_role(name: str, *permissions: str, is_admin: bool = False) -> Role:
        return Role(
            name=name,
            group_type="node",
            group_bundle="group",
            permissions=set(permissions),
            is_admin=is_admin,
        )

    return _make_role
