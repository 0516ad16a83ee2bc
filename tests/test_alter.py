"""Tests for permission alter hooks"""

from unittest.mock import Mock

import pytest

from og_access.core.authorization import (OG_USER_ACCESS_HOOK, AlterContext,
                                          AlterHookRegistry)
from og_access.core.exceptions import NotFoundError, ValidationError
from og_access.core.models import CacheableMetadata, Entity, PermissionTier


class TestAlterHookRegistry:
    """Test registering and invoking alter callbacks"""

    def test_callbacks_run_in_registration_order(self):
        """Test that callbacks see each other's changes in order"""
        registry = AlterHookRegistry()
        calls = []

        def first(permissions, metadata, context):
            calls.append("first")
            permissions.add("from first")

        def second(permissions, metadata, context):
            calls.append("second")
            assert "from first" in permissions
            permissions.discard("view")

        registry.register(first)
        registry.register(second)

        permissions = {"view"}
        context = AlterContext(operation="view", group=Mock(), user=Mock())
        registry.alter(permissions, CacheableMetadata(), context)

        assert calls == ["first", "second"]
        assert permissions == {"from first"}
        assert registry.list_callbacks() == [first.__qualname__, second.__qualname__]

    def test_register_with_name(self):
        """Test registering under an explicit name"""
        registry = AlterHookRegistry()

        name = registry.register(lambda *args: None, name="grant_editors")

        assert name == "grant_editors"
        assert registry.has_callbacks(OG_USER_ACCESS_HOOK)

    def test_duplicate_name_rejected(self):
        """Test that names are unique per hook"""
        registry = AlterHookRegistry()
        registry.register(lambda *args: None, name="grant")

        with pytest.raises(ValueError):
            registry.register(lambda *args: None, name="grant")

        # Other hooks have their own names
        registry.register(lambda *args: None, name="grant", hook="other_hook")

    def test_unnamed_closures_all_run(self):
        """Test that closures from one factory register side by side"""
        registry = AlterHookRegistry()

        def make_granter(permission):
            def grant(permissions, metadata, context):
                permissions.add(permission)
            return grant

        first = registry.register(make_granter("a"))
        second = registry.register(make_granter("b"))
        third = registry.register(lambda permissions, *args: permissions.add("c"))
        fourth = registry.register(lambda permissions, *args: permissions.add("d"))

        assert len({first, second, third, fourth}) == 4
        assert second == f"{first}#2"

        permissions = set()
        registry.alter(permissions, CacheableMetadata(), AlterContext("view", Mock(), Mock()))

        assert permissions == {"a", "b", "c", "d"}

    def test_non_callable_rejected(self):
        """Test that only callables can be registered"""
        registry = AlterHookRegistry()

        with pytest.raises(ValidationError):
            registry.register("not a callback")

    def test_unregister(self):
        """Test unregistering a callback"""
        registry = AlterHookRegistry()
        callback = Mock()
        registry.register(callback, name="mock")

        assert registry.unregister("mock") is callback
        assert registry.list_callbacks() == []

        with pytest.raises(NotFoundError):
            registry.unregister("mock")

    def test_clear(self):
        """Test clearing every hook"""
        registry = AlterHookRegistry()
        registry.register(Mock(), name="a")
        registry.register(Mock(), name="b", hook="other_hook")

        registry.clear()

        assert not registry.has_callbacks()
        assert not registry.has_callbacks("other_hook")

    def test_callback_errors_propagate(self):
        """Test that a failing callback is not swallowed"""
        registry = AlterHookRegistry()
        registry.register(Mock(side_effect=RuntimeError("boom")), name="broken")

        with pytest.raises(RuntimeError):
            registry.alter(set(), CacheableMetadata(), AlterContext("view", Mock(), Mock()))


class TestAlterDuringAccessCheck:
    """Test alter hooks invoked by the group access check"""

    def test_callback_grants_permission(self, og_access, alter_registry, group, member):
        """Test that an added permission allows the operation"""

        def grant_view(permissions, metadata, context):
            permissions.add("view group")

        alter_registry.register(grant_view)

        assert og_access.user_access(group, "view group", member).is_allowed()

    def test_callback_revokes_permission(self, og_access, alter_registry, membership_manager,
                                         group, member, make_role):
        """Test that a removed permission denies the operation"""
        membership_manager.create_membership(member, group, roles=[make_role("viewer", "view group")])

        def revoke_view(permissions, metadata, context):
            permissions.discard("view group")

        alter_registry.register(revoke_view)

        assert og_access.user_access(group, "view group", member).is_forbidden()

        # The raw permissions are kept apart from the altered ones
        pre_alter = og_access.cache.get(group, member, PermissionTier.PRE_ALTER)
        assert pre_alter.permissions == {"view group"}

    def test_callback_receives_context(self, og_access, alter_registry, group, member):
        """Test the context passed to callbacks"""
        callback = Mock()
        alter_registry.register(callback, name="spy")

        og_access.user_access(group, "edit", member)

        permissions, metadata, context = callback.call_args.args
        assert isinstance(permissions, set)
        assert isinstance(metadata, CacheableMetadata)
        assert context.operation == "update group"
        assert context.group == group
        assert context.user == member

    def test_callback_cacheability_is_kept(self, og_access, alter_registry, group, member):
        """Test that metadata added by callbacks ends up in the result"""

        def depend_on_config(permissions, metadata, context):
            metadata.add_cache_tags(["config:custom.settings"])

        alter_registry.register(depend_on_config)

        result = og_access.user_access(group, "view group", member)

        assert "config:custom.settings" in result.cache_tags

    def test_alter_runs_once_per_operation(self, og_access, alter_registry, group, member):
        """Test that altered permissions are cached per operation"""
        callback = Mock()
        alter_registry.register(callback, name="spy")

        og_access.user_access(group, "view group", member)
        og_access.user_access(group, "view group", member)
        assert callback.call_count == 1

        og_access.user_access(group, "post", member)
        assert callback.call_count == 2

        og_access.reset()
        og_access.user_access(group, "view group", member)
        assert callback.call_count == 3

    def test_skip_alter(self, og_access, alter_registry, membership_manager, group, member, make_role):
        """Test that skip_alter decides on the raw role permissions"""
        membership_manager.create_membership(member, group, roles=[make_role("viewer", "view group")])
        callback = Mock(side_effect=lambda permissions, *args: permissions.clear())
        alter_registry.register(callback, name="revoke_all")

        assert og_access.user_access(group, "view group", member, skip_alter=True).is_allowed()
        assert callback.call_count == 0

        assert og_access.user_access(group, "view group", member).is_forbidden()
        assert callback.call_count == 1

    def test_admin_flag_survives_alter(self, og_access, alter_registry, membership_manager,
                                       group, member, make_role):
        """Test that group admins keep access even if callbacks clear permissions"""
        membership_manager.create_membership(member, group, roles=[make_role("administrator", is_admin=True)])
        alter_registry.register(lambda permissions, *args: permissions.clear(), name="revoke_all")

        assert og_access.user_access(group, "view group", member).is_allowed()

    def test_not_invoked_for_non_groups(self, og_access, alter_registry, member):
        """Test that callbacks only run for group entities"""
        callback = Mock()
        alter_registry.register(callback, name="spy")

        og_access.user_access(Entity(entity_type_id="node", bundle="page", id=1), "view", member)

        callback.assert_not_called()
