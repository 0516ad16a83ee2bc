"""Tests for the permission cache"""

from og_access.core.authorization import PermissionCache
from og_access.core.models import CacheableMetadata, PermissionTier


class TestPermissionCache:
    """Test pre-alter and post-alter cache tiers"""

    def test_empty_cache(self, group, member):
        """Test that nothing is cached initially"""
        cache = PermissionCache()

        assert cache.get(group, member, PermissionTier.PRE_ALTER) is None
        assert not cache.has(group, member, PermissionTier.POST_ALTER, "view")
        assert len(cache) == 0

    def test_get_or_empty(self, group, member):
        """Test that missing entries read as an empty permission set"""
        entry = PermissionCache().get_or_empty(group, member, PermissionTier.POST_ALTER, "view")

        assert entry.permissions == set()
        assert entry.is_admin is False

    def test_set_and_get(self, group, member):
        """Test storing pre-alter permissions"""
        cache = PermissionCache()
        metadata = CacheableMetadata(tags={"config:og.settings"})

        cache.set(group, member, PermissionTier.PRE_ALTER, ["view", "view", "post"], False, metadata)

        entry = cache.get(group, member, PermissionTier.PRE_ALTER)
        assert entry.permissions == {"view", "post"}
        assert entry.cacheable_metadata.tags == {"config:og.settings"}

    def test_pre_alter_ignores_operation(self, group, member):
        """Test that the pre-alter tier is shared by every operation"""
        cache = PermissionCache()
        cache.set(group, member, PermissionTier.PRE_ALTER, ["view"], False, CacheableMetadata(), operation="view")

        assert cache.has(group, member, PermissionTier.PRE_ALTER)
        assert cache.has(group, member, PermissionTier.PRE_ALTER, "delete")

    def test_post_alter_per_operation(self, group, member):
        """Test that the post-alter tier is kept per operation"""
        cache = PermissionCache()
        cache.set(group, member, PermissionTier.POST_ALTER, ["view"], False, CacheableMetadata(), operation="view")

        assert cache.has(group, member, PermissionTier.POST_ALTER, "view")
        assert not cache.has(group, member, PermissionTier.POST_ALTER, "delete")
        assert not cache.has(group, member, PermissionTier.PRE_ALTER)

    def test_tiers_are_separate(self, group, member):
        """Test that tiers never overwrite each other"""
        cache = PermissionCache()
        cache.set(group, member, PermissionTier.PRE_ALTER, ["view"], False, CacheableMetadata())
        cache.set(group, member, PermissionTier.POST_ALTER, ["post"], True, CacheableMetadata(), operation="post")

        assert cache.get(group, member, PermissionTier.PRE_ALTER).permissions == {"view"}
        assert cache.get(group, member, PermissionTier.POST_ALTER, "post").is_admin is True
        assert len(cache) == 2

    def test_keys_include_group_and_user(self, group, other_group, member, outsider):
        """Test that entries are scoped to one group and one user"""
        cache = PermissionCache()
        cache.set(group, member, PermissionTier.PRE_ALTER, ["view"], False, CacheableMetadata())

        assert not cache.has(other_group, member, PermissionTier.PRE_ALTER)
        assert not cache.has(group, outsider, PermissionTier.PRE_ALTER)

    def test_stored_metadata_is_a_copy(self, group, member):
        """Test that later changes to the metadata do not leak into the cache"""
        cache = PermissionCache()
        metadata = CacheableMetadata()
        cache.set(group, member, PermissionTier.PRE_ALTER, [], False, metadata)

        metadata.add_cache_tags(["late"])

        assert cache.get(group, member, PermissionTier.PRE_ALTER).cacheable_metadata.tags == set()

    def test_reset(self, group, member):
        """Test clearing the cache"""
        cache = PermissionCache()
        cache.set(group, member, PermissionTier.PRE_ALTER, ["view"], False, CacheableMetadata())
        cache.set(group, member, PermissionTier.POST_ALTER, ["view"], False, CacheableMetadata(), operation="view")

        cache.reset()

        assert len(cache) == 0
        assert cache.get(group, member, PermissionTier.PRE_ALTER) is None
