"""Cacheability metadata attached to access results"""

from typing import Iterable, List, Protocol, Set, runtime_checkable

from pydantic import BaseModel, Field

# Max-age value meaning "cache forever"
PERMANENT = -1


@runtime_checkable
class CacheableDependency(Protocol):
    """Anything a computed result can depend on"""

    @property
    def cache_tags(self) -> List[str]: ...

    @property
    def cache_contexts(self) -> List[str]: ...

    @property
    def cache_max_age(self) -> int: ...


def merge_max_ages(a: int, b: int) -> int:
    """Merge two max-ages, the most restrictive one wins"""
    if a == PERMANENT:
        return b
    if b == PERMANENT:
        return a
    return min(a, b)


class CacheableMetadata(BaseModel):
    """Tags, contexts and max-age describing what a result depends on"""

    tags: Set[str] = Field(default_factory=set, description="Cache tags")
    contexts: Set[str] = Field(default_factory=set, description="Cache contexts")
    max_age: int = Field(default=PERMANENT, description="Max-age in seconds, -1 = permanent")

    @property
    def cache_tags(self) -> List[str]:
        return sorted(self.tags)

    @property
    def cache_contexts(self) -> List[str]:
        return sorted(self.contexts)

    @property
    def cache_max_age(self) -> int:
        return self.max_age

    def add_cache_tags(self, tags: Iterable[str]) -> "CacheableMetadata":
        self.tags.update(tags)
        return self

    def add_cache_contexts(self, contexts: Iterable[str]) -> "CacheableMetadata":
        self.contexts.update(contexts)
        return self

    def merge_cache_max_age(self, max_age: int) -> "CacheableMetadata":
        self.max_age = merge_max_ages(self.max_age, max_age)
        return self

    def add_cacheable_dependency(self, dependency: object) -> "CacheableMetadata":
        """
        Add the cacheability of another object to this one.

        An object that cannot describe its own cacheability makes the result
        uncacheable.
        """
        if isinstance(dependency, CacheableDependency):
            self.add_cache_tags(dependency.cache_tags)
            self.add_cache_contexts(dependency.cache_contexts)
            self.merge_cache_max_age(dependency.cache_max_age)
        else:
            self.max_age = 0
        return self

    def merge(self, other: "CacheableMetadata") -> "CacheableMetadata":
        """Return a new metadata object combining both"""
        return self.copy_metadata().add_cacheable_dependency(other)

    def copy_metadata(self) -> "CacheableMetadata":
        return self.model_copy(deep=True)

    @classmethod
    def create_from_object(cls, dependency: object) -> "CacheableMetadata":
        return cls().add_cacheable_dependency(dependency)
