"""Access result returned by every access check"""

from enum import Enum
from typing import Any, Iterable, List, Optional

from pydantic import BaseModel, Field

from og_access.core.models.cacheable import CacheableMetadata


class AccessResultKind(str, Enum):
    """Outcome of an access check"""

    ALLOWED = "allowed"
    FORBIDDEN = "forbidden"
    NEUTRAL = "neutral"


class AccessResult(BaseModel):
    """Allowed, forbidden or neutral, with the cacheability it depends on"""

    kind: AccessResultKind
    cacheability: CacheableMetadata = Field(default_factory=CacheableMetadata)
    reason: Optional[str] = None

    @classmethod
    def allowed(cls) -> "AccessResult":
        """Create an allowed result"""
        return cls(kind=AccessResultKind.ALLOWED)

    @classmethod
    def forbidden(cls, reason: Optional[str] = None) -> "AccessResult":
        """Create a forbidden result"""
        return cls(kind=AccessResultKind.FORBIDDEN, reason=reason)

    @classmethod
    def neutral(cls, reason: Optional[str] = None) -> "AccessResult":
        """Create a neutral result"""
        return cls(kind=AccessResultKind.NEUTRAL, reason=reason)

    @classmethod
    def allowed_if_has_permission(cls, account: Any, permission: str) -> "AccessResult":
        """Allowed if the account holds a global permission, neutral otherwise"""
        if account.has_permission(permission):
            result = cls.allowed()
        else:
            result = cls.neutral(reason=f"The '{permission}' permission is required.")
        return result.add_cache_contexts(["user.permissions"])

    def is_allowed(self) -> bool:
        return self.kind == AccessResultKind.ALLOWED

    def is_forbidden(self) -> bool:
        return self.kind == AccessResultKind.FORBIDDEN

    def is_neutral(self) -> bool:
        return self.kind == AccessResultKind.NEUTRAL

    # Cacheable dependency interface

    @property
    def cache_tags(self) -> List[str]:
        return self.cacheability.cache_tags

    @property
    def cache_contexts(self) -> List[str]:
        return self.cacheability.cache_contexts

    @property
    def cache_max_age(self) -> int:
        return self.cacheability.cache_max_age

    def add_cache_tags(self, tags: Iterable[str]) -> "AccessResult":
        self.cacheability.add_cache_tags(tags)
        return self

    def add_cache_contexts(self, contexts: Iterable[str]) -> "AccessResult":
        self.cacheability.add_cache_contexts(contexts)
        return self

    def add_cacheable_dependency(self, dependency: object) -> "AccessResult":
        self.cacheability.add_cacheable_dependency(dependency)
        return self

    def inherit_cacheability(self, other: "AccessResult") -> "AccessResult":
        """Merge the cacheability of another result into this one"""
        return self.add_cacheable_dependency(other)
