"""Group-scoped access control for groups and group content."""

from og_access.core.authorization.service import OgAccess
from og_access.core.models import AccessResult, CacheableMetadata

__version__ = "0.1.0"

__all__ = ["OgAccess", "AccessResult", "CacheableMetadata"]
