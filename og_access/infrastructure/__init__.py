from og_access.infrastructure.current_user import CurrentUser
from og_access.infrastructure.group_manager import GroupManager
from og_access.infrastructure.logging import get_logger, setup_logging
from og_access.infrastructure.membership_manager import MembershipManager
from og_access.infrastructure.permission_manager import PermissionManager

__all__ = [
    "CurrentUser",
    "GroupManager",
    "MembershipManager",
    "PermissionManager",
    "get_logger",
    "setup_logging",
]
