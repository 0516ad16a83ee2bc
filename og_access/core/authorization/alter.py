"""Registry of callbacks that alter a user's group permissions."""

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Set

from og_access.core.exceptions import NotFoundError, ValidationError
from og_access.core.models import Account, CacheableMetadata, Entity
from og_access.infrastructure.logging import get_logger

logger = get_logger(__name__)

# Alter point invoked before the final group access decision
OG_USER_ACCESS_HOOK = "og_user_access"


@dataclass
class AlterContext:
    """Context passed to permission alter callbacks."""
    operation: str
    group: Entity
    user: Account


AlterCallback = Callable[[Set[str], CacheableMetadata, AlterContext], None]


class AlterHookRegistry:
    """
    Ordered callbacks per alter point.

    Callbacks run in registration order and mutate the permission set and the
    cacheable metadata they receive in place. There is no recursion guard: a
    callback that calls back into the group access check for the same group
    and user will recurse.
    """

    def __init__(self):
        """Initialize alter hook registry."""
        self._callbacks: Dict[str, Dict[str, AlterCallback]] = {}

    def register(
        self,
        callback: AlterCallback,
        name: Optional[str] = None,
        hook: str = OG_USER_ACCESS_HOOK,
    ) -> str:
        """
        Register a callback for an alter point.

        Args:
            callback: Callable receiving (permissions, cacheable_metadata, context)
            name: Unique name within the hook, defaults to the callback's qualified
                name, numbered when another callback already uses it
            hook: Alter point name

        Returns:
            The name the callback was registered under

        Raises:
            ValidationError: If the callback is not callable
            ValueError: If the given name is already registered
        """
        if not callable(callback):
            raise ValidationError([f"Alter callback for '{hook}' is not callable"])

        callbacks = self._callbacks.setdefault(hook, {})
        if name is None:
            # Closures and lambdas share a qualified name, number the repeats
            base = getattr(callback, "__qualname__", repr(callback))
            name = base
            suffix = 2
            while name in callbacks:
                name = f"{base}#{suffix}"
                suffix += 1
        elif name in callbacks:
            raise ValueError(f"Alter callback already registered: {hook}.{name}")

        callbacks[name] = callback
        logger.info("alter_hook_registered", hook=hook, name=name, position=len(callbacks))
        return name

    def unregister(self, name: str, hook: str = OG_USER_ACCESS_HOOK) -> AlterCallback:
        """
        Unregister a callback.

        Raises:
            NotFoundError: If no callback is registered under the name
        """
        callbacks = self._callbacks.get(hook, {})
        if name not in callbacks:
            raise NotFoundError("Alter callback", f"{hook}.{name}")

        callback = callbacks.pop(name)
        logger.info("alter_hook_unregistered", hook=hook, name=name)
        return callback

    def list_callbacks(self, hook: str = OG_USER_ACCESS_HOOK) -> List[str]:
        """List callback names of an alter point in invocation order."""
        return list(self._callbacks.get(hook, {}))

    def has_callbacks(self, hook: str = OG_USER_ACCESS_HOOK) -> bool:
        return bool(self._callbacks.get(hook))

    def alter(
        self,
        permissions: Set[str],
        cacheable_metadata: CacheableMetadata,
        context: AlterContext,
        hook: str = OG_USER_ACCESS_HOOK,
    ) -> None:
        """Run every callback of the alter point, in registration order."""
        for name, callback in list(self._callbacks.get(hook, {}).items()):
            logger.debug(
                "alter_hook_invoked",
                hook=hook,
                name=name,
                operation=context.operation,
            )
            callback(permissions, cacheable_metadata, context)

    def clear(self) -> None:
        """Clear all registered callbacks."""
        self._callbacks.clear()
        logger.info("alter_hooks_cleared")
