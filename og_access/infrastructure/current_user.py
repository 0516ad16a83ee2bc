from typing import Optional

from og_access.core.models import Account
from og_access.core.models.entity import EntityId
from og_access.infrastructure.logging import bind_context


class CurrentUser:
    """Holds the account of the current session, anonymous until one is set"""

    def __init__(self, account: Optional[Account] = None):
        self._account = account or Account.anonymous()

    def set_account(self, account: Account) -> None:
        self._account = account
        # Log lines of this context carry the session account
        bind_context(session_user_id=account.id)

    def get_account(self) -> Account:
        return self._account

    def id(self) -> EntityId:
        return self._account.id
