from typing import List, Optional, Set, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

EntityId = Union[int, str]

# Entity type of accounts, whose groups come from memberships
USER_ENTITY_TYPE = "user"

ANONYMOUS_ID = 0


class Entity(BaseModel):
    """Minimal view of a stored entity, enough to make access decisions"""

    model_config = ConfigDict(str_strip_whitespace=True)

    entity_type_id: str = Field(..., min_length=1, description="Entity type, e.g. 'node'")
    bundle: str = Field(..., min_length=1, description="Bundle, e.g. 'article'")
    id: EntityId = Field(..., description="Entity identifier")
    owner_id: Optional[EntityId] = Field(
        None, description="Owner account ID, None for entities without an owner"
    )
    label: Optional[str] = Field(None, description="Human readable label")

    def has_owner(self) -> bool:
        return self.owner_id is not None

    @property
    def cache_tags(self) -> List[str]:
        return [f"{self.entity_type_id}:{self.id}"]

    @property
    def cache_contexts(self) -> List[str]:
        return []

    @property
    def cache_max_age(self) -> int:
        return -1

    @property
    def list_cache_tags(self) -> List[str]:
        return [f"{self.entity_type_id}_list"]


class Account(Entity):
    """A user account, which is itself an entity of type 'user'"""

    entity_type_id: str = USER_ENTITY_TYPE
    bundle: str = USER_ENTITY_TYPE
    id: EntityId = ANONYMOUS_ID
    username: Optional[str] = Field(None, description="Account name")
    permissions: Set[str] = Field(
        default_factory=set, description="Site-wide permissions of the account"
    )

    @field_validator("entity_type_id")
    @classmethod
    def validate_entity_type(cls, v: str) -> str:
        if v != USER_ENTITY_TYPE:
            raise ValueError(f"Accounts must have entity type '{USER_ENTITY_TYPE}'")
        return v

    @property
    def is_authenticated(self) -> bool:
        return not same_id(self.id, ANONYMOUS_ID)

    @property
    def is_anonymous(self) -> bool:
        return not self.is_authenticated

    def has_permission(self, permission: str) -> bool:
        return permission in self.permissions

    @classmethod
    def anonymous(cls) -> "Account":
        return cls(id=ANONYMOUS_ID, username="anonymous")


def same_id(a: Optional[EntityId], b: Optional[EntityId]) -> bool:
    """Compare entity IDs that may be given as int or str"""
    if a is None or b is None:
        return False
    return str(a) == str(b)
