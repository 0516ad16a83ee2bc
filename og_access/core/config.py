from typing import Dict, List, Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Cache tag carried by every result that depends on the group configuration
CONFIG_NAME = "og.settings"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="OG_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = Field(default="og-access", description="Application name")
    environment: Literal["development", "staging", "production"] = Field(
        default="development", description="Environment mode"
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Logging level"
    )
    log_format: Literal["json", "console"] = Field(
        default="console",
        description="Log output format, always json in production",
        validate_default=True,
    )

    # Access settings
    group_manager_full_access: bool = Field(
        default=False,
        description="Grant the owner of a group every permission in that group",
    )
    superuser_id: int = Field(
        default=1, description="Account ID that bypasses every group access check"
    )
    groups: Dict[str, List[str]] = Field(
        default_factory=dict,
        description="Group bundles keyed by entity type, e.g. {'node': ['article']}",
    )

    @field_validator("log_format", mode="before")
    @classmethod
    def validate_log_format(cls, v, info):
        if info.data.get("environment") == "production":
            return "json"
        return v

    @field_validator("groups")
    @classmethod
    def dedupe_group_bundles(cls, v: Dict[str, List[str]]) -> Dict[str, List[str]]:
        return {
            entity_type: list(dict.fromkeys(bundles))
            for entity_type, bundles in v.items()
        }

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    # Cacheable dependency interface

    @property
    def cache_tags(self) -> List[str]:
        return [f"config:{CONFIG_NAME}"]

    @property
    def cache_contexts(self) -> List[str]:
        return []

    @property
    def cache_max_age(self) -> int:
        return -1


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
