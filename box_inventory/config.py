"""Configuration management using Pydantic settings."""

import os
from functools import lru_cache
from pathlib import Path

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


BASE_DIR = Path(__file__).resolve().parent.parent
DEFAULT_ENV_FILES: tuple[Path, ...] = (BASE_DIR / ".env",)
ENV_FILE_OVERRIDES: dict[str, tuple[Path, ...]] = {
    "testing": (BASE_DIR / ".env.test",),
}


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Flask settings
    SECRET_KEY: str = Field(default="dev-secret-key-change-in-production")
    FLASK_ENV: str = Field(default="development")
    DEBUG: bool = Field(default=True)

    # CORS settings
    CORS_ORIGINS: list[str] = Field(
        default=["http://localhost:3000"], description="Allowed CORS origins"
    )

    # Inventory backend settings
    INVENTORY_API_URL: str = Field(
        default="http://localhost:5000/api",
        description="Base URL of the inventory backend REST API",
    )
    INVENTORY_API_TOKEN: str = Field(
        default="",
        description="Bearer token sent to the inventory backend (empty for none)",
    )
    INVENTORY_API_TIMEOUT: float = Field(
        default=30.0,
        description="Timeout in seconds for inventory backend requests",
    )
    INVENTORY_LOCATION_PATHS: dict[str, str] = Field(
        default={
            "Warehouse": "warehouse",
            "Store": "store",
            "Store2": "store2",
        },
        description="Backend stock endpoint per storage location",
    )

    # Box allocation settings
    SNAPSHOT_MAX_AGE_SECONDS: int = Field(
        default=30,
        description="Seconds a cached location snapshot stays valid before it is re-fetched",
    )
    SMART_CREATE_SKIP_EMPTY_BOXES: bool = Field(
        default=False,
        description="When true, smart create does not create boxes that would receive no stock",
    )
    LEDGER_ENFORCE_CAPACITY: bool = Field(
        default=False,
        description="When true, manual box item edits are rejected if they would overfill the box",
    )
    DEFAULT_BOX_CAPACITY: int = Field(
        default=50,
        gt=0,
        description="Capacity used when a box is created without an explicit capacity",
    )
    DEFAULT_BOX_NUMBER_PREFIX: str = Field(
        default="BOX",
        description="Prefix for box numbers generated by smart create",
    )

    @model_validator(mode="after")
    def configure_environment_defaults(self):
        """Apply environment-specific defaults after validation."""
        if self.FLASK_ENV == "testing":
            self.SNAPSHOT_MAX_AGE_SECONDS = 0
        return self

    @property
    def is_testing(self) -> bool:
        """Check if running in testing environment."""
        return self.FLASK_ENV == "testing"

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.FLASK_ENV == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings(_env_file=_resolve_env_files())


def _resolve_env_files() -> tuple[str, ...]:
    """Select environment files based on FLASK_ENV."""
    env = os.getenv("FLASK_ENV")
    candidate_paths: list[Path] = list(DEFAULT_ENV_FILES)

    override = ENV_FILE_OVERRIDES.get(env or "")
    if override:
        candidate_paths.extend(override)

    unique_paths = dict.fromkeys(candidate_paths)
    return tuple(str(path) for path in unique_paths)
