"""Configuration Management."""

from dataclasses import dataclass
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


@dataclass(frozen=True)
class Limits:
    """Resource limits applied to untrusted producer output."""

    max_components: int = 100
    max_children: int = 50
    max_data_model_bytes: int = 51200  # 50 KB
    max_tree_depth: int = 10
    max_value_depth: int = 32
    idle_timeout: float = 30.0


class Settings(BaseSettings):
    """Engine settings from environment."""

    model_config = SettingsConfigDict(
        env_prefix="A2UI_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra environment variables
    )

    # DoS limits
    max_components: int = Field(default=100, gt=0, description="Max components per update message")
    max_children: int = Field(default=50, gt=0, description="Max children per component")
    max_data_model_bytes: int = Field(
        default=51200, gt=0, description="Max serialized data model payload (bytes)"
    )
    max_tree_depth: int = Field(default=10, gt=0, description="Max depth walked at render time")
    max_value_depth: int = Field(
        default=32, gt=0, description="Max JSON nesting of data model values and component properties"
    )

    # Streaming
    idle_timeout: float = Field(default=30.0, gt=0, description="Seconds without a fragment before abort")

    # Surface lifecycle
    require_create: bool = Field(
        default=False, description="Drop updates for surfaces that never saw createSurface"
    )

    # Catalog
    catalog_id: str = Field(
        default="common-origin.design-system:v2.4", description="Catalog implemented by the registry"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    json_logs: bool = Field(default=False, description="Use JSON log format")

    def limits(self) -> Limits:
        """Snapshot the resource limits as an immutable value."""
        return Limits(
            max_components=self.max_components,
            max_children=self.max_children,
            max_data_model_bytes=self.max_data_model_bytes,
            max_tree_depth=self.max_tree_depth,
            max_value_depth=self.max_value_depth,
            idle_timeout=self.idle_timeout,
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
