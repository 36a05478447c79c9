"""
Configuration management for the cargo dispatch dashboard.

Handles loading and accessing:
- Business configuration (config.yaml)
- Environment variables (.env)
"""

from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings

from cargo_dispatch.core.exceptions import ConfigurationError

STORAGE_BACKENDS = ("memory", "local", "firestore")


class StorageConfig(BaseModel):
    """Resolved persistence settings."""

    backend: str = "local"
    local_path: Path = Path("data/storage")
    firestore_project_id: Optional[str] = None


class EnvironmentSettings(BaseSettings):
    """Environment variables configuration."""

    # Persistence
    storage_backend: Optional[str] = Field(None, alias="STORAGE_BACKEND")
    local_storage_path: Optional[str] = Field(None, alias="LOCAL_STORAGE_PATH")

    # Firestore
    firestore_project_id: Optional[str] = Field(None, alias="FIRESTORE_PROJECT_ID")
    google_application_credentials: Optional[str] = Field(
        None, alias="GOOGLE_APPLICATION_CREDENTIALS"
    )

    # Auth
    admin_default_password: str = Field("admin123", alias="ADMIN_DEFAULT_PASSWORD")

    log_level: str = Field("INFO", alias="LOG_LEVEL")

    class Config:
        """Pydantic configuration."""

        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"


class ConfigManager:
    """
    Central configuration manager for the dispatch dashboard.

    Loads and provides access to:
    - Business configuration from config/config.yaml
    - Environment variables from .env
    """

    def __init__(self, config_dir: Optional[Path] = None) -> None:
        """
        Initialize the configuration manager.

        Args:
            config_dir: Optional path to config directory. Defaults to project root/config.
        """
        if config_dir is None:
            project_root = Path(__file__).parent.parent.parent
            config_dir = project_root / "config"

        self.config_dir = Path(config_dir)
        self._business_config: Optional[dict[str, Any]] = None
        self._env_settings: Optional[EnvironmentSettings] = None

    @property
    def business_config(self) -> dict[str, Any]:
        """Load and return business configuration from config.yaml."""
        if self._business_config is None:
            config_path = self.config_dir / "config.yaml"
            if not config_path.exists():
                raise ConfigurationError(f"Configuration file not found: {config_path}")
            with open(config_path, "r") as f:
                self._business_config = yaml.safe_load(f) or {}
        return self._business_config

    @property
    def env(self) -> EnvironmentSettings:
        """Load and return environment settings."""
        if self._env_settings is None:
            self._env_settings = EnvironmentSettings()
        return self._env_settings

    def get_app_info(self) -> dict[str, Any]:
        """Get application information from business config."""
        return self.business_config.get("app", {})

    def get_storage_config(self) -> StorageConfig:
        """
        Get persistence settings, with environment values taking precedence.

        Raises:
            ConfigurationError: If the configured backend is unknown
        """
        storage = self.business_config.get("storage", {})
        backend = (self.env.storage_backend or storage.get("backend", "local")).lower()
        if backend not in STORAGE_BACKENDS:
            raise ConfigurationError(f"Unsupported storage backend: {backend}")

        local_path = Path(self.env.local_storage_path or storage.get("local_path", "data/storage"))
        return StorageConfig(
            backend=backend,
            local_path=local_path,
            firestore_project_id=self.env.firestore_project_id or storage.get("firestore_project_id"),
        )

    def get_collection_name(self, key: str) -> str:
        """
        Get the document collection name for an entity.

        Args:
            key: Entity key ("drivers", "cargos", "users")

        Returns:
            Collection name, defaulting to the key itself
        """
        return self.business_config.get("collections", {}).get(key, key)

    def get_public_owner_id(self) -> str:
        """Owner id that marks a driver as visible to every user."""
        return self.business_config.get("drivers", {}).get("public_owner_id", "all")

    def get_accounting_config(self) -> dict[str, Any]:
        """Get accounting settings from business config."""
        return self.business_config.get("accounting", {})

    def get_seed_data(self) -> dict[str, list[dict[str, Any]]]:
        """Get seed documents for the local fallback store."""
        return self.business_config.get("seed", {})


# Global config instance
_config_manager: Optional[ConfigManager] = None


def get_config() -> ConfigManager:
    """
    Get the global configuration manager instance.

    Returns:
        ConfigManager singleton instance
    """
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager
