"""
Configuration management for linear-vault.
Uses Pydantic for type-safe configuration with YAML file support.
"""

import logging
import sys
from pathlib import Path
from typing import List, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
import yaml

# Keyring namespace of the linear CLI. Changing it orphans every secret
# users have already stored.
SERVICE_NAME = "linear-cli"

DEFAULT_CONFIG_LOCATIONS = [
    "linear-vault.yaml",
    "~/.config/linear-vault/config.yaml",
]


class VaultConfig(BaseSettings):
    """Credential vault configuration."""
    model_config = SettingsConfigDict(
        env_prefix="LINEAR_VAULT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Storage
    service_name: str = SERVICE_NAME
    backend: str = "keyring"
    keyring_backend: Optional[str] = None

    # Logging and debugging
    debug: bool = False
    log_level: str = "INFO"

    @field_validator("backend")
    @classmethod
    def normalize_backend(cls, v: str) -> str:
        """Accept backend names in any case."""
        return v.strip().lower()

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.strip().upper()

    @classmethod
    def from_file(cls, config_file: str) -> "VaultConfig":
        """Load configuration from a YAML file."""
        config_path = Path(config_file).expanduser()
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_file}")

        with open(config_path, "r", encoding="utf-8") as f:
            yaml_config = yaml.safe_load(f)

        if not yaml_config:
            yaml_config = {}
        if not isinstance(yaml_config, dict):
            raise ValueError(f"Config file {config_file} must contain a mapping")

        # YAML keys are dashed ("service-name"), fields are not
        values = {str(k).replace("-", "_"): v for k, v in yaml_config.items()}
        return cls(**values)

    def save_to_file(self, config_file: str) -> None:
        """Save configuration to a YAML file."""
        config_path = Path(config_file).expanduser()

        config_dict = {
            key.replace("_", "-"): value
            for key, value in self.model_dump(exclude_none=True).items()
        }

        # Ensure directory exists
        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, "w", encoding="utf-8") as f:
            yaml.dump(config_dict, f, default_flow_style=False, sort_keys=False)

    def validate_config(self) -> List[str]:
        """Validate configuration and return list of errors."""
        from .stores.manager import available_store_types

        errors = []

        if not self.service_name.strip():
            errors.append("service-name must not be empty")

        store_types = available_store_types()
        if self.backend not in store_types:
            errors.append(
                f"Unknown backend {self.backend!r} (expected one of: {', '.join(store_types)})"
            )

        if self.keyring_backend and "." not in self.keyring_backend:
            errors.append(
                f"keyring-backend must be a dotted class path, got {self.keyring_backend!r}"
            )

        if not isinstance(logging.getLevelName(self.log_level), int):
            errors.append(f"Unknown log level: {self.log_level}")

        return errors


# Global configuration instance
_config: Optional[VaultConfig] = None


def get_config() -> VaultConfig:
    """Get the global configuration instance."""
    if _config is None:
        raise RuntimeError("Configuration not initialized. Call load_config() first.")
    return _config


def load_config(config_file: Optional[str] = None) -> VaultConfig:
    """Load configuration from file or environment."""
    global _config

    if config_file:
        _config = VaultConfig.from_file(config_file)
    else:
        # Try to find config file in common locations
        for location in DEFAULT_CONFIG_LOCATIONS:
            if Path(location).expanduser().exists():
                _config = VaultConfig.from_file(location)
                break
        else:
            # No config file found, use defaults and environment
            _config = VaultConfig()

    # Validate configuration
    errors = _config.validate_config()
    if errors:
        print("Configuration errors:", file=sys.stderr)
        for error in errors:
            print(f"  - {error}", file=sys.stderr)

    return _config


def reload_config(config_file: Optional[str] = None) -> VaultConfig:
    """Reload configuration from file."""
    reset_config()
    return load_config(config_file)


def reset_config() -> None:
    """Forget the global configuration instance."""
    global _config
    _config = None
