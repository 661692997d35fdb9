# === MODULE PURPOSE ===
# Configuration loading for account setup.
# Loads YAML files and provides typed access to settings.

# === KEY CONCEPTS ===
# - YAML-based: account limits and pairs are declared in human-readable files
# - Dotted keys: "account.allocations.BTC" reaches nested sections
# - Environment placeholders: string values "${NAME}" resolve from os.environ
#   (left untouched if the variable is not set)

import logging
import os
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

# Project root directory
PROJECT_ROOT = Path(__file__).parent.parent.parent
DEFAULT_ACCOUNT_CONFIG = PROJECT_ROOT / "config" / "account.yaml"


def _resolve_env_vars(node: Any) -> Any:
    if isinstance(node, dict):
        return {key: _resolve_env_vars(value) for key, value in node.items()}
    if isinstance(node, list):
        return [_resolve_env_vars(item) for item in node]
    if isinstance(node, str) and node.startswith("${") and node.endswith("}"):
        return os.getenv(node[2:-1], node)
    return node


class Config:
    """
    Configuration loader and accessor.

    Usage:
        config = Config.load("config/account.yaml")

        # Access nested values
        currency = config.get_str("account.reference_currency", default="USDT")

        # Access with type checking
        reserve = config.get_int("account.margin_reserve_percentage", default=150)
    """

    def __init__(self, data: dict[str, Any]):
        self._data = data

    @classmethod
    def load(cls, config_path: str | Path) -> "Config":
        """
        Load configuration from a YAML file.

        Args:
            config_path: Path to the YAML configuration file

        Returns:
            Config instance with loaded data

        Raises:
            FileNotFoundError: If config file doesn't exist
            yaml.YAMLError: If YAML parsing fails
        """
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ValueError(f"Config file must contain a mapping at top level: {path}")

        logger.info(f"Loaded configuration from {path}")
        return cls(_resolve_env_vars(data))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Config":
        """Create Config from a dictionary."""
        return cls(_resolve_env_vars(data))

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value by dot-separated key.

        Args:
            key: Dot-separated path (e.g., "account.reference_currency")
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        value: Any = self._data

        for k in key.split("."):
            if isinstance(value, dict):
                value = value.get(k)
                if value is None:
                    return default
            else:
                return default

        return value

    def get_str(self, key: str, default: str = "") -> str:
        value = self.get(key, default)
        return str(value) if value is not None else default

    def get_int(self, key: str, default: int = 0) -> int:
        value = self.get(key, default)
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    def get_bool(self, key: str, default: bool = False) -> bool:
        value = self.get(key, default)
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            return value.lower() in ("true", "yes", "1", "on")
        return bool(value) if value is not None else default

    def get_list(self, key: str, default: list | None = None) -> list:
        value = self.get(key, default)
        if isinstance(value, list):
            return value
        return default if default is not None else []

    def get_dict(self, key: str, default: dict | None = None) -> dict:
        value = self.get(key, default)
        if isinstance(value, dict):
            return value
        return default if default is not None else {}

    @property
    def raw(self) -> dict[str, Any]:
        """Access raw configuration data."""
        return self._data

    def __repr__(self) -> str:
        return f"Config({list(self._data.keys())})"


def get_account_config_path() -> Path:
    """
    Path of the account configuration file.

    Environment variables:
        ACCOUNT_CONFIG: Path to the YAML file (default: config/account.yaml)
    """
    value = os.getenv("ACCOUNT_CONFIG", "")
    return Path(value) if value else DEFAULT_ACCOUNT_CONFIG
