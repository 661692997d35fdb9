# === MODULE PURPOSE ===
# Common utilities shared across all modules.

from .config import Config, get_account_config_path

__all__ = [
    "Config",
    "get_account_config_path",
]
