"""
Config Module

YAML project configuration loading and validation.
"""

from .loader import (
    DEFAULT_CONFIG_FILE,
    BlockConfig,
    ConfigDocument,
    ConfigError,
    ConfigProvider,
)

__all__ = [
    "DEFAULT_CONFIG_FILE",
    "BlockConfig",
    "ConfigDocument",
    "ConfigError",
    "ConfigProvider",
]
