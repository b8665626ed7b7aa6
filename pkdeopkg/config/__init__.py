"""Configuration module for pkdeopkg."""

from pkdeopkg.config.loader import key_file_overrides, load_settings
from pkdeopkg.config.schema import BackendSettings

__all__ = ["BackendSettings", "key_file_overrides", "load_settings"]
