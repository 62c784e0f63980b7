"""Configuration utilities for richerr."""

from .config_loader import DEFAULT_SETTINGS, ConfigLoader, ErrorSettings, LoadedConfig, load_settings

__all__ = ["ConfigLoader", "LoadedConfig", "ErrorSettings", "DEFAULT_SETTINGS", "load_settings"]
