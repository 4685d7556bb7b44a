"""
Configuration management for Brightwire
"""
from .settings import ConfigurationError, Settings, SettingsLoader, load_settings

__all__ = ["ConfigurationError", "Settings", "SettingsLoader", "load_settings"]
