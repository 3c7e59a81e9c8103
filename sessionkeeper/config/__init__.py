"""
Config Module - Black Box Interface

Purpose: Application configuration management
Interface: ConfigProvider, EnvConfigProvider
Hidden: Config sources, validation logic, environment parsing
"""

from .provider import ConfigProvider, EnvConfigProvider, LoggingConfig, StorageConfig

__all__ = ["ConfigProvider", "EnvConfigProvider", "LoggingConfig", "StorageConfig"]
